"""
Inline @-mention token codec.

Mentions are stored inside comment content as ``@[Display Name](user-id)``.
The bracketed name keeps tokens distinct from plain ``@word`` text, and the
id survives later renames of the user. Names containing ``]`` and ids
containing ``)`` cannot be encoded; such tokens simply fail to decode.
"""
from __future__ import annotations

import re
import uuid

from app.schemas.comment import Mention, MentionFragment

MENTION_PATTERN = re.compile(r"@\[([^\]]+)\]\(([^)]+)\)")


def encode(name: str, user_id: object) -> str:
    """Return the mention token for a user."""
    return f"@[{name}]({user_id})"


def decode(content: str) -> list[Mention]:
    """
    Extract every well-formed mention token, in order of first appearance.
    A user mentioned twice under the same name is reported once.
    """
    mentions: list[Mention] = []
    seen: set[tuple[str, str]] = set()
    for match in MENTION_PATTERN.finditer(content):
        pair = (match.group(1), match.group(2))
        if pair in seen:
            continue
        seen.add(pair)
        mentions.append(Mention(name=pair[0], user_id=pair[1]))
    return mentions


def mentioned_user_ids(content: str) -> list[str]:
    """Distinct user ids mentioned in ``content``, in order of first appearance."""
    ids: list[str] = []
    for mention in decode(content):
        if mention.user_id not in ids:
            ids.append(mention.user_id)
    return ids


def render(content: str) -> list[MentionFragment]:
    """
    Split content into literal text and mention fragments for display.
    Mention fragments read ``@Name``; content without tokens comes back
    as a single text fragment.
    """
    fragments: list[MentionFragment] = []
    last = 0
    for match in MENTION_PATTERN.finditer(content):
        if match.start() > last:
            fragments.append(MentionFragment(kind="text", text=content[last : match.start()]))
        fragments.append(
            MentionFragment(kind="mention", text=f"@{match.group(1)}", user_id=match.group(2))
        )
        last = match.end()

    if last < len(content):
        fragments.append(MentionFragment(kind="text", text=content[last:]))

    if not fragments:
        return [MentionFragment(kind="text", text=content)]
    return fragments


def mentioned_uuids(content: str) -> list[uuid.UUID]:
    """
    Distinct mentioned user ids parsed as UUIDs, in order of first appearance.
    Ids that are not valid UUIDs are skipped; spelling variants of the same
    UUID (case, braces, hyphens) collapse into one.
    """
    user_ids: list[uuid.UUID] = []
    for raw in mentioned_user_ids(content):
        try:
            user_id = uuid.UUID(raw)
        except ValueError:
            continue
        if user_id not in user_ids:
            user_ids.append(user_id)
    return user_ids
