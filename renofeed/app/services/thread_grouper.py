"""
Groups a project's comments into threads, one per context.
"""
from __future__ import annotations

from collections.abc import Iterable

from app.schemas.comment import FeedComment
from app.schemas.feed import ThreadGroup
from app.services.context_classifier import label, resolve_context
from app.services.ordering import oldest_first, timestamp_key


def group_comments(comments: Iterable[FeedComment]) -> list[ThreadGroup]:
    """
    Bucket comments by context key. Comments inside a thread read oldest
    first; threads are ordered by their latest comment, newest first.
    All project-level comments share the single ``"project"`` thread.
    """
    buckets: dict[str, list[FeedComment]] = {}
    for comment in comments:
        buckets.setdefault(resolve_context(comment).key, []).append(comment)

    groups: list[ThreadGroup] = []
    for key, bucket in buckets.items():
        ordered = oldest_first(bucket)
        first = ordered[0]
        groups.append(
            ThreadGroup(
                key=key,
                context_type=resolve_context(first).type,
                context_label=label(first),
                first_comment=first,
                comments=ordered,
            )
        )

    groups.sort(key=lambda g: timestamp_key(g.comments[-1]), reverse=True)
    return groups
