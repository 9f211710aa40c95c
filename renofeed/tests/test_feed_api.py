"""
Feed, comment and member endpoint tests.
Covers: authentication, listing, threads, unified feed modes, posting, errors.
"""
from __future__ import annotations

import uuid

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError

from app.crud.comment import crud_comment
from app.crud.floor_map import crud_floor_map_shape
from app.services.mention_codec import encode

pytestmark = pytest.mark.asyncio


def url(project, path: str) -> str:
    return f"/api/v1/projects/{project.id}/{path}"


class TestAuth:
    async def test_missing_token(self, client: AsyncClient, project) -> None:
        response = await client.get(url(project, "comments"))
        assert response.status_code == 401
        assert response.json()["error"] == "UNAUTHORIZED"

    async def test_garbage_token(self, client: AsyncClient, project) -> None:
        response = await client.get(
            url(project, "comments"), headers={"Authorization": "Bearer not-a-jwt"}
        )
        assert response.status_code == 401
        assert response.json()["error"] == "INVALID_TOKEN"

    async def test_non_access_token_rejected(
        self, client: AsyncClient, alice_refresh_headers: dict, project
    ) -> None:
        response = await client.get(url(project, "comments"), headers=alice_refresh_headers)
        assert response.status_code == 401
        assert response.json()["error"] == "INVALID_TOKEN"

    async def test_unknown_project(self, client: AsyncClient, alice_headers: dict) -> None:
        response = await client.get(
            f"/api/v1/projects/{uuid.uuid4()}/feed", headers=alice_headers
        )
        assert response.status_code == 404
        assert response.json()["error"] == "NOT_FOUND"


class TestListComments:
    async def test_newest_first_with_fragments(
        self, client: AsyncClient, alice_headers: dict, seed, alice, bob, project
    ) -> None:
        task = await seed.task(project, "Remove tiles")
        await seed.comment(bob, "looks good", 0, task=task)
        await seed.comment(bob, f"{encode('Alice Martin', alice.id)} please review", 5, task=task)
        await seed.comment(alice, "general note", 10, project=project)

        response = await client.get(url(project, "comments"), headers=alice_headers)

        assert response.status_code == 200
        data = response.json()
        assert [c["content"] for c in data] == [
            "general note",
            f"@[Alice Martin]({alice.id}) please review",
            "looks good",
        ]
        assert data[1]["task_title"] == "Remove tiles"
        assert data[1]["content_fragments"][0] == {
            "kind": "mention",
            "text": "@Alice Martin",
            "user_id": str(alice.id),
        }

    async def test_store_failure_is_503(
        self, client: AsyncClient, alice_headers: dict, project, monkeypatch
    ) -> None:
        async def broken(*args, **kwargs):
            raise OperationalError("SELECT", {}, Exception("connection lost"))

        monkeypatch.setattr(crud_comment, "list_task_comments", broken)

        response = await client.get(url(project, "comments"), headers=alice_headers)

        assert response.status_code == 503
        assert response.json()["error"] == "FEED_UNAVAILABLE"

    async def test_shape_lookup_failure_is_503(
        self, client: AsyncClient, alice_headers: dict, seed, alice, project, monkeypatch
    ) -> None:
        shape = await seed.shape(project, "Boiler")
        await seed.comment(alice, "needs clearance", 1, shape=shape)
        await seed.comment(alice, "general note", 2, project=project)

        async def broken(*args, **kwargs):
            raise OperationalError("SELECT", {}, Exception("connection lost"))

        monkeypatch.setattr(crud_floor_map_shape, "resolve_owners", broken)

        for path in ("comments", "threads", "feed"):
            response = await client.get(url(project, path), headers=alice_headers)
            assert response.status_code == 503
            assert response.json()["error"] == "FEED_UNAVAILABLE"


class TestThreads:
    async def test_grouped_threads(
        self, client: AsyncClient, alice_headers: dict, seed, alice, bob, project
    ) -> None:
        task = await seed.task(project, "Install lights")
        await seed.comment(bob, "wiring done", 1, task=task)
        await seed.comment(alice, "great", 2, task=task)
        await seed.comment(bob, "skip is full", 3, project=project)

        response = await client.get(url(project, "threads"), headers=alice_headers)

        assert response.status_code == 200
        data = response.json()
        assert [g["key"] for g in data] == ["project", f"task:{task.id}"]
        assert data[1]["context_label"] == "Install lights"
        assert data[1]["first_comment"]["content"] == "wiring done"
        assert [c["content"] for c in data[1]["comments"]] == ["wiring done", "great"]

    async def test_mine_filters_to_relevant_threads(
        self, client: AsyncClient, alice_headers: dict, seed, alice, bob, project
    ) -> None:
        task = await seed.task(project, "Install lights", assignee=alice)
        await seed.comment(bob, "wiring done", 1, task=task)
        await seed.comment(bob, "skip is full", 3, project=project)

        response = await client.get(
            url(project, "threads"), params={"mine": "true"}, headers=alice_headers
        )

        assert response.status_code == 200
        assert [g["key"] for g in response.json()] == [f"task:{task.id}"]


class TestUnifiedFeed:
    async def _seed(self, seed, alice, bob, project) -> None:
        await seed.comment(bob, "demo starts", 1, project=project)
        await seed.activity(project, 2, entity_name="Demo wall", actor=alice)
        await seed.comment(alice, "dust sheets down", 3, project=project)

    async def test_all(
        self, client: AsyncClient, alice_headers: dict, seed, alice, bob, project
    ) -> None:
        await self._seed(seed, alice, bob, project)

        response = await client.get(url(project, "feed"), headers=alice_headers)

        assert response.status_code == 200
        data = response.json()
        assert [i["type"] for i in data] == ["comment", "activity", "comment"]
        assert data[1]["activity"]["entity_name"] == "Demo wall"
        assert data[1]["comment"] is None

    @pytest.mark.parametrize(("mode", "expected"), [("comments", "comment"), ("activity", "activity")])
    async def test_modes(
        self,
        client: AsyncClient,
        alice_headers: dict,
        seed,
        alice,
        bob,
        project,
        mode: str,
        expected: str,
    ) -> None:
        await self._seed(seed, alice, bob, project)

        response = await client.get(
            url(project, "feed"), params={"mode": mode}, headers=alice_headers
        )

        assert response.status_code == 200
        assert {i["type"] for i in response.json()} == {expected}

    async def test_invalid_mode(
        self, client: AsyncClient, alice_headers: dict, project
    ) -> None:
        response = await client.get(
            url(project, "feed"), params={"mode": "everything"}, headers=alice_headers
        )
        assert response.status_code == 422
        assert response.json()["error"] == "VALIDATION_ERROR"

    async def test_activity_endpoint(
        self, client: AsyncClient, alice_headers: dict, seed, alice, project
    ) -> None:
        await seed.activity(project, 1, action="assigned", entity_name="Grout", actor=alice)

        response = await client.get(url(project, "activity"), headers=alice_headers)

        assert response.status_code == 200
        data = response.json()
        assert len(data) == 1
        assert data[0]["action"] == "assigned"
        assert data[0]["actor"]["name"] == "Alice Martin"


class TestPostComments:
    async def test_post_and_reply(
        self,
        client: AsyncClient,
        alice_headers: dict,
        bob_headers: dict,
        seed,
        alice,
        bob,
        project,
    ) -> None:
        room = await seed.room(project, "Utility")
        response = await client.post(
            url(project, "comments"),
            json={
                "content": f"{encode('Bob Chen', bob.id)} where does the boiler go?",
                "context_type": "room",
                "context_id": str(room.id),
            },
            headers=alice_headers,
        )
        assert response.status_code == 201, response.text
        created = response.json()
        assert created["room_name"] == "Utility"
        assert created["creator"]["id"] == str(alice.id)

        reply = await client.post(
            url(project, f"comments/{created['id']}/replies"),
            json={"content": "left wall"},
            headers=bob_headers,
        )
        assert reply.status_code == 201, reply.text
        assert reply.json()["entity_id"] == str(room.id)

        threads = await client.get(url(project, "threads"), headers=alice_headers)
        assert [len(g["comments"]) for g in threads.json()] == [2]

    async def test_blank_content_rejected(
        self, client: AsyncClient, alice_headers: dict, project
    ) -> None:
        response = await client.post(
            url(project, "comments"), json={"content": "   "}, headers=alice_headers
        )
        assert response.status_code == 422

    async def test_missing_context_id(
        self, client: AsyncClient, alice_headers: dict, project
    ) -> None:
        response = await client.post(
            url(project, "comments"),
            json={"content": "hello", "context_type": "task"},
            headers=alice_headers,
        )
        assert response.status_code == 400
        assert response.json()["error"] == "BAD_REQUEST"

    async def test_reply_to_missing_comment(
        self, client: AsyncClient, alice_headers: dict, project
    ) -> None:
        response = await client.post(
            url(project, f"comments/{uuid.uuid4()}/replies"),
            json={"content": "anyone?"},
            headers=alice_headers,
        )
        assert response.status_code == 404


class TestMembers:
    async def test_search_members(
        self, client: AsyncClient, alice_headers: dict, seed, project
    ) -> None:
        await seed.user("Outsider Bo")

        everyone = await client.get(url(project, "members"), headers=alice_headers)
        matching = await client.get(
            url(project, "members"), params={"q": "bo"}, headers=alice_headers
        )

        assert [m["name"] for m in everyone.json()] == ["Alice Martin", "Bob Chen"]
        assert [m["name"] for m in matching.json()] == ["Bob Chen"]
