"""End-to-end tests of the ToDo endpoints."""

import pytest
from httpx import AsyncClient


async def create_todo(client: AsyncClient, **body: object) -> dict[str, object]:
    response = await client.post("/todos", json={"title": "Buy milk", **body})
    assert response.status_code == 200
    return response.json()["todo"]


@pytest.mark.integration
class TestCreate:
    async def test_create_fills_defaults(self, client: AsyncClient) -> None:
        todo = await create_todo(client, due_date="2024-03-01T10:00:00Z")
        assert todo == {
            "id": 1,
            "done": False,
            "tags": [],
            "title": "Buy milk",
            "due_date": "2024-03-01",
            "priority": "normal",
        }

    async def test_enum_is_case_insensitive(self, client: AsyncClient) -> None:
        todo = await create_todo(client, priority="HIGH")
        assert todo["priority"] == "high"

    async def test_invalid_body_envelope(self, client: AsyncClient) -> None:
        response = await client.post(
            "/todos", json={"priority": "urgent", "tags": "solo", "owner": "ann"}
        )

        assert response.status_code == 400
        payload = response.json()
        assert payload["success"] is False
        assert payload["result"] == {}
        assert payload["errors"]["form_errors"] == []
        assert payload["errors"]["field_errors"] == {
            "body.title": ["Field required"],
            "body.priority": ["Input should be 'low', 'normal', 'high'"],
            "body.owner": ["Extra inputs are not permitted"],
        }

    async def test_lone_tag_becomes_list(self, client: AsyncClient) -> None:
        todo = await create_todo(client, tags="home")
        assert todo["tags"] == ["home"]

    async def test_malformed_json(self, client: AsyncClient) -> None:
        response = await client.post(
            "/todos",
            content=b'{"title": ',
            headers={"content-type": "application/json"},
        )
        assert response.status_code == 400
        payload = response.json()
        assert payload["error_code"] == "BODY_PARSE_ERROR"
        assert payload["correlation_id"] == response.headers["x-correlation-id"]

    async def test_missing_body(self, client: AsyncClient) -> None:
        response = await client.post("/todos")
        assert response.status_code == 400
        assert response.json()["errors"]["field_errors"] == {"body": ["Field required"]}

    async def test_body_validated_despite_text_content_type(
        self, client: AsyncClient
    ) -> None:
        response = await client.post(
            "/todos",
            content=b'{"title": "Buy milk"}',
            headers={"content-type": "text/plain"},
        )
        assert response.status_code == 200
        assert response.json()["todo"]["title"] == "Buy milk"

    async def test_invalid_body_with_text_content_type(
        self, client: AsyncClient
    ) -> None:
        response = await client.post(
            "/todos", content=b'{"priority": "low"}', headers={"content-type": "text/plain"}
        )
        assert response.status_code == 400
        assert response.json()["errors"]["field_errors"] == {
            "body.title": ["Field required"]
        }


@pytest.mark.integration
class TestRead:
    async def test_get_by_id(self, client: AsyncClient) -> None:
        created = await create_todo(client)
        response = await client.get(f"/todos/{created['id']}")
        assert response.json() == {"todo": created}

    async def test_unknown_id_is_404(self, client: AsyncClient) -> None:
        response = await client.get("/todos/42")
        assert response.status_code == 404
        assert response.json()["error_code"] == "NOT_FOUND"
        assert response.json()["message"] == "ToDo 42 not found"

    async def test_non_integer_id(self, client: AsyncClient) -> None:
        response = await client.get("/todos/abc")
        assert response.status_code == 400
        assert list(response.json()["errors"]["field_errors"]) == ["path.todo_id"]

    async def test_list_filters_and_pages(self, client: AsyncClient) -> None:
        await create_todo(client, title="a", tags=["home"])
        await create_todo(client, title="b", tags=["work"])
        await create_todo(client, title="c", tags=["home", "work"])

        by_tag = await client.get("/todos", params={"tags": "home"})
        paged = await client.get("/todos", params={"page": "2", "limit": "2"})

        assert [t["title"] for t in by_tag.json()["todos"]] == ["a", "c"]
        assert [t["title"] for t in paged.json()["todos"]] == ["c"]

    async def test_repeated_query_keys(self, client: AsyncClient) -> None:
        await create_todo(client, title="a", tags=["home"])
        await create_todo(client, title="b", tags=["work"])
        await create_todo(client, title="c", tags=["garden"])

        response = await client.get("/todos?tags=home&tags=work")

        assert [t["title"] for t in response.json()["todos"]] == ["a", "b"]

    async def test_invalid_query(self, client: AsyncClient) -> None:
        response = await client.get("/todos", params={"page": "first", "done": "maybe"})
        assert response.status_code == 400
        assert set(response.json()["errors"]["field_errors"]) == {"query.page", "query.done"}

    async def test_bare_query_keys_are_ignored(self, client: AsyncClient) -> None:
        await create_todo(client, title="a")
        await create_todo(client, title="b")

        response = await client.get("/todos?page&done")

        assert response.status_code == 200
        assert [t["title"] for t in response.json()["todos"]] == ["a", "b"]


@pytest.mark.integration
class TestDelete:
    async def test_delete(self, client: AsyncClient) -> None:
        created = await create_todo(client)

        response = await client.delete(
            f"/todos/{created['id']}", headers={"X-Reason": "done"}
        )

        assert response.json() == {"success": True}
        assert (await client.get(f"/todos/{created['id']}")).status_code == 404

    async def test_delete_unknown(self, client: AsyncClient) -> None:
        response = await client.delete("/todos/7")
        assert response.status_code == 404
