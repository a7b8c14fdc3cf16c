"""Example ToDo endpoints.

Items are kept in memory on ``app.state.todos`` and are lost on restart.
"""

from datetime import date
from typing import Any

from starlette.exceptions import HTTPException
from starlette.requests import Request

from openroute.core.types import ValidatedData
from openroute.routing.route import OpenAPIRoute
from openroute.routing.router import OpenAPIRouter, RouterOptions
from openroute.schema.endpoint import EndpointSchema
from openroute.schema.parameters import Header, Path, Query, Response
from openroute.schema.types import Arr, Bool, DateOnly, Enumeration, Int, Obj, Str

TODO_TAG = "ToDo"

Todo = Obj(
    {
        "id": int,
        "title": str,
        "description": Str(required=False),
        "done": bool,
        "due_date": DateOnly(required=False),
        "priority": Enumeration(values=["low", "normal", "high"]),
        "tags": [str],
    }
)


class TodoStore:
    """In-memory ToDo storage."""

    def __init__(self) -> None:
        self._items: dict[int, dict[str, Any]] = {}
        self._next_id = 1

    def list(self) -> list[dict[str, Any]]:
        return list(self._items.values())

    def get(self, todo_id: int) -> dict[str, Any] | None:
        return self._items.get(todo_id)

    def add(self, values: dict[str, Any]) -> dict[str, Any]:
        item = {"id": self._next_id, "done": False, "tags": [], **values}
        self._items[self._next_id] = item
        self._next_id += 1
        return item

    def remove(self, todo_id: int) -> bool:
        return self._items.pop(todo_id, None) is not None


def _store(request: Request) -> TodoStore:
    return request.app.state.todos


def _get_or_404(request: Request, todo_id: int) -> dict[str, Any]:
    item = _store(request).get(todo_id)
    if item is None:
        raise HTTPException(status_code=404, detail=f"ToDo {todo_id} not found")
    return item


class ToDoList(OpenAPIRoute):
    schema = EndpointSchema(
        tags=[TODO_TAG],
        summary="List all ToDos",
        parameters={
            "page": Query(Int, description="Page number", default=1),
            "limit": Query(int, default=20),
            "done": Query(Bool, description="Only finished or open ToDos", required=False),
            "tags": Query([str], description="Match any of these tags", required=False),
        },
        responses={"200": Response({"todos": [Todo]}, description="List of ToDos")},
    )

    async def handle(self, request: Request, data: ValidatedData) -> dict[str, Any]:
        query = data["query"]
        todos = _store(request).list()
        if "done" in query:
            todos = [t for t in todos if t["done"] is query["done"]]
        if "tags" in query:
            wanted = set(query["tags"])
            todos = [t for t in todos if wanted.intersection(t["tags"])]

        start = (query["page"] - 1) * query["limit"]
        return {"todos": todos[start : start + query["limit"]]}


class ToDoGet(OpenAPIRoute):
    schema = EndpointSchema(
        tags=[TODO_TAG],
        summary="Get a single ToDo",
        parameters={"todo_id": Path(Int, description="ToDo id")},
        responses={"200": Response({"todo": Todo}, description="The ToDo")},
    )

    async def handle(self, request: Request, data: ValidatedData) -> dict[str, Any]:
        return {"todo": _get_or_404(request, data["path"]["todo_id"])}


class ToDoCreate(OpenAPIRoute):
    schema = EndpointSchema(
        operation_id="create_todo",
        tags=[TODO_TAG],
        summary="Create a new ToDo",
        request_body={
            "title": Str(example="Buy milk"),
            "description": Str(required=False),
            "due_date": DateOnly(required=False),
            "priority": Enumeration(
                values=["low", "normal", "high"],
                default="normal",
                enum_case_sensitive=False,
            ),
            "tags": Arr(str, required=False),
        },
        responses={"200": Response({"todo": Todo}, description="The created ToDo")},
    )

    async def handle(self, request: Request, data: ValidatedData) -> dict[str, Any]:
        values = dict(data["body"])
        if isinstance(values.get("due_date"), date):
            values["due_date"] = values["due_date"].isoformat()
        return {"todo": _store(request).add(values)}


class ToDoDelete(OpenAPIRoute):
    schema = EndpointSchema(
        tags=[TODO_TAG],
        summary="Delete a ToDo",
        parameters=[
            Path(int, name="todo_id"),
            Header(str, name="x-reason", description="Why it is deleted", required=False),
        ],
        responses={"200": Response({"success": True})},
    )

    async def handle(self, request: Request, data: ValidatedData) -> dict[str, Any]:
        todo_id = data["path"]["todo_id"]
        _get_or_404(request, todo_id)
        return {"success": _store(request).remove(todo_id)}


def build_todo_router(options: RouterOptions | None = None) -> OpenAPIRouter:
    """Create the router of the ToDo endpoints."""
    router = OpenAPIRouter(options)
    router.get("/todos", ToDoList)
    router.post("/todos", ToDoCreate)
    router.get("/todos/:todo_id", ToDoGet)
    router.delete("/todos/:todo_id", ToDoDelete)
    return router
