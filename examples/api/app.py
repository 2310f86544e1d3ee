"""API — a small JSON REST API built from nested scopes.

CRUD for an "items" resource. Each level of the URL is a handler that
registers the level below it, so the item id parsed at ``/items/{id}``
is simply a closure variable for the handlers underneath.

Run (from this directory):
    perch call app:app POST /api/items --data '{"title": "milk"}'
"""

import json
import threading
from dataclasses import asdict, dataclass

from perch import App, HTTPError, Request, Response

app = App()


# ---------------------------------------------------------------------------
# In-memory storage
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Item:
    id: int
    title: str
    done: bool = False


class ItemStore:
    """Thread-safe in-memory item storage."""

    def __init__(self) -> None:
        self._items: dict[int, Item] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def all(self) -> list[Item]:
        with self._lock:
            return list(self._items.values())

    def get(self, item_id: int) -> Item:
        with self._lock:
            item = self._items.get(item_id)
        if item is None:
            raise HTTPError(404, f"Item {item_id} not found")
        return item

    def add(self, title: str) -> Item:
        with self._lock:
            item = Item(self._next_id, title)
            self._items[item.id] = item
            self._next_id += 1
            return item

    def save(self, item: Item) -> None:
        with self._lock:
            self._items[item.id] = item

    def remove(self, item_id: int) -> None:
        with self._lock:
            if self._items.pop(item_id, None) is None:
                raise HTTPError(404, f"Item {item_id} not found")


_store = ItemStore()
app.provide(ItemStore, lambda: _store)


def _json(data: object, status: int = 200) -> Response:
    return Response(json.dumps(data), status, content_type="application/json")


def _payload(request: Request) -> dict:
    try:
        data = json.loads(request.body or b"{}")
    except json.JSONDecodeError as exc:
        raise HTTPError(400, f"Invalid JSON: {exc.msg}") from exc
    if not isinstance(data, dict):
        raise HTTPError(422, "Expected a JSON object")
    return data


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@app.path("api")
def api(app):
    @app.path("items")
    def items(app):
        @app.get
        def list_items(store: ItemStore):
            return _json([asdict(item) for item in store.all()])

        @app.post
        def create_item(request: Request, store: ItemStore):
            title = _payload(request).get("title")
            if not isinstance(title, str) or not title:
                raise HTTPError(422, "title is required")
            item = store.add(title)
            return _json(asdict(item), 201).with_header("Location", f"/api/items/{item.id}")

        @app.path("done")
        def done(app):
            @app.get
            def finished(store: ItemStore):
                return _json([asdict(item) for item in store.all() if item.done])

        @app.path("open")
        def open_items(app):
            @app.get
            def unfinished(store: ItemStore):
                return _json([asdict(item) for item in store.all() if not item.done])

        @app.param("int")
        def item(app, item_id: int):
            @app.get
            def show(store: ItemStore):
                return _json(asdict(store.get(item_id)))

            @app.put
            def update(request: Request, store: ItemStore):
                current = store.get(item_id)
                data = _payload(request)
                updated = Item(
                    id=current.id,
                    title=data.get("title", current.title),
                    done=bool(data.get("done", current.done)),
                )
                store.save(updated)
                return _json(asdict(updated))

            @app.delete
            def remove(store: ItemStore):
                store.remove(item_id)
                return 204
