"""In-memory stand-in for the parts of the async pymongo API the services use.

Transactions snapshot every collection on start and restore the snapshot on
abort, which is enough to observe all-or-nothing behavior. Failures can be
injected per collection method to simulate storage errors mid-operation.
"""

import copy
from dataclasses import dataclass
from types import TracebackType
from typing import Any, Self

from pymongo.errors import DuplicateKeyError, PyMongoError


@dataclass
class InsertOneResult:
    inserted_id: Any


@dataclass
class DeleteResult:
    deleted_count: int


def _matches(doc: dict[str, Any], query: dict[str, Any]) -> bool:
    return all(key in doc and doc[key] == value for key, value in query.items())


class FakeCursor:
    def __init__(self, docs: list[dict[str, Any]]) -> None:
        self._docs = docs

    def sort(self, keys: list[tuple[str, int]]) -> Self:
        for field, direction in reversed(keys):
            self._docs.sort(key=lambda d, f=field: d[f], reverse=direction < 0)
        return self

    async def to_list(self) -> list[dict[str, Any]]:
        return list(self._docs)

    def __aiter__(self) -> "FakeCursor":
        self._iter = iter(self._docs)
        return self

    async def __anext__(self) -> dict[str, Any]:
        try:
            return next(self._iter)
        except StopIteration:
            raise StopAsyncIteration from None


class FakeCollection:
    def __init__(self, name: str) -> None:
        self.name = name
        self.docs: list[dict[str, Any]] = []
        self.unique_fields: set[str] = set()
        self.indexes: list[list[tuple[str, int]]] = []
        self._failures: dict[str, BaseException] = {}

    def fail_next(self, method: str, error: BaseException | None = None) -> None:
        """Make the next call of `method` raise `error`."""
        self._failures[method] = error or PyMongoError(f"simulated {method} failure")

    def _maybe_fail(self, method: str) -> None:
        error = self._failures.pop(method, None)
        if error is not None:
            raise error

    async def create_index(self, keys: list[tuple[str, int]], unique: bool = False, **_: Any) -> str:
        self.indexes.append(keys)
        if unique and len(keys) == 1:
            self.unique_fields.add(keys[0][0])
        return "_".join(f"{field}_{direction}" for field, direction in keys)

    async def insert_one(self, doc: dict[str, Any], session: Any = None) -> InsertOneResult:
        self._maybe_fail("insert_one")
        for field in self.unique_fields | {"_id"}:
            if any(existing.get(field) == doc.get(field) for existing in self.docs):
                raise DuplicateKeyError(f"E11000 duplicate key error collection: {self.name} index: {field}_1")
        self.docs.append(copy.deepcopy(doc))
        return InsertOneResult(inserted_id=doc["_id"])

    async def find_one(self, query: dict[str, Any], session: Any = None) -> dict[str, Any] | None:
        self._maybe_fail("find_one")
        for doc in self.docs:
            if _matches(doc, query):
                return copy.deepcopy(doc)
        return None

    def find(self, query: dict[str, Any], session: Any = None) -> FakeCursor:
        self._maybe_fail("find")
        return FakeCursor([copy.deepcopy(doc) for doc in self.docs if _matches(doc, query)])

    async def find_one_and_update(
        self, query: dict[str, Any], update: dict[str, Any], return_document: Any = None, session: Any = None
    ) -> dict[str, Any] | None:
        self._maybe_fail("find_one_and_update")
        for doc in self.docs:
            if _matches(doc, query):
                doc.update(copy.deepcopy(update["$set"]))
                return copy.deepcopy(doc)
        return None

    async def delete_one(self, query: dict[str, Any], session: Any = None) -> DeleteResult:
        self._maybe_fail("delete_one")
        for i, doc in enumerate(self.docs):
            if _matches(doc, query):
                del self.docs[i]
                return DeleteResult(deleted_count=1)
        return DeleteResult(deleted_count=0)

    async def delete_many(self, query: dict[str, Any], session: Any = None) -> DeleteResult:
        self._maybe_fail("delete_many")
        kept = [doc for doc in self.docs if not _matches(doc, query)]
        deleted = len(self.docs) - len(kept)
        self.docs[:] = kept
        return DeleteResult(deleted_count=deleted)


class FakeDatabase:
    def __init__(self, client: "FakeMongoClient") -> None:
        self._client = client

    def get_collection(self, name: str) -> FakeCollection:
        return self._client.collection(name)


class FakeTransaction:
    def __init__(self, client: "FakeMongoClient") -> None:
        self._client = client
        self._snapshot: dict[str, list[dict[str, Any]]] = {}

    async def __aenter__(self) -> Self:
        self._snapshot = {name: copy.deepcopy(coll.docs) for name, coll in self._client.collections.items()}
        return self

    async def __aexit__(
        self, exc_type: type[BaseException] | None, exc: BaseException | None, tb: TracebackType | None
    ) -> None:
        if exc_type is None:
            self._client.commits += 1
            return
        for name, docs in self._snapshot.items():
            self._client.collections[name].docs[:] = docs
        self._client.aborts += 1


class FakeSession:
    def __init__(self, client: "FakeMongoClient") -> None:
        self._client = client

    async def start_transaction(self) -> FakeTransaction:
        return FakeTransaction(self._client)

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *_: object) -> None:
        return None


class FakeMongoClient:
    def __init__(self) -> None:
        self.collections: dict[str, FakeCollection] = {}
        self.commits = 0
        self.aborts = 0
        self.closed = False

    def collection(self, name: str) -> FakeCollection:
        if name not in self.collections:
            self.collections[name] = FakeCollection(name)
        return self.collections[name]

    def get_database(self, name: str) -> FakeDatabase:
        return FakeDatabase(self)

    def start_session(self) -> FakeSession:
        return FakeSession(self)

    async def aclose(self) -> None:
        self.closed = True
