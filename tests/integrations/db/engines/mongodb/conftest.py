"""
목적: MongoDB 비동기 컬렉션 스텁과 관련 픽스처를 제공한다.
설명: 저장소가 사용하는 컬렉션 호출(find_one/find/replace_one/update_one/delete_one/delete_many/insert_many)을
      메모리에서 흉내 내고 호출 순서를 기록한다.
디자인 패턴: 테스트 스텁
참조: src/db_plumbing/integrations/db/engines/mongodb/store.py
"""

from __future__ import annotations

import copy
from types import SimpleNamespace
from typing import Any

import pytest
from pymongo.errors import DuplicateKeyError


_MISSING = object()


def _get_path(document: dict, path: str) -> Any:
    current: Any = document
    for part in path.split("."):
        if not isinstance(current, dict) or part not in current:
            return _MISSING
        current = current[part]
    return current


def _set_path(document: dict, path: str, value: Any) -> None:
    parts = path.split(".")
    current = document
    for part in parts[:-1]:
        current = current.setdefault(part, {})
    current[parts[-1]] = copy.deepcopy(value)


def _unset_path(document: dict, path: str) -> None:
    parts = path.split(".")
    current: Any = document
    for part in parts[:-1]:
        if not isinstance(current, dict) or part not in current:
            return
        current = current[part]
    if isinstance(current, dict):
        current.pop(parts[-1], None)


def _matches(document: dict, criteria: dict) -> bool:
    for path, expected in criteria.items():
        actual = _get_path(document, path)
        if isinstance(expected, dict) and "$in" in expected:
            if actual is _MISSING or actual not in expected["$in"]:
                return False
        elif actual is _MISSING or actual != expected:
            return False
    return True


class _CursorStub:
    def __init__(self, documents: list[dict], error: Exception | None) -> None:
        self._documents = documents
        self._error = error

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        if self._error is not None:
            raise self._error
        for document in self._documents:
            yield document


class AsyncCollectionStub:
    """비동기 MongoDB 컬렉션 스텁."""

    def __init__(self, name: str = "testsimple") -> None:
        self.name = name
        self.documents: dict[Any, dict] = {}
        self.calls: list[str] = []
        self.failures: dict[str, Exception] = {}

    def fail(self, operation: str, error: Exception) -> None:
        self.failures[operation] = error

    def _record(self, operation: str) -> None:
        self.calls.append(operation)
        error = self.failures.get(operation)
        if error is not None:
            raise error

    async def find_one(self, criteria: dict):
        self._record("find_one")
        for document in self.documents.values():
            if _matches(document, criteria):
                return copy.deepcopy(document)
        return None

    def find(self, criteria: dict | None = None) -> _CursorStub:
        self.calls.append("find")
        selected = [
            copy.deepcopy(document)
            for document in self.documents.values()
            if _matches(document, criteria or {})
        ]
        return _CursorStub(selected, self.failures.get("find"))

    async def replace_one(self, criteria: dict, document: dict, upsert: bool = False):
        self._record("replace_one")
        key = criteria["_id"]
        matched = 1 if key in self.documents else 0
        if matched or upsert:
            self.documents[key] = copy.deepcopy(document)
        return SimpleNamespace(matched_count=matched, modified_count=matched, upserted_id=None if matched else key)

    async def update_one(self, criteria: dict, command: dict, upsert: bool = False):
        self._record("update_one")
        for key, document in self.documents.items():
            if not _matches(document, criteria):
                continue
            before = copy.deepcopy(document)
            for path, value in command.get("$set", {}).items():
                _set_path(document, path, value)
            for path in command.get("$unset", {}):
                _unset_path(document, path)
            return SimpleNamespace(matched_count=1, modified_count=int(before != document))
        return SimpleNamespace(matched_count=0, modified_count=0)

    async def insert_many(self, documents: list[dict]):
        self._record("insert_many")
        inserted = []
        for document in documents:
            key = document["_id"]
            if key in self.documents:
                raise DuplicateKeyError(f"E11000 duplicate key: {key!r}")
            self.documents[key] = copy.deepcopy(document)
            inserted.append(key)
        return SimpleNamespace(inserted_ids=inserted)

    async def delete_one(self, criteria: dict):
        self._record("delete_one")
        for key, document in list(self.documents.items()):
            if _matches(document, criteria):
                del self.documents[key]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)

    async def delete_many(self, criteria: dict):
        self._record("delete_many")
        targets = [key for key, document in self.documents.items() if _matches(document, criteria)]
        for key in targets:
            del self.documents[key]
        return SimpleNamespace(deleted_count=len(targets))


@pytest.fixture
def collection() -> AsyncCollectionStub:
    return AsyncCollectionStub()
