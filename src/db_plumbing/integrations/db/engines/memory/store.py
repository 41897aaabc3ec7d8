"""
목적: 인메모리 문서 저장소를 제공한다.
설명: 조건자 함수를 직접 실행하는 전체 스캔 방식으로 조회/삭제하며, BatchPatch를 메모리에서 적용한다.
디자인 패턴: 저장소 패턴
참조: src/db_plumbing/integrations/db/base/store.py, src/db_plumbing/core/patch/apply.py
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any, AsyncIterator, Callable, Dict, Hashable, List, Optional

from db_plumbing.core.errors import BackendFailure, NotFound, UnsupportedPatchShape
from db_plumbing.core.patch import BatchPatch, Delete, Insert, Merge, apply
from db_plumbing.integrations.db.base.models import BulkResult
from db_plumbing.integrations.db.base.options import DEFAULT_OPTIONS, StoreOptions, build_entity
from db_plumbing.integrations.db.base.store import BaseStore
from db_plumbing.shared.logging import LogContext, Logger, create_default_logger


class InMemoryStore(BaseStore):
    """삽입 순서를 유지하는 인메모리 저장소.

    Args:
        entity_type: 저장 엔티티 타입.
        options: 키/값/엔트리 추출 규칙.
        logger: 주입 가능한 로거.
    """

    def __init__(
        self,
        entity_type: Optional[type] = None,
        options: StoreOptions = DEFAULT_OPTIONS,
        logger: Optional[Logger] = None,
    ) -> None:
        self._entity_type = entity_type
        self._options = options
        self._logger = logger or create_default_logger("InMemoryStore")
        self._documents: Dict[Hashable, Dict[str, Any]] = {}

    DoesNotExist = NotFound

    @property
    def name(self) -> str:
        return "memory"

    def __len__(self) -> int:
        return len(self._documents)

    async def find(self, key: Hashable) -> Any:
        document = self._documents.get(key)
        if document is None:
            raise NotFound(key)
        return self._to_entity(document)

    async def iterate_all(self) -> AsyncIterator[Any]:
        for document in list(self._documents.values()):
            yield self._to_entity(document)

    async def find_all(self, predicate: Callable[[Any, Any], bool], value: Any) -> List[Any]:
        return [entity async for entity in self.iterate_all() if predicate(value, entity)]

    async def update(self, entity: Any) -> None:
        key = self._options.key(entity)
        self._documents[key] = copy.deepcopy(self._options.entry(key, entity))

    async def remove(self, key: Hashable) -> int:
        if self._documents.pop(key, None) is None:
            self._logger.warning(
                "삭제할 문서가 없습니다.",
                LogContext(operation="remove"),
                metadata={"key": key},
            )
            return 0
        return 1

    async def remove_all(self, predicate: Callable[[Any, Any], bool], value: Any) -> int:
        targets = [
            key
            for key, document in self._documents.items()
            if predicate(value, self._to_entity(document))
        ]
        for key in targets:
            del self._documents[key]
        return len(targets)

    async def bulk(self, patch: BatchPatch) -> BulkResult:
        if not isinstance(patch, BatchPatch):
            raise TypeError("벌크 작업은 BatchPatch만 처리합니다.")
        updates: list = []
        inserts: list = []
        deletes: list = []
        for key, operation in patch:
            if isinstance(operation, Merge):
                updates.append((key, operation))
            elif isinstance(operation, Insert):
                inserts.append((key, operation.value))
            elif isinstance(operation, Delete):
                deletes.append(key)
            else:
                raise UnsupportedPatchShape(operation, f"key={key!r}")

        result = BulkResult()
        for key, operation in updates:
            if operation.is_noop:
                result.skipped += 1
                continue
            current = self._documents.get(key)
            if current is None:
                self._logger.warning(
                    "bulk 갱신 대상 문서가 없습니다.",
                    LogContext(operation="bulk"),
                    metadata={"key": key},
                )
                continue
            result.matched += 1
            updated = apply(operation, current)
            if updated != current:
                result.modified += 1
            self._documents[key] = updated
        for key, value in inserts:
            if key in self._documents:
                raise BackendFailure("insert_many", KeyError(key))
            entity = build_entity(self._entity_type, value) if isinstance(value, Mapping) else value
            self._documents[key] = copy.deepcopy(self._options.entry(key, entity))
            result.inserted += 1
        for key in deletes:
            if self._documents.pop(key, None) is not None:
                result.deleted += 1
        return result

    def _to_entity(self, document: Dict[str, Any]) -> Any:
        return build_entity(self._entity_type, copy.deepcopy(self._options.value(document)))
