"""
목적: MongoDB 기반 문서 저장소 파사드를 제공한다.
설명: 표준 CRUD와 함께 조건자 기반 조회/삭제, BatchPatch 기반 벌크 동기화를 지원한다.
디자인 패턴: 파사드, 어댑터 패턴
참조: src/db_plumbing/integrations/db/base/store.py, src/db_plumbing/integrations/db/engines/mongodb/bulk_sequencer.py
"""

from __future__ import annotations

from typing import Any, AsyncIterator, Hashable, List, Optional

from pymongo.errors import PyMongoError

from db_plumbing.core.errors import BackendFailure, NotFound
from db_plumbing.core.patch import BatchPatch
from db_plumbing.integrations.db.base.models import BulkResult
from db_plumbing.integrations.db.base.options import DEFAULT_OPTIONS, StoreOptions
from db_plumbing.integrations.db.base.store import BaseStore
from db_plumbing.integrations.db.engines.mongodb.bulk_sequencer import MongoBulkSequencer
from db_plumbing.integrations.db.engines.mongodb.connection import (
    CollectionSource,
    DeferredCollection,
    guarded,
)
from db_plumbing.integrations.db.engines.mongodb.document_mapper import MongoDocumentMapper
from db_plumbing.integrations.db.engines.mongodb.index_map import IndexMap, NamedPredicate
from db_plumbing.shared.logging import LogContext, Logger, create_default_logger


class MongoStore(BaseStore):
    """MongoDB 문서 저장소.

    Args:
        collection: MongoDB 컬렉션, 그 awaitable, 또는 컬렉션을 돌려주는 팩토리.
        entity_type: 저장 엔티티 타입. `from_record` 클래스 메서드, Pydantic 모델,
            키워드 생성자 순으로 생성 방법을 고른다.
        indexes: 조건자 -> MongoDB 필터 변환 규칙.
        options: 키/값/엔트리 추출 규칙.
        logger: 주입 가능한 로거.
    """

    def __init__(
        self,
        collection: CollectionSource,
        entity_type: Optional[type] = None,
        indexes: Optional[IndexMap] = None,
        options: StoreOptions = DEFAULT_OPTIONS,
        logger: Optional[Logger] = None,
    ) -> None:
        if indexes is not None and not isinstance(indexes, IndexMap):
            raise TypeError("indexes는 IndexMap 인스턴스여야 합니다.")
        if not isinstance(options, StoreOptions):
            raise TypeError("options는 StoreOptions 인스턴스여야 합니다.")
        self._collection = (
            collection if isinstance(collection, DeferredCollection) else DeferredCollection(collection)
        )
        self._indexes = indexes if indexes is not None else IndexMap()
        self._mapper = MongoDocumentMapper(entity_type=entity_type, options=options)
        self._logger = logger or create_default_logger("MongoStore")
        self._sequencer = MongoBulkSequencer(mapper=self._mapper, logger=self._logger)

    DoesNotExist = NotFound

    @property
    def name(self) -> str:
        return "mongodb"

    @property
    def indexes(self) -> IndexMap:
        return self._indexes

    @property
    def mapper(self) -> MongoDocumentMapper:
        return self._mapper

    async def find(self, key: Hashable) -> Any:
        self._debug("find", key=key)
        collection = await self._collection.get()
        document = await guarded("find_one", collection.find_one(self._mapper.key_filter(key)))
        if document is None:
            raise NotFound(key)
        return self._mapper.from_document(document)

    async def iterate_all(self) -> AsyncIterator[Any]:
        self._debug("all")
        async for entity in self._iterate({}):
            yield entity

    async def find_all(self, predicate: Any, value: Any) -> List[Any]:
        self._debug("find_all", predicate=getattr(predicate, "name", predicate), value=value)
        criteria = self._indexes.translate(predicate, value)
        return [entity async for entity in self._iterate(criteria)]

    async def scan(self, predicate: NamedPredicate, value: Any) -> List[Any]:
        """전체 컬렉션을 읽어 조건자 함수를 직접 실행한다.

        인덱스 등록이 필요 없는 대신 모든 문서를 가져오는 느린 경로이며
        `find_all`을 대신하지 않는다.
        """

        if not callable(predicate):
            raise TypeError("scan에는 실행 가능한 조건자가 필요합니다.")
        self._debug("scan", predicate=getattr(predicate, "name", predicate), value=value)
        return [entity async for entity in self._iterate({}) if predicate(value, entity)]

    async def update(self, entity: Any) -> None:
        key, document = self._mapper.to_document(entity)
        self._debug("update", key=key)
        collection = await self._collection.get()
        await guarded(
            "replace_one",
            collection.replace_one(self._mapper.key_filter(key), document, upsert=True),
        )

    async def remove(self, key: Hashable) -> int:
        self._debug("remove", key=key)
        collection = await self._collection.get()
        result = await guarded("delete_one", collection.delete_one(self._mapper.key_filter(key)))
        if result.deleted_count != 1:
            self._logger.warning(
                "삭제된 문서 수가 예상과 다릅니다.",
                LogContext(operation="remove"),
                metadata={"key": key, "deleted": result.deleted_count},
            )
        return result.deleted_count

    async def remove_all(self, predicate: Any, value: Any) -> int:
        self._debug("remove_all", predicate=getattr(predicate, "name", predicate), value=value)
        criteria = self._indexes.translate(predicate, value)
        collection = await self._collection.get()
        result = await guarded("delete_many", collection.delete_many(criteria))
        return result.deleted_count

    async def bulk(self, patch: BatchPatch) -> BulkResult:
        self._debug("bulk", size=len(patch) if isinstance(patch, BatchPatch) else None)
        plan = self._sequencer.plan(patch)
        if plan.is_empty:
            return BulkResult(skipped=plan.skipped)
        collection = await self._collection.get()
        return await self._sequencer.execute(collection, plan)

    async def _iterate(self, criteria: dict) -> AsyncIterator[Any]:
        collection = await self._collection.get()
        cursor = collection.find(criteria)
        try:
            async for document in cursor:
                yield self._mapper.from_document(document)
        except PyMongoError as exc:
            raise BackendFailure("find", exc) from exc

    def _debug(self, operation: str, **metadata: Any) -> None:
        self._logger.debug(operation, LogContext(operation=operation), metadata=metadata)
