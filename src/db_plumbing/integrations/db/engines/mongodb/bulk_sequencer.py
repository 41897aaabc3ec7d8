"""
목적: BatchPatch를 갱신/삽입/삭제 그룹으로 분류하고 MongoDB 호출 순서를 결정한다.
설명: 분류는 백엔드 호출 전에 끝나며(실패 시 아무 것도 보내지 않음), 실행은 갱신 -> 일괄 삽입 -> 일괄 삭제 순서로 진행한다.
디자인 패턴: 커맨드 패턴, 템플릿 메서드
참조: src/db_plumbing/integrations/db/engines/mongodb/update_translator.py, src/db_plumbing/integrations/db/engines/mongodb/store.py

실행 규칙:
1. 갱신은 BatchPatch 순서대로 키마다 한 번씩 순차 호출한다.
2. 모든 갱신이 끝난 뒤 삽입 대상 전체를 한 번에 삽입한다.
3. 그 다음 삭제 대상 전체를 한 번에 삭제한다.
4. 어느 단계든 실패하면 즉시 중단하며, 앞 단계에서 반영된 내용은 되돌리지 않는다.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Hashable, Optional, Tuple

from db_plumbing.core.errors import UnsupportedPatchShape
from db_plumbing.core.patch import BatchPatch, Delete, Insert, Merge
from db_plumbing.integrations.db.base.models import BulkResult
from db_plumbing.integrations.db.engines.mongodb.connection import guarded
from db_plumbing.integrations.db.engines.mongodb.document_mapper import MongoDocumentMapper
from db_plumbing.integrations.db.engines.mongodb.update_translator import (
    MongoUpdateTranslator,
    UpdateCommand,
)
from db_plumbing.shared.logging import LogContext, Logger, create_default_logger


@dataclass(frozen=True)
class BulkPlan:
    """분류가 끝난 벌크 작업 계획이다.

    Args:
        updates: BatchPatch 순서를 유지한 `(키, 갱신 명령)` 목록. 빈 명령은 제외된다.
        inserts: 삽입할 문서 목록.
        deletes: 삭제할 키 목록.
        skipped: 빈 Merge라서 제외된 갱신 수.
    """

    updates: Tuple[Tuple[Hashable, UpdateCommand], ...] = ()
    inserts: Tuple[Dict[str, Any], ...] = ()
    deletes: Tuple[Hashable, ...] = ()
    skipped: int = 0

    @property
    def is_empty(self) -> bool:
        return not (self.updates or self.inserts or self.deletes)


class MongoBulkSequencer:
    """BatchPatch 분류기 겸 실행 순서 결정기."""

    def __init__(
        self,
        mapper: MongoDocumentMapper,
        translator: Optional[MongoUpdateTranslator] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        self._mapper = mapper
        self._translator = translator or MongoUpdateTranslator()
        self._logger = logger or create_default_logger("MongoBulkSequencer")

    def plan(self, patch: BatchPatch) -> BulkPlan:
        """BatchPatch를 분류한다. 최상위 Replace 등은 `UnsupportedPatchShape`로 거부한다."""

        if not isinstance(patch, BatchPatch):
            raise TypeError("벌크 작업은 BatchPatch만 처리합니다.")
        updates: list[Tuple[Hashable, UpdateCommand]] = []
        inserts: list[Dict[str, Any]] = []
        deletes: list[Hashable] = []
        skipped = 0
        for key, operation in patch:
            if isinstance(operation, Merge):
                command = self._translator.translate(operation)
                if not command:
                    skipped += 1
                    continue
                updates.append((key, command))
            elif isinstance(operation, Insert):
                inserts.append(self._mapper.to_insert_document(key, operation.value))
            elif isinstance(operation, Delete):
                deletes.append(key)
            else:
                raise UnsupportedPatchShape(operation, f"key={key!r}")
        return BulkPlan(
            updates=tuple(updates),
            inserts=tuple(inserts),
            deletes=tuple(deletes),
            skipped=skipped,
        )

    async def execute(self, collection: Any, plan: BulkPlan) -> BulkResult:
        """계획을 갱신 -> 삽입 -> 삭제 순서로 실행한다."""

        context = LogContext(operation="bulk", collection=getattr(collection, "name", None))
        result = BulkResult(skipped=plan.skipped)
        for key, command in plan.updates:
            self._logger.debug(
                "bulk 갱신",
                context,
                metadata={"key": key, "command": command},
            )
            outcome = await guarded(
                "update_one",
                collection.update_one(self._mapper.key_filter(key), command),
            )
            result.matched += outcome.matched_count
            result.modified += outcome.modified_count
            if outcome.matched_count == 0:
                self._logger.warning("bulk 갱신 대상 문서가 없습니다.", context, metadata={"key": key})
        if plan.inserts:
            self._logger.debug("bulk 삽입", context, metadata={"count": len(plan.inserts)})
            outcome = await guarded("insert_many", collection.insert_many(list(plan.inserts)))
            result.inserted = len(outcome.inserted_ids)
        if plan.deletes:
            self._logger.debug("bulk 삭제", context, metadata={"keys": list(plan.deletes)})
            outcome = await guarded(
                "delete_many",
                collection.delete_many(self._mapper.keys_filter(plan.deletes)),
            )
            result.deleted = outcome.deleted_count
        return result

    async def run(self, collection: Any, patch: BatchPatch) -> BulkResult:
        """분류와 실행을 이어서 수행한다."""

        plan = self.plan(patch)
        return await self.execute(collection, plan)
