"""
목적: 문서 저장소 추상 인터페이스를 정의한다.
설명: 키 조회, 전체 조회, 조건자 기반 조회/삭제, 업서트, 삭제, 벌크 동기화를 비동기 메서드로 제공한다.
디자인 패턴: 전략 패턴
참조: src/db_plumbing/integrations/db/engines/mongodb/store.py, src/db_plumbing/integrations/db/engines/memory/store.py
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, AsyncIterator, Hashable, List

from db_plumbing.core.patch import BatchPatch
from db_plumbing.integrations.db.base.models import BulkResult


class BaseStore(ABC):
    """문서 저장소 인터페이스.

    조건자(`predicate`)는 `NamedPredicate`이다. 인메모리 저장소는 일반 `(value, entity) -> bool` 함수도 받는다.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """저장소 구현 이름을 반환한다."""

    @abstractmethod
    async def find(self, key: Hashable) -> Any:
        """키로 엔티티를 조회한다. 없으면 `NotFound`를 발생시킨다."""

    @abstractmethod
    def iterate_all(self) -> AsyncIterator[Any]:
        """전체 엔티티를 순회한다. 한 번 소비하면 다시 시작할 수 없다."""

    async def all(self) -> List[Any]:
        """전체 엔티티 목록을 매번 새로 만들어 반환한다."""

        return [entity async for entity in self.iterate_all()]

    @abstractmethod
    async def find_all(self, predicate: Any, value: Any) -> List[Any]:
        """조건자와 값에 해당하는 엔티티 목록을 반환한다."""

    @abstractmethod
    async def update(self, entity: Any) -> None:
        """엔티티를 키 기준으로 삽입 또는 갱신한다."""

    @abstractmethod
    async def remove(self, key: Hashable) -> int:
        """키로 엔티티를 삭제하고 삭제 건수를 반환한다."""

    @abstractmethod
    async def remove_all(self, predicate: Any, value: Any) -> int:
        """조건자와 값에 해당하는 엔티티를 삭제하고 삭제 건수를 반환한다."""

    @abstractmethod
    async def bulk(self, patch: BatchPatch) -> BulkResult:
        """BatchPatch가 기술한 최종 상태로 컬렉션을 동기화한다."""
