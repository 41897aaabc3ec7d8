"""
목적: MongoDB 문서 매퍼 모듈을 제공한다.
설명: 엔티티와 MongoDB 문서 간 변환, 키 필터 생성을 담당한다.
디자인 패턴: 매퍼 패턴
참조: src/db_plumbing/integrations/db/base/options.py
"""

from __future__ import annotations

from typing import Any, Dict, Hashable, Iterable, Mapping, Optional, Tuple

from db_plumbing.integrations.db.base.options import DEFAULT_OPTIONS, StoreOptions, build_entity
from db_plumbing.shared.const import StoreConst


class MongoDocumentMapper:
    """MongoDB 문서 매퍼.

    Args:
        entity_type: 저장 엔티티 타입. `None`이면 사전을 그대로 사용한다.
        options: 키/값/엔트리 추출 규칙.
    """

    def __init__(
        self,
        entity_type: Optional[type] = None,
        options: StoreOptions = DEFAULT_OPTIONS,
    ) -> None:
        self._entity_type = entity_type
        self._options = options

    @property
    def entity_type(self) -> Optional[type]:
        return self._entity_type

    @property
    def options(self) -> StoreOptions:
        return self._options

    def key_of(self, entity: Any) -> Hashable:
        """엔티티의 키를 반환한다."""

        return self._options.key(entity)

    def to_document(self, entity: Any) -> Tuple[Hashable, Dict[str, Any]]:
        """엔티티를 `(키, 업서트용 문서)`로 변환한다."""

        key = self.key_of(entity)
        return key, self._options.entry(key, entity)

    def to_insert_document(self, key: Hashable, value: Any) -> Dict[str, Any]:
        """Insert 패치 값을 엔티티로 재구성한 뒤 삽입용 문서로 변환한다."""

        entity = value
        if isinstance(value, Mapping):
            entity = build_entity(self._entity_type, value)
        return self._options.entry(key, entity)

    def from_document(self, document: Mapping[str, Any]) -> Any:
        """MongoDB 문서를 엔티티로 변환한다."""

        return build_entity(self._entity_type, self._options.value(document))

    def key_filter(self, key: Hashable) -> Dict[str, Any]:
        return {StoreConst.ID_FIELD: key}

    def keys_filter(self, keys: Iterable[Hashable]) -> Dict[str, Any]:
        return {StoreConst.ID_FIELD: {StoreConst.IN_OPERATOR: list(keys)}}
