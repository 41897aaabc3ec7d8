"""
목적: 저장소의 키/값/엔트리 추출 규칙과 엔티티 생성 규칙을 제공한다.
설명: 전역 가변 기본 옵션 대신 저장소 생성 시 주입하는 불변 설정 객체를 정의한다.
디자인 패턴: 전략 패턴, 팩토리 메서드
참조: src/db_plumbing/integrations/db/engines/mongodb/document_mapper.py
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Dict, Hashable, Optional

from pydantic import BaseModel

from db_plumbing.shared.const import StoreConst


def to_record(entity: Any) -> Dict[str, Any]:
    """엔티티를 필드 사전으로 변환한다."""

    if isinstance(entity, Mapping):
        return dict(entity)
    if isinstance(entity, BaseModel):
        return entity.model_dump()
    if dataclasses.is_dataclass(entity) and not isinstance(entity, type):
        return dataclasses.asdict(entity)
    to_json = getattr(entity, "to_json", None)
    if callable(to_json):
        return dict(to_json())
    if hasattr(entity, "__dict__"):
        return dict(vars(entity))
    raise TypeError(f"레코드로 변환할 수 없는 엔티티입니다: {type(entity).__name__}")


def build_entity(entity_type: Optional[type], record: Mapping[str, Any]) -> Any:
    """레코드로부터 `entity_type` 엔티티를 생성한다.

    `from_record`/`from_json` 클래스 메서드가 있으면 우선 사용한다.
    """

    if entity_type is None or entity_type is dict:
        return dict(record)
    for factory_name in ("from_record", "from_json"):
        factory = getattr(entity_type, factory_name, None)
        if callable(factory):
            return factory(dict(record))
    if isinstance(entity_type, type) and issubclass(entity_type, BaseModel):
        return entity_type.model_validate(dict(record))
    return entity_type(**record)


def default_key(entity: Any) -> Hashable:
    """`uid` 필드(또는 속성)를 키로 사용한다."""

    if isinstance(entity, Mapping):
        return entity[StoreConst.DEFAULT_KEY_FIELD]
    return getattr(entity, StoreConst.DEFAULT_KEY_FIELD)


def default_value(record: Mapping[str, Any]) -> Dict[str, Any]:
    """백엔드 문서에서 식별자 필드를 뺀 레코드를 반환한다."""

    return {name: value for name, value in record.items() if name != StoreConst.ID_FIELD}


def default_entry(key: Hashable, entity: Any) -> Dict[str, Any]:
    """엔티티 필드에 식별자 필드를 더한 백엔드 문서를 반환한다."""

    document = to_record(entity)
    document[StoreConst.ID_FIELD] = key
    return document


@dataclass(frozen=True)
class StoreOptions:
    """저장소 추출 규칙 설정이다.

    Args:
        key: 엔티티에서 키를 꺼내는 함수.
        value: 백엔드 문서를 엔티티 생성용 레코드로 바꾸는 함수.
        entry: 키와 엔티티로 백엔드 문서를 만드는 함수.
    """

    key: Callable[[Any], Hashable] = default_key
    value: Callable[[Mapping[str, Any]], Mapping[str, Any]] = default_value
    entry: Callable[[Hashable, Any], Dict[str, Any]] = default_entry

    @classmethod
    def keyed_by(cls, field_name: str) -> "StoreOptions":
        """`uid` 대신 `field_name`을 키로 쓰는 옵션을 만든다."""

        def _key(entity: Any) -> Hashable:
            if isinstance(entity, Mapping):
                return entity[field_name]
            return getattr(entity, field_name)

        return cls(key=_key)


DEFAULT_OPTIONS = StoreOptions()
