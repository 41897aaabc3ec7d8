"""
목적: 이름 있는 조건자를 MongoDB 쿼리 조각으로 변환하는 인덱스 맵을 제공한다.
설명: 애플리케이션이 필터 함수로 전달하는 조건자를 이름으로 찾아 선언적 필터로 바꾼다.
디자인 패턴: 레지스트리, 빌더 패턴
참조: src/db_plumbing/integrations/db/engines/mongodb/store.py

인메모리 저장소는 조건자 함수를 직접 실행하지만 MongoDB는 임의 함수를 실행할 수 없다.
IndexMap은 같은 조건자 식별자가 두 용도 모두에 쓰이도록 이름 -> 쿼리 조각 생성기를 보관한다.
`store.find_all(p, v)`의 결과는 `[e for e in store.all() if p(v, e)]`와 같아야 한다.
현재는 단일 필드 동등 비교만 지원한다.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional, Union

from db_plumbing.core.errors import UnsupportedIndex

QueryFragment = Dict[str, Any]
FragmentFactory = Callable[[Any], QueryFragment]


@dataclass(frozen=True)
class NamedPredicate:
    """이름으로 식별되는 불변 조건자 서술자이다.

    Args:
        name: 레지스트리 조회 키로 쓰이는 안정적인 이름.
        function: `(value, entity) -> bool` 함수. 인메모리 저장소와 전체 스캔 경로만 호출한다.
    """

    name: str
    function: Optional[Callable[[Any, Any], bool]] = None

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError("조건자 이름은 비어 있지 않은 문자열이어야 합니다.")

    def __call__(self, value: Any, entity: Any) -> bool:
        if self.function is None:
            raise TypeError(f"실행 본문이 없는 조건자입니다: {self.name}")
        return bool(self.function(value, entity))


def named_predicate(
    name: Union[str, Callable[[Any, Any], bool]],
) -> Any:
    """함수를 `NamedPredicate`로 감싸는 데코레이터.

    `@named_predicate`로 쓰면 함수 이름을, `@named_predicate("by_a")`로 쓰면 주어진 이름을 사용한다.
    """

    if callable(name):
        return NamedPredicate(name=name.__name__, function=name)

    def _decorate(function: Callable[[Any, Any], bool]) -> NamedPredicate:
        return NamedPredicate(name=name, function=function)

    return _decorate


def predicate_name(predicate: Union[NamedPredicate, str]) -> str:
    """조건자 식별자에서 이름을 꺼낸다."""

    if isinstance(predicate, NamedPredicate):
        return predicate.name
    if isinstance(predicate, str):
        return predicate
    raise TypeError(
        "조건자는 NamedPredicate 또는 이름 문자열이어야 합니다: "
        f"{type(predicate).__name__}"
    )


def _field_equals(field_name: str) -> FragmentFactory:
    def _fragment(value: Any) -> QueryFragment:
        return {field_name: value}

    return _fragment


class IndexMap:
    """조건자 이름 -> MongoDB 쿼리 조각 생성기 레지스트리."""

    def __init__(self) -> None:
        self._maps: Dict[str, FragmentFactory] = {}
        self._fields: Dict[str, str] = {}

    def register(self, predicate: Union[NamedPredicate, str], field_name: str) -> "IndexMap":
        """단일 필드 동등 비교 인덱스를 등록한다.

        Args:
            predicate: 저장소 항목을 거르는 조건자 또는 그 이름.
            field_name: `entity.field == value`가 조건자와 동치인 MongoDB 필드 이름(점 경로 허용).

        Returns:
            연쇄 호출을 위한 자기 자신.
        """

        if not field_name:
            raise ValueError("field_name은 비어 있을 수 없습니다.")
        name = predicate_name(predicate)
        self._maps[name] = _field_equals(field_name)
        self._fields[name] = field_name
        return self

    add_simple_field = register

    def translate(self, predicate: Union[NamedPredicate, str], value: Any) -> QueryFragment:
        """조건자와 값을 MongoDB 필터로 변환한다. 미등록이면 `UnsupportedIndex`를 발생시킨다."""

        name = predicate_name(predicate)
        factory = self._maps.get(name)
        if factory is None:
            raise UnsupportedIndex(name)
        return factory(value)

    to_mongo_criteria = translate

    @property
    def fields(self) -> Mapping[str, str]:
        """등록된 조건자 이름 -> 필드 이름 매핑을 반환한다."""

        return MappingProxyType(self._fields)

    def __contains__(self, predicate: object) -> bool:
        if isinstance(predicate, NamedPredicate):
            return predicate.name in self._maps
        return predicate in self._maps

    def __len__(self) -> int:
        return len(self._maps)
