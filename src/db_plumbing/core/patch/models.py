"""
목적: 키 기반 컬렉션 변경을 표현하는 패치 문법을 정의한다.
설명: Replace/Delete/Merge/Insert 네 가지 연산과 키 -> 연산의 순서 있는 묶음(BatchPatch)을 제공한다.
디자인 패턴: 값 객체, 태그드 유니온
참조: src/db_plumbing/core/patch/compare.py, src/db_plumbing/integrations/db/engines/mongodb/bulk_sequencer.py
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Hashable, Iterable, Iterator, Mapping, Tuple, Union


@dataclass(frozen=True)
class Replace:
    """필드(또는 루트) 값을 통째로 덮어쓴다."""

    value: Any


@dataclass(frozen=True)
class Insert:
    """새 엔티티를 추가한다."""

    value: Any


class Delete:
    """필드(또는 루트)를 제거한다. 인스턴스는 `DELETE` 하나뿐이다."""

    _instance: "Delete | None" = None

    def __new__(cls) -> "Delete":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "DELETE"

    def __reduce__(self):
        return (Delete, ())


DELETE = Delete()


@dataclass(frozen=True)
class Merge:
    """언급된 필드에만 하위 패치를 재귀적으로 적용한다."""

    fields: Mapping[str, "Patch"] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for name, operation in self.fields.items():
            if not isinstance(name, str):
                raise TypeError(f"Merge 필드 이름은 문자열이어야 합니다: {name!r}")
            if not isinstance(operation, PATCH_TYPES):
                raise TypeError(f"Merge 필드 값은 패치 연산이어야 합니다: {name}={operation!r}")
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def __bool__(self) -> bool:
        return bool(self.fields)

    @property
    def is_noop(self) -> bool:
        """하위 Merge까지 내려가도 바꾸는 필드가 없으면 참이다."""

        return all(
            isinstance(operation, Merge) and operation.is_noop
            for operation in self.fields.values()
        )

    def __repr__(self) -> str:
        return f"Merge({dict(self.fields)!r})"


Patch = Union[Replace, Delete, Merge, Insert]
PATCH_TYPES = (Replace, Delete, Merge, Insert)


class BatchPatch:
    """엔티티 키 -> 패치의 순서 있는 매핑이다.

    한 BatchPatch 안에서 같은 키는 한 번만 나타날 수 있다.

    Args:
        entries: `Mapping` 또는 `(key, patch)` 쌍의 이터러블.
    """

    __slots__ = ("_entries",)

    def __init__(
        self,
        entries: Union[Mapping[Hashable, Patch], Iterable[Tuple[Hashable, Patch]]] = (),
    ) -> None:
        pairs = entries.items() if isinstance(entries, Mapping) else entries
        collected: list[Tuple[Hashable, Patch]] = []
        seen: set = set()
        for key, operation in pairs:
            if key in seen:
                raise ValueError(f"BatchPatch에 중복된 키가 있습니다: {key!r}")
            if not isinstance(operation, PATCH_TYPES):
                raise TypeError(f"BatchPatch 값은 패치 연산이어야 합니다: {key!r}={operation!r}")
            seen.add(key)
            collected.append((key, operation))
        self._entries: Tuple[Tuple[Hashable, Patch], ...] = tuple(collected)

    @property
    def entries(self) -> Tuple[Tuple[Hashable, Patch], ...]:
        return self._entries

    def keys(self) -> list:
        return [key for key, _ in self._entries]

    def __iter__(self) -> Iterator[Tuple[Hashable, Patch]]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BatchPatch):
            return NotImplemented
        return self._entries == other._entries

    def __hash__(self) -> int:
        return hash(tuple(key for key, _ in self._entries))

    def __repr__(self) -> str:
        return f"BatchPatch({list(self._entries)!r})"
