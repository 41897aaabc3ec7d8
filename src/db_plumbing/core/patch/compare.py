"""
목적: 두 상태의 차이로부터 패치를 생성한다.
설명: 레코드 간 비교는 Merge로, 컬렉션 간 비교는 BatchPatch로 만든다.
디자인 패턴: 비교기(Differ)
참조: src/db_plumbing/core/patch/models.py, src/db_plumbing/core/patch/apply.py
"""

from __future__ import annotations

from typing import Any, Dict, Hashable, Mapping

from db_plumbing.core.patch.models import DELETE, BatchPatch, Insert, Merge, Patch, Replace


def compare(before: Mapping[str, Any], after: Mapping[str, Any]) -> Merge:
    """`before`를 `after`로 바꾸는 Merge 패치를 반환한다.

    같은 값은 생략하고, 양쪽 모두 매핑인 필드는 중첩 Merge로 내려간다.
    차이가 없으면 빈 Merge를 반환한다.
    """

    if not isinstance(before, Mapping) or not isinstance(after, Mapping):
        raise TypeError("compare는 두 매핑을 비교합니다.")
    fields: Dict[str, Patch] = {}
    for name, new_value in after.items():
        if name not in before:
            fields[name] = Replace(new_value)
            continue
        old_value = before[name]
        if old_value == new_value:
            continue
        if isinstance(old_value, Mapping) and isinstance(new_value, Mapping):
            nested = compare(old_value, new_value)
            if nested:
                fields[name] = nested
            continue
        fields[name] = Replace(new_value)
    for name in before:
        if name not in after:
            fields[name] = DELETE
    return Merge(fields)


def compare_collections(
    before: Mapping[Hashable, Mapping[str, Any]],
    after: Mapping[Hashable, Mapping[str, Any]],
) -> BatchPatch:
    """키 -> 레코드 매핑 두 개를 동기화하는 BatchPatch를 반환한다.

    `after`의 순서로 추가/변경 키를 먼저 나열하고, 제거된 키는 `before` 순서로 뒤에 붙인다.
    변경 없는 엔티티는 포함하지 않는다.
    """

    entries: list = []
    for key, record in after.items():
        if key not in before:
            entries.append((key, Insert(record)))
            continue
        diff = compare(before[key], record)
        if diff:
            entries.append((key, diff))
    for key in before:
        if key not in after:
            entries.append((key, DELETE))
    return BatchPatch(entries)
