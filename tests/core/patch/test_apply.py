"""
목적: 패치의 메모리 적용 결과를 검증한다.
설명: 원본 불변, 누락 필드에 대한 중첩 Merge, 잘못된 위치의 연산 거부를 확인한다.
디자인 패턴: 인터프리터 단위 테스트
참조: src/db_plumbing/core/patch/apply.py
"""

from __future__ import annotations

import pytest

from db_plumbing.core.errors import UnsupportedPatchShape
from db_plumbing.core.patch import DELETE, Insert, Merge, Replace, apply


def test_apply_merge_does_not_mutate_source() -> None:
    record = {"a": "hello", "b": {"x": 1}, "c": 3}
    patch = Merge({"a": Replace("hi"), "b": Merge({"y": Replace(2)}), "c": DELETE, "d": Merge({"e": Replace(0)})})

    result = apply(patch, record)

    assert result == {"a": "hi", "b": {"x": 1, "y": 2}, "d": {"e": 0}}
    assert record == {"a": "hello", "b": {"x": 1}, "c": 3}


def test_apply_replace_and_insert_copy_value() -> None:
    value = {"nested": [1]}

    replaced = apply(Replace(value), {"old": True})
    inserted = apply(Insert(value), None)

    assert replaced == value and replaced is not value
    assert inserted["nested"] is not value["nested"]


def test_apply_rejects_invalid_positions() -> None:
    """루트 DELETE, 필드 위치의 Insert, 매핑이 아닌 대상은 거부된다."""

    with pytest.raises(UnsupportedPatchShape):
        apply(DELETE, {"a": 1})
    with pytest.raises(UnsupportedPatchShape) as error:
        apply(Merge({"a": Insert(1)}), {"a": 0})
    assert error.value.position == "a"
    with pytest.raises(UnsupportedPatchShape):
        apply(Merge({"a": Merge({"b": Replace(1)})}), {"a": 5})
