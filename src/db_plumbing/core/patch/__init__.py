"""
목적: 패치 문법 모듈 공개 API를 제공한다.
설명: 패치 연산, 패치 생성(compare), 메모리 적용(apply)을 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/db_plumbing/core/patch/models.py, src/db_plumbing/core/patch/compare.py
"""

from db_plumbing.core.patch.apply import apply
from db_plumbing.core.patch.compare import compare, compare_collections
from db_plumbing.core.patch.models import (
    DELETE,
    PATCH_TYPES,
    BatchPatch,
    Delete,
    Insert,
    Merge,
    Patch,
    Replace,
)

__all__ = [
    "DELETE",
    "PATCH_TYPES",
    "BatchPatch",
    "Delete",
    "Insert",
    "Merge",
    "Patch",
    "Replace",
    "apply",
    "compare",
    "compare_collections",
]
