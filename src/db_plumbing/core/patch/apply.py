"""
목적: 패치를 메모리상의 레코드에 적용한다.
설명: 원본을 변경하지 않고 새 값을 만들어 반환한다. 인메모리 저장소의 벌크 처리에서 사용한다.
디자인 패턴: 인터프리터
참조: src/db_plumbing/core/patch/models.py, src/db_plumbing/integrations/db/engines/memory/store.py
"""

from __future__ import annotations

import copy
from typing import Any, Dict, Mapping

from db_plumbing.core.errors import UnsupportedPatchShape
from db_plumbing.core.patch.models import Delete, Insert, Merge, Patch, Replace


def apply(patch: Patch, value: Any) -> Any:
    """루트 값에 패치를 적용한 결과를 반환한다.

    루트 DELETE는 값이 아니라 제거 지시이므로 호출자가 먼저 처리해야 한다.
    """

    if isinstance(patch, (Replace, Insert)):
        return copy.deepcopy(patch.value)
    if isinstance(patch, Merge):
        return _merge(patch, value, path="")
    raise UnsupportedPatchShape(patch, "root")


def _merge(patch: Merge, value: Any, path: str) -> Dict[str, Any]:
    if not isinstance(value, Mapping):
        raise UnsupportedPatchShape(patch, path or "root")
    merged = dict(value)
    for name, operation in patch.fields.items():
        field_path = f"{path}.{name}" if path else name
        if isinstance(operation, Replace):
            merged[name] = copy.deepcopy(operation.value)
        elif isinstance(operation, Delete):
            merged.pop(name, None)
        elif isinstance(operation, Merge):
            # 없는 필드에 대한 Merge는 빈 객체에서 시작한다.
            merged[name] = _merge(operation, merged.get(name, {}), field_path)
        else:
            raise UnsupportedPatchShape(operation, field_path)
    return merged
