"""
목적: 엔티티 하나의 Merge 패치를 MongoDB 부분 갱신 명령으로 변환한다.
설명: 중첩 Merge를 점 경로의 `$set`/`$unset` 목록으로 평탄화해 형제 필드를 보존한다.
디자인 패턴: 인터프리터, 빌더 패턴
참조: src/db_plumbing/core/patch/models.py, src/db_plumbing/integrations/db/engines/mongodb/bulk_sequencer.py
"""

from __future__ import annotations

from typing import Any, Dict

from db_plumbing.core.errors import UnsupportedPatchShape
from db_plumbing.core.patch import Delete, Merge, Patch, Replace
from db_plumbing.shared.const import StoreConst

UpdateCommand = Dict[str, Dict[str, Any]]


class MongoUpdateTranslator:
    """Merge 패치 -> MongoDB 갱신 명령 변환기.

    비어 있는 `$set`/`$unset` 그룹은 결과에서 생략한다. 빈 Merge는 빈 명령이 되며
    호출자는 이를 생략 가능한 no-op으로 취급한다.
    """

    def __init__(self, separator: str = StoreConst.PATH_SEPARATOR) -> None:
        self._separator = separator

    def translate(self, patch: Patch) -> UpdateCommand:
        """Merge 패치를 갱신 명령으로 변환한다."""

        if not isinstance(patch, Merge):
            raise UnsupportedPatchShape(patch, "root")
        assignments: Dict[str, Any] = {}
        removals: Dict[str, Any] = {}
        self._collect(patch, "", assignments, removals)
        command: UpdateCommand = {}
        if assignments:
            command[StoreConst.SET_OPERATOR] = assignments
        if removals:
            command[StoreConst.UNSET_OPERATOR] = removals
        return command

    def _collect(
        self,
        patch: Merge,
        prefix: str,
        assignments: Dict[str, Any],
        removals: Dict[str, Any],
    ) -> None:
        for name, operation in patch.fields.items():
            path = prefix + name
            # 구분자가 든 이름은 중첩 경로로, `$` 이름은 연산자로 해석되므로 거부한다.
            if not name or self._separator in name or name.startswith("$"):
                raise UnsupportedPatchShape(operation, path)
            if isinstance(operation, Replace):
                assignments[path] = operation.value
            elif isinstance(operation, Delete):
                removals[path] = ""
            elif isinstance(operation, Merge):
                self._collect(operation, path + self._separator, assignments, removals)
            else:
                raise UnsupportedPatchShape(operation, path)


def diff_to_mongo(patch: Patch) -> UpdateCommand:
    """기본 구분자로 Merge 패치를 변환한다."""

    return MongoUpdateTranslator().translate(patch)
