"""
목적: 문서 저장소 도메인 예외를 정의한다.
설명: 조회 실패, 미등록 인덱스, 지원하지 않는 패치 형태, 백엔드 실패를 구분한다.
디자인 패턴: 도메인 예외 객체
참조: src/db_plumbing/shared/exceptions/base.py
"""

from __future__ import annotations

from typing import Any, Optional

from db_plumbing.shared.exceptions import BaseAppException, ExceptionDetail


class StoreError(BaseAppException):
    """문서 저장소 예외의 공통 부모 클래스이다."""


class NotFound(StoreError):
    """단일 키 조회 결과가 없을 때 발생한다.

    Args:
        key: 조회한 엔티티 키.
    """

    def __init__(self, key: Any) -> None:
        super().__init__(
            message=f"키에 해당하는 문서가 없습니다: {key!r}",
            detail=ExceptionDetail(
                code="STORE-404",
                cause="document not found",
                metadata={"key": key},
            ),
        )
        self.key = key


DoesNotExist = NotFound


class UnsupportedIndex(StoreError):
    """등록되지 않은 이름의 조건자로 조회/삭제를 시도할 때 발생한다."""

    def __init__(self, name: str) -> None:
        super().__init__(
            message=f"등록되지 않은 인덱스입니다: {name}",
            detail=ExceptionDetail(
                code="STORE-INDEX",
                cause="predicate has no registered translation",
                hint="IndexMap.register로 조건자를 먼저 등록하세요.",
                metadata={"predicate": name},
            ),
        )
        self.name = name


class UnsupportedPatchShape(StoreError):
    """현재 위치에서 허용되지 않는 패치 연산을 만났을 때 발생한다.

    Args:
        operation: 문제가 된 패치 연산.
        position: 연산이 나타난 위치 설명(키 또는 필드 경로).
    """

    def __init__(self, operation: Any, position: Optional[str] = None) -> None:
        where = f" ({position})" if position else ""
        super().__init__(
            message=f"지원하지 않는 패치 형태입니다{where}: {operation!r}",
            detail=ExceptionDetail(
                code="STORE-PATCH",
                cause=type(operation).__name__,
                hint="최상위 Replace는 DELETE와 Insert로 나누어 표현하세요.",
                metadata={"position": position},
            ),
        )
        self.operation = operation
        self.position = position


class BackendFailure(StoreError):
    """백엔드 호출 자체가 실패했을 때 발생한다. 원본 예외는 `original`에 보관한다."""

    def __init__(self, operation: str, original: Exception) -> None:
        super().__init__(
            message=f"백엔드 호출이 실패했습니다({operation}): {original}",
            detail=ExceptionDetail(
                code="STORE-BACKEND",
                cause=type(original).__name__,
                metadata={"operation": operation},
            ),
            original=original,
        )
        self.operation = operation


__all__ = [
    "StoreError",
    "NotFound",
    "DoesNotExist",
    "UnsupportedIndex",
    "UnsupportedPatchShape",
    "BackendFailure",
]
