"""
목적: 저장소 공통 결과 모델을 정의한다.
설명: 벌크 동기화 결과 집계를 Pydantic 모델로 제공한다.
디자인 패턴: 데이터 전송 객체(DTO)
참조: src/db_plumbing/integrations/db/base/store.py
"""

from __future__ import annotations

from pydantic import BaseModel


class BulkResult(BaseModel):
    """벌크 동기화 결과이다.

    Args:
        matched: 갱신 단계에서 매칭된 문서 수.
        modified: 갱신 단계에서 실제 변경된 문서 수.
        skipped: 변경 내용이 없어 호출을 생략한 갱신 수.
        inserted: 삽입된 문서 수.
        deleted: 삭제된 문서 수.
    """

    matched: int = 0
    modified: int = 0
    skipped: int = 0
    inserted: int = 0
    deleted: int = 0
