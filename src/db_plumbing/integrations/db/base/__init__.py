"""
목적: 저장소 베이스 모듈 공개 API를 제공한다.
설명: 공통 인터페이스, 결과 모델, 추출 옵션을 노출한다.
디자인 패턴: 퍼사드
참조: src/db_plumbing/integrations/db/base/store.py, src/db_plumbing/integrations/db/base/options.py
"""

from db_plumbing.integrations.db.base.models import BulkResult
from db_plumbing.integrations.db.base.options import (
    DEFAULT_OPTIONS,
    StoreOptions,
    build_entity,
    to_record,
)
from db_plumbing.integrations.db.base.store import BaseStore

__all__ = [
    "BaseStore",
    "BulkResult",
    "DEFAULT_OPTIONS",
    "StoreOptions",
    "build_entity",
    "to_record",
]
