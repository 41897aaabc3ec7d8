"""
목적: 문서 저장소 통합 모듈 공개 API를 제공한다.
설명: 저장소 인터페이스, 엔진 구현체, 인덱스 맵, 도메인 예외를 노출한다.
디자인 패턴: 퍼사드
참조: src/db_plumbing/integrations/db/engines, src/db_plumbing/core/errors.py
"""

from db_plumbing.core.errors import (
    BackendFailure,
    DoesNotExist,
    NotFound,
    StoreError,
    UnsupportedIndex,
    UnsupportedPatchShape,
)
from db_plumbing.integrations.db.base import BaseStore, BulkResult, StoreOptions
from db_plumbing.integrations.db.engines import InMemoryStore, MongoStore, StoreClient
from db_plumbing.integrations.db.engines.mongodb import (
    IndexMap,
    NamedPredicate,
    named_predicate,
)

__all__ = [
    "BaseStore",
    "BulkResult",
    "StoreOptions",
    "InMemoryStore",
    "MongoStore",
    "StoreClient",
    "IndexMap",
    "NamedPredicate",
    "named_predicate",
    "StoreError",
    "NotFound",
    "DoesNotExist",
    "UnsupportedIndex",
    "UnsupportedPatchShape",
    "BackendFailure",
]
