"""
목적: db_plumbing 패키지 공개 API를 제공한다.
설명: 문서 저장소 파사드, 인덱스 맵, 패치 문법과 예외를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/db_plumbing/integrations/db/__init__.py, src/db_plumbing/core/patch/__init__.py
"""

from db_plumbing.core.patch import (
    DELETE,
    BatchPatch,
    Delete,
    Insert,
    Merge,
    Replace,
)
from db_plumbing.integrations.db import (
    BackendFailure,
    BaseStore,
    BulkResult,
    DoesNotExist,
    IndexMap,
    InMemoryStore,
    MongoStore,
    NamedPredicate,
    NotFound,
    StoreClient,
    StoreOptions,
    UnsupportedIndex,
    UnsupportedPatchShape,
    named_predicate,
)

__all__ = [
    "DELETE",
    "BatchPatch",
    "Delete",
    "Insert",
    "Merge",
    "Replace",
    "BaseStore",
    "BulkResult",
    "InMemoryStore",
    "MongoStore",
    "StoreClient",
    "StoreOptions",
    "IndexMap",
    "NamedPredicate",
    "named_predicate",
    "NotFound",
    "DoesNotExist",
    "UnsupportedIndex",
    "UnsupportedPatchShape",
    "BackendFailure",
]
