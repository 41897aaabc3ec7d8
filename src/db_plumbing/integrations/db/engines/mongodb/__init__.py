"""
목적: MongoDB 저장소 엔진 공개 API를 제공한다.
설명: 저장소 파사드, 클라이언트, 인덱스 맵, 패치 변환기와 벌크 시퀀서를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/db_plumbing/integrations/db/engines/mongodb/store.py
"""

from db_plumbing.integrations.db.engines.mongodb.bulk_sequencer import BulkPlan, MongoBulkSequencer
from db_plumbing.integrations.db.engines.mongodb.client import StoreClient
from db_plumbing.integrations.db.engines.mongodb.connection import (
    DeferredCollection,
    MongoConnectionManager,
)
from db_plumbing.integrations.db.engines.mongodb.document_mapper import MongoDocumentMapper
from db_plumbing.integrations.db.engines.mongodb.index_map import (
    IndexMap,
    NamedPredicate,
    named_predicate,
)
from db_plumbing.integrations.db.engines.mongodb.store import MongoStore
from db_plumbing.integrations.db.engines.mongodb.update_translator import (
    MongoUpdateTranslator,
    diff_to_mongo,
)

__all__ = [
    "BulkPlan",
    "MongoBulkSequencer",
    "StoreClient",
    "DeferredCollection",
    "MongoConnectionManager",
    "MongoDocumentMapper",
    "IndexMap",
    "NamedPredicate",
    "named_predicate",
    "MongoStore",
    "MongoUpdateTranslator",
    "diff_to_mongo",
]
