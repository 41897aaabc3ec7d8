"""
목적: 저장소 엔진 구현체 모듈을 제공한다.
설명: 각 저장소 엔진 클래스를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/db_plumbing/integrations/db/engines/*/store.py
"""

from db_plumbing.integrations.db.engines.memory import InMemoryStore
from db_plumbing.integrations.db.engines.mongodb import MongoStore, StoreClient

__all__ = ["InMemoryStore", "MongoStore", "StoreClient"]
