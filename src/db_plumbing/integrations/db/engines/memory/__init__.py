"""
목적: 인메모리 저장소 엔진 공개 API를 제공한다.
설명: 인메모리 저장소 클래스를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/db_plumbing/integrations/db/engines/memory/store.py
"""

from db_plumbing.integrations.db.engines.memory.store import InMemoryStore

__all__ = ["InMemoryStore"]
