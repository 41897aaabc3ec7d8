"""
목적: MongoDB 데이터베이스 연결을 캡슐화하는 저장소 클라이언트를 제공한다.
설명: 연결 관리자를 소유하고, 컬렉션별 MongoStore를 생성한다.
디자인 패턴: 팩토리 메서드, 파사드
참조: src/db_plumbing/integrations/db/engines/mongodb/connection.py, src/db_plumbing/integrations/db/engines/mongodb/store.py
"""

from __future__ import annotations

from typing import Optional, Union

from db_plumbing.integrations.db.base.options import DEFAULT_OPTIONS, StoreOptions
from db_plumbing.integrations.db.engines.mongodb.connection import MongoConnectionManager
from db_plumbing.integrations.db.engines.mongodb.index_map import IndexMap
from db_plumbing.integrations.db.engines.mongodb.store import MongoStore
from db_plumbing.shared.config import MongoSettings
from db_plumbing.shared.logging import Logger, create_default_logger


class StoreClient:
    """MongoDB 저장소 클라이언트.

    생성만으로는 연결하지 않는다. 첫 저장소 작업이 연결을 트리거한다.

    Args:
        settings: 연결 URI 문자열 또는 `MongoSettings`.
        logger: 주입 가능한 로거.
        connection: 테스트 등에서 주입할 연결 관리자.
    """

    def __init__(
        self,
        settings: Union[str, MongoSettings],
        logger: Optional[Logger] = None,
        connection: Optional[MongoConnectionManager] = None,
    ) -> None:
        if isinstance(settings, str):
            settings = MongoSettings(uri=settings)
        self._logger = logger or create_default_logger("StoreClient")
        self._connection = connection or MongoConnectionManager(settings=settings, logger=self._logger)

    @property
    def connection(self) -> MongoConnectionManager:
        return self._connection

    def get_store(
        self,
        collection: str,
        entity_type: Optional[type] = None,
        indexes: Optional[IndexMap] = None,
        options: StoreOptions = DEFAULT_OPTIONS,
    ) -> MongoStore:
        """컬렉션 이름에 해당하는 저장소를 반환한다.

        Args:
            collection: MongoDB 컬렉션 이름.
            entity_type: 저장 엔티티 타입(기본값: dict).
            indexes: 조건자 인덱스(기본값: 빈 IndexMap).
            options: 키/값/엔트리 추출 규칙.
        """

        if not collection:
            raise ValueError("collection 이름이 필요합니다.")
        connection = self._connection

        async def _resolve():
            return await connection.collection(collection)

        return MongoStore(
            collection=_resolve,
            entity_type=entity_type,
            indexes=indexes,
            options=options,
            logger=self._logger,
        )

    async def close(self) -> None:
        await self._connection.close()

    async def __aenter__(self) -> "StoreClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
