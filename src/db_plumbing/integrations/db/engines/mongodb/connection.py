"""
목적: MongoDB 비동기 연결과 지연 컬렉션 핸들을 관리한다.
설명: 클라이언트 초기화/종료, 데이터베이스 보장, 한 번만 해석되는 컬렉션 핸들, 백엔드 호출 예외 변환을 담당한다.
디자인 패턴: 매니저 패턴, 지연 초기화
참조: src/db_plumbing/integrations/db/engines/mongodb/client.py, src/db_plumbing/integrations/db/engines/mongodb/store.py
"""

from __future__ import annotations

import asyncio
import inspect
from typing import Any, Awaitable, Callable, Optional, TypeVar, Union

from pymongo import AsyncMongoClient
from pymongo.errors import PyMongoError

from db_plumbing.core.errors import BackendFailure
from db_plumbing.shared.config import MongoSettings
from db_plumbing.shared.logging import Logger, create_default_logger

T = TypeVar("T")

CollectionSource = Union[Any, Awaitable[Any], Callable[[], Any]]


async def guarded(operation: str, awaitable: Awaitable[T]) -> T:
    """백엔드 호출을 기다리고 pymongo 예외를 `BackendFailure`로 바꿔 다시 발생시킨다."""

    try:
        return await awaitable
    except PyMongoError as exc:
        raise BackendFailure(operation, exc) from exc


class DeferredCollection:
    """한 번만 해석되는 컬렉션 핸들.

    컬렉션 객체, 그 awaitable, 또는 인자 없는 팩토리를 받을 수 있다. 모든 저장소 작업은
    `get()`을 기다리므로 연결이 아직 맺어지는 중이어도 저장소를 바로 사용할 수 있다.
    해석 결과(실패 포함)는 캐시되어 이후 호출에 그대로 돌려준다.

    해석은 하나의 태스크에서 진행되며 호출자는 `asyncio.shield`로 그 태스크를 기다린다.
    첫 호출자가 취소되어도 해석은 계속되고, 다음 호출자가 같은 결과를 받는다.
    """

    def __init__(self, source: CollectionSource) -> None:
        if source is None:
            raise TypeError("collection은 None일 수 없습니다.")
        self._source = source
        self._task: Optional[asyncio.Future] = None
        self._resolved = False
        self._collection: Any = None
        self._error: Optional[Exception] = None

    @property
    def resolved(self) -> bool:
        return self._resolved

    async def get(self) -> Any:
        """컬렉션 객체를 반환한다."""

        if not self._resolved:
            if self._task is None:
                self._task = asyncio.ensure_future(self._resolve())
            await asyncio.shield(self._task)
        if self._error is not None:
            raise self._error
        return self._collection

    async def _resolve(self) -> None:
        try:
            candidate = self._source
            if callable(candidate) and not _looks_like_collection(candidate):
                candidate = candidate()
            if inspect.isawaitable(candidate):
                candidate = await guarded("resolve_collection", candidate)
            self._collection = candidate
        except Exception as exc:
            self._error = exc
        self._resolved = True
        self._source = None


def _looks_like_collection(candidate: Any) -> bool:
    # pymongo 컬렉션은 __call__을 정의하지만 호출하면 TypeError를 낸다.
    return hasattr(candidate, "find_one") and hasattr(candidate, "insert_many")


class MongoConnectionManager:
    """MongoDB 비동기 연결 관리자."""

    def __init__(
        self,
        settings: MongoSettings,
        logger: Optional[Logger] = None,
        client_cls: Callable[..., Any] = AsyncMongoClient,
    ) -> None:
        self._settings = settings
        self._logger = logger or create_default_logger("MongoConnectionManager")
        self._client_cls = client_cls
        self._client: Any | None = None
        self._database: Any | None = None
        self._lock = asyncio.Lock()

    @property
    def settings(self) -> MongoSettings:
        return self._settings

    async def connect(self) -> None:
        """MongoDB 연결을 초기화한다. 이미 연결되어 있으면 아무 것도 하지 않는다."""

        async with self._lock:
            if self._client is not None:
                return
            kwargs: dict[str, Any] = {"appname": self._settings.app_name}
            if self._settings.auth_source and "authSource=" not in self._settings.uri:
                kwargs["authSource"] = self._settings.auth_source
            client = self._client_cls(self._settings.uri, **kwargs)
            try:
                await guarded("connect", client.aconnect())
                database = self._select_database(client)
            except BaseException:
                # 연결에 실패한 클라이언트도 모니터 태스크를 가지므로 닫고 다시 발생시킨다.
                await client.close()
                raise
            self._client = client
            self._database = database
            self._logger.info(f"MongoDB 연결이 초기화되었습니다: db={database.name}")

    def _select_database(self, client: Any) -> Any:
        if self._settings.database:
            return client[self._settings.database]
        try:
            return client.get_default_database()
        except PyMongoError as exc:
            # URI에 DB 이름이 없으면 ConfigurationError가 발생한다.
            raise BackendFailure("get_default_database", exc) from exc

    async def close(self) -> None:
        """MongoDB 연결을 종료한다."""

        async with self._lock:
            if self._client is None:
                return
            await self._client.close()
            self._client = None
            self._database = None
            self._logger.info("MongoDB 연결이 종료되었습니다.")

    async def collection(self, name: str) -> Any:
        """필요하면 연결한 뒤 이름에 해당하는 컬렉션을 반환한다."""

        await self.connect()
        return self.ensure_database()[name]

    def ensure_database(self) -> Any:
        """초기화된 MongoDB 데이터베이스 객체를 반환한다."""

        if self._database is None:
            raise RuntimeError("MongoDB 연결이 초기화되지 않았습니다.")
        return self._database
