"""
목적: 지연 컬렉션 핸들과 연결 관리자, 저장소 클라이언트 동작을 검증한다.
설명: 핸들이 한 번만 해석되는지, 연결이 첫 작업 시점에 맺어지는지, 실패가 전달되는지 확인한다.
디자인 패턴: 매니저 패턴 단위 테스트
참조: src/db_plumbing/integrations/db/engines/mongodb/connection.py, src/db_plumbing/integrations/db/engines/mongodb/client.py
"""

from __future__ import annotations

import asyncio

import pytest
from pymongo.errors import ConfigurationError, ServerSelectionTimeoutError

from db_plumbing.core.errors import BackendFailure, NotFound
from db_plumbing.integrations.db.engines.mongodb import (
    DeferredCollection,
    MongoConnectionManager,
    MongoStore,
    StoreClient,
)
from db_plumbing.shared.config import MongoSettings


class _DatabaseStub:
    def __init__(self, name: str, collections: dict) -> None:
        self.name = name
        self._collections = collections

    def __getitem__(self, name: str):
        return self._collections[name]


class _ClientStub:
    instances: list["_ClientStub"] = []

    def __init__(self, uri: str, **kwargs) -> None:
        self.uri = uri
        self.kwargs = kwargs
        self.connects = 0
        self.closed = False
        self.collections: dict = {}
        _ClientStub.instances.append(self)

    async def aconnect(self) -> None:
        self.connects += 1

    def __getitem__(self, name: str) -> _DatabaseStub:
        return _DatabaseStub(name, self.collections)

    def get_default_database(self) -> _DatabaseStub:
        return _DatabaseStub("default", self.collections)

    async def close(self) -> None:
        self.closed = True


class _FailingClientStub(_ClientStub):
    async def aconnect(self) -> None:
        raise ServerSelectionTimeoutError("no servers")


class _NoDefaultDatabaseClientStub(_ClientStub):
    def get_default_database(self) -> _DatabaseStub:
        raise ConfigurationError("No default database name defined or provided.")


@pytest.mark.asyncio
async def test_deferred_collection_resolves_once(collection) -> None:
    """동시에 여러 번 요청해도 팩토리는 한 번만 호출된다."""

    calls = 0

    async def _factory():
        nonlocal calls
        calls += 1
        await asyncio.sleep(0)
        return collection

    handle = DeferredCollection(_factory)
    results = await asyncio.gather(*(handle.get() for _ in range(5)))

    assert calls == 1
    assert all(item is collection for item in results)
    assert handle.resolved is True


@pytest.mark.asyncio
async def test_deferred_collection_accepts_plain_collection(collection) -> None:
    """이미 준비된 컬렉션은 그대로 반환한다."""

    assert await DeferredCollection(collection).get() is collection


@pytest.mark.asyncio
async def test_deferred_collection_caches_failure() -> None:
    """해석 실패는 BackendFailure로 바뀌어 이후 호출에도 그대로 전달된다."""

    calls = 0

    async def _factory():
        nonlocal calls
        calls += 1
        raise ServerSelectionTimeoutError("no servers")

    handle = DeferredCollection(_factory)

    with pytest.raises(BackendFailure):
        await handle.get()
    with pytest.raises(BackendFailure):
        await handle.get()
    assert calls == 1


def test_deferred_collection_rejects_none() -> None:
    with pytest.raises(TypeError):
        DeferredCollection(None)


@pytest.mark.asyncio
async def test_connection_manager_connects_lazily_and_closes(collection) -> None:
    """collection() 호출 시 한 번만 연결하고 close()로 정리한다."""

    settings = MongoSettings(uri="mongodb://db.local:27017", database="app", auth_source="admin")
    manager = MongoConnectionManager(settings=settings, client_cls=_ClientStub)

    with pytest.raises(RuntimeError):
        manager.ensure_database()

    await manager.connect()
    client = _ClientStub.instances[-1]
    client.collections["testsimple"] = collection
    await manager.connect()

    assert await manager.collection("testsimple") is collection
    assert client.connects == 1
    assert client.kwargs == {"appname": "db-plumbing", "authSource": "admin"}
    assert manager.ensure_database().name == "app"

    await manager.close()
    assert client.closed is True
    with pytest.raises(RuntimeError):
        manager.ensure_database()


@pytest.mark.asyncio
async def test_connection_manager_wraps_connect_failure() -> None:
    """연결 실패는 BackendFailure로 전달된다."""

    manager = MongoConnectionManager(
        settings=MongoSettings(database="app"),
        client_cls=_FailingClientStub,
    )

    with pytest.raises(BackendFailure) as raised:
        await manager.connect()

    assert raised.value.operation == "connect"


@pytest.mark.asyncio
async def test_store_client_returns_usable_store_before_connecting(collection, simple_type, index_map) -> None:
    """클라이언트가 만든 저장소는 연결 전에도 생성되고 첫 작업에서 연결한다."""

    manager = MongoConnectionManager(
        settings=MongoSettings(uri="mongodb://db.local:27017", database="app"),
        client_cls=_ClientStub,
    )
    before = len(_ClientStub.instances)
    client = StoreClient("mongodb://ignored:27017", connection=manager)
    store = client.get_store("testsimple", simple_type, index_map)

    assert len(_ClientStub.instances) == before
    await manager.connect()
    _ClientStub.instances[-1].collections["testsimple"] = collection

    await store.update(simple_type(1, "hello", "world"))
    assert (await store.find(1)).a == "hello"

    await client.close()
    assert _ClientStub.instances[-1].closed is True


def test_store_client_requires_collection_name() -> None:
    client = StoreClient("mongodb://127.0.0.1:27017")

    with pytest.raises(ValueError):
        client.get_store("")


@pytest.mark.asyncio
async def test_cancelled_first_operation_does_not_break_store(collection, simple_type) -> None:
    """첫 작업이 연결 대기 중 취소되어도 이후 작업은 같은 해석 결과를 기다린다."""

    ready = asyncio.Event()
    calls = 0

    async def _factory():
        nonlocal calls
        calls += 1
        await ready.wait()
        return collection

    store = MongoStore(_factory, simple_type)
    first = asyncio.ensure_future(store.find(1))
    await asyncio.sleep(0)
    first.cancel()
    with pytest.raises(asyncio.CancelledError):
        await first

    ready.set()
    with pytest.raises(NotFound):
        await store.find(1)
    assert calls == 1


@pytest.mark.asyncio
async def test_connect_failure_closes_client() -> None:
    """연결에 실패한 클라이언트는 닫히고 관리자는 연결되지 않은 상태로 남는다."""

    manager = MongoConnectionManager(
        settings=MongoSettings(database="app"),
        client_cls=_FailingClientStub,
    )

    with pytest.raises(BackendFailure):
        await manager.connect()

    assert _ClientStub.instances[-1].closed is True
    with pytest.raises(RuntimeError):
        manager.ensure_database()


@pytest.mark.asyncio
async def test_missing_default_database_is_backend_failure() -> None:
    """URI에 DB 이름이 없으면 BackendFailure가 발생하고 클라이언트가 닫힌다."""

    manager = MongoConnectionManager(
        settings=MongoSettings(uri="mongodb://db.local:27017"),
        client_cls=_NoDefaultDatabaseClientStub,
    )

    with pytest.raises(BackendFailure) as raised:
        await manager.connect()

    assert raised.value.operation == "get_default_database"
    assert _ClientStub.instances[-1].closed is True
