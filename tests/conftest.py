"""
목적: 테스트 공통 픽스처와 로깅 훅을 제공한다.
설명: 표준 로깅 기반 테스트 진행 로그와 공용 엔티티/조건자 픽스처를 정의한다.
디자인 패턴: 테스트 픽스처 + 테스트 훅
참조: pyproject.toml
"""

from __future__ import annotations

import logging

import pytest

from db_plumbing.integrations.db.engines.mongodb import IndexMap, named_predicate


_LOGGER = logging.getLogger("tests")


class Simple:
    """테스트용 엔티티."""

    def __init__(self, uid: int, a: str, b: str) -> None:
        self.uid = uid
        self.a = a
        self.b = b

    @classmethod
    def from_record(cls, record: dict) -> "Simple":
        return cls(record["uid"], record["a"], record["b"])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Simple):
            return NotImplemented
        return (self.uid, self.a, self.b) == (other.uid, other.a, other.b)

    def __repr__(self) -> str:
        return f"Simple({self.uid!r}, {self.a!r}, {self.b!r})"


@named_predicate
def by_a(value: str, simple: Simple) -> bool:
    return simple.a == value


@named_predicate
def by_b(value: str, simple: Simple) -> bool:
    return simple.b == value


@pytest.fixture
def simple_type() -> type:
    return Simple


@pytest.fixture
def by_a_predicate():
    return by_a


@pytest.fixture
def by_b_predicate():
    return by_b


@pytest.fixture
def index_map() -> IndexMap:
    return IndexMap().register(by_a, "a")


@pytest.fixture
def sample_entities() -> list[Simple]:
    return [
        Simple(1, "hello", "world"),
        Simple(2, "hello", "friend"),
        Simple(3, "goodbye", "Mr. Chips"),
    ]


def pytest_runtest_logstart(nodeid: str, location) -> None:  # noqa: D401 - pytest 훅 시그니처 유지
    """각 테스트 시작을 로깅한다."""

    _LOGGER.info("테스트 시작: %s", nodeid)


def pytest_runtest_logreport(report) -> None:  # noqa: D401 - pytest 훅 시그니처 유지
    """테스트 결과를 로깅한다."""

    if report.when != "call":
        return
    if report.passed:
        _LOGGER.info("테스트 완료: %s", report.nodeid)
        return
    if report.skipped:
        _LOGGER.warning("테스트 스킵: %s", report.nodeid)
        return
    _LOGGER.error("테스트 실패: %s", report.nodeid)
