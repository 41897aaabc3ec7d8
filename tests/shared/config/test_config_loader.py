"""
목적: 설정 로더와 MongoDB 설정 모델을 검증한다.
설명: dict/JSON/.env/환경 변수 병합 순서와 MongoSettings 생성 및 URI 검증을 확인한다.
디자인 패턴: 빌더 패턴 단위 테스트
참조: src/db_plumbing/shared/config/loader.py, src/db_plumbing/shared/config/settings.py
"""

from __future__ import annotations

import json
import os

import pytest
from pydantic import ValidationError

from db_plumbing.shared.config import ConfigLoader, MongoSettings


def test_loader_merges_sources_in_order(tmp_path, monkeypatch) -> None:
    """나중에 추가된 소스가 앞선 값을 덮어쓰고 중첩 객체는 병합된다."""

    config_path = tmp_path / "config.json"
    config_path.write_text(
        json.dumps({"mongodb": {"uri": "mongodb://json:27017", "database": "app"}}),
        encoding="utf-8",
    )
    dotenv_path = tmp_path / ".env"
    dotenv_path.write_text("APP_MONGODB__AUTH_SOURCE=admin\n", encoding="utf-8")
    monkeypatch.setenv("APP_MONGODB__URI", "mongodb://env:27017")
    monkeypatch.setenv("APP_RETRY", "3")

    config = (
        ConfigLoader()
        .add_dict({"mongodb": {"app_name": "loader"}})
        .add_json_file(str(config_path))
        .add_dotenv(str(dotenv_path), prefix="APP_")
        .add_env(prefix="APP_")
        .build(overrides={"mongodb": {"database": "override"}})
    )

    assert config["retry"] == 3
    assert config["mongodb"] == {
        "app_name": "loader",
        "uri": "mongodb://env:27017",
        "database": "override",
        "auth_source": "admin",
    }


def test_loader_missing_optional_file_is_skipped(tmp_path) -> None:
    loader = ConfigLoader().add_json_file(str(tmp_path / "missing.json"))

    assert loader.build() == {}
    with pytest.raises(FileNotFoundError):
        ConfigLoader().add_json_file(str(tmp_path / "missing.json"), required=True)


def test_mongo_settings_from_mapping() -> None:
    settings = MongoSettings.from_mapping(
        {"mongodb": {"uri": " mongodb+srv://cluster.example ", "database": "", "extra": 1}}
    )

    assert settings.uri == "mongodb+srv://cluster.example"
    assert settings.database is None
    assert settings.app_name == "db-plumbing"


def test_mongo_settings_rejects_invalid_uri() -> None:
    with pytest.raises(ValidationError):
        MongoSettings(uri="http://localhost:27017")


def test_mongo_settings_from_env_reads_dotenv(tmp_path, monkeypatch) -> None:
    """프로세스 환경 변수가 .env 값보다 우선한다."""

    monkeypatch.delenv("MONGODB_URI", raising=False)
    monkeypatch.delenv("MONGODB_AUTH_DB", raising=False)
    monkeypatch.setenv("MONGODB_DB", "from_env")
    dotenv_path = tmp_path / ".env"
    dotenv_path.write_text(
        "MONGODB_URI=mongodb://dotenv:27017\nMONGODB_DB=from_dotenv\n",
        encoding="utf-8",
    )

    settings = MongoSettings.from_env(str(dotenv_path))

    assert settings.uri == "mongodb://dotenv:27017"
    assert settings.database == "from_env"
    assert settings.auth_source is None
    assert "MONGODB_URI" not in os.environ


def test_mongo_settings_from_env_keeps_values_as_strings(monkeypatch) -> None:
    """숫자처럼 보이는 DB 이름도 문자열로 유지되고 빈 URI는 기본값을 쓴다."""

    monkeypatch.setenv("MONGODB_URI", "")
    monkeypatch.setenv("MONGODB_DB", "2024")
    monkeypatch.setenv("MONGODB_AUTH_DB", "admin")

    settings = MongoSettings.from_env()

    assert settings.uri == "mongodb://127.0.0.1:27017"
    assert settings.database == "2024"
    assert settings.auth_source == "admin"


def test_loader_can_keep_raw_strings(monkeypatch) -> None:
    monkeypatch.setenv("APP_PORT", "27017")
    monkeypatch.setenv("APP_FLAG", "true")

    parsed = ConfigLoader().add_env(prefix="APP_").build()
    raw = ConfigLoader().add_env(prefix="APP_", parse_values=False).build()

    assert (parsed["port"], parsed["flag"]) == (27017, True)
    assert (raw["port"], raw["flag"]) == ("27017", "true")
