"""
목적: MongoDB 저장소 연결 설정 모델을 제공한다.
설명: URI/데이터베이스/인증 DB 설정을 Pydantic 모델로 검증하고 환경 변수에서 생성한다.
디자인 패턴: 데이터 전송 객체(DTO), 팩토리 메서드
참조: src/db_plumbing/shared/config/loader.py, src/db_plumbing/integrations/db/engines/mongodb/client.py
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, Field, field_validator

from db_plumbing.shared.config.loader import ConfigLoader
from db_plumbing.shared.const import StoreConst
from db_plumbing.shared.logging import Logger


def _env_key(name: str) -> str:
    return name[len(StoreConst.ENV_PREFIX) :].lower()


_ENV_FIELDS: Dict[str, str] = {
    _env_key(StoreConst.ENV_URI): "uri",
    _env_key(StoreConst.ENV_DATABASE): "database",
    _env_key(StoreConst.ENV_AUTH_SOURCE): "auth_source",
}


class MongoSettings(BaseModel):
    """MongoDB 연결 설정이다.

    Args:
        uri: MongoDB 연결 URI. 경로에 DB 이름을 포함할 수 있다.
        database: 사용할 데이터베이스 이름. 비어 있으면 URI의 기본 DB를 사용한다.
        auth_source: 인증 DB 이름.
        app_name: 서버 로그에 남길 애플리케이션 이름.
    """

    uri: str = Field(default="mongodb://127.0.0.1:27017")
    database: Optional[str] = None
    auth_source: Optional[str] = None
    app_name: str = Field(default="db-plumbing")

    @field_validator("uri")
    @classmethod
    def _validate_uri(cls, value: str) -> str:
        trimmed = value.strip()
        if not trimmed.startswith(("mongodb://", "mongodb+srv://")):
            raise ValueError("uri는 mongodb:// 또는 mongodb+srv:// 로 시작해야 합니다.")
        return trimmed

    @field_validator("database", "auth_source")
    @classmethod
    def _blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        trimmed = value.strip()
        return trimmed or None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "MongoSettings":
        """`ConfigLoader.build()` 결과의 `mongodb` 섹션에서 설정을 만든다."""

        section = data.get("mongodb", data)
        if not isinstance(section, Mapping):
            raise ValueError("mongodb 설정은 객체여야 합니다.")
        fields = {key: section[key] for key in cls.model_fields if key in section}
        return cls(**fields)

    @classmethod
    def from_env(
        cls,
        dotenv_path: Optional[str] = None,
        logger: Optional[Logger] = None,
    ) -> "MongoSettings":
        """`MONGODB_*` 환경 변수(필요하면 `.env`)에서 설정을 만든다.

        프로세스 환경 변수가 `.env` 값보다 우선하며, 빈 값은 지정하지 않은 것으로 본다.
        """

        loader = ConfigLoader(logger=logger)
        if dotenv_path:
            loader.add_dotenv(dotenv_path, prefix=StoreConst.ENV_PREFIX, parse_values=False)
        raw = loader.add_env(prefix=StoreConst.ENV_PREFIX, parse_values=False).build()
        section = {
            field_name: raw[env_key]
            for env_key, field_name in _ENV_FIELDS.items()
            if raw.get(env_key) not in (None, "")
        }
        return cls.from_mapping(section)
