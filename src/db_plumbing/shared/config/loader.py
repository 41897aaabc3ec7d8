"""
목적: 저장소 설정 로더를 제공한다.
설명: dict/JSON 파일/.env 파일/환경 변수를 순서대로 병합해 설정 사전을 만든다.
디자인 패턴: 빌더 패턴
참조: src/db_plumbing/shared/config/settings.py, src/db_plumbing/shared/const/__init__.py
"""

from __future__ import annotations

import json
import os
from typing import Any, Dict, Mapping, Optional

from dotenv import dotenv_values

from db_plumbing.shared.const import SharedConst
from db_plumbing.shared.logging import Logger, create_default_logger


class ConfigLoader:
    """설정 로더 구현체이다.

    나중에 추가된 소스가 앞선 소스를 덮어쓰며, 중첩 사전은 재귀적으로 병합한다.

    Args:
        logger: 주입 가능한 로거.
    """

    _DEFAULT_ENCODING = SharedConst.DEFAULT_ENCODING
    _DEFAULT_ENV_DELIMITER = SharedConst.ENV_NESTED_DELIMITER

    def __init__(self, logger: Optional[Logger] = None) -> None:
        self._logger = logger or create_default_logger("ConfigLoader")
        self._sources: list[Dict[str, Any]] = []

    def add_dict(self, data: Optional[Mapping[str, Any]]) -> "ConfigLoader":
        """딕셔너리 설정을 추가한다."""

        if not data:
            return self
        self._sources.append(dict(data))
        return self

    def add_json_file(
        self,
        path: str,
        required: bool = False,
        encoding: Optional[str] = None,
    ) -> "ConfigLoader":
        """JSON 파일 설정을 추가한다."""

        if not path:
            raise ValueError("path는 비어 있을 수 없습니다.")
        if not os.path.exists(path):
            if required:
                raise FileNotFoundError(path)
            self._logger.warning(f"설정 파일이 없어 건너뜁니다: {path}")
            return self
        with open(path, "r", encoding=encoding or self._DEFAULT_ENCODING) as handle:
            try:
                payload = json.load(handle)
            except json.JSONDecodeError as exc:
                raise ValueError("JSON 설정 파일 파싱에 실패했습니다.") from exc
        if not isinstance(payload, dict):
            raise ValueError("JSON 설정 파일은 최상위가 객체여야 합니다.")
        self._sources.append(payload)
        return self

    def add_dotenv(
        self,
        path: str,
        prefix: str = "",
        delimiter: Optional[str] = None,
        parse_values: bool = True,
    ) -> "ConfigLoader":
        """`.env` 파일을 환경 변수와 같은 규칙으로 추가한다.

        프로세스 환경 변수는 건드리지 않는다.
        """

        if not os.path.exists(path):
            self._logger.warning(f".env 파일이 없어 건너뜁니다: {path}")
            return self
        values = {key: value for key, value in dotenv_values(path).items() if value is not None}
        return self._add_flat(values, prefix, delimiter, parse_values)

    def add_env(
        self,
        prefix: str = "",
        delimiter: Optional[str] = None,
        parse_values: bool = True,
    ) -> "ConfigLoader":
        """환경 변수 설정을 추가한다.

        `parse_values`가 거짓이면 값을 문자열 그대로 둔다.
        """

        return self._add_flat(os.environ, prefix, delimiter, parse_values)

    def build(self, overrides: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """수집된 설정을 병합해 반환한다."""

        merged: Dict[str, Any] = {}
        for source in self._sources:
            merged = self._merge(merged, source)
        if overrides:
            merged = self._merge(merged, dict(overrides))
        return merged

    def _add_flat(
        self,
        values: Mapping[str, str],
        prefix: str,
        delimiter: Optional[str],
        parse_values: bool = True,
    ) -> "ConfigLoader":
        delimiter = delimiter or self._DEFAULT_ENV_DELIMITER
        data: Dict[str, Any] = {}
        for key, value in values.items():
            if prefix and not key.startswith(prefix):
                continue
            trimmed = key[len(prefix) :] if prefix else key
            parts = [part.lower() for part in trimmed.split(delimiter) if part]
            if not parts:
                continue
            self._assign_nested(data, parts, self._parse_value(value) if parse_values else value)
        if data:
            self._sources.append(data)
        return self

    def _assign_nested(self, root: Dict[str, Any], keys: list[str], value: Any) -> None:
        current = root
        for part in keys[:-1]:
            if not isinstance(current.get(part), dict):
                current[part] = {}
            current = current[part]
        current[keys[-1]] = value

    def _merge(self, base: Dict[str, Any], incoming: Dict[str, Any]) -> Dict[str, Any]:
        merged = dict(base)
        for key, value in incoming.items():
            if isinstance(merged.get(key), dict) and isinstance(value, dict):
                merged[key] = self._merge(merged[key], value)
            else:
                merged[key] = value
        return merged

    def _parse_value(self, raw: str) -> Any:
        lowered = raw.lower()
        if lowered in {"true", "false"}:
            return lowered == "true"
        if lowered in {"null", "none"}:
            return None
        try:
            if "." in raw:
                return float(raw)
            return int(raw)
        except ValueError:
            pass
        if (raw.startswith("{") and raw.endswith("}")) or (
            raw.startswith("[") and raw.endswith("]")
        ):
            try:
                return json.loads(raw)
            except json.JSONDecodeError:
                return raw
        return raw
