"""
목적: 설정 모듈 공개 API를 제공한다.
설명: 설정 병합 로더와 MongoDB 연결 설정 모델을 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/db_plumbing/shared/config/loader.py, src/db_plumbing/shared/config/settings.py
"""

from db_plumbing.shared.config.loader import ConfigLoader
from db_plumbing.shared.config.settings import MongoSettings

__all__ = ["ConfigLoader", "MongoSettings"]
