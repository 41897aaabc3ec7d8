"""
목적: 공통 상수 집합을 제공한다.
설명: 설정 로더와 문서 저장소에서 사용하는 기본 상수 값을 정의한다.
디자인 패턴: 상수 객체
참조: src/db_plumbing/shared/config/loader.py, src/db_plumbing/integrations/db/engines/mongodb/store.py
"""


class SharedConst:
    """공통 상수 집합이다.

    Attributes:
        DEFAULT_ENCODING: 기본 파일 인코딩.
        ENV_NESTED_DELIMITER: 환경 변수 키를 중첩 경로로 해석하는 구분자.
    """

    DEFAULT_ENCODING = "utf-8"
    ENV_NESTED_DELIMITER = "__"


class StoreConst:
    """문서 저장소 상수 집합이다.

    Attributes:
        ID_FIELD: 백엔드 문서의 식별자 필드 이름.
        DEFAULT_KEY_FIELD: 엔티티 키를 읽어올 기본 필드 이름.
        PATH_SEPARATOR: 중첩 필드 경로 구분자.
        SET_OPERATOR: 부분 갱신 할당 연산자.
        UNSET_OPERATOR: 부분 갱신 제거 연산자.
        IN_OPERATOR: 다중 키 조회 연산자.
        ENV_PREFIX: MongoDB 설정 환경 변수의 공통 접두사.
        ENV_URI: MongoDB URI 환경 변수 이름.
        ENV_DATABASE: MongoDB 데이터베이스 환경 변수 이름.
        ENV_AUTH_SOURCE: MongoDB 인증 DB 환경 변수 이름.
    """

    ID_FIELD = "_id"
    DEFAULT_KEY_FIELD = "uid"
    PATH_SEPARATOR = "."
    SET_OPERATOR = "$set"
    UNSET_OPERATOR = "$unset"
    IN_OPERATOR = "$in"
    ENV_PREFIX = "MONGODB_"
    ENV_URI = "MONGODB_URI"
    ENV_DATABASE = "MONGODB_DB"
    ENV_AUTH_SOURCE = "MONGODB_AUTH_DB"


__all__ = ["SharedConst", "StoreConst"]
