"""
목적: 공통 모듈 패키지를 정의한다.
설명: 상수/로깅/예외/설정 모듈을 묶는다.
디자인 패턴: 패키지 구성
참조: src/db_plumbing/shared/logging, src/db_plumbing/shared/exceptions
"""
