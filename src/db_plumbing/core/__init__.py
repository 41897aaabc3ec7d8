"""
목적: 저장소 핵심 도메인 패키지를 정의한다.
설명: 패치 문법과 저장소 도메인 예외를 묶는다.
디자인 패턴: 패키지 구성
참조: src/db_plumbing/core/patch, src/db_plumbing/core/errors.py
"""
