"""
목적: 외부 시스템 통합 패키지를 정의한다.
설명: 문서 저장소 백엔드 통합 모듈을 묶는다.
디자인 패턴: 패키지 구성
참조: src/db_plumbing/integrations/db
"""
