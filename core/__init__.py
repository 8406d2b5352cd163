# core/__init__.py
"""
core - AWS Inventory CLI 인프라

CLI와 수집기가 공통으로 사용하는 인프라 패키지입니다.

아키텍처:
    core/
    ├── auth/           # boto3 세션 생성, 자격 증명 확인
    ├── parallel/       # client 생성, 재시도 설정, 에러 분류
    ├── config.py       # 중앙 설정 관리
    └── exceptions.py   # 통합 예외 계층

Usage:
    # 설정 사용
    from core.config import settings, get_env_region
    region = get_env_region() or settings.DEFAULT_REGION

    # 예외 처리
    from core.exceptions import PreconditionError, is_access_denied
    try:
        result = ec2.describe_instances()
    except Exception as e:
        if is_access_denied(e):
            print("권한이 없습니다")
"""

from core import auth, config, exceptions, parallel

__all__: list[str] = [
    # 서브패키지
    "auth",
    "parallel",
    # 모듈
    "config",
    "exceptions",
]
