"""
core/parallel - 병렬 수집 공통 모듈

probe 실행기에서 사용하는 AWS 클라이언트 생성, 재시도 설정,
에러 분류 유틸리티를 제공합니다.

주요 구성 요소:
- get_client: 타임아웃/재시도가 설정된 boto3 client 생성
- RetryConfig: probe 단위 지수 백오프 재시도 설정
- categorize_error / get_error_code: 예외 분류

Example:
    from core.parallel import RetryConfig, categorize_error, get_client

    ec2 = get_client(session, "ec2", region_name="us-east-1")
    try:
        ec2.describe_instances()
    except Exception as e:
        print(categorize_error(e).value)
"""

from .client import get_client
from .decorators import (
    RETRYABLE_ERROR_CODES,
    RetryConfig,
    categorize_error,
    get_error_code,
    get_error_message,
    is_retryable,
)
from .types import ErrorCategory

__all__: list[str] = [
    # Client
    "get_client",
    # Retry / 에러 분류
    "RetryConfig",
    "RETRYABLE_ERROR_CODES",
    "categorize_error",
    "get_error_code",
    "get_error_message",
    "is_retryable",
    # Types
    "ErrorCategory",
]
