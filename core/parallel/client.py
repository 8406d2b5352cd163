"""
core/parallel/client.py - boto3 client 생성 헬퍼

Retry + 타임아웃 + 연결 풀이 설정된 boto3 client를 생성합니다.
probe 레벨 재시도(RetryConfig)와 별개로, botocore 레벨 재시도는
settings.API_MAX_ATTEMPTS로 제한됩니다.

Example:
    from core.parallel.client import get_client

    # 기본 설정 (standard retry)
    ec2 = get_client(session, "ec2", region_name="us-east-1")

    # 커스텀 설정
    ec2 = get_client(session, "ec2", max_attempts=1, connect_timeout=5)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Literal, cast

from core.config import settings

if TYPE_CHECKING:
    import boto3

# Retry mode 타입 (botocore TypedDict와 호환)
RetryMode = Literal["legacy", "standard", "adaptive"]

DEFAULT_RETRY_MODE: RetryMode = "standard"
DEFAULT_MAX_POOL_CONNECTIONS = 10


def get_client(
    session: boto3.Session,
    service_name: str,
    region_name: str | None = None,
    max_attempts: int | None = None,
    retry_mode: RetryMode = DEFAULT_RETRY_MODE,
    connect_timeout: int | None = None,
    read_timeout: int | None = None,
    max_pool_connections: int = DEFAULT_MAX_POOL_CONNECTIONS,
    **kwargs: Any,
) -> Any:
    """Retry가 적용된 boto3 client 생성

    Args:
        session: boto3 Session
        service_name: AWS 서비스 이름 (ec2, s3, iam 등)
        region_name: 리전 (None이면 세션 기본값)
        max_attempts: 최대 시도 횟수 (None이면 settings.API_MAX_ATTEMPTS)
        retry_mode: 재시도 모드
        connect_timeout: 연결 타임아웃 (초, None이면 settings)
        read_timeout: 읽기 타임아웃 (초, None이면 settings)
        max_pool_connections: HTTP 연결 풀 크기
        **kwargs: session.client()에 전달할 추가 인자

    Returns:
        boto3 client
    """
    from botocore.config import Config

    config = Config(
        retries={  # pyright: ignore[reportArgumentType]
            "max_attempts": max_attempts if max_attempts is not None else settings.API_MAX_ATTEMPTS,
            "mode": retry_mode,
        },
        connect_timeout=connect_timeout if connect_timeout is not None else settings.API_CONNECT_TIMEOUT,
        read_timeout=read_timeout if read_timeout is not None else settings.API_READ_TIMEOUT,
        max_pool_connections=max_pool_connections,
    )

    # 기존 config가 있으면 병합
    if "config" in kwargs:
        existing = kwargs.pop("config")
        config = config.merge(existing)

    # cast to Any to bypass boto3-stubs Literal type requirements
    return session.client(  # pyright: ignore[reportCallIssue]
        cast(Any, service_name),
        region_name=region_name,
        config=config,
        **kwargs,
    )
