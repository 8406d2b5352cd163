"""
core/auth/session.py - boto3 세션 생성 및 자격 증명 확인

자격 증명은 boto3 표준 체인(환경변수, ~/.aws, 인스턴스 프로파일 등)에 맡기고,
probe 실행 전에 sts:GetCallerIdentity로 한 번만 유효성을 확인합니다.

Usage:
    from core.auth.session import get_session, verify_identity

    session = get_session("my-profile", "us-east-1")
    identity = verify_identity(session)  # 실패 시 PreconditionError
    print(identity["Account"])
"""

from __future__ import annotations

import logging

import boto3
from botocore.exceptions import BotoCoreError, ClientError, ProfileNotFound

from core.exceptions import PreconditionError, format_error_for_user
from core.parallel.client import get_client

logger = logging.getLogger(__name__)


def get_session(profile_name: str | None = None, region_name: str | None = None) -> boto3.Session:
    """boto3 Session 생성

    Args:
        profile_name: AWS 프로파일 (None이면 기본 자격 증명 체인)
        region_name: 기본 리전

    Returns:
        boto3.Session

    Raises:
        PreconditionError: 프로파일이 존재하지 않는 경우
    """
    try:
        return boto3.Session(profile_name=profile_name, region_name=region_name)
    except ProfileNotFound as e:
        raise PreconditionError(f"프로파일 '{profile_name}'을(를) 찾을 수 없습니다", cause=e) from e


def verify_identity(session: boto3.Session, region_name: str | None = None) -> dict[str, str]:
    """sts:GetCallerIdentity로 자격 증명 확인

    Args:
        session: boto3 Session
        region_name: STS 엔드포인트 리전 (None이면 세션 리전)

    Returns:
        {"Account": ..., "Arn": ..., "UserId": ...}

    Raises:
        PreconditionError: 자격 증명이 없거나 AWS에 연결할 수 없는 경우
    """
    try:
        sts = get_client(session, "sts", region_name=region_name or session.region_name, max_attempts=1)
        identity = sts.get_caller_identity()
    except ClientError as e:
        raise PreconditionError(
            f"AWS 자격 증명이 유효하지 않습니다 ({format_error_for_user(e)})"
        ) from e
    except BotoCoreError as e:
        # NoCredentialsError, EndpointConnectionError 등
        raise PreconditionError("AWS에 인증하거나 연결할 수 없습니다", cause=e) from e

    logger.info("자격 증명 확인: account=%s arn=%s", identity.get("Account"), identity.get("Arn"))
    return {
        "Account": identity.get("Account", ""),
        "Arn": identity.get("Arn", ""),
        "UserId": identity.get("UserId", ""),
    }
