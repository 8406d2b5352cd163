"""
core/exceptions.py - 통합 예외 계층 구조

애플리케이션 전체에서 사용되는 예외 클래스들을 정의합니다.
일관된 예외 처리와 에러 메시지를 제공합니다.

예외 계층 구조:
    InventoryError (베이스)
    ├── PreconditionError (자격 증명/연결 실패 - 치명적, probe 실행 전 중단)
    ├── ProbeError (단일 probe 실패 - 해당 probe 결과에만 기록)
    │   └── ProbeTimeoutError (전체 제한 시간 초과)
    ├── DuplicateNameError (레지스트리 이름 중복)
    └── ValidationError (입력 검증)

Usage:
    from core.exceptions import PreconditionError, format_error_for_user

    try:
        identity = sts.get_caller_identity()
    except ClientError as e:
        raise PreconditionError(format_error_for_user(e)) from e
"""

from datetime import datetime
from typing import Any, Dict, Optional

# =============================================================================
# 베이스 예외
# =============================================================================


class InventoryError(Exception):
    """AWS Inventory 기본 예외 클래스

    모든 커스텀 예외의 베이스 클래스입니다.

    Attributes:
        message: 에러 메시지
        cause: 원인 예외 (체이닝용)
        details: 추가 상세 정보
    """

    def __init__(
        self,
        message: str,
        cause: Optional[Exception] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details = details or {}
        self.timestamp = datetime.now()

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message


# =============================================================================
# 실행 전제 조건
# =============================================================================


class PreconditionError(InventoryError):
    """실행 전제 조건 실패

    자격 증명이 없거나 AWS에 연결할 수 없는 경우처럼
    어떤 probe도 실행할 수 없는 상황입니다. 실행 전체를 중단합니다.
    """

    def __init__(
        self,
        reason: str,
        cause: Optional[Exception] = None,
    ):
        super().__init__(f"실행 조건 미충족: {reason}", cause)
        self.reason = reason


# =============================================================================
# Probe 관련 예외
# =============================================================================


class ProbeError(InventoryError):
    """단일 probe의 원격 호출 실패

    runner가 해당 probe의 결과에만 기록하며, 다른 probe로 전파되지 않습니다.
    """

    def __init__(
        self,
        probe_name: str,
        message: str,
        error_code: Optional[str] = None,
        operation: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        full_message = f"probe 실패 [{probe_name}]: {message}"
        super().__init__(full_message, cause)
        self.probe_name = probe_name
        self.error_code = error_code
        self.operation = operation
        self.details.update(
            {
                "probe": probe_name,
                "operation": operation,
                "error_code": error_code,
            }
        )


class ProbeTimeoutError(ProbeError):
    """전체 실행 제한 시간 안에 끝나지 않은 probe"""

    def __init__(self, probe_name: str, timeout: float):
        super().__init__(
            probe_name,
            f"제한 시간 {timeout:g}초 초과",
            error_code="Timeout",
        )
        self.timeout = timeout


class DuplicateNameError(InventoryError):
    """같은 이름의 probe가 이미 등록된 경우"""

    def __init__(self, name: str):
        super().__init__(f"이미 등록된 probe 이름: {name}")
        self.name = name
        self.details["name"] = name


# =============================================================================
# 입력 검증
# =============================================================================


class ValidationError(InventoryError):
    """입력 검증 오류"""

    def __init__(
        self,
        field: str,
        value: Any,
        expected: str,
        cause: Optional[Exception] = None,
    ):
        message = f"검증 오류 [{field}]: 예상값 '{expected}', 실제값 '{value}'"
        super().__init__(message, cause)
        self.field = field
        self.value = value
        self.expected = expected
        self.details.update(
            {
                "field": field,
                "value": str(value),
                "expected": expected,
            }
        )


# =============================================================================
# 예외 유틸리티 함수
# =============================================================================

ACCESS_DENIED_CODES = {
    "AccessDenied",
    "AccessDeniedException",
    "UnauthorizedAccess",
    "UnauthorizedOperation",
}

THROTTLING_CODES = {
    "Throttling",
    "ThrottlingException",
    "RequestLimitExceeded",
    "TooManyRequestsException",
    "RateExceeded",
}

NOT_FOUND_CODES = {
    "ResourceNotFoundException",
    "NotFoundException",
    "NoSuchEntity",
    "NoSuchBucket",
    "InvalidInstanceID.NotFound",
}


def _error_code_of(error: Exception) -> str:
    if isinstance(error, ProbeError):
        return error.error_code or ""
    response = getattr(error, "response", None)
    if isinstance(response, dict):
        return response.get("Error", {}).get("Code", "")
    return ""


def is_access_denied(error: Exception) -> bool:
    """액세스 거부 오류인지 확인

    Args:
        error: 확인할 예외

    Returns:
        액세스 거부 오류이면 True
    """
    return _error_code_of(error) in ACCESS_DENIED_CODES


def is_throttling(error: Exception) -> bool:
    """스로틀링 오류인지 확인"""
    return _error_code_of(error) in THROTTLING_CODES


def is_not_found(error: Exception) -> bool:
    """리소스를 찾을 수 없는 오류인지 확인"""
    return _error_code_of(error) in NOT_FOUND_CODES


def format_error_for_user(error: Exception) -> str:
    """사용자에게 표시할 에러 메시지 포맷팅

    Args:
        error: 예외

    Returns:
        사용자 친화적인 에러 메시지
    """
    if isinstance(error, InventoryError):
        return str(error)

    response = getattr(error, "response", None)
    if isinstance(response, dict):
        error_info = response.get("Error", {})
        code = error_info.get("Code", "UnknownError")
        message = error_info.get("Message", str(error))

        friendly_messages = {
            "AccessDenied": "권한이 없습니다. IAM 정책을 확인하세요.",
            "ExpiredToken": "인증 토큰이 만료되었습니다. 다시 로그인하세요.",
            "InvalidClientTokenId": "잘못된 자격 증명입니다.",
            "Throttling": "요청이 너무 많습니다. 잠시 후 다시 시도하세요.",
        }

        return friendly_messages.get(code, f"{code}: {message}")

    return str(error)
