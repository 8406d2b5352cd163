"""
core/parallel/types.py - 병렬 실행 공통 타입

병렬 실행 중 발생한 에러를 분류하는 카테고리를 정의합니다.
"""

from enum import Enum


class ErrorCategory(Enum):
    """에러 카테고리

    재시도 여부 판단과 보고서 분류에 사용됩니다.
    """

    THROTTLING = "throttling"  # API 호출 한도 초과
    ACCESS_DENIED = "access_denied"  # 권한 없음
    NOT_FOUND = "not_found"  # 리소스/엔드포인트 없음
    NETWORK = "network"  # 연결 실패
    TIMEOUT = "timeout"  # 응답/제한 시간 초과
    EXPIRED_TOKEN = "expired_token"  # 자격 증명 만료
    INVALID_REQUEST = "invalid_request"  # 잘못된 요청
    SERVICE_ERROR = "service_error"  # AWS 내부 오류
    UNKNOWN = "unknown"

    @property
    def is_retryable(self) -> bool:
        """재시도 가능한 카테고리인지 여부"""
        return self in (
            ErrorCategory.THROTTLING,
            ErrorCategory.NETWORK,
            ErrorCategory.TIMEOUT,
            ErrorCategory.SERVICE_ERROR,
        )
