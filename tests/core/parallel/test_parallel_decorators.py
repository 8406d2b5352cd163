"""
tests/core/parallel/test_parallel_decorators.py - core/parallel/decorators.py 테스트
"""

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError, NoCredentialsError, ReadTimeoutError

from core.exceptions import ProbeError, ProbeTimeoutError
from core.parallel.decorators import (
    RETRYABLE_ERROR_CODES,
    RetryConfig,
    categorize_error,
    get_error_code,
    get_error_message,
    is_retryable,
)
from core.parallel.types import ErrorCategory


class TestRetryConfig:
    """RetryConfig 테스트"""

    def test_default_values(self):
        """기본값 확인"""
        config = RetryConfig()

        assert config.max_retries == 3
        assert config.base_delay == 1.0
        assert config.max_delay == 30.0
        assert config.exponential_base == 2.0
        assert config.jitter is True

    def test_negative_retries_rejected(self):
        with pytest.raises(ValueError):
            RetryConfig(max_retries=-1)

    def test_get_delay_exponential_no_jitter(self):
        """지수 백오프 (jitter 없음)"""
        config = RetryConfig(
            base_delay=1.0,
            exponential_base=2.0,
            max_delay=100.0,
            jitter=False,
        )

        assert config.get_delay(0) == 1.0  # 1 * 2^0 = 1
        assert config.get_delay(1) == 2.0  # 1 * 2^1 = 2
        assert config.get_delay(3) == 8.0  # 1 * 2^3 = 8

    def test_get_delay_max_cap(self):
        """최대 지연 시간 제한"""
        config = RetryConfig(base_delay=1.0, max_delay=5.0, jitter=False)

        assert config.get_delay(10) == 5.0

    def test_get_delay_with_jitter(self):
        """Jitter가 있으면 [0, delay] 범위"""
        config = RetryConfig(base_delay=1.0, exponential_base=2.0, jitter=True)

        delays = [config.get_delay(2) for _ in range(20)]

        assert all(0 <= d <= 4.0 for d in delays)


class TestRetryableErrorCodes:
    """RETRYABLE_ERROR_CODES 테스트"""

    def test_throttling_codes(self):
        assert "Throttling" in RETRYABLE_ERROR_CODES
        assert "ThrottlingException" in RETRYABLE_ERROR_CODES
        assert "RequestLimitExceeded" in RETRYABLE_ERROR_CODES

    def test_service_error_codes(self):
        assert "ServiceUnavailable" in RETRYABLE_ERROR_CODES
        assert "InternalError" in RETRYABLE_ERROR_CODES


class TestCategorizeError:
    """categorize_error 함수 테스트"""

    @pytest.mark.parametrize(
        "code, expected",
        [
            ("Throttling", ErrorCategory.THROTTLING),
            ("AccessDenied", ErrorCategory.ACCESS_DENIED),
            ("UnauthorizedOperation", ErrorCategory.ACCESS_DENIED),
            ("ResourceNotFoundException", ErrorCategory.NOT_FOUND),
            ("RequestTimeout", ErrorCategory.TIMEOUT),
            ("ExpiredToken", ErrorCategory.EXPIRED_TOKEN),
            ("ServiceUnavailable", ErrorCategory.SERVICE_ERROR),
            ("InvalidParameterValue", ErrorCategory.INVALID_REQUEST),
            ("SomethingElse", ErrorCategory.UNKNOWN),
        ],
    )
    def test_client_error_codes(self, code, expected):
        error = ClientError({"Error": {"Code": code, "Message": "msg"}}, "Operation")
        assert categorize_error(error) == expected

    def test_probe_timeout(self):
        """전체 제한 시간 초과는 TIMEOUT"""
        assert categorize_error(ProbeTimeoutError("slow", 1.0)) == ErrorCategory.TIMEOUT

    def test_builtin_timeout_before_network(self):
        """TimeoutError는 OSError 하위지만 TIMEOUT으로 분류"""
        assert categorize_error(TimeoutError("timed out")) == ErrorCategory.TIMEOUT

    def test_read_timeout(self):
        error = ReadTimeoutError(endpoint_url="https://ec2.us-east-1.amazonaws.com")
        assert categorize_error(error) == ErrorCategory.TIMEOUT

    def test_network_errors(self):
        assert categorize_error(ConnectionError("refused")) == ErrorCategory.NETWORK
        assert (
            categorize_error(EndpointConnectionError(endpoint_url="https://sqs.us-east-1.amazonaws.com"))
            == ErrorCategory.NETWORK
        )

    def test_no_credentials(self):
        assert categorize_error(NoCredentialsError()) == ErrorCategory.ACCESS_DENIED

    def test_probe_error_code(self):
        error = ProbeError("iam-users", "denied", error_code="AccessDenied")
        assert categorize_error(error) == ErrorCategory.ACCESS_DENIED

    def test_unknown_error(self):
        assert categorize_error(ValueError("bad")) == ErrorCategory.UNKNOWN


class TestGetErrorCode:
    """get_error_code 함수 테스트"""

    def test_client_error_code(self):
        error = ClientError({"Error": {"Code": "AccessDenied", "Message": "msg"}}, "operation")
        assert get_error_code(error) == "AccessDenied"

    def test_client_error_no_code(self):
        """Error 블록에 Code가 없을 때"""
        error = ClientError({"Error": {}}, "operation")
        assert get_error_code(error) == "Unknown"

    def test_probe_error_code(self):
        assert get_error_code(ProbeTimeoutError("slow", 2.0)) == "Timeout"

    def test_generic_exception(self):
        """일반 예외에서 클래스명 반환"""
        assert get_error_code(ValueError("test")) == "ValueError"


class TestGetErrorMessage:
    """get_error_message 함수 테스트"""

    def test_client_error_message(self):
        error = ClientError({"Error": {"Code": "AccessDenied", "Message": "not authorized"}}, "op")
        assert get_error_message(error) == "not authorized"

    def test_plain_exception(self):
        assert get_error_message(RuntimeError("boom")) == "boom"

    def test_empty_message_uses_class_name(self):
        assert get_error_message(RuntimeError()) == "RuntimeError"


class TestIsRetryable:
    """is_retryable 함수 테스트"""

    def test_throttling_is_retryable(self):
        error = ClientError({"Error": {"Code": "Throttling", "Message": "msg"}}, "operation")
        assert is_retryable(error) is True

    def test_access_denied_not_retryable(self):
        error = ClientError({"Error": {"Code": "AccessDenied", "Message": "msg"}}, "operation")
        assert is_retryable(error) is False

    def test_network_error_retryable(self):
        assert is_retryable(ConnectionError("reset")) is True

    def test_probe_timeout_not_retryable(self):
        """전체 제한 시간 초과는 재시도하지 않음"""
        assert is_retryable(ProbeTimeoutError("slow", 1.0)) is False

    def test_generic_error_not_retryable(self):
        assert is_retryable(ValueError("bad")) is False

    @pytest.mark.parametrize(
        "error, category",
        [
            (ClientError({"Error": {"Code": "ServiceUnavailable", "Message": "msg"}}, "operation"), "SERVICE_ERROR"),
            (ReadTimeoutError(endpoint_url="https://ec2.us-east-1.amazonaws.com/"), "TIMEOUT"),
            (ClientError({"Error": {"Code": "ExpiredToken", "Message": "msg"}}, "operation"), "EXPIRED_TOKEN"),
        ],
    )
    def test_follows_category(self, error, category):
        """재시도 여부는 에러 카테고리의 is_retryable을 따름"""
        assert categorize_error(error) is ErrorCategory[category]
        assert is_retryable(error) is ErrorCategory[category].is_retryable
