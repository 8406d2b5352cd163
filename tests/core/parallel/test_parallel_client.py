"""
tests/core/parallel/test_parallel_client.py - core/parallel/client.py 테스트
"""

from unittest.mock import MagicMock

from botocore.config import Config

from core.config import settings
from core.parallel.client import get_client


class TestGetClient:
    """get_client 테스트"""

    def test_default_config(self):
        """settings 기본값으로 Config 생성"""
        session = MagicMock()

        get_client(session, "ec2", region_name="us-east-1")

        args, kwargs = session.client.call_args
        assert args[0] == "ec2"
        assert kwargs["region_name"] == "us-east-1"

        config = kwargs["config"]
        assert config.retries["max_attempts"] == settings.API_MAX_ATTEMPTS
        assert config.retries["mode"] == "standard"
        assert config.connect_timeout == settings.API_CONNECT_TIMEOUT
        assert config.read_timeout == settings.API_READ_TIMEOUT

    def test_custom_values(self):
        session = MagicMock()

        get_client(session, "sts", max_attempts=1, connect_timeout=5, read_timeout=7)

        config = session.client.call_args.kwargs["config"]
        assert config.retries["max_attempts"] == 1
        assert config.connect_timeout == 5
        assert config.read_timeout == 7

    def test_merge_existing_config(self):
        """전달된 config는 기본 config에 병합"""
        session = MagicMock()

        get_client(session, "s3", config=Config(signature_version="s3v4"))

        config = session.client.call_args.kwargs["config"]
        assert config.signature_version == "s3v4"
        assert config.retries["mode"] == "standard"
