"""
tests/conftest.py - pytest 공통 픽스처

AWS API 모킹과 테스트 헬퍼를 제공합니다.

Usage:
    def test_something(probe_context, moto_session):
        # probe_context: MagicMock client를 돌려주는 ProbeContext
        # moto_session: moto로 모킹된 boto3 Session
        pass
"""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional
from unittest.mock import MagicMock

import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from inventory.registry import ProbeRegistry  # noqa: E402
from inventory.types import Category, ProbeContext, ProbeSpec, ResourceRecord  # noqa: E402

TEST_ACCOUNT_ID = "123456789012"
TEST_REGION = "us-east-1"


# =============================================================================
# 환경 설정
# =============================================================================


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """테스트 환경 설정

    실제 자격 증명/프로파일이 테스트에 섞이지 않도록 격리합니다.
    """
    monkeypatch.setenv("AWS_DEFAULT_REGION", TEST_REGION)
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.delenv("AWS_PROFILE", raising=False)
    monkeypatch.delenv("AWS_DEFAULT_PROFILE", raising=False)
    monkeypatch.delenv("AWS_REGION", raising=False)
    # rich 출력에 ANSI 코드가 섞이지 않도록
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    monkeypatch.delenv("TTY_COMPATIBLE", raising=False)

    yield


# =============================================================================
# AWS 모킹 픽스처
# =============================================================================


@pytest.fixture
def mock_clients():
    """서비스 이름별 MagicMock client 모음 (필요할 때 생성)"""
    return {}


@pytest.fixture
def probe_context(mock_clients):
    """MagicMock client를 돌려주는 ProbeContext

    같은 서비스는 같은 MagicMock을 반환하므로 테스트에서 미리 응답을 설정할 수 있습니다.
    """

    def factory(session, service_name, region_name=None):
        if service_name not in mock_clients:
            mock_clients[service_name] = MagicMock(name=f"{service_name}-client")
        return mock_clients[service_name]

    return ProbeContext(MagicMock(), TEST_REGION, account_id=TEST_ACCOUNT_ID, client_factory=factory)


@pytest.fixture
def mock_sts_client():
    """STS 클라이언트 모킹"""
    mock_client = MagicMock()

    mock_client.get_caller_identity.return_value = {
        "UserId": "AIDATEST123",
        "Account": TEST_ACCOUNT_ID,
        "Arn": f"arn:aws:iam::{TEST_ACCOUNT_ID}:user/test-user",
    }

    yield mock_client


# =============================================================================
# probe 헬퍼
# =============================================================================


def make_spec(
    name: str,
    category: Category = Category.OTHER,
    records: Optional[List[str]] = None,
    error: Optional[Exception] = None,
    label: str = "",
    noun: str = "",
    **kwargs: Any,
) -> ProbeSpec:
    """고정 결과를 반환하는 테스트용 ProbeSpec 생성

    Args:
        name: probe 이름
        category: 카테고리
        records: 반환할 리소스 id 목록
        error: 지정 시 fetch에서 발생시킬 예외
    """

    def fetch(ctx):
        if error is not None:
            raise error
        return [ResourceRecord.of(resource_id) for resource_id in records or []]

    return ProbeSpec(name=name, category=category, fetch=fetch, label=label, noun=noun, **kwargs)


def make_registry(*specs: ProbeSpec) -> ProbeRegistry:
    """ProbeSpec 목록으로 레지스트리 생성"""
    return ProbeRegistry(specs)


def set_pages(client: MagicMock, pages: Dict[str, List[Dict[str, Any]]]) -> None:
    """get_paginator(operation).paginate() 응답을 작업별로 설정

    Args:
        client: MagicMock client
        pages: {"describe_instances": [page1, page2], ...}
    """

    def get_paginator(operation_name):
        paginator = MagicMock(name=f"{operation_name}-paginator")
        paginator.paginate.return_value = pages.get(operation_name, [])
        return paginator

    client.get_paginator.side_effect = get_paginator


def create_mock_client_error(
    error_code: str,
    error_message: str = "Test error",
    operation_name: str = "TestOperation",
) -> Exception:
    """ClientError 생성 헬퍼"""
    from botocore.exceptions import ClientError

    return ClientError(
        {
            "Error": {
                "Code": error_code,
                "Message": error_message,
            }
        },
        operation_name,
    )


# =============================================================================
# moto 통합
# =============================================================================


@pytest.fixture
def moto_session():
    """moto로 모킹된 boto3 Session"""
    import boto3
    from moto import mock_aws

    with mock_aws():
        yield boto3.Session(region_name=TEST_REGION)


@pytest.fixture
def moto_context(moto_session):
    """moto Session 기반 ProbeContext (실제 get_client 사용)"""
    return ProbeContext(moto_session, TEST_REGION, account_id=TEST_ACCOUNT_ID)

