"""
core/config.py - 중앙 설정 관리

애플리케이션 전역 설정값과 환경변수 헬퍼를 한 곳에 모읍니다.
설정은 불변(frozen) 데이터클래스로 제공되며, AWS_INVENTORY_* 환경변수로
기본값을 덮어쓸 수 있습니다.

Usage:
    from core.config import settings, get_env_region

    region = get_env_region()  # AWS_REGION > AWS_DEFAULT_REGION > None (프로파일 설정)
    workers = settings.MAX_WORKERS
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

ENV_PREFIX = "AWS_INVENTORY_"


# =============================================================================
# 환경변수 헬퍼
# =============================================================================


def get_env_int(name: str, default: int) -> int:
    """환경변수를 int로 변환 (실패 시 default)"""
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def get_env_float(name: str, default: float | None) -> float | None:
    """환경변수를 float로 변환 (실패 시 default)"""
    value = os.environ.get(name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError:
        return default


# =============================================================================
# 설정
# =============================================================================


@dataclass(frozen=True)
class Settings:
    """애플리케이션 설정 (불변)

    Attributes:
        DEFAULT_REGION: 리전 환경변수가 없을 때 사용할 리전
        API_CONNECT_TIMEOUT: botocore 연결 타임아웃 (초)
        API_READ_TIMEOUT: botocore 읽기 타임아웃 (초)
        API_MAX_ATTEMPTS: botocore 레벨 최대 시도 횟수
        MAX_WORKERS: probe 병렬 실행 워커 수 기본값
        MAX_WORKERS_LIMIT: 워커 수 상한 (API 쓰로틀링 방지)
        RUN_TIMEOUT_SECONDS: 전체 실행 제한 시간 (None이면 무제한)
    """

    DEFAULT_REGION: str = field(default_factory=lambda: os.environ.get(f"{ENV_PREFIX}DEFAULT_REGION", "us-east-1"))
    API_CONNECT_TIMEOUT: int = field(default_factory=lambda: get_env_int(f"{ENV_PREFIX}CONNECT_TIMEOUT", 10))
    API_READ_TIMEOUT: int = field(default_factory=lambda: get_env_int(f"{ENV_PREFIX}READ_TIMEOUT", 30))
    API_MAX_ATTEMPTS: int = field(default_factory=lambda: get_env_int(f"{ENV_PREFIX}MAX_ATTEMPTS", 3))
    MAX_WORKERS: int = field(default_factory=lambda: get_env_int(f"{ENV_PREFIX}MAX_WORKERS", 8))
    MAX_WORKERS_LIMIT: int = 32
    RUN_TIMEOUT_SECONDS: float | None = field(
        default_factory=lambda: get_env_float(f"{ENV_PREFIX}TIMEOUT", None)
    )


settings = Settings()


@dataclass
class LogConfig:
    """로깅 설정

    Attributes:
        level: 로그 레벨 이름
        format: 로그 포맷 문자열 (시각과 레벨은 RichHandler가 출력)
        date_format: 날짜 포맷
    """

    level: str = "WARNING"
    format: str = "%(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"

    @classmethod
    def from_env(cls) -> LogConfig:
        """LOG_LEVEL / LOG_FORMAT 환경변수에서 로드"""
        default = cls()
        return cls(
            level=os.environ.get("LOG_LEVEL", default.level).upper(),
            format=os.environ.get("LOG_FORMAT", default.format),
            date_format=default.date_format,
        )


# =============================================================================
# 경로 / 버전
# =============================================================================


def get_project_root() -> Path:
    """프로젝트 루트 경로 반환"""
    return Path(__file__).resolve().parent.parent


def get_version() -> str:
    """버전 문자열 반환

    설치된 배포판 메타데이터를 우선 사용하고, 소스 체크아웃에서는
    version.txt를 읽습니다.
    """
    from importlib.metadata import PackageNotFoundError, version

    try:
        return version("aws-inventory")
    except PackageNotFoundError:
        pass

    version_file = get_project_root() / "version.txt"
    if version_file.exists():
        return version_file.read_text(encoding="utf-8").strip()
    return "0.0.0"


def get_default_profile() -> str | None:
    """AWS_PROFILE > AWS_DEFAULT_PROFILE 순으로 프로파일 반환"""
    return os.environ.get("AWS_PROFILE") or os.environ.get("AWS_DEFAULT_PROFILE") or None


def get_env_region() -> str | None:
    """AWS_REGION > AWS_DEFAULT_REGION 순으로 리전 반환

    둘 다 없으면 None을 반환하여 프로파일에 설정된 리전을 따르게 합니다.
    """
    return os.environ.get("AWS_REGION") or os.environ.get("AWS_DEFAULT_REGION") or None
