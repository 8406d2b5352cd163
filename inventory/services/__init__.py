"""
inventory/services - AWS 서비스별 probe 모음

카테고리별 모듈이 probes()로 ProbeSpec 목록을 제공하고,
build_default_registry()가 이를 모아 기본 레지스트리를 구성합니다.

새 probe 추가:
    1. 해당 카테고리 모듈에 fetch 함수 작성 (ProbeContext -> list[ResourceRecord])
    2. 같은 모듈의 probes()에 ProbeSpec 추가
"""

from __future__ import annotations

from ..registry import ProbeRegistry
from . import compute, database, monitoring, networking, other, storage

# 카테고리 모듈 (등록 순서)
SERVICE_MODULES = (compute, storage, networking, database, monitoring, other)


def build_default_registry() -> ProbeRegistry:
    """기본 probe 전체가 등록된 레지스트리 생성"""
    registry = ProbeRegistry()
    for module in SERVICE_MODULES:
        for spec in module.probes():
            registry.register(spec)
    return registry


__all__ = ["SERVICE_MODULES", "build_default_registry"]
