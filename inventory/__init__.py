"""
inventory - AWS 리소스 인벤토리 수집기

Probe → Registry → Runner → Presenter 구조로 AWS 리소스 목록을 수집하고 출력합니다.

아키텍처:
    inventory/
    ├── types.py        # 데이터 모델 (ProbeSpec, ResourceRecord, RunReport 등)
    ├── registry.py     # probe 레지스트리
    ├── runner.py       # 병렬 실행기 (부분 실패 격리, 제한 시간, 재시도)
    ├── presenter.py    # 텍스트/JSON 출력, 종료 코드
    └── services/       # 카테고리별 AWS probe

Usage:
    from core.auth.session import get_session, verify_identity
    from inventory import ProbeContext, build_default_registry, render_text, run_inventory

    session = get_session(None, "us-east-1")
    identity = verify_identity(session)
    ctx = ProbeContext(session, "us-east-1", account_id=identity["Account"])

    report = run_inventory(build_default_registry(), ctx)
    render_text(report)
"""

from .presenter import exit_code, render_json, render_text, report_to_dicts
from .registry import ProbeRegistry
from .runner import InventoryRunner, RunnerConfig, RunState, run_inventory
from .services import build_default_registry
from .types import (
    Category,
    ProbeContext,
    ProbeFailure,
    ProbeResult,
    ProbeSpec,
    ResourceRecord,
    RunReport,
)

__all__: list[str] = [
    # Types
    "Category",
    "ProbeContext",
    "ProbeFailure",
    "ProbeResult",
    "ProbeSpec",
    "ResourceRecord",
    "RunReport",
    # Registry
    "ProbeRegistry",
    "build_default_registry",
    # Runner
    "InventoryRunner",
    "RunnerConfig",
    "RunState",
    "run_inventory",
    # Presenter
    "render_text",
    "render_json",
    "report_to_dicts",
    "exit_code",
]
