"""
cli/app.py - 메인 CLI 엔트리포인트

Click 기반의 CLI 애플리케이션 진입점입니다.
인자 없이 실행하면 기본 자격 증명 체인으로 전체 probe를 실행하고
리소스 목록을 출력합니다.

명령어 구조:
    aws-inventory                           # 전체 probe, 텍스트 출력
    aws-inventory --strict                  # probe 실패 시 종료 코드 1
    aws-inventory -f json                   # JSON 출력
    aws-inventory --only storage,compute    # 카테고리 제한
    aws-inventory --only s3-buckets         # probe 이름 제한
    aws-inventory --timeout 2m              # 전체 제한 시간
    aws-inventory --list-probes             # 등록된 probe 목록

종료 코드:
    0: 성공 또는 strict가 아닌 부분 실패
    1: strict 모드에서 하나 이상의 probe 실패
    2: 자격 증명/연결 실패 또는 잘못된 인자

Usage:
    $ aws-inventory -p my-profile -r ap-northeast-2
    $ python -m cli.app
"""

from __future__ import annotations

import logging
import os
import sys

import click
from rich.logging import RichHandler
from rich.table import Table

from core.auth.session import get_session, verify_identity
from core.config import LogConfig, get_default_profile, get_env_region, get_version, settings
from core.exceptions import PreconditionError, ValidationError
from inventory.presenter import (
    EXIT_PRECONDITION,
    OUTPUT_FORMATS,
    exit_code,
    get_console,
    print_summary,
    render_json,
    render_text,
)
from inventory.registry import ProbeRegistry
from inventory.runner import InventoryRunner, RunnerConfig
from inventory.services import build_default_registry
from inventory.types import ProbeContext

from .params import DURATION, split_csv

logger = logging.getLogger(__name__)

VERSION = get_version()

# botocore 노이즈 로그 제한
_NOISY_LOGGERS = (
    "botocore",
    "boto3",
    "urllib3",
)


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """stderr RichHandler로 로깅 설정

    반복 호출 시 이전에 추가한 핸들러를 교체합니다.
    """
    config = LogConfig.from_env()
    level = logging.DEBUG if verbose else logging.ERROR if quiet else config.level

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if getattr(handler, "_aws_inventory", False):
            root_logger.removeHandler(handler)

    handler = RichHandler(console=get_console(stderr=True), show_path=False, rich_tracebacks=verbose)
    handler.setFormatter(logging.Formatter(config.format, datefmt=config.date_format))
    handler._aws_inventory = True  # type: ignore[attr-defined]
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def _print_probe_table(registry: ProbeRegistry) -> None:
    table = Table(show_header=True, header_style="bold")
    table.add_column("Probe")
    table.add_column("Category")
    table.add_column("Service")
    table.add_column("Label")

    for spec in registry:
        table.add_row(spec.name, spec.category.value, spec.service, spec.label)

    get_console().print(table)


def _exit_now(code: int) -> None:
    """출력을 비운 뒤 워커 스레드를 join하지 않고 즉시 종료

    제한 시간을 넘긴 probe 스레드는 인터프리터 종료 시 join 대상이므로
    정상 종료 경로로는 --timeout 이후에도 프로세스가 남습니다.
    """
    sys.stdout.flush()
    sys.stderr.flush()
    os._exit(code)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(VERSION, prog_name="aws-inventory")
@click.option("--strict", is_flag=True, help="probe가 하나라도 실패하면 종료 코드 1")
@click.option(
    "-f",
    "--format",
    "output_format",
    type=click.Choice(OUTPUT_FORMATS),
    default="text",
    show_default=True,
    help="출력 형식",
)
@click.option(
    "--only",
    "only",
    multiple=True,
    callback=split_csv,
    metavar="CATEGORY_OR_PROBE[,...]",
    help="카테고리 또는 probe 이름으로 제한 (다중/콤마 구분 가능)",
)
@click.option("--timeout", type=DURATION, default=None, help="전체 제한 시간 (예: 90, 90s, 1.5m, 500ms)")
@click.option("-p", "--profile", default=None, help="AWS 프로파일 (기본: AWS_PROFILE 또는 기본 자격 증명 체인)")
@click.option("-r", "--region", default=None, help="AWS 리전 (기본: AWS_REGION/AWS_DEFAULT_REGION, 없으면 프로파일 설정 리전)")
@click.option(
    "-w",
    "--max-workers",
    type=click.IntRange(min=1, max=settings.MAX_WORKERS_LIMIT),
    default=settings.MAX_WORKERS,
    show_default=True,
    help="동시 실행 probe 수",
)
@click.option("--list-probes", is_flag=True, help="등록된 probe 목록 출력 후 종료")
@click.option("-q", "--quiet", is_flag=True, help="요약/경고 출력 억제")
@click.option("-v", "--verbose", is_flag=True, help="디버그 로그 출력")
@click.pass_context
def cli(
    ctx: click.Context,
    strict: bool,
    output_format: str,
    only: list[str],
    timeout: float | None,
    profile: str | None,
    region: str | None,
    max_workers: int,
    list_probes: bool,
    quiet: bool,
    verbose: bool,
) -> None:
    """AWS 리소스 인벤토리 - 계정의 리소스 목록을 카테고리별로 출력합니다."""
    configure_logging(verbose=verbose, quiet=quiet)

    registry = build_default_registry()
    try:
        registry = registry.select(only)
    except ValidationError as e:
        raise click.BadParameter(str(e), param_hint="--only") from e

    if list_probes:
        _print_probe_table(registry)
        ctx.exit(0)

    profile = profile or get_default_profile()
    err_console = get_console(stderr=True)

    # 전제 조건: probe 실행 전 한 번만 확인
    try:
        # 명시 리전이 없으면 프로파일 설정 리전을 따름
        session = get_session(profile, region or get_env_region())
        region = session.region_name or settings.DEFAULT_REGION
        identity = verify_identity(session, region)
    except PreconditionError as e:
        err_console.print(f"✗ {e}", style="red")
        ctx.exit(EXIT_PRECONDITION)

    probe_ctx = ProbeContext(session, region, account_id=identity["Account"])
    runner = InventoryRunner(
        registry,
        RunnerConfig(
            max_workers=max_workers,
            timeout=timeout if timeout is not None else settings.RUN_TIMEOUT_SECONDS,
        ),
    )
    report = runner.run(probe_ctx)

    if output_format == "json":
        click.echo(render_json(report))
    else:
        render_text(report)
        if not quiet:
            err_console.print()
            print_summary(report, err_console)

    code = exit_code(report, strict=strict)
    if report.timed_out:
        _exit_now(code)
    ctx.exit(code)


if __name__ == "__main__":
    cli()
