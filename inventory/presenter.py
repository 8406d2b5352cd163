"""
inventory/presenter.py - RunReport 출력

RunReport를 사람이 읽는 텍스트 또는 JSON으로 렌더링하고,
실행 결과에 맞는 프로세스 종료 코드를 결정합니다.

텍스트 형식 (카테고리 순 → 등록 순):
    List of S3 Buckets
    my-bucket-1
    my-bucket-2

    List of SQS Queues
    No SQS queues found.

    List of SNS Topics
    Error: AccessDenied: User is not authorized

JSON 형식:
    [{"probe": "s3-buckets", "category": "Storage",
      "records": [{"id": "my-bucket-1", "attributes": {...}}], "error": null}, ...]
"""

from __future__ import annotations

import json
from typing import Any

from rich.console import Console
from rich.text import Text

from .types import ProbeResult, RunReport

EXIT_OK = 0
EXIT_PROBE_FAILURE = 1
EXIT_PRECONDITION = 2

OUTPUT_FORMATS = ("text", "json")


def get_console(stderr: bool = False) -> Console:
    """식별자를 그대로 출력하는 Rich Console 생성

    markup/emoji/highlight를 끄고 soft_wrap을 켜서
    ARN 같은 긴 식별자가 변형되거나 줄바꿈되지 않도록 합니다.
    """
    return Console(
        stderr=stderr,
        markup=False,
        emoji=False,
        highlight=False,
        soft_wrap=True,
    )


# =============================================================================
# 텍스트
# =============================================================================


def _result_lines(result: ProbeResult) -> list[Text]:
    lines = [Text(f"List of {result.spec.label}", style="bold")]
    if result.error is not None:
        lines.append(Text(f"Error: {result.error}", style="red"))
    elif not result.records:
        lines.append(Text(f"No {result.spec.noun} found.", style="dim"))
    else:
        lines.extend(Text(record.id) for record in result.records)
    return lines


def render_text(report: RunReport, console: Console | None = None) -> None:
    """텍스트 형식으로 출력

    모든 probe는 최소 한 줄(데이터, 빈 결과 문구, 에러)을 출력하므로
    "비어 있음"과 "조회 실패"를 항상 구분할 수 있습니다.
    """
    console = console or get_console()

    for index, result in enumerate(report.ordered()):
        if index:
            console.print()
        for line in _result_lines(result):
            console.print(line)


def print_summary(report: RunReport, console: Console | None = None) -> None:
    """실행 요약 한 줄 출력 (stderr용)"""
    console = console or get_console(stderr=True)
    failed = len(report.failed)
    style = "yellow" if failed else "green"
    console.print(
        Text(
            f"{len(report.results)} probes, {failed} failed, {report.record_count} records "
            f"({report.duration_ms / 1000:.1f}s)",
            style=style,
        )
    )


# =============================================================================
# JSON
# =============================================================================


def result_to_dict(result: ProbeResult) -> dict[str, Any]:
    return {
        "probe": result.spec.name,
        "category": result.spec.category.value,
        "records": [record.to_dict() for record in result.records],
        "error": result.error.to_dict() if result.error is not None else None,
    }


def report_to_dicts(report: RunReport) -> list[dict[str, Any]]:
    """RunReport를 JSON 직렬화 가능한 객체로 변환 (텍스트와 같은 순서)"""
    return [result_to_dict(result) for result in report.ordered()]


def render_json(report: RunReport, indent: int | None = 2) -> str:
    return json.dumps(report_to_dicts(report), ensure_ascii=False, indent=indent, default=str)


# =============================================================================
# 종료 코드
# =============================================================================


def exit_code(report: RunReport, strict: bool = False) -> int:
    """종료 코드 결정

    Returns:
        0: 전체 성공 또는 strict가 아닌 부분 실패
        1: strict 모드에서 하나 이상의 probe 실패
    """
    if strict and report.has_failures():
        return EXIT_PROBE_FAILURE
    return EXIT_OK
