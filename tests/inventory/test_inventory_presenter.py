"""
tests/inventory/test_inventory_presenter.py - inventory/presenter.py 테스트
"""

import json
from datetime import datetime, timedelta, timezone

import pytest

from conftest import make_spec
from core.parallel import ErrorCategory
from inventory.presenter import (
    EXIT_OK,
    EXIT_PROBE_FAILURE,
    exit_code,
    print_summary,
    render_json,
    render_text,
    report_to_dicts,
    result_to_dict,
)
from inventory.types import Category, ProbeFailure, ProbeResult, ResourceRecord, RunReport


def _report(*results):
    started = datetime(2024, 1, 1, tzinfo=timezone.utc)
    return RunReport(results=tuple(results), started_at=started, finished_at=started + timedelta(seconds=1.5))


def _parse_text_blocks(out):
    """텍스트 출력을 (제목, id 목록, 에러 문자열) 블록으로 분해"""
    blocks = []
    for block in out.strip("\n").split("\n\n"):
        heading, *lines = block.split("\n")
        assert heading.startswith("List of ")
        label = heading[len("List of ") :]

        if len(lines) == 1 and lines[0].startswith("Error: "):
            blocks.append((label, [], lines[0][len("Error: ") :]))
        elif len(lines) == 1 and lines[0].startswith("No ") and lines[0].endswith(" found."):
            blocks.append((label, [], None))
        else:
            blocks.append((label, lines, None))
    return blocks


@pytest.fixture
def mixed_report():
    """성공/빈 결과/실패가 섞인 보고서 (등록 순서는 카테고리 순서와 다름)"""
    return _report(
        ProbeResult(
            make_spec("sns-topics", Category.OTHER, label="SNS Topics", noun="SNS topics"),
            error=ProbeFailure("AccessDenied", "User is not authorized", ErrorCategory.ACCESS_DENIED),
        ),
        ProbeResult(
            make_spec("s3-buckets", Category.STORAGE, label="S3 Buckets", noun="S3 buckets"),
            records=[ResourceRecord.of("my-bucket-1"), ResourceRecord.of("my-bucket-2")],
        ),
        ProbeResult(make_spec("ebs-volumes", Category.STORAGE, label="EBS Volumes", noun="EBS volumes")),
        ProbeResult(
            make_spec("ec2-instances", Category.COMPUTE, label="EC2 Instances", noun="EC2 instances"),
            records=[ResourceRecord.of("i-0abc", State="running")],
        ),
    )


class TestRenderText:
    """텍스트 출력 테스트"""

    def test_scenario_output(self, mixed_report, capsys):
        render_text(mixed_report)

        assert capsys.readouterr().out == (
            "List of EC2 Instances\n"
            "i-0abc\n"
            "\n"
            "List of S3 Buckets\n"
            "my-bucket-1\n"
            "my-bucket-2\n"
            "\n"
            "List of EBS Volumes\n"
            "No EBS volumes found.\n"
            "\n"
            "List of SNS Topics\n"
            "Error: AccessDenied: User is not authorized\n"
        )

    def test_every_probe_has_heading(self, mixed_report, capsys):
        """모든 probe가 제목 + 최소 한 줄을 출력"""
        render_text(mixed_report)
        out = capsys.readouterr().out

        for result in mixed_report.results:
            assert f"List of {result.spec.label}" in out

    def test_empty_report(self, capsys):
        render_text(_report())
        assert capsys.readouterr().out == ""

    def test_long_identifier_not_wrapped(self, capsys):
        arn = "arn:aws:sns:us-east-1:123456789012:" + "x" * 300
        report = _report(ProbeResult(make_spec("sns-topics", label="SNS Topics"), records=[ResourceRecord.of(arn)]))

        render_text(report)

        assert arn in capsys.readouterr().out.splitlines()

    def test_markup_not_interpreted(self, capsys):
        report = _report(ProbeResult(make_spec("q"), records=[ResourceRecord.of("[bold]queue[/bold]")]))

        render_text(report)

        assert "[bold]queue[/bold]" in capsys.readouterr().out


class TestSummary:
    def test_print_summary(self, mixed_report, capsys):
        print_summary(mixed_report)

        err = capsys.readouterr().err
        assert "4 probes, 1 failed, 3 records (1.5s)" in err


class TestRenderJson:
    """JSON 출력 테스트"""

    def test_result_to_dict_success(self, mixed_report):
        data = result_to_dict(mixed_report.get("ec2-instances"))

        assert data == {
            "probe": "ec2-instances",
            "category": "Compute",
            "records": [{"id": "i-0abc", "attributes": {"State": "running"}}],
            "error": None,
        }

    def test_result_to_dict_failure(self, mixed_report):
        data = result_to_dict(mixed_report.get("sns-topics"))

        assert data["records"] == []
        assert data["error"]["code"] == "AccessDenied"
        assert data["error"]["category"] == "access_denied"

    def test_json_matches_text_order(self, mixed_report):
        """JSON과 텍스트는 같은 순서, 같은 내용"""
        data = json.loads(render_json(mixed_report))

        assert [item["probe"] for item in data] == [r.spec.name for r in mixed_report.ordered()]
        assert data == report_to_dicts(mixed_report)

    def test_text_and_json_describe_same_results(self, mixed_report, capsys):
        """텍스트 블록과 JSON 항목이 (probe, id 목록, 에러) 단위로 일치"""
        render_text(mixed_report)
        text_blocks = _parse_text_blocks(capsys.readouterr().out)
        data = json.loads(render_json(mixed_report))

        json_blocks = [
            (
                mixed_report.get(item["probe"]).spec.label,
                [record["id"] for record in item["records"]],
                f"{item['error']['code']}: {item['error']['message']}" if item["error"] else None,
            )
            for item in data
        ]

        assert text_blocks == json_blocks
        assert text_blocks == [
            ("EC2 Instances", ["i-0abc"], None),
            ("S3 Buckets", ["my-bucket-1", "my-bucket-2"], None),
            ("EBS Volumes", [], None),
            ("SNS Topics", [], "AccessDenied: User is not authorized"),
        ]

    def test_compact(self, mixed_report):
        assert "\n" not in render_json(mixed_report, indent=None)


class TestExitCode:
    """종료 코드 테스트"""

    def test_all_success(self):
        report = _report(ProbeResult(make_spec("a")))

        assert exit_code(report) == EXIT_OK
        assert exit_code(report, strict=True) == EXIT_OK

    def test_failure_non_strict(self, mixed_report):
        assert exit_code(mixed_report) == EXIT_OK

    def test_failure_strict(self, mixed_report):
        assert exit_code(mixed_report, strict=True) == EXIT_PROBE_FAILURE
