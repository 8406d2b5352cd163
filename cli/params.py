"""
cli/params.py - Click 커스텀 파라미터 타입

Usage:
    @click.option("--timeout", type=DURATION)
    @click.option("--only", multiple=True, callback=split_csv)
"""

from __future__ import annotations

import re

import click

_DURATION_PATTERN = re.compile(r"^\s*(?P<value>\d+(?:\.\d+)?)\s*(?P<unit>ms|s|m|h)?\s*$", re.IGNORECASE)

_UNIT_SECONDS = {
    "ms": 0.001,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}


def parse_duration(value: str) -> float:
    """기간 문자열을 초 단위로 변환

    단위가 없으면 초로 해석합니다.

    Examples:
        >>> parse_duration("90")
        90.0
        >>> parse_duration("1.5m")
        90.0
        >>> parse_duration("500ms")
        0.5

    Raises:
        ValueError: 형식이 잘못되었거나 0 이하인 경우
    """
    match = _DURATION_PATTERN.match(value)
    if not match:
        raise ValueError(f"invalid duration: {value!r}")

    unit = (match.group("unit") or "s").lower()
    seconds = float(match.group("value")) * _UNIT_SECONDS[unit]
    if seconds <= 0:
        raise ValueError(f"duration must be positive: {value!r}")
    return seconds


class DurationType(click.ParamType):
    """"90", "90s", "1.5m", "500ms" 형식의 기간 (초 단위 float)"""

    name = "duration"

    def convert(self, value, param, ctx):
        if isinstance(value, (int, float)):
            if value <= 0:
                self.fail(f"duration must be positive: {value}", param, ctx)
            return float(value)
        try:
            return parse_duration(value)
        except ValueError as e:
            self.fail(str(e), param, ctx)


DURATION = DurationType()


def split_csv(ctx: click.Context, param: click.Parameter, value: tuple[str, ...]) -> list[str]:
    """반복 옵션 + 콤마 구분 값을 평탄화 ("a,b" "c" -> ["a", "b", "c"])"""
    items: list[str] = []
    for raw in value or ():
        items.extend(part.strip() for part in raw.split(",") if part.strip())
    return items
