"""
inventory/services/monitoring.py - Monitoring & Logging 리소스 probe

CloudWatch Alarm, CloudTrail Trail 수집.
"""

from __future__ import annotations

from ..types import Category, ProbeContext, ProbeSpec, ResourceRecord


def list_cloudwatch_alarms(ctx: ProbeContext) -> list[ResourceRecord]:
    """CloudWatch Metric Alarm 수집"""
    cloudwatch = ctx.client("cloudwatch")
    records = []

    paginator = cloudwatch.get_paginator("describe_alarms")
    for page in paginator.paginate(AlarmTypes=["MetricAlarm"]):
        for alarm in page.get("MetricAlarms", []):
            records.append(
                ResourceRecord.of(
                    alarm["AlarmName"],
                    StateValue=alarm.get("StateValue"),
                    MetricName=alarm.get("MetricName"),
                )
            )

    return records


def list_cloudtrail_trails(ctx: ProbeContext) -> list[ResourceRecord]:
    """CloudTrail Trail 수집

    describe_trails는 페이지네이션을 지원하지 않으며, 다른 리전에서 생성된
    멀티 리전 trail(shadow trail)도 함께 반환합니다.
    """
    cloudtrail = ctx.client("cloudtrail")
    response = cloudtrail.describe_trails()

    return [
        ResourceRecord.of(
            trail["Name"],
            HomeRegion=trail.get("HomeRegion"),
            TrailARN=trail.get("TrailARN"),
            IsMultiRegionTrail=trail.get("IsMultiRegionTrail"),
        )
        for trail in response.get("trailList", [])
    ]


def probes() -> list[ProbeSpec]:
    return [
        ProbeSpec(
            name="cloudwatch-alarms",
            category=Category.MONITORING,
            fetch=list_cloudwatch_alarms,
            label="CloudWatch Alarms",
            noun="CloudWatch alarms",
            service="cloudwatch",
        ),
        ProbeSpec(
            name="cloudtrail-trails",
            category=Category.MONITORING,
            fetch=list_cloudtrail_trails,
            label="CloudTrails",
            service="cloudtrail",
        ),
    ]
