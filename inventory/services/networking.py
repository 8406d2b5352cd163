"""
inventory/services/networking.py - Networking 리소스 probe

VPC, Route 53 Hosted Zone, Route 53 Health Check 수집.
"""

from __future__ import annotations

from ..types import Category, ProbeContext, ProbeSpec, ResourceRecord


def list_vpcs(ctx: ProbeContext) -> list[ResourceRecord]:
    """VPC 수집 (기본 VPC 포함)"""
    ec2 = ctx.client("ec2")
    records = []

    paginator = ec2.get_paginator("describe_vpcs")
    for page in paginator.paginate():
        for vpc in page.get("Vpcs", []):
            records.append(
                ResourceRecord.of(
                    vpc["VpcId"],
                    CidrBlock=vpc.get("CidrBlock"),
                    IsDefault=vpc.get("IsDefault", False),
                )
            )

    return records


def list_hosted_zones(ctx: ProbeContext) -> list[ResourceRecord]:
    """Route 53 Hosted Zone 수집 (글로벌)"""
    route53 = ctx.client("route53")
    records = []

    paginator = route53.get_paginator("list_hosted_zones")
    for page in paginator.paginate():
        for zone in page.get("HostedZones", []):
            records.append(
                ResourceRecord.of(
                    zone["Name"],
                    Id=zone.get("Id"),
                    PrivateZone=zone.get("Config", {}).get("PrivateZone"),
                )
            )

    return records


def list_health_checks(ctx: ProbeContext) -> list[ResourceRecord]:
    """Route 53 Health Check 수집 (글로벌)"""
    route53 = ctx.client("route53")
    records = []

    paginator = route53.get_paginator("list_health_checks")
    for page in paginator.paginate():
        for check in page.get("HealthChecks", []):
            records.append(
                ResourceRecord.of(
                    check["Id"],
                    Type=check.get("HealthCheckConfig", {}).get("Type"),
                )
            )

    return records


def probes() -> list[ProbeSpec]:
    return [
        ProbeSpec(
            name="vpcs",
            category=Category.NETWORKING,
            fetch=list_vpcs,
            label="VPCs",
            service="ec2",
        ),
        ProbeSpec(
            name="route53-hosted-zones",
            category=Category.NETWORKING,
            fetch=list_hosted_zones,
            label="Route 53 Hosted Zones",
            noun="Route 53 hosted zones",
            service="route53",
        ),
        ProbeSpec(
            name="route53-health-checks",
            category=Category.NETWORKING,
            fetch=list_health_checks,
            label="Route 53 Health Checks",
            noun="Route 53 health checks",
            service="route53",
        ),
    ]
