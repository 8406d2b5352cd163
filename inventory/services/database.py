"""
inventory/services/database.py - Database 리소스 probe

RDS Instance, DynamoDB Table 수집.
"""

from __future__ import annotations

from ..types import Category, ProbeContext, ProbeSpec, ResourceRecord


def list_rds_instances(ctx: ProbeContext) -> list[ResourceRecord]:
    """RDS DB Instance 수집"""
    rds = ctx.client("rds")
    records = []

    paginator = rds.get_paginator("describe_db_instances")
    for page in paginator.paginate():
        for instance in page.get("DBInstances", []):
            records.append(
                ResourceRecord.of(
                    instance["DBInstanceIdentifier"],
                    Engine=instance.get("Engine"),
                    DBInstanceClass=instance.get("DBInstanceClass"),
                    DBInstanceStatus=instance.get("DBInstanceStatus"),
                )
            )

    return records


def list_dynamodb_tables(ctx: ProbeContext) -> list[ResourceRecord]:
    """DynamoDB Table 수집 (이름만)"""
    dynamodb = ctx.client("dynamodb")
    records = []

    paginator = dynamodb.get_paginator("list_tables")
    for page in paginator.paginate():
        records.extend(ResourceRecord.of(name) for name in page.get("TableNames", []))

    return records


def probes() -> list[ProbeSpec]:
    return [
        ProbeSpec(
            name="rds-instances",
            category=Category.DATABASE,
            fetch=list_rds_instances,
            label="RDS Instances",
            noun="RDS instances",
            service="rds",
        ),
        ProbeSpec(
            name="dynamodb-tables",
            category=Category.DATABASE,
            fetch=list_dynamodb_tables,
            label="DynamoDB Tables",
            noun="DynamoDB tables",
            service="dynamodb",
        ),
    ]
