"""
inventory/services/other.py - 기타 리소스 probe

IAM User, CloudFormation Stack, SQS Queue, SNS Topic 수집.
"""

from __future__ import annotations

from ..types import Category, ProbeContext, ProbeSpec, ResourceRecord


def list_iam_users(ctx: ProbeContext) -> list[ResourceRecord]:
    """IAM User 수집 (글로벌)"""
    iam = ctx.client("iam")
    records = []

    paginator = iam.get_paginator("list_users")
    for page in paginator.paginate():
        for user in page.get("Users", []):
            records.append(
                ResourceRecord.of(
                    user["UserName"],
                    CreateDate=user.get("CreateDate"),
                    Arn=user.get("Arn"),
                )
            )

    return records


def list_cloudformation_stacks(ctx: ProbeContext) -> list[ResourceRecord]:
    """CloudFormation Stack 수집 (삭제된 스택 제외)"""
    cloudformation = ctx.client("cloudformation")
    records = []

    paginator = cloudformation.get_paginator("describe_stacks")
    for page in paginator.paginate():
        for stack in page.get("Stacks", []):
            records.append(
                ResourceRecord.of(
                    stack["StackName"],
                    StackStatus=stack.get("StackStatus"),
                    CreationTime=stack.get("CreationTime"),
                )
            )

    return records


def list_sqs_queues(ctx: ProbeContext) -> list[ResourceRecord]:
    """SQS Queue 수집 (URL)"""
    sqs = ctx.client("sqs")
    records = []

    paginator = sqs.get_paginator("list_queues")
    for page in paginator.paginate():
        records.extend(ResourceRecord.of(url) for url in page.get("QueueUrls", []))

    return records


def list_sns_topics(ctx: ProbeContext) -> list[ResourceRecord]:
    """SNS Topic 수집 (ARN)"""
    sns = ctx.client("sns")
    records = []

    paginator = sns.get_paginator("list_topics")
    for page in paginator.paginate():
        records.extend(ResourceRecord.of(topic["TopicArn"]) for topic in page.get("Topics", []))

    return records


def probes() -> list[ProbeSpec]:
    return [
        ProbeSpec(
            name="iam-users",
            category=Category.OTHER,
            fetch=list_iam_users,
            label="IAM Users",
            noun="IAM users",
            service="iam",
        ),
        ProbeSpec(
            name="cloudformation-stacks",
            category=Category.OTHER,
            fetch=list_cloudformation_stacks,
            label="CloudFormation Stacks",
            noun="CloudFormation stacks",
            service="cloudformation",
        ),
        ProbeSpec(
            name="sqs-queues",
            category=Category.OTHER,
            fetch=list_sqs_queues,
            label="SQS Queues",
            noun="SQS queues",
            service="sqs",
        ),
        ProbeSpec(
            name="sns-topics",
            category=Category.OTHER,
            fetch=list_sns_topics,
            label="SNS Topics",
            noun="SNS topics",
            service="sns",
        ),
    ]
