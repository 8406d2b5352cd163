"""
inventory/services/compute.py - Compute 리소스 probe

EC2 Instance, Lambda Function, ECS Cluster, ECS Service 수집.
"""

from __future__ import annotations

import logging

from ..types import Category, ProbeContext, ProbeSpec, ResourceRecord

logger = logging.getLogger(__name__)


def list_ec2_instances(ctx: ProbeContext) -> list[ResourceRecord]:
    """EC2 Instance 수집"""
    ec2 = ctx.client("ec2")
    records = []

    paginator = ec2.get_paginator("describe_instances")
    for page in paginator.paginate():
        for reservation in page.get("Reservations", []):
            for instance in reservation.get("Instances", []):
                records.append(
                    ResourceRecord.of(
                        instance["InstanceId"],
                        InstanceType=instance.get("InstanceType"),
                        State=instance.get("State", {}).get("Name"),
                        LaunchTime=instance.get("LaunchTime"),
                    )
                )

    return records


def list_lambda_functions(ctx: ProbeContext) -> list[ResourceRecord]:
    """Lambda Function 수집"""
    lambda_client = ctx.client("lambda")
    records = []

    paginator = lambda_client.get_paginator("list_functions")
    for page in paginator.paginate():
        for function in page.get("Functions", []):
            records.append(
                ResourceRecord.of(
                    function["FunctionName"],
                    Runtime=function.get("Runtime"),
                    LastModified=function.get("LastModified"),
                    FunctionArn=function.get("FunctionArn"),
                )
            )

    return records


# describe_clusters 1회 호출당 최대 클러스터 수
_DESCRIBE_CLUSTERS_BATCH = 100


def _list_cluster_arns(ecs) -> list[str]:
    cluster_arns: list[str] = []
    for page in ecs.get_paginator("list_clusters").paginate():
        cluster_arns.extend(page.get("clusterArns", []))

    logger.debug("ECS 클러스터 %d개", len(cluster_arns))
    return cluster_arns


def list_ecs_clusters(ctx: ProbeContext) -> list[ResourceRecord]:
    """ECS Cluster 수집

    서비스가 없는 클러스터도 ActiveServicesCount=0으로 포함합니다.
    """
    ecs = ctx.client("ecs")
    cluster_arns = _list_cluster_arns(ecs)
    described: dict[str, dict] = {}

    for start in range(0, len(cluster_arns), _DESCRIBE_CLUSTERS_BATCH):
        batch = cluster_arns[start : start + _DESCRIBE_CLUSTERS_BATCH]
        for cluster in ecs.describe_clusters(clusters=batch).get("clusters", []):
            described[cluster["clusterArn"]] = cluster

    records = []
    for cluster_arn in cluster_arns:
        cluster = described.get(cluster_arn, {})
        records.append(
            ResourceRecord.of(
                cluster_arn,
                ClusterName=cluster.get("clusterName"),
                Status=cluster.get("status"),
                ActiveServicesCount=cluster.get("activeServicesCount"),
            )
        )

    return records


def list_ecs_services(ctx: ProbeContext) -> list[ResourceRecord]:
    """ECS Service 수집

    클러스터 목록을 조회한 뒤 클러스터별 서비스를 모읍니다.
    서비스가 없는 클러스터는 ecs-clusters probe에만 나타납니다.
    """
    ecs = ctx.client("ecs")
    records = []
    cluster_arns = _list_cluster_arns(ecs)

    service_paginator = ecs.get_paginator("list_services")
    for cluster_arn in cluster_arns:
        for page in service_paginator.paginate(cluster=cluster_arn):
            for service_arn in page.get("serviceArns", []):
                records.append(ResourceRecord.of(service_arn, Cluster=cluster_arn))

    return records


def probes() -> list[ProbeSpec]:
    return [
        ProbeSpec(
            name="ec2-instances",
            category=Category.COMPUTE,
            fetch=list_ec2_instances,
            label="EC2 Instances",
            noun="EC2 instances",
            service="ec2",
        ),
        ProbeSpec(
            name="lambda-functions",
            category=Category.COMPUTE,
            fetch=list_lambda_functions,
            label="Lambda Functions",
            noun="Lambda functions",
            service="lambda",
        ),
        ProbeSpec(
            name="ecs-clusters",
            category=Category.COMPUTE,
            fetch=list_ecs_clusters,
            label="ECS Clusters",
            noun="ECS clusters",
            service="ecs",
        ),
        ProbeSpec(
            name="ecs-services",
            category=Category.COMPUTE,
            fetch=list_ecs_services,
            label="ECS Services",
            noun="ECS services",
            service="ecs",
        ),
    ]
