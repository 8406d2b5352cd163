"""
inventory/services/storage.py - Storage 리소스 probe

S3 Bucket, EBS Volume, EFS File System 수집.
"""

from __future__ import annotations

from ..types import Category, ProbeContext, ProbeSpec, ResourceRecord


def list_s3_buckets(ctx: ProbeContext) -> list[ResourceRecord]:
    """S3 Bucket 수집 (글로벌)"""
    s3 = ctx.client("s3")
    response = s3.list_buckets()

    return [
        ResourceRecord.of(bucket["Name"], CreationDate=bucket.get("CreationDate"))
        for bucket in response.get("Buckets", [])
    ]


def list_ebs_volumes(ctx: ProbeContext) -> list[ResourceRecord]:
    """EBS Volume 수집"""
    ec2 = ctx.client("ec2")
    records = []

    paginator = ec2.get_paginator("describe_volumes")
    for page in paginator.paginate():
        for volume in page.get("Volumes", []):
            records.append(
                ResourceRecord.of(
                    volume["VolumeId"],
                    Size=volume.get("Size"),
                    VolumeType=volume.get("VolumeType"),
                    State=volume.get("State"),
                )
            )

    return records


def list_efs_file_systems(ctx: ProbeContext) -> list[ResourceRecord]:
    """EFS File System 수집"""
    efs = ctx.client("efs")
    records = []

    paginator = efs.get_paginator("describe_file_systems")
    for page in paginator.paginate():
        for file_system in page.get("FileSystems", []):
            records.append(
                ResourceRecord.of(
                    file_system["FileSystemId"],
                    CreationTime=file_system.get("CreationTime"),
                )
            )

    return records


def probes() -> list[ProbeSpec]:
    return [
        ProbeSpec(
            name="s3-buckets",
            category=Category.STORAGE,
            fetch=list_s3_buckets,
            label="S3 Buckets",
            noun="S3 buckets",
            service="s3",
        ),
        ProbeSpec(
            name="ebs-volumes",
            category=Category.STORAGE,
            fetch=list_ebs_volumes,
            label="EBS Volumes",
            noun="EBS volumes",
            service="ec2",
        ),
        ProbeSpec(
            name="efs-file-systems",
            category=Category.STORAGE,
            fetch=list_efs_file_systems,
            label="Elastic File Systems",
            noun="Elastic File Systems",
            service="efs",
        ),
    ]
