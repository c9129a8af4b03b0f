"""AWS resource accessors.

AWS tags have no concurrency token: writes apply immediately and the last
writer wins. A write upserts only the keys whose value differs from the
snapshot and deletes the keys the new map dropped. Keys under the reserved
``aws:`` prefix are owned by AWS services and are never written back.
"""

from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from botocore.exceptions import BotoCoreError, ClientError

from cloudtag.domain.tag.exceptions import InvalidTagError, ResourceNotFoundError
from cloudtag.domain.tag.value_objects import (
    OperationHandle,
    ResourceIdentity,
    ResourceKind,
    ResourceSnapshot,
)
from cloudtag.providers.aws.aws_client import AWSClient
from cloudtag.providers.aws.exceptions import translate_aws_error
from cloudtag.providers.base import BaseResourceAccessor

RESERVED_PREFIX = "aws:"


class AWSResourceAccessor(BaseResourceAccessor):
    """Base class for AWS accessors."""

    def __init__(self, aws_client: AWSClient, logger=None):
        super().__init__(logger)
        self.aws_client = aws_client

    def _call(self, operation: Callable, action: str, resource_id: str, **kwargs) -> Any:
        """Invoke a client method, translating botocore errors."""
        try:
            return operation(**kwargs)
        except (ClientError, BotoCoreError) as e:
            translated = translate_aws_error(e, self.resource_type, resource_id)
            self._logger.warning(
                "AWS call failed",
                action=action,
                resource_type=self.resource_type,
                resource_id=resource_id,
                error=type(translated).__name__,
                mutation=translated.mutation.value,
            )
            raise translated from e

    @staticmethod
    def _tags_from_list(tag_list: Optional[Iterable[Dict[str, str]]]) -> Dict[str, str]:
        return {tag["Key"]: tag.get("Value", "") for tag in tag_list or []}

    def _tag_changes(
        self, snapshot: ResourceSnapshot, tags: Mapping[str, str]
    ) -> Tuple[Dict[str, str], List[str]]:
        """Return the keys to upsert and the keys to delete.

        Raises:
            InvalidTagError: A reserved ``aws:`` key would be changed or removed
        """
        upserts = {key: value for key, value in tags.items() if snapshot.tags.get(key) != value}
        removed = [key for key in snapshot.tags if key not in tags]

        reserved = sorted(key for key in [*upserts, *removed] if key.startswith(RESERVED_PREFIX))
        if reserved:
            raise InvalidTagError(
                f"Tag keys starting with '{RESERVED_PREFIX}' are reserved: {', '.join(reserved)}"
            )
        return upserts, removed


class EC2TaggedAccessor(AWSResourceAccessor):
    """Shared write path for resources tagged through the EC2 API."""

    def _identity(self, resource_id: str, tags: Mapping[str, str], identity: Optional[ResourceIdentity]):
        if identity is not None:
            return identity
        return ResourceIdentity(name_id=tags.get("Name", resource_id), system_id=resource_id)

    def set_tags(self, snapshot: ResourceSnapshot, tags: Mapping[str, str]) -> Optional[OperationHandle]:
        resource_id = self._resource_id(snapshot.identity)
        upserts, removed = self._tag_changes(snapshot, tags)
        ec2 = self.aws_client.ec2_client

        if upserts:
            self._call(
                ec2.create_tags,
                "create_tags",
                resource_id,
                Resources=[resource_id],
                Tags=[{"Key": key, "Value": value} for key, value in upserts.items()],
            )

        if removed:
            self._call(
                ec2.delete_tags,
                "delete_tags",
                resource_id,
                Resources=[resource_id],
                Tags=[{"Key": key} for key in removed],
            )

        self._logger.debug(
            "EC2 tags written", resource_id=resource_id, upserted=len(upserts), removed=len(removed)
        )
        return None


class EC2InstanceAccessor(EC2TaggedAccessor):
    """EC2 instances."""

    kind = ResourceKind.VM
    resource_type = "VM"

    def _snapshot(self, instance: Dict[str, Any], identity: Optional[ResourceIdentity] = None):
        tags = self._tags_from_list(instance.get("Tags"))
        return ResourceSnapshot(
            identity=self._identity(instance["InstanceId"], tags, identity),
            tags=tags,
        )

    def fetch(self, identity: ResourceIdentity) -> ResourceSnapshot:
        instance_id = self._resource_id(identity)
        response = self._call(
            self.aws_client.ec2_client.describe_instances,
            "describe_instances",
            instance_id,
            InstanceIds=[instance_id],
        )
        for reservation in response.get("Reservations", []):
            for instance in reservation.get("Instances", []):
                return self._snapshot(instance, identity)
        raise ResourceNotFoundError(self.resource_type, instance_id)

    def list_resources(self) -> List[ResourceSnapshot]:
        paginator = self.aws_client.ec2_client.get_paginator("describe_instances")
        snapshots = []
        for page in self._call(lambda: list(paginator.paginate()), "describe_instances", "*"):
            for reservation in page.get("Reservations", []):
                for instance in reservation.get("Instances", []):
                    if instance.get("State", {}).get("Name") == "terminated":
                        continue
                    snapshots.append(self._snapshot(instance))
        return snapshots


class EBSVolumeAccessor(EC2TaggedAccessor):
    """EBS volumes."""

    kind = ResourceKind.DISK
    resource_type = "Disk"

    def _snapshot(self, volume: Dict[str, Any], identity: Optional[ResourceIdentity] = None):
        tags = self._tags_from_list(volume.get("Tags"))
        return ResourceSnapshot(
            identity=self._identity(volume["VolumeId"], tags, identity),
            tags=tags,
        )

    def fetch(self, identity: ResourceIdentity) -> ResourceSnapshot:
        volume_id = self._resource_id(identity)
        response = self._call(
            self.aws_client.ec2_client.describe_volumes,
            "describe_volumes",
            volume_id,
            VolumeIds=[volume_id],
        )
        volumes = response.get("Volumes", [])
        if not volumes:
            raise ResourceNotFoundError(self.resource_type, volume_id)
        return self._snapshot(volumes[0], identity)

    def list_resources(self) -> List[ResourceSnapshot]:
        paginator = self.aws_client.ec2_client.get_paginator("describe_volumes")
        snapshots = []
        for page in self._call(lambda: list(paginator.paginate()), "describe_volumes", "*"):
            for volume in page.get("Volumes", []):
                snapshots.append(self._snapshot(volume))
        return snapshots


class EKSClusterAccessor(AWSResourceAccessor):
    """EKS clusters. Tags are written against the cluster ARN."""

    kind = ResourceKind.CLUSTER
    resource_type = "Cluster"

    def _describe(self, cluster_name: str) -> Dict[str, Any]:
        response = self._call(
            self.aws_client.eks_client.describe_cluster,
            "describe_cluster",
            cluster_name,
            name=cluster_name,
        )
        return response["cluster"]

    def _snapshot(self, cluster: Dict[str, Any], identity: Optional[ResourceIdentity] = None):
        if identity is None:
            identity = ResourceIdentity(name_id=cluster["name"], system_id=cluster["name"])
        return ResourceSnapshot(
            identity=identity,
            tags=self._copy_tags(cluster.get("tags")),
            reference=cluster.get("arn"),
        )

    def fetch(self, identity: ResourceIdentity) -> ResourceSnapshot:
        return self._snapshot(self._describe(self._resource_id(identity)), identity)

    def set_tags(self, snapshot: ResourceSnapshot, tags: Mapping[str, str]) -> Optional[OperationHandle]:
        cluster_name = self._resource_id(snapshot.identity)
        upserts, removed = self._tag_changes(snapshot, tags)
        if not upserts and not removed:
            return None

        arn = snapshot.reference or self._describe(cluster_name)["arn"]
        eks = self.aws_client.eks_client

        if upserts:
            self._call(eks.tag_resource, "tag_resource", cluster_name, resourceArn=arn, tags=upserts)

        if removed:
            self._call(eks.untag_resource, "untag_resource", cluster_name, resourceArn=arn, tagKeys=removed)

        self._logger.debug(
            "EKS tags written", cluster=cluster_name, upserted=len(upserts), removed=len(removed)
        )
        return None

    def list_resources(self) -> List[ResourceSnapshot]:
        paginator = self.aws_client.eks_client.get_paginator("list_clusters")
        names = []
        for page in self._call(lambda: list(paginator.paginate()), "list_clusters", "*"):
            names.extend(page.get("clusters", []))
        return [self._snapshot(self._describe(name)) for name in names]
