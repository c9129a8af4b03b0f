"""GCP resource accessors.

Compute Engine instances and disks keep labels inline with a
``labelFingerprint``; GKE clusters keep ``resourceLabels`` with their own
fingerprint. Every write sends the fingerprint read by ``fetch`` and returns
an operation that must be polled.
"""

from abc import abstractmethod
from typing import Any, Dict, Iterator, List, Mapping, Optional

from googleapiclient.errors import HttpError

from cloudtag.domain.tag.value_objects import (
    OperationHandle,
    ResourceIdentity,
    ResourceKind,
    ResourceSnapshot,
)
from cloudtag.providers.base import BaseResourceAccessor
from cloudtag.providers.gcp.exceptions import TRANSPORT_ERRORS, translate_gcp_error
from cloudtag.providers.gcp.gcp_client import GCPClient
from cloudtag.providers.gcp.operations import to_operation_handle


class GCPResourceAccessor(BaseResourceAccessor):
    """Base class for GCP accessors."""

    #: Field holding the label map in the resource body.
    labels_field = "labels"

    def __init__(self, gcp_client: GCPClient, logger=None):
        super().__init__(logger)
        self.gcp_client = gcp_client

    def _execute(self, request: Any, action: str, resource_id: str) -> Dict[str, Any]:
        """Execute a discovery request, translating client errors."""
        try:
            return request.execute()
        except (HttpError, *TRANSPORT_ERRORS) as e:
            translated = translate_gcp_error(e, self.resource_type, resource_id)
            self._logger.warning(
                "GCP call failed",
                action=action,
                resource_type=self.resource_type,
                resource_id=resource_id,
                error=type(translated).__name__,
                mutation=translated.mutation.value,
            )
            raise translated from e

    def _snapshot(self, item: Dict[str, Any], identity: Optional[ResourceIdentity] = None) -> ResourceSnapshot:
        if identity is None:
            identity = ResourceIdentity(name_id=item.get("name", ""), system_id=item.get("name", ""))
        return ResourceSnapshot(
            identity=identity,
            tags=self._copy_tags(item.get(self.labels_field)),
            token=item.get("labelFingerprint"),
            reference=item.get("selfLink"),
        )

    def _label_body(self, snapshot: ResourceSnapshot, tags: Mapping[str, str]) -> Dict[str, Any]:
        return {
            self.labels_field: self._copy_tags(tags),
            "labelFingerprint": snapshot.token,
        }

    def _paginate(self, collection: Any, action: str, **kwargs) -> Iterator[Dict[str, Any]]:
        request = collection.list(**kwargs)
        while request is not None:
            response = self._execute(request, action, kwargs.get("zone", self.gcp_client.zone))
            yield from response.get("items", [])
            request = collection.list_next(previous_request=request, previous_response=response)


class GCPZonalComputeAccessor(GCPResourceAccessor):
    """Shared behaviour for zonal Compute Engine resources."""

    @abstractmethod
    def _collection(self) -> Any:
        """Discovery collection for this resource, e.g. compute.instances()."""

    def get_operation(self, handle: OperationHandle) -> OperationHandle:
        request = self.gcp_client.compute.zoneOperations().get(
            project=self.gcp_client.project_id,
            zone=self.gcp_client.zone,
            operation=handle.name,
        )
        return to_operation_handle(self._execute(request, "zoneOperations.get", handle.name))

    def list_resources(self) -> List[ResourceSnapshot]:
        return [
            self._snapshot(item)
            for item in self._paginate(
                self._collection(),
                f"{self.resource_type}.list",
                project=self.gcp_client.project_id,
                zone=self.gcp_client.zone,
            )
        ]


class GCPInstanceAccessor(GCPZonalComputeAccessor):
    """Compute Engine VM instances."""

    kind = ResourceKind.VM
    resource_type = "VM"

    def _collection(self) -> Any:
        return self.gcp_client.compute.instances()

    def fetch(self, identity: ResourceIdentity) -> ResourceSnapshot:
        instance_id = self._resource_id(identity)
        request = self._collection().get(
            project=self.gcp_client.project_id, zone=self.gcp_client.zone, instance=instance_id
        )
        return self._snapshot(self._execute(request, "instances.get", instance_id), identity)

    def set_tags(self, snapshot: ResourceSnapshot, tags: Mapping[str, str]) -> Optional[OperationHandle]:
        instance_id = self._resource_id(snapshot.identity)
        request = self._collection().setLabels(
            project=self.gcp_client.project_id,
            zone=self.gcp_client.zone,
            instance=instance_id,
            body=self._label_body(snapshot, tags),
        )
        return to_operation_handle(self._execute(request, "instances.setLabels", instance_id))


class GCPDiskAccessor(GCPZonalComputeAccessor):
    """Zonal persistent disks."""

    kind = ResourceKind.DISK
    resource_type = "Disk"

    def _collection(self) -> Any:
        return self.gcp_client.compute.disks()

    def fetch(self, identity: ResourceIdentity) -> ResourceSnapshot:
        disk_id = self._resource_id(identity)
        request = self._collection().get(
            project=self.gcp_client.project_id, zone=self.gcp_client.zone, disk=disk_id
        )
        return self._snapshot(self._execute(request, "disks.get", disk_id), identity)

    def set_tags(self, snapshot: ResourceSnapshot, tags: Mapping[str, str]) -> Optional[OperationHandle]:
        disk_id = self._resource_id(snapshot.identity)
        request = self._collection().setLabels(
            project=self.gcp_client.project_id,
            zone=self.gcp_client.zone,
            resource=disk_id,
            body=self._label_body(snapshot, tags),
        )
        return to_operation_handle(self._execute(request, "disks.setLabels", disk_id))


class GCPClusterAccessor(GCPResourceAccessor):
    """GKE clusters in the configured zone."""

    kind = ResourceKind.CLUSTER
    resource_type = "Cluster"
    labels_field = "resourceLabels"

    def _clusters(self) -> Any:
        return self.gcp_client.container.projects().locations().clusters()

    def _snapshot(self, item: Dict[str, Any], identity: Optional[ResourceIdentity] = None) -> ResourceSnapshot:
        snapshot = super()._snapshot(item, identity)
        cluster_path = self.gcp_client.cluster_path(snapshot.identity.system_id)
        return snapshot.model_copy(update={"reference": cluster_path})

    def fetch(self, identity: ResourceIdentity) -> ResourceSnapshot:
        cluster_id = self._resource_id(identity)
        request = self._clusters().get(name=self.gcp_client.cluster_path(cluster_id))
        return self._snapshot(self._execute(request, "clusters.get", cluster_id), identity)

    def set_tags(self, snapshot: ResourceSnapshot, tags: Mapping[str, str]) -> Optional[OperationHandle]:
        cluster_id = self._resource_id(snapshot.identity)
        name = snapshot.reference or self.gcp_client.cluster_path(cluster_id)
        request = self._clusters().setResourceLabels(name=name, body=self._label_body(snapshot, tags))
        return to_operation_handle(self._execute(request, "clusters.setResourceLabels", cluster_id))

    def get_operation(self, handle: OperationHandle) -> OperationHandle:
        request = self.gcp_client.container.projects().locations().operations().get(
            name=self.gcp_client.container_operation_path(handle.name)
        )
        return to_operation_handle(self._execute(request, "operations.get", handle.name))

    def list_resources(self) -> List[ResourceSnapshot]:
        request = self._clusters().list(parent=self.gcp_client.location_path())
        response = self._execute(request, "clusters.list", self.gcp_client.location_path())
        return [self._snapshot(item) for item in response.get("clusters", [])]
