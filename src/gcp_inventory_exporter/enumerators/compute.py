"""
Compute Engine instance enumerator
"""
import logging
from typing import Iterator, Optional

from google.cloud import compute_v1

from ..cache import MachineTypeCache
from ..models import InstanceRow, Project, ScopeKind, ScopeQualifier
from ..utils.normalize import remove_url_prefix
from .base import ResourceEnumerator


def network_interfaces_to_string(instance) -> str:
    return ', '.join(nic.network_i_p for nic in instance.network_interfaces)


def disk_sizes_to_string(instance) -> str:
    return ', '.join(f"{disk.disk_size_gb}GB" for disk in instance.disks)


class InstanceEnumerator(ResourceEnumerator):
    """VM instances per zone, with CPU and memory from the zone's machine types"""

    kind = 'compute'
    sheet_name = 'Compute'
    row_type = InstanceRow
    scope_kind = ScopeKind.ZONE
    requires_scopes = True

    def __init__(self,
                 logger: Optional[logging.Logger] = None,
                 client=None,
                 machine_types_client=None):
        super().__init__(logger)
        self.client = client
        self.machine_types_client = machine_types_client

    def prepare(self):
        if self.client is None:
            self.client = compute_v1.InstancesClient()
        if self.machine_types_client is None:
            self.machine_types_client = compute_v1.MachineTypesClient()

    def list(self, project: Project, scope: ScopeQualifier):
        return self.client.list(project=project.id, zone=scope.name)

    def rows(self, project: Project, scope: ScopeQualifier) -> Iterator[InstanceRow]:
        # Rebuilt for every zone; zones can expose different machine type catalogs
        machine_types = MachineTypeCache.build(
            self.machine_types_client, project.id, scope.name, self.logger
        )
        for instance in self.list(project, scope):
            yield from self.denormalize(project, scope, instance, machine_types)

    def denormalize(self, project: Project, scope: ScopeQualifier, record,
                    machine_types: Optional[MachineTypeCache] = None) -> Iterator[InstanceRow]:
        if machine_types is None:
            machine_types = MachineTypeCache()
        machine_type = remove_url_prefix(record.machine_type)
        if machine_type not in machine_types:
            self.logger.debug(f"No CPU/memory for machine type {machine_type} of instance {record.name}")
        yield InstanceRow(
            project=project.display_name,
            zone=scope.name,
            name=record.name,
            status=record.status,
            machine_type=machine_type,
            cpu=machine_types.get_cpu(machine_type),
            memory_mb=machine_types.get_memory(machine_type),
            ip_addresses=network_interfaces_to_string(record),
            disks=disk_sizes_to_string(record),
            creation_timestamp=record.creation_timestamp,
        )
