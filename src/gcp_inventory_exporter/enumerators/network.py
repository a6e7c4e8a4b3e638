"""
VPC enumerators: subnetworks, IP addresses, routes, peerings and firewalls
"""
import logging
from typing import Iterator, List, Optional, Sequence

from google.cloud import compute_v1

from ..models import (
    AddressRow,
    FirewallRow,
    PeeringRow,
    Project,
    RouteRow,
    ScopeKind,
    ScopeQualifier,
    SubnetworkRow
)
from ..utils.normalize import format_bool, format_int, join_references, remove_url_prefix
from .base import ResourceEnumerator


def rules_to_string(rules) -> str:
    """Render firewall allow/deny rules as protocol:ports entries"""
    return ','.join(f"{rule.I_p_protocol}:{','.join(rule.ports)}" for rule in rules)


class SubnetworkEnumerator(ResourceEnumerator):
    """Subnetworks per region"""

    kind = 'vpc'
    sheet_name = 'VPC'
    row_type = SubnetworkRow
    scope_kind = ScopeKind.REGION
    requires_scopes = True

    def __init__(self, logger: Optional[logging.Logger] = None, client=None):
        super().__init__(logger)
        self.client = client

    def prepare(self):
        if self.client is None:
            self.client = compute_v1.SubnetworksClient()

    def list(self, project: Project, scope: ScopeQualifier):
        return self.client.list(project=project.id, region=scope.name)

    def denormalize(self, project, scope, record) -> Iterator[SubnetworkRow]:
        yield SubnetworkRow(
            project=project.display_name,
            region=scope.name,
            network=remove_url_prefix(record.network),
            subnetwork=record.name,
            cidr=record.ip_cidr_range,
            gateway_address=record.gateway_address,
            creation_timestamp=record.creation_timestamp,
        )


class AddressEnumerator(ResourceEnumerator):
    """
    IP addresses from three independent listings:

    - internal IPs of instance network interfaces, per zone
    - reserved addresses, aggregated across regions
    - global reserved addresses

    The aggregated listing is not deduplicated against the instance
    interfaces; an address can appear once per source.
    """

    kind = 'ip_addresses'
    sheet_name = 'IP Addresses'
    row_type = AddressRow
    scope_kind = ScopeKind.ZONE

    def __init__(self,
                 logger: Optional[logging.Logger] = None,
                 instances_client=None,
                 addresses_client=None,
                 global_addresses_client=None):
        super().__init__(logger)
        self.instances_client = instances_client
        self.addresses_client = addresses_client
        self.global_addresses_client = global_addresses_client

    def prepare(self):
        if self.instances_client is None:
            self.instances_client = compute_v1.InstancesClient()
        if self.addresses_client is None:
            self.addresses_client = compute_v1.AddressesClient()
        if self.global_addresses_client is None:
            self.global_addresses_client = compute_v1.GlobalAddressesClient()

    def plan(self, scope_names: Sequence[str] = ()) -> List[ScopeQualifier]:
        zones = [ScopeQualifier.zone(name) for name in scope_names]
        return zones + [ScopeQualifier.aggregated(), ScopeQualifier.global_()]

    def list(self, project: Project, scope: ScopeQualifier):
        if scope.kind is ScopeKind.ZONE:
            return self.instances_client.list(project=project.id, zone=scope.name)
        if scope.kind is ScopeKind.AGGREGATED:
            return self._aggregated_addresses(project)
        return self.global_addresses_client.list(project=project.id)

    def _aggregated_addresses(self, project: Project):
        request = compute_v1.AggregatedListAddressesRequest(project=project.id)
        for _, scoped_list in self.addresses_client.aggregated_list(request=request):
            yield from scoped_list.addresses

    def denormalize(self, project, scope, record) -> Iterator[AddressRow]:
        if scope.kind is ScopeKind.ZONE:
            for nic in record.network_interfaces:
                yield AddressRow(
                    project=project.display_name,
                    location=remove_url_prefix(scope.name),
                    name=nic.name,
                    address=nic.network_i_p,
                    network=remove_url_prefix(nic.network),
                    subnetwork=remove_url_prefix(nic.subnetwork),
                    address_type='INTERNAL',
                    used_by=record.name,
                    creation_timestamp=record.creation_timestamp,
                )
            return

        if scope.kind is ScopeKind.AGGREGATED:
            location = remove_url_prefix(record.region)
        else:
            location = 'global'
        yield AddressRow(
            project=project.display_name,
            location=location,
            name=record.name,
            address=record.address,
            network=remove_url_prefix(record.network),
            subnetwork=remove_url_prefix(record.subnetwork),
            address_type=record.address_type,
            used_by=join_references(record.users),
            creation_timestamp=record.creation_timestamp,
        )


class RouteEnumerator(ResourceEnumerator):
    """Routes, listed once per project"""

    kind = 'routes'
    sheet_name = 'Routes'
    row_type = RouteRow

    def __init__(self, logger: Optional[logging.Logger] = None, client=None):
        super().__init__(logger)
        self.client = client

    def prepare(self):
        if self.client is None:
            self.client = compute_v1.RoutesClient()

    def list(self, project: Project, scope: ScopeQualifier):
        return self.client.list(project=project.id)

    def denormalize(self, project, scope, record) -> Iterator[RouteRow]:
        yield RouteRow(
            project=project.display_name,
            name=record.name,
            network=remove_url_prefix(record.network),
            dest_range=record.dest_range,
            priority=format_int(record.priority),
            next_hop_ip=remove_url_prefix(record.next_hop_ip),
            next_hop_network=remove_url_prefix(record.next_hop_network),
            next_hop_gateway=remove_url_prefix(record.next_hop_gateway),
            next_hop_peering=remove_url_prefix(record.next_hop_peering),
            next_hop_ilb=remove_url_prefix(record.next_hop_ilb),
            creation_timestamp=record.creation_timestamp,
        )


class PeeringEnumerator(ResourceEnumerator):
    """One row per peering of every VPC network"""

    kind = 'peering'
    sheet_name = 'VPC Peering'
    row_type = PeeringRow

    def __init__(self, logger: Optional[logging.Logger] = None, client=None):
        super().__init__(logger)
        self.client = client

    def prepare(self):
        if self.client is None:
            self.client = compute_v1.NetworksClient()

    def list(self, project: Project, scope: ScopeQualifier):
        return self.client.list(project=project.id)

    def denormalize(self, project, scope, record) -> Iterator[PeeringRow]:
        for peering in record.peerings:
            yield PeeringRow(
                project=project.display_name,
                name=peering.name,
                network=remove_url_prefix(record.name),
                peer_network=remove_url_prefix(peering.network),
                state=peering.state_details,
                auto_create_routes=format_bool(peering.auto_create_routes),
                exchange_subnet_routes=format_bool(peering.exchange_subnet_routes),
                export_custom_routes=format_bool(peering.export_custom_routes),
                import_custom_routes=format_bool(peering.import_custom_routes),
                export_subnet_routes_with_public_ip=format_bool(peering.export_subnet_routes_with_public_ip),
                import_subnet_routes_with_public_ip=format_bool(peering.import_subnet_routes_with_public_ip),
                creation_timestamp=record.creation_timestamp,
            )


class FirewallEnumerator(ResourceEnumerator):
    """Firewall rules, listed once per project"""

    kind = 'firewall'
    sheet_name = 'Firewall'
    row_type = FirewallRow

    def __init__(self, logger: Optional[logging.Logger] = None, client=None):
        super().__init__(logger)
        self.client = client

    def prepare(self):
        if self.client is None:
            self.client = compute_v1.FirewallsClient()

    def list(self, project: Project, scope: ScopeQualifier):
        return self.client.list(project=project.id)

    def denormalize(self, project, scope, record) -> Iterator[FirewallRow]:
        yield FirewallRow(
            project=project.display_name,
            name=record.name,
            network=remove_url_prefix(record.network),
            priority=format_int(record.priority),
            source_ranges=','.join(record.source_ranges),
            allowed=rules_to_string(record.allowed),
            denied=rules_to_string(record.denied),
            creation_timestamp=record.creation_timestamp,
        )
