"""
Data model for the inventory: projects, scope qualifiers, typed rows and tables

Every resource kind has a typed row dataclass. The column name of each field
lives in the field metadata, so the header and the rendered row are always
derived from the same field order.
"""
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import ClassVar, Iterable, List, Sequence, Tuple

import pandas as pd


@dataclass(frozen=True)
class Project:
    """A tenant project discovered for this run"""
    id: str
    display_name: str


class ScopeKind(Enum):
    ZONE = 'zone'
    REGION = 'region'
    GLOBAL = 'global'
    AGGREGATED = 'aggregated'


@dataclass(frozen=True)
class ScopeQualifier:
    """Where a listing call searches: a zone, a region, or no location"""
    kind: ScopeKind
    name: str = ''

    @classmethod
    def zone(cls, name: str) -> 'ScopeQualifier':
        return cls(ScopeKind.ZONE, name)

    @classmethod
    def region(cls, name: str) -> 'ScopeQualifier':
        return cls(ScopeKind.REGION, name)

    @classmethod
    def global_(cls) -> 'ScopeQualifier':
        return cls(ScopeKind.GLOBAL, 'global')

    @classmethod
    def aggregated(cls) -> 'ScopeQualifier':
        return cls(ScopeKind.AGGREGATED, 'aggregated')

    def __str__(self) -> str:
        if self.kind in (ScopeKind.ZONE, ScopeKind.REGION):
            return f"{self.kind.value} {self.name}"
        return self.name


def column(name: str):
    """Declare a row field together with its header column name"""
    return field(default='', metadata={'column': name})


class InventoryRow:
    """Mixin for typed rows. Subclasses are dataclasses of str fields."""

    @classmethod
    def header(cls) -> Tuple[str, ...]:
        return tuple(f.metadata['column'] for f in fields(cls))

    def to_row(self) -> Tuple[str, ...]:
        return tuple(str(getattr(self, f.name)) for f in fields(self))


@dataclass
class InstanceRow(InventoryRow):
    project: str = column('Project')
    zone: str = column('Zone')
    name: str = column('Name')
    status: str = column('Status')
    machine_type: str = column('Machine Type')
    cpu: str = column('CPU')
    memory_mb: str = column('Memory (MB)')
    ip_addresses: str = column('IP Address')
    disks: str = column('Disks (GB)')
    creation_timestamp: str = column('Creation Time')


@dataclass
class SubnetworkRow(InventoryRow):
    project: str = column('Project')
    region: str = column('Region')
    network: str = column('Network')
    subnetwork: str = column('Subnetwork')
    cidr: str = column('CIDR')
    gateway_address: str = column('Gateway Address')
    creation_timestamp: str = column('Creation Timestamp')


@dataclass
class AddressRow(InventoryRow):
    project: str = column('Project')
    location: str = column('Region/Zone')
    name: str = column('Name')
    address: str = column('Address')
    network: str = column('Network')
    subnetwork: str = column('Subnetwork')
    address_type: str = column('Address Type')
    used_by: str = column('Used By')
    creation_timestamp: str = column('Creation Timestamp')


@dataclass
class RouteRow(InventoryRow):
    project: str = column('Project')
    name: str = column('Name')
    network: str = column('Network')
    dest_range: str = column('Dest Range')
    priority: str = column('Priority')
    next_hop_ip: str = column('Next Hop IP')
    next_hop_network: str = column('Next Hop Network')
    next_hop_gateway: str = column('Next Hop Gateway')
    next_hop_peering: str = column('Next Hop Peering')
    next_hop_ilb: str = column('Next Hop Ilb')
    creation_timestamp: str = column('Creation Timestamp')


@dataclass
class PeeringRow(InventoryRow):
    project: str = column('Project')
    name: str = column('Name')
    network: str = column('Network')
    peer_network: str = column('Peer Network')
    state: str = column('State')
    auto_create_routes: str = column('Auto Create Routes')
    exchange_subnet_routes: str = column('Exchange Subnet Routes')
    export_custom_routes: str = column('Export Custom Routes')
    import_custom_routes: str = column('Import Custom Routes')
    export_subnet_routes_with_public_ip: str = column('Export Subnet Routes With Public IP')
    import_subnet_routes_with_public_ip: str = column('Import Subnet Routes With Public IP')
    creation_timestamp: str = column('Creation Timestamp')


@dataclass
class FirewallRow(InventoryRow):
    project: str = column('Project')
    name: str = column('Name')
    network: str = column('Network')
    priority: str = column('Priority')
    source_ranges: str = column('Source Ranges')
    allowed: str = column('Allowed')
    denied: str = column('Denied')
    creation_timestamp: str = column('Creation Timestamp')


@dataclass
class BucketRow(InventoryRow):
    project: str = column('Project')
    name: str = column('Name')
    location: str = column('Location')
    storage_class: str = column('Storage Class')
    creation_timestamp: str = column('Creation Timestamp')


@dataclass(frozen=True)
class InventoryTable:
    """Merged, header-prefixed rows for one resource kind.

    Rows from one project are contiguous; project groups appear in
    worker completion order.
    """
    kind: str
    header: Tuple[str, ...]
    rows: Tuple[Tuple[str, ...], ...] = ()

    def __post_init__(self):
        width = len(self.header)
        for row in self.rows:
            if len(row) != width:
                raise ValueError(
                    f"{self.kind} row has {len(row)} fields, header has {width}: {row!r}"
                )

    def __len__(self) -> int:
        return len(self.rows) + 1

    def as_matrix(self) -> List[List[str]]:
        """Header row first, then every data row"""
        return [list(self.header)] + [list(row) for row in self.rows]

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame([list(row) for row in self.rows], columns=list(self.header))

    @classmethod
    def from_rows(cls, kind: str, header: Sequence[str],
                  rows: Iterable[Sequence[str]]) -> 'InventoryTable':
        return cls(kind=kind, header=tuple(header), rows=tuple(tuple(r) for r in rows))
