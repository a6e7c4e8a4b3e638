"""Resource enumerators, one per inventory kind, in workbook sheet order"""

from .base import ResourceEnumerator
from .compute import InstanceEnumerator
from .network import (
    AddressEnumerator,
    FirewallEnumerator,
    PeeringEnumerator,
    RouteEnumerator,
    SubnetworkEnumerator
)
from .storage import BucketEnumerator

ENUMERATORS = {
    cls.kind: cls
    for cls in (
        InstanceEnumerator,
        SubnetworkEnumerator,
        AddressEnumerator,
        RouteEnumerator,
        PeeringEnumerator,
        FirewallEnumerator,
        BucketEnumerator,
    )
}

RESOURCE_KINDS = tuple(ENUMERATORS)


def create_enumerator(kind: str, **kwargs) -> ResourceEnumerator:
    """Instantiate the enumerator registered for a resource kind"""
    try:
        enumerator_class = ENUMERATORS[kind]
    except KeyError:
        raise ValueError(f"Unknown resource kind {kind!r}, expected one of {', '.join(RESOURCE_KINDS)}")
    return enumerator_class(**kwargs)
