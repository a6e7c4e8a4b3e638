"""
Lookup caches used to denormalize enumerator output

A cache is built for one (project, scope) pair, owned by the worker that
built it, and dropped once the enumerator pass that needed it is done.
Lookups never fail: a missing key or attribute renders as an empty string.
"""
import logging
from typing import Dict, Mapping, Optional

from .utils.normalize import format_int

logger = logging.getLogger(__name__)


class LookupCache:
    """key -> {attribute: value} side table"""

    def __init__(self, entries: Optional[Mapping[str, Mapping[str, str]]] = None):
        self._entries: Dict[str, Dict[str, str]] = {
            key: dict(attributes) for key, attributes in (entries or {}).items()
        }

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str, attribute: str) -> str:
        return self._entries.get(key, {}).get(attribute, '')


class MachineTypeCache(LookupCache):
    """Machine type name -> guest CPUs and memory for one project and zone"""

    CPU = 'cpu'
    MEMORY = 'memory_mb'

    @classmethod
    def build(cls, client, project_id: str, zone: str,
              log: Optional[logging.Logger] = None) -> 'MachineTypeCache':
        """
        List the zone's machine types. A listing failure yields an empty
        cache so instance rows still render, with blank CPU/memory cells.

        Args:
            client: compute_v1.MachineTypesClient or compatible
            project_id: Project to list machine types for
            zone: Zone name
        """
        log = log or logger
        log.debug(f"Getting machine types for project {project_id} and zone {zone}")
        entries = {}
        try:
            for machine_type in client.list(project=project_id, zone=zone):
                entries[machine_type.name] = {
                    cls.CPU: format_int(machine_type.guest_cpus),
                    cls.MEMORY: format_int(machine_type.memory_mb),
                }
        except Exception as e:
            log.warning(f"Failed to get machine types for project {project_id} and zone {zone}: {e}")
            return cls()
        cache = cls(entries)
        log.debug(f"Found {len(cache)} machine types for project {project_id} and zone {zone}")
        return cache

    def get_cpu(self, name: str) -> str:
        return self.get(name, self.CPU)

    def get_memory(self, name: str) -> str:
        return self.get(name, self.MEMORY)
