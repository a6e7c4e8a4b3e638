"""
GCP inventory exporter - concurrent multi-project resource inventory
"""
__version__ = "1.0.0"

from .cache import LookupCache, MachineTypeCache
from .collection import CollectionCoordinator, InventoryAccumulator, ProjectWorker
from .config import InventoryConfig
from .context import RunContext
from .discovery import ProjectDirectory
from .enumerators import ENUMERATORS, RESOURCE_KINDS, ResourceEnumerator, create_enumerator
from .exceptions import (
    ConfigurationError,
    DirectoryUnavailableError,
    ExportError,
    InventoryError
)
from .models import InventoryTable, Project, ScopeKind, ScopeQualifier
from .orchestrator import ExportResult, InventoryExporter
from .utils.normalize import remove_url_prefix

__all__ = [
    '__version__',

    # Model
    'Project',
    'ScopeKind',
    'ScopeQualifier',
    'InventoryTable',

    # Collection
    'CollectionCoordinator',
    'InventoryAccumulator',
    'ProjectWorker',
    'LookupCache',
    'MachineTypeCache',
    'ResourceEnumerator',
    'ENUMERATORS',
    'RESOURCE_KINDS',
    'create_enumerator',
    'ProjectDirectory',

    # Run
    'InventoryConfig',
    'RunContext',
    'InventoryExporter',
    'ExportResult',
    'remove_url_prefix',

    # Errors
    'InventoryError',
    'ConfigurationError',
    'DirectoryUnavailableError',
    'ExportError'
]
