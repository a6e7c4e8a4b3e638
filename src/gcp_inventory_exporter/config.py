"""
Configuration for inventory runs

Values are layered: defaults, then an optional YAML file, then environment
variables, then explicit overrides (usually CLI flags).
"""
import logging
import os
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, List, Mapping, Optional

import yaml

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = 'config/config.yaml'

# Environment variable -> config field
ENV_VARS = {
    'ORG_ID': 'org_id',
    'REGIONS': 'regions',
    'ZONES': 'zones',
    'EXPORT_PROJECT_ID': 'export_project_id',
    'EXPORT_BUCKET_NAME': 'export_bucket_name',
    'MAX_WORKERS': 'max_workers',
    'LOG_LEVEL': 'log_level',
}


def split_list(value: Any) -> List[str]:
    """Accept 'a,b' strings or lists, drop blanks"""
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(',')
    return [str(item).strip() for item in value if str(item).strip()]


@dataclass
class InventoryConfig:
    """Settings for one inventory run"""
    org_id: str = ''
    regions: List[str] = field(default_factory=list)
    zones: List[str] = field(default_factory=list)
    export_project_id: str = ''
    export_bucket_name: str = ''
    max_workers: Optional[int] = None
    log_level: str = 'INFO'
    log_format: str = 'console'
    log_file: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'InventoryConfig':
        return cls().merge(data)

    @classmethod
    def from_yaml(cls, config_path: str = DEFAULT_CONFIG_PATH) -> 'InventoryConfig':
        """Load configuration from a YAML file; a missing file gives defaults"""
        if not os.path.exists(config_path):
            logger.debug(f"Config file not found: {config_path}")
            return cls()
        try:
            with open(config_path, 'r') as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Unable to read config file {config_path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file {config_path} must contain a mapping")
        # Accept both a flat file and one nested under 'inventory'
        return cls.from_dict(data.get('inventory', data))

    @classmethod
    def load(cls,
             config_path: Optional[str] = None,
             environ: Optional[Mapping[str, str]] = None,
             overrides: Optional[Mapping[str, Any]] = None) -> 'InventoryConfig':
        config = cls.from_yaml(config_path or DEFAULT_CONFIG_PATH)
        config = config.merge_env(os.environ if environ is None else environ)
        if overrides:
            config = config.merge(overrides)
        return config

    def merge_env(self, environ: Mapping[str, str]) -> 'InventoryConfig':
        values = {attr: environ[var] for var, attr in ENV_VARS.items() if environ.get(var)}
        return self.merge(values)

    def merge(self, values: Mapping[str, Any]) -> 'InventoryConfig':
        """Return a copy with every non-empty known value applied"""
        known = {f.name for f in fields(self)}
        updates: Dict[str, Any] = {}
        for key, value in values.items():
            if key not in known or value is None or value == () or value == []:
                continue
            if key in ('regions', 'zones'):
                value = split_list(value)
            elif key == 'max_workers':
                try:
                    value = int(value)
                except (TypeError, ValueError):
                    raise ConfigurationError(f"max_workers must be an integer, got {value!r}")
            updates[key] = value
        return replace(self, **updates)

    def validate(self, require_export: bool = True) -> None:
        """Raise ConfigurationError naming the first missing setting"""
        if not self.regions:
            raise ConfigurationError('REGIONS is missing')
        if not self.zones:
            raise ConfigurationError('ZONES is missing')
        if self.max_workers is not None and self.max_workers < 1:
            raise ConfigurationError('MAX_WORKERS must be at least 1')
        if require_export:
            if not self.export_project_id:
                raise ConfigurationError('EXPORT_PROJECT_ID is missing')
            if not self.export_bucket_name:
                raise ConfigurationError('EXPORT_BUCKET_NAME is missing')
