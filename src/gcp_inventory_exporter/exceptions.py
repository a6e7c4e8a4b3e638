"""
Exception hierarchy for the GCP inventory exporter

Only these errors unwind past the collection coordinator. Provider errors
raised while listing a single project/scope are logged and absorbed.
"""


class InventoryError(Exception):
    """Base class for fatal inventory errors"""


class ConfigurationError(InventoryError):
    """Configuration is missing or invalid"""


class DirectoryUnavailableError(InventoryError):
    """The project directory could not be listed"""


class ExportError(InventoryError):
    """The inventory document could not be built, serialized or uploaded"""
