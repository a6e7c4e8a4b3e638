"""
Base class for resource enumerators

An enumerator knows how to list one resource kind for one project and scope,
and how to map each provider record onto that kind's typed row.
"""
import logging
from abc import ABC, abstractmethod
from typing import ClassVar, Iterable, Iterator, List, Optional, Sequence, Tuple, Type

from ..exceptions import ConfigurationError
from ..models import InventoryRow, Project, ScopeKind, ScopeQualifier
from ..utils.logging_config import get_logger


class ResourceEnumerator(ABC):
    """Lists one resource kind and denormalizes it into rows"""

    kind: ClassVar[str]
    sheet_name: ClassVar[str]
    row_type: ClassVar[Type[InventoryRow]]
    # ZONE, REGION, or None for kinds listed once per project
    scope_kind: ClassVar[Optional[ScopeKind]] = None
    requires_scopes: ClassVar[bool] = False

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or get_logger(f"enumerators.{self.kind}")

    @property
    def header(self) -> Tuple[str, ...]:
        return self.row_type.header()

    @property
    def scope_setting(self) -> Optional[str]:
        """Name of the config list that feeds this enumerator's scopes"""
        if self.scope_kind is ScopeKind.ZONE:
            return 'zones'
        if self.scope_kind is ScopeKind.REGION:
            return 'regions'
        return None

    def plan(self, scope_names: Sequence[str] = ()) -> List[ScopeQualifier]:
        """Scope qualifiers each project worker visits, in order"""
        if self.requires_scopes and not scope_names:
            raise ConfigurationError(f"{self.kind} inventory needs at least one {self.scope_setting[:-1]}")
        if self.scope_kind is ScopeKind.ZONE:
            return [ScopeQualifier.zone(name) for name in scope_names]
        if self.scope_kind is ScopeKind.REGION:
            return [ScopeQualifier.region(name) for name in scope_names]
        return [ScopeQualifier.global_()]

    def prepare(self) -> None:
        """Create provider clients before workers start sharing them"""

    @abstractmethod
    def list(self, project: Project, scope: ScopeQualifier) -> Iterable:
        """Provider records for one project and scope, across all pages"""

    @abstractmethod
    def denormalize(self, project: Project, scope: ScopeQualifier, record) -> Iterator[InventoryRow]:
        """Typed rows for one provider record"""

    def rows(self, project: Project, scope: ScopeQualifier) -> Iterator[InventoryRow]:
        for record in self.list(project, scope):
            yield from self.denormalize(project, scope, record)
