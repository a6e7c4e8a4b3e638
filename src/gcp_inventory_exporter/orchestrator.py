"""
Inventory export orchestrator - collects every resource kind across all
projects and publishes the workbook to Cloud Storage
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, List, Optional, Sequence

from .collection.coordinator import CollectionCoordinator
from .context import RunContext
from .discovery.projects import ProjectDirectory
from .enumerators import ENUMERATORS, RESOURCE_KINDS, create_enumerator
from .models import InventoryTable, Project
from .reporting.gcs import InventoryStorage
from .reporting.workbook import XLSX_CONTENT_TYPE, InventoryWorkbook

OBJECT_NAME_FORMAT = 'inventory-%Y-%m-%d-%H-%M-%S.xlsx'


@dataclass
class ExportResult:
    """Outcome of one export run"""
    uri: str
    tables: Dict[str, InventoryTable]
    projects: List[Project]
    logs: List[str] = field(default_factory=list)

    @property
    def row_counts(self) -> Dict[str, int]:
        return {kind: len(table.rows) for kind, table in self.tables.items()}


class InventoryExporter:
    """Runs the collection coordinator once per resource kind"""

    def __init__(self,
                 context: RunContext,
                 directory: Optional[ProjectDirectory] = None,
                 storage: Optional[InventoryStorage] = None,
                 enumerator_options: Optional[Dict[str, dict]] = None):
        """
        Args:
            context: Run configuration and logger
            directory: Project directory (default: Resource Manager search)
            storage: Export destination (created from the config when needed)
            enumerator_options: Per-kind constructor arguments, e.g. clients
        """
        self.context = context
        self.config = context.config
        self.logger = context.logger
        self.directory = directory or ProjectDirectory(
            logger=context.child('discovery'), org_id=self.config.org_id
        )
        self.storage = storage
        self.enumerator_options = enumerator_options or {}
        self.coordinator = CollectionCoordinator(
            logger=context.child('collection'),
            max_workers=self.config.max_workers
        )

    def discover_projects(self) -> List[Project]:
        return self.directory.list_projects()

    def collect(self,
                projects: Sequence[Project],
                kinds: Sequence[str] = RESOURCE_KINDS,
                progress: Optional[Callable[[str], None]] = None) -> Dict[str, InventoryTable]:
        """Collect the given kinds in sheet order"""
        tables = {}
        for kind in kinds:
            enumerator = self._enumerator(kind)
            scopes = getattr(self.config, enumerator.scope_setting) if enumerator.scope_setting else ()
            tables[kind] = self.coordinator.collect(enumerator, projects, scopes)
            if progress:
                progress(kind)
        return tables

    def build(self, kinds: Sequence[str] = RESOURCE_KINDS) -> Dict[str, InventoryTable]:
        """Discover projects and collect tables without uploading anything"""
        return self.collect(self.discover_projects(), kinds)

    def build_workbook(self, tables: Dict[str, InventoryTable]) -> InventoryWorkbook:
        workbook = InventoryWorkbook()
        for kind, table in tables.items():
            workbook.add_sheet(ENUMERATORS[kind].sheet_name, table)
        return workbook

    def run(self, now: Optional[datetime] = None) -> ExportResult:
        """
        Full export: validate, discover, collect, upload.

        The run's log lines are captured and returned with the result. A
        buffer attached here is detached again before returning.

        Raises:
            ConfigurationError, DirectoryUnavailableError, ExportError
        """
        owns_buffer = self.context.buffer is None
        if owns_buffer:
            self.context.start_capture()
        owns_storage = self.storage is None

        try:
            self.logger.info("Inventory export started")
            self.config.validate(require_export=True)

            if owns_storage:
                self.storage = InventoryStorage(self.config.export_project_id)
            self.storage.ensure_bucket(self.config.export_bucket_name)

            projects = self.discover_projects()
            tables = self.collect(projects)
            data = self.build_workbook(tables).to_bytes()

            object_name = (now or datetime.now()).strftime(OBJECT_NAME_FORMAT)
            uri = self.storage.save_file(
                self.config.export_bucket_name, object_name, data, XLSX_CONTENT_TYPE
            )
            self.logger.info(f"Inventory exported to {uri}")

            return ExportResult(
                uri=uri,
                tables=tables,
                projects=projects,
                logs=self.context.captured_logs()
            )
        finally:
            if owns_storage and self.storage is not None:
                self.storage.close()
                self.storage = None
            if owns_buffer:
                self.context.close()

    def _enumerator(self, kind: str):
        options = dict(self.enumerator_options.get(kind, {}))
        if kind == 'storage' and 'client' not in options:
            options.setdefault('client_project', self.config.export_project_id or None)
        return create_enumerator(kind, logger=self.context.child(kind), **options)
