"""
Concurrent collection across projects

One worker per project runs concurrently. Each worker walks its scopes in
order, buffers rows locally, and merges the whole buffer into the shared
accumulator in a single critical section. A failure for one scope is logged
and that scope contributes no rows; a project never fails the collection.
"""
import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import List, Optional, Sequence, Tuple, Union

from ..enumerators import create_enumerator
from ..exceptions import ConfigurationError
from ..enumerators.base import ResourceEnumerator
from ..models import InventoryTable, Project, ScopeQualifier
from ..utils.logging_config import get_logger, log_execution_time

Row = Tuple[str, ...]


class InventoryAccumulator:
    """Shared append-only row store for one collection call"""

    def __init__(self, kind: str, header: Sequence[str]):
        self.kind = kind
        self.header = tuple(header)
        self._rows: List[Row] = []
        self._lock = threading.Lock()
        self._frozen = False

    def merge(self, rows: Sequence[Row]) -> None:
        """Append one project's entire buffer under the lock"""
        with self._lock:
            if self._frozen:
                raise RuntimeError(f"{self.kind} inventory is already complete")
            self._rows.extend(rows)

    def freeze(self) -> InventoryTable:
        with self._lock:
            self._frozen = True
            return InventoryTable.from_rows(self.kind, self.header, self._rows)


class ProjectWorker:
    """Collects one project's rows for one resource kind"""

    def __init__(self,
                 enumerator: ResourceEnumerator,
                 project: Project,
                 scopes: Sequence[ScopeQualifier],
                 logger: logging.Logger):
        self.enumerator = enumerator
        self.project = project
        self.scopes = scopes
        self.logger = logger

    def run(self) -> List[Row]:
        kind = self.enumerator.kind
        buffer: List[Row] = []
        self.logger.info(f"Getting {kind} inventory for project {self.project.display_name}")

        for scope in self.scopes:
            self.logger.debug(f"Getting {kind} inventory for project {self.project.display_name} in {scope}")
            try:
                scope_rows = [row.to_row() for row in self.enumerator.rows(self.project, scope)]
            except Exception as e:
                self.logger.error(
                    f"Failed to get {kind} inventory for project {self.project.display_name} "
                    f"in {scope}, error: {e}",
                    extra={'resource_kind': kind, 'project_id': self.project.id, 'scope': str(scope)}
                )
                continue
            buffer.extend(scope_rows)

        return buffer


class CollectionCoordinator:
    """Fans a resource kind out over all projects and merges the results"""

    def __init__(self,
                 logger: Optional[logging.Logger] = None,
                 max_workers: Optional[int] = None):
        """
        Args:
            logger: Logger for this run, usually RunContext.logger
            max_workers: Upper bound on concurrent projects (default: one
                thread per project)
        """
        self.logger = logger or get_logger('collection')
        self.max_workers = max_workers

    @log_execution_time
    def collect(self,
                enumerator: Union[ResourceEnumerator, str],
                projects: Sequence[Project],
                scopes: Sequence[str] = ()) -> InventoryTable:
        """
        Collect one resource kind across every project.

        Returns only after every project worker has finished. The returned
        table always starts with the kind's header, even with no projects.
        """
        if isinstance(enumerator, str):
            enumerator = create_enumerator(enumerator, logger=self.logger.getChild(enumerator))

        plan = enumerator.plan(scopes)
        accumulator = InventoryAccumulator(enumerator.kind, enumerator.header)
        self.logger.info(f"Getting {enumerator.kind} inventory for {len(projects)} projects")

        if projects:
            try:
                enumerator.prepare()
            except Exception as e:
                raise ConfigurationError(f"Failed to create {enumerator.kind} clients: {e}") from e
            workers = len(projects)
            if self.max_workers:
                workers = min(workers, self.max_workers)

            with ThreadPoolExecutor(max_workers=workers,
                                    thread_name_prefix=f"{enumerator.kind}-worker") as executor:
                future_to_project = {
                    executor.submit(self._run_worker,
                                    ProjectWorker(enumerator, project, plan, self.logger),
                                    accumulator): project
                    for project in projects
                }

                for future in as_completed(future_to_project):
                    project = future_to_project[future]
                    try:
                        count = future.result()
                        self.logger.info(
                            f"Done getting {enumerator.kind} inventory for project "
                            f"{project.display_name}: {count} rows"
                        )
                    except Exception as e:
                        self.logger.error(f"Failed to process project {project.display_name}: {e}")

        table = accumulator.freeze()
        self.logger.info(f"Done getting {enumerator.kind} inventory: {len(table.rows)} rows")
        return table

    def _run_worker(self, worker: ProjectWorker, accumulator: InventoryAccumulator) -> int:
        try:
            rows = worker.run()
        except Exception as e:
            self.logger.error(
                f"Failed to get {worker.enumerator.kind} inventory for project "
                f"{worker.project.display_name}, error: {e}",
                extra={'resource_kind': worker.enumerator.kind, 'project_id': worker.project.id}
            )
            rows = []
        accumulator.merge(rows)
        return len(rows)
