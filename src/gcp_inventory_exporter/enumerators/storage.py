"""
Cloud Storage bucket enumerator
"""
import logging
from typing import Iterator, Optional

from google.cloud import storage

from ..models import BucketRow, Project, ScopeQualifier
from .base import ResourceEnumerator


class BucketEnumerator(ResourceEnumerator):
    """Buckets owned by each project"""

    kind = 'storage'
    sheet_name = 'Cloud Storage'
    row_type = BucketRow

    def __init__(self,
                 logger: Optional[logging.Logger] = None,
                 client: Optional[storage.Client] = None,
                 client_project: Optional[str] = None):
        """
        Args:
            client: Storage client; created on first use when omitted
            client_project: Billing project for a client created here
        """
        super().__init__(logger)
        self.client = client
        self.client_project = client_project

    def prepare(self):
        if self.client is None:
            self.client = storage.Client(project=self.client_project)

    def list(self, project: Project, scope: ScopeQualifier):
        return self.client.list_buckets(project=project.id)

    def denormalize(self, project, scope, record) -> Iterator[BucketRow]:
        created = record.time_created
        yield BucketRow(
            project=project.display_name,
            name=record.name,
            location=record.location or '',
            storage_class=record.storage_class or '',
            creation_timestamp=created.isoformat() if created else '',
        )
