"""
Cloud Storage destination for exported inventory documents
"""
import logging
from typing import Optional

from google.api_core import exceptions as google_exceptions
from google.cloud import storage

from ..exceptions import ExportError

logger = logging.getLogger(__name__)


class InventoryStorage:
    """Uploads inventory documents to a bucket in the export project"""

    def __init__(self, project_id: str, client: Optional[storage.Client] = None):
        self.project_id = project_id
        if client is None:
            try:
                client = storage.Client(project=project_id)
            except Exception as e:
                raise ExportError(f"Failed to create storage client for project {project_id}: {e}") from e
        self.client = client

    def close(self):
        self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def ensure_bucket(self, bucket_name: str):
        """Create the bucket in the export project when it does not exist"""
        try:
            return self.client.get_bucket(bucket_name)
        except google_exceptions.NotFound:
            logger.info(f"Bucket {bucket_name} not found, creating it in project {self.project_id}")
        except google_exceptions.GoogleAPIError as e:
            raise ExportError(f"Failed to check bucket {bucket_name}: {e}") from e

        try:
            return self.client.create_bucket(bucket_name, project=self.project_id)
        except google_exceptions.GoogleAPIError as e:
            raise ExportError(f"Failed to create bucket {bucket_name}: {e}") from e

    def save_file(self, bucket_name: str, object_name: str, data: bytes, content_type: str) -> str:
        """Upload bytes and return the gs:// URI"""
        blob = self.client.bucket(bucket_name).blob(object_name)
        try:
            blob.upload_from_string(data, content_type=content_type)
        except google_exceptions.GoogleAPIError as e:
            raise ExportError(f"Failed to upload gs://{bucket_name}/{object_name}: {e}") from e
        uri = f"gs://{bucket_name}/{object_name}"
        logger.info(f"Uploaded {len(data)} bytes to {uri}")
        return uri
