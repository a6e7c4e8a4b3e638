"""
Project discovery through Cloud Resource Manager
"""
import logging
from typing import List, Optional

from google.cloud import resourcemanager_v3

from ..exceptions import DirectoryUnavailableError
from ..models import Project
from ..utils.logging_config import get_logger

ACTIVE = resourcemanager_v3.Project.State.ACTIVE


class ProjectDirectory:
    """Lists the projects an inventory run covers"""

    def __init__(self,
                 logger: Optional[logging.Logger] = None,
                 client: Optional[resourcemanager_v3.ProjectsClient] = None,
                 org_id: str = ''):
        """
        Args:
            logger: Run logger
            client: Projects client; created on first use when omitted
            org_id: Restrict discovery to projects directly under this organization
        """
        self.logger = logger or get_logger('discovery')
        self.client = client
        self.org_id = org_id

    @property
    def query(self) -> str:
        if self.org_id:
            return f"parent:organizations/{self.org_id}"
        return ''

    def list_projects(self) -> List[Project]:
        """
        Return every active project visible to the caller.

        Raises:
            DirectoryUnavailableError: the directory could not be listed;
                no inventory can be produced without it
        """
        self.logger.info("Getting projects list")
        projects = []
        try:
            if self.client is None:
                self.client = resourcemanager_v3.ProjectsClient()
            request = resourcemanager_v3.SearchProjectsRequest(query=self.query)
            for project in self.client.search_projects(request=request):
                if project.state != ACTIVE:
                    self.logger.debug(f"Skipping project {project.project_id} in state {project.state.name}")
                    continue
                self.logger.debug(f"Found project {project.display_name}")
                projects.append(Project(
                    id=project.project_id,
                    display_name=project.display_name or project.project_id
                ))
        except Exception as e:
            raise DirectoryUnavailableError(f"Failed to list projects: {e}") from e

        self.logger.info(f"Found {len(projects)} projects")
        return projects
