"""
Shared fixtures: projects, a scripted enumerator and mock provider clients
"""
import logging
from dataclasses import dataclass
from unittest.mock import Mock

import pytest
from google.api_core import exceptions as google_exceptions
from google.cloud import compute_v1

from gcp_inventory_exporter.config import InventoryConfig
from gcp_inventory_exporter.context import RunContext
from gcp_inventory_exporter.enumerators.base import ResourceEnumerator
from gcp_inventory_exporter.models import InventoryRow, Project, ScopeKind, column

NETWORK_URL = 'https://www.googleapis.com/compute/v1/projects/{project}/global/networks/{name}'
SUBNETWORK_URL = 'https://www.googleapis.com/compute/v1/projects/{project}/regions/{region}/subnetworks/{name}'


@dataclass
class RecordRow(InventoryRow):
    project: str = column('Project')
    scope: str = column('Scope')
    record: str = column('Record')


class ScriptedEnumerator(ResourceEnumerator):
    """Returns canned records per (project id, scope name); raises for listed failures"""

    kind = 'scripted'
    sheet_name = 'Scripted'
    row_type = RecordRow
    scope_kind = ScopeKind.ZONE
    requires_scopes = True

    def __init__(self, records=None, failing=(), logger=None):
        super().__init__(logger)
        self.records = records or {}
        self.failing = set(failing)

    def list(self, project, scope):
        if project.id in self.failing or (project.id, scope.name) in self.failing:
            raise google_exceptions.PermissionDenied(f"denied for {project.id}/{scope.name}")
        return list(self.records.get((project.id, scope.name), []))

    def denormalize(self, project, scope, record):
        yield RecordRow(project=project.display_name, scope=scope.name, record=record)


@pytest.fixture
def test_logger():
    logger = logging.getLogger('tests.inventory')
    logger.setLevel(logging.DEBUG)
    return logger


@pytest.fixture
def projects():
    return [
        Project(id='proj-a', display_name='Project A'),
        Project(id='proj-b', display_name='Project B'),
        Project(id='proj-c', display_name='Project C'),
    ]


@pytest.fixture
def project():
    return Project(id='proj-a', display_name='Project A')


@pytest.fixture
def inventory_config():
    return InventoryConfig(
        regions=['us-central1'],
        zones=['us-central1-a', 'us-central1-b'],
        export_project_id='admin-project',
        export_bucket_name='inventory-exports'
    )


@pytest.fixture
def run_context(inventory_config, test_logger):
    return RunContext(config=inventory_config, logger=test_logger)


def empty_client():
    """Provider client mock whose every listing returns nothing"""
    client = Mock()
    client.list.return_value = []
    client.aggregated_list.return_value = []
    client.list_buckets.return_value = []
    return client


def enumerator_options():
    """Injected clients for every kind; each project has one route"""
    options = {
        'compute': {'client': empty_client(), 'machine_types_client': empty_client()},
        'ip_addresses': {'instances_client': empty_client(),
                         'addresses_client': empty_client(),
                         'global_addresses_client': empty_client()},
    }
    for kind in ('vpc', 'routes', 'peering', 'firewall', 'storage'):
        options[kind] = {'client': empty_client()}
    options['routes']['client'].list.return_value = [
        compute_v1.Route(name='default-route', dest_range='0.0.0.0/0', priority=1000)
    ]
    return options
