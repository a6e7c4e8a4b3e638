"""
Tests for the command line interface
"""
import logging
import os
from unittest.mock import Mock, patch

import pytest
from click.testing import CliRunner
from openpyxl import load_workbook

from gcp_inventory_exporter.cli import cli
from gcp_inventory_exporter.exceptions import DirectoryUnavailableError
from gcp_inventory_exporter.models import InventoryTable, Project, RouteRow
from gcp_inventory_exporter.orchestrator import ExportResult, InventoryExporter
from gcp_inventory_exporter.utils.logging_config import BufferHandler

from conftest import enumerator_options

CLEAN_ENV = {var: '' for var in ('ORG_ID', 'REGIONS', 'ZONES', 'EXPORT_PROJECT_ID',
                                 'EXPORT_BUCKET_NAME', 'MAX_WORKERS', 'LOG_LEVEL')}


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def no_logging_setup():
    with patch('gcp_inventory_exporter.context.setup_logging'):
        yield


@pytest.fixture
def tables():
    return {'routes': InventoryTable.from_rows('routes', RouteRow.header(), [
        ('P1', 'default-route', 'default', '0.0.0.0/0', '1000', '', '', 'default-internet-gateway',
         '', '', '2023-01-01T00:00:00.000-07:00')
    ])}


@pytest.fixture
def exporter(tables):
    with patch('gcp_inventory_exporter.cli.InventoryExporter') as exporter_class:
        exporter = exporter_class.return_value
        exporter.discover_projects.return_value = [Project('p1', 'P1')]
        exporter.collect.return_value = tables
        exporter.build_workbook.side_effect = lambda t: InventoryExporter.build_workbook(exporter, t)
        yield exporter_class


def test_projects(runner, exporter):
    result = runner.invoke(cli, ['projects', '--org-id', '42'], env=CLEAN_ENV)

    assert result.exit_code == 0, result.output
    assert 'p1' in result.output
    assert '1 projects' in result.output
    context = exporter.call_args.args[0]
    assert context.config.org_id == '42'


def test_collect_writes_workbook(runner, exporter):
    with runner.isolated_filesystem():
        result = runner.invoke(cli, ['collect', '-z', 'us-central1-a', '-r', 'us-central1',
                                     '-k', 'routes', '-o', 'out.xlsx'], env=CLEAN_ENV)

        assert result.exit_code == 0, result.output
        assert load_workbook('out.xlsx').sheetnames == ['Routes']

    assert 'Routes' in result.output
    context = exporter.call_args.args[0]
    assert context.config.zones == ['us-central1-a']
    exporter.return_value.collect.assert_called_once()
    assert exporter.return_value.collect.call_args.args[1] == ('routes',)


def test_collect_csv(runner, exporter):
    with runner.isolated_filesystem():
        result = runner.invoke(cli, ['collect', '-z', 'z1', '-r', 'r1', '--format', 'csv',
                                     '-o', 'csv-out'], env=CLEAN_ENV)

        assert result.exit_code == 0, result.output
        with open('csv-out/routes.csv') as f:
            assert f.readline().startswith('Project,Name,Network')


def test_collect_requires_zones(runner, exporter):
    with runner.isolated_filesystem():
        result = runner.invoke(cli, ['collect', '-r', 'us-central1'], env=CLEAN_ENV)

    assert result.exit_code == 1
    assert 'ZONES is missing' in result.output
    exporter.return_value.discover_projects.assert_not_called()


def test_export(runner, exporter, tables):
    exporter.return_value.run.return_value = ExportResult(
        uri='gs://exports/inventory-2024-01-01-00-00-00.xlsx',
        tables=tables,
        projects=[Project('p1', 'P1')]
    )

    with runner.isolated_filesystem():
        result = runner.invoke(cli, ['export', '--bucket', 'exports', '--project', 'admin'],
                               env=CLEAN_ENV)

    assert result.exit_code == 0, result.output
    assert 'gs://exports/inventory-2024-01-01-00-00-00.xlsx' in result.output
    config = exporter.call_args.args[0].config
    assert (config.export_bucket_name, config.export_project_id) == ('exports', 'admin')


def test_export_failure(runner, exporter):
    exporter.return_value.run.side_effect = DirectoryUnavailableError('Failed to list projects: denied')

    with runner.isolated_filesystem():
        result = runner.invoke(cli, ['export'], env=CLEAN_ENV)

    assert result.exit_code == 1
    assert 'Failed to list projects: denied' in result.output


def test_config_file(runner, exporter):
    with runner.isolated_filesystem():
        with open('inventory.yaml', 'w') as f:
            f.write('inventory:\n  org_id: "777"\n')
        result = runner.invoke(cli, ['-c', 'inventory.yaml', 'projects'], env=CLEAN_ENV)

    assert result.exit_code == 0, result.output
    assert exporter.call_args.args[0].config.org_id == '777'


def test_collect_csv_default_output_is_a_directory(runner, exporter):
    with runner.isolated_filesystem():
        result = runner.invoke(cli, ['collect', '-z', 'z1', '-r', 'r1', '--format', 'csv'],
                               env=CLEAN_ENV)

        assert result.exit_code == 0, result.output
        assert os.path.isfile(os.path.join('inventory', 'routes.csv'))
        assert not os.path.exists('inventory.xlsx')


def test_collect_xlsx_default_output(runner, exporter):
    with runner.isolated_filesystem():
        result = runner.invoke(cli, ['collect', '-z', 'z1', '-r', 'r1'], env=CLEAN_ENV)

        assert result.exit_code == 0, result.output
        assert os.path.isfile('inventory.xlsx')


def test_export_show_logs(runner):
    directory = Mock()
    directory.list_projects.return_value = [Project('p1', 'P1')]
    storage = Mock()
    storage.save_file.return_value = 'gs://exports/inventory.xlsx'

    def make_exporter(context):
        return InventoryExporter(context, directory=directory, storage=storage,
                                 enumerator_options=enumerator_options())

    with patch('gcp_inventory_exporter.cli.InventoryExporter', side_effect=make_exporter):
        with runner.isolated_filesystem():
            result = runner.invoke(cli, ['export', '--bucket', 'exports', '--project', 'admin',
                                         '--show-logs'],
                                   env=dict(CLEAN_ENV, REGIONS='us-central1', ZONES='us-central1-a'))

    assert result.exit_code == 0, result.output
    assert 'Inventory export started' in result.output
    assert 'Done getting routes inventory' in result.output
    assert 'Inventory exported to gs://exports/inventory.xlsx' in result.output
    package_logger = logging.getLogger('gcp_inventory_exporter')
    assert not any(isinstance(h, BufferHandler) for h in package_logger.handlers)
