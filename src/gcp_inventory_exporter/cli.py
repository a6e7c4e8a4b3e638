import sys

import click
from tabulate import tabulate
from tqdm import tqdm

from .config import DEFAULT_CONFIG_PATH, InventoryConfig
from .context import RunContext
from .enumerators import ENUMERATORS, RESOURCE_KINDS
from .exceptions import InventoryError
from .orchestrator import InventoryExporter
from .reporting.csv_reporter import write_csv_files

DEFAULT_OUTPUTS = {'xlsx': 'inventory.xlsx', 'csv': 'inventory'}


def _load_context(ctx, **overrides) -> RunContext:
    options = dict(ctx.obj['overrides'])
    options.update({key: value for key, value in overrides.items() if value})
    try:
        config = InventoryConfig.load(ctx.obj['config_path'], overrides=options)
    except InventoryError as e:
        raise click.ClickException(str(e))
    return RunContext.create(config)


def _summary(tables) -> str:
    rows = [[ENUMERATORS[kind].sheet_name, len(table.rows)] for kind, table in tables.items()]
    return tabulate(rows, headers=['Sheet', 'Rows'], tablefmt='simple')


@click.group()
@click.option('--config', '-c', 'config_path', default=DEFAULT_CONFIG_PATH,
              help='Path to YAML configuration file')
@click.option('--log-level', type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
              help='Logging level')
@click.option('--log-format', type=click.Choice(['console', 'json', 'detailed']), help='Log output format')
@click.option('--log-file', help='Also write logs to this file')
@click.pass_context
def cli(ctx, config_path, log_level, log_format, log_file):
    """GCP Inventory Exporter - inventory compute, network and storage across projects"""
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path
    ctx.obj['overrides'] = {
        'log_level': log_level,
        'log_format': log_format,
        'log_file': log_file
    }


@cli.command()
@click.option('--org-id', help='Only projects directly under this organization')
@click.pass_context
def projects(ctx, org_id):
    """List the projects an inventory run would cover"""
    context = _load_context(ctx, org_id=org_id)
    exporter = InventoryExporter(context)
    try:
        found = exporter.discover_projects()
    except InventoryError as e:
        raise click.ClickException(str(e))

    click.echo(tabulate([[p.id, p.display_name] for p in found],
                        headers=['Project ID', 'Name'], tablefmt='simple'))
    click.echo(f"\n{len(found)} projects")


@cli.command()
@click.option('--kind', '-k', 'kinds', multiple=True, type=click.Choice(RESOURCE_KINDS),
              help='Resource kinds to collect (default: all)')
@click.option('--zones', '-z', help='Comma separated zones')
@click.option('--regions', '-r', help='Comma separated regions')
@click.option('--org-id', help='Only projects directly under this organization')
@click.option('--max-workers', type=int, help='Maximum projects collected concurrently')
@click.option('--format', 'output_format', type=click.Choice(['xlsx', 'csv']), default='xlsx',
              help='Output format')
@click.option('--output', '-o',
              help='Workbook path (xlsx, default inventory.xlsx) or output directory (csv, default inventory)')
@click.pass_context
def collect(ctx, kinds, zones, regions, org_id, max_workers, output_format, output):
    """Collect the inventory and write it locally"""
    context = _load_context(ctx, zones=zones, regions=regions, org_id=org_id, max_workers=max_workers)
    kinds = kinds or RESOURCE_KINDS
    output = output or DEFAULT_OUTPUTS[output_format]
    exporter = InventoryExporter(context)

    try:
        context.config.validate(require_export=False)
        found = exporter.discover_projects()
        click.echo(f"Collecting {len(kinds)} resource kinds from {len(found)} projects...")
        with tqdm(total=len(kinds), desc='Collecting', unit='kind',
                  disable=not sys.stderr.isatty()) as bar:
            tables = exporter.collect(found, kinds, progress=lambda kind: bar.update(1))

        if output_format == 'csv':
            paths = write_csv_files(tables, output)
            destination = f"{len(paths)} CSV files in {output}"
        else:
            destination = str(exporter.build_workbook(tables).save(output))
    except InventoryError as e:
        raise click.ClickException(str(e))

    click.echo(_summary(tables))
    click.echo(f"\nInventory written to {destination}")


@cli.command()
@click.option('--bucket', help='Export bucket name')
@click.option('--project', 'export_project_id', help='Project that owns the export bucket')
@click.option('--show-logs', is_flag=True, help='Print the log lines captured during the run')
@click.pass_context
def export(ctx, bucket, export_project_id, show_logs):
    """Collect the inventory and upload the workbook to Cloud Storage"""
    context = _load_context(ctx, export_bucket_name=bucket, export_project_id=export_project_id)
    exporter = InventoryExporter(context)

    try:
        result = exporter.run()
    except InventoryError as e:
        raise click.ClickException(str(e))

    if show_logs:
        for line in result.logs:
            click.echo(line)

    click.echo(_summary(result.tables))
    click.echo(f"\nInventory exported to {result.uri}")


if __name__ == '__main__':
    cli()
