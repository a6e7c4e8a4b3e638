"""
CSV output for inventory tables
"""
import logging
from pathlib import Path
from typing import Dict, List

from ..models import InventoryTable

logger = logging.getLogger(__name__)

CSV_CONTENT_TYPE = 'text/csv'


def table_to_csv(table: InventoryTable) -> bytes:
    """Header row first, one line per row"""
    return table.to_dataframe().to_csv(index=False).encode('utf-8')


def write_csv_files(tables: Dict[str, InventoryTable], output_dir: str) -> List[Path]:
    """Write one <kind>.csv per table into output_dir"""
    directory = Path(output_dir)
    directory.mkdir(parents=True, exist_ok=True)

    written = []
    for kind, table in tables.items():
        path = directory / f"{kind}.csv"
        path.write_bytes(table_to_csv(table))
        logger.info(f"Wrote {len(table.rows)} {kind} rows to {path}")
        written.append(path)
    return written
