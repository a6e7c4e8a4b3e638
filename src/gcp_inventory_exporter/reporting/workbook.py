"""
Excel workbook for inventory tables

One sheet per resource kind, header row styled and columns sized the same
way for every sheet.
"""
import io
import logging
from collections import OrderedDict
from pathlib import Path
from typing import Dict

import pandas as pd
from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from ..exceptions import ExportError
from ..models import InventoryTable

logger = logging.getLogger(__name__)

XLSX_CONTENT_TYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'

INVALID_SHEET_CHARS = set('[]:*?/\\')
MAX_SHEET_LEN = 31
MAX_COLUMN_WIDTH = 50


def sanitize_sheet_name(name: str) -> str:
    out = ''.join(ch for ch in name if ch not in INVALID_SHEET_CHARS)
    return out[:MAX_SHEET_LEN].strip() or 'Sheet'


class InventoryWorkbook:
    """Collects inventory tables as named sheets and serializes them to xlsx"""

    COLORS = {
        'header': '366092',
        'header_font': 'FFFFFF'
    }

    def __init__(self):
        self.sheets: Dict[str, InventoryTable] = OrderedDict()

    def add_sheet(self, name: str, table: InventoryTable):
        """Add a table; header-only tables become header-only sheets"""
        sheet_name = sanitize_sheet_name(name)
        if sheet_name in self.sheets:
            raise ExportError(f"Sheet {sheet_name!r} already exists")
        self.sheets[sheet_name] = table
        logger.debug(f"Added sheet {sheet_name} with {len(table.rows)} rows")

    def to_bytes(self) -> bytes:
        if not self.sheets:
            raise ExportError("Workbook has no sheets")

        buffer = io.BytesIO()
        try:
            with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
                for sheet_name, table in self.sheets.items():
                    table.to_dataframe().to_excel(writer, sheet_name=sheet_name, index=False)
                self._format_sheets(writer.book)
        except ExportError:
            raise
        except Exception as e:
            raise ExportError(f"Failed to build workbook: {e}") from e
        return buffer.getvalue()

    def save(self, output_file: str) -> Path:
        path = Path(output_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(self.to_bytes())
        logger.info(f"Workbook saved to {path}")
        return path

    def _format_sheets(self, workbook: Workbook):
        header_fill = PatternFill(start_color=self.COLORS['header'],
                                  end_color=self.COLORS['header'],
                                  fill_type='solid')
        header_font = Font(color=self.COLORS['header_font'], bold=True)

        for sheet_name in workbook.sheetnames:
            worksheet = workbook[sheet_name]

            # Auto-adjust column widths
            for column in worksheet.columns:
                column_letter = get_column_letter(column[0].column)
                max_length = max(len(str(cell.value)) if cell.value is not None else 0
                                 for cell in column)
                worksheet.column_dimensions[column_letter].width = min(max_length + 2, MAX_COLUMN_WIDTH)

            for cell in worksheet[1]:
                cell.font = header_font
                cell.fill = header_fill
                cell.alignment = Alignment(horizontal='center')

            worksheet.freeze_panes = 'A2'
