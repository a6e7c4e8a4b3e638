"""Workbook, CSV and Cloud Storage outputs"""

from .csv_reporter import CSV_CONTENT_TYPE, table_to_csv, write_csv_files
from .gcs import InventoryStorage
from .workbook import XLSX_CONTENT_TYPE, InventoryWorkbook, sanitize_sheet_name
