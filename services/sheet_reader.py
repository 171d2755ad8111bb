"""
Sheet Reader - Turn workbook sheets into ordered row records.

The first row of a sheet is the header. Every following row becomes a
dictionary mapping header text to cell value, skipping blank cells and
fully blank rows.
"""

import logging
import zipfile
from pathlib import Path
from typing import Any, Dict, List, Optional

import openpyxl
from openpyxl.utils.exceptions import InvalidFileException

from services.errors import SheetNotFound, SourceUnavailable

logger = logging.getLogger(__name__)


def normalize_cell_value(value: Any) -> Any:
    """Narrow integral floats to int and drop empty strings."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value == '':
        return None
    return value


class SheetReader:
    """
    Read-only access to the sheets of one workbook.

    Usage:
        with SheetReader('capability_map.xlsx') as reader:
            rows = reader.read_sheet('Matrix')
    """

    def __init__(self, source):
        """
        Open the workbook.

        Args:
            source: Filesystem path or binary file object

        Raises:
            SourceUnavailable: If the workbook is missing or cannot be parsed
        """
        self.source = source
        self.workbook = self._open(source)

    def _open(self, source):
        if isinstance(source, (str, Path)) and not Path(source).is_file():
            raise SourceUnavailable(source, 'file not found')

        try:
            return openpyxl.load_workbook(source, read_only=True, data_only=True)
        except (OSError, InvalidFileException, zipfile.BadZipFile, KeyError, ValueError) as e:
            raise SourceUnavailable(source, str(e)) from e

    @property
    def sheet_names(self) -> List[str]:
        return list(self.workbook.sheetnames)

    def read_sheet(self, sheet_name: str) -> List[Dict[str, Any]]:
        """
        Read all data rows of a sheet.

        Raises:
            SheetNotFound: If the workbook has no sheet with that name
        """
        if sheet_name not in self.workbook.sheetnames:
            raise SheetNotFound(sheet_name, self.workbook.sheetnames)

        worksheet = self.workbook[sheet_name]
        rows = worksheet.iter_rows(values_only=True)

        header_row = next(rows, None)
        if header_row is None:
            logger.warning(f"Sheet '{sheet_name}' is empty")
            return []

        headers = [self._header_text(cell) for cell in header_row]
        records = []

        for row in rows:
            record = {}
            for header, value in zip(headers, row):
                if header is None:
                    continue
                value = normalize_cell_value(value)
                if value is None:
                    continue
                record[header] = value
            if record:
                records.append(record)

        logger.info(f"Read {len(records)} rows from sheet '{sheet_name}'")
        return records

    @staticmethod
    def _header_text(cell) -> Optional[str]:
        if cell is None:
            return None
        text = str(cell).strip()
        return text or None

    def close(self):
        self.workbook.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
