"""
Capability Builder - Project raw sheet rows into typed records.

Matrix rows are wide: each row carries a variable number of paired
``appName<N>`` / ``appName<N>_score`` columns. These are folded into a
single ``applications`` mapping per capability.
"""

import logging
import re
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Tuple

from backend.models.schema import Application, Capability

logger = logging.getLogger(__name__)

DEFAULT_APP_COLUMN_PATTERN = r'^appName\d+$'
DEFAULT_SCORE_COLUMN_SUFFIX = '_score'

# Matrix column names
DOMAIN_COLUMN = 'domain'
VERTICAL_COLUMN = 'vertical'
FUNCTION_COLUMN = 'functionname'
FUNCTION_DESC_DE_COLUMN = 'functiondescriptionDE'
FUNCTION_DESC_EN_COLUMN = 'functiondescriptionEN'

_LEADING_INT = re.compile(r'^\s*([+-]?\d+)')


def parse_score(value: Any) -> Tuple[int, bool]:
    """
    Parse a score cell into an integer.

    Ints pass through, floats are truncated and strings are read from their
    leading integer digits ("4", " 4 ", "4.5", "4 - good" all give 4).

    Returns:
        (score, parsed) where parsed is False if the value fell back to 0
    """
    if isinstance(value, bool):
        return 0, False
    if isinstance(value, int):
        return value, True
    if isinstance(value, float):
        if value != value or value in (float('inf'), float('-inf')):
            return 0, False
        return int(value), True
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        if match:
            return int(match.group(1)), True
    return 0, False


def _text(value: Any) -> str:
    if value is None:
        return ''
    return str(value)


class CapabilityBuilder:
    """Builds Capability records from Matrix rows."""

    def __init__(
        self,
        app_column_pattern: str = DEFAULT_APP_COLUMN_PATTERN,
        score_column_suffix: str = DEFAULT_SCORE_COLUMN_SUFFIX
    ):
        self.app_column_re = re.compile(app_column_pattern)
        self.score_column_suffix = score_column_suffix
        self.stats = {
            'capabilities': 0,
            'score_entries': 0,
            'score_parse_failures': 0,
        }

    def is_app_column(self, key: str) -> bool:
        return bool(self.app_column_re.match(key)) and not key.endswith(self.score_column_suffix)

    def build_capability(self, row: Mapping[str, Any]) -> Capability:
        applications: Dict[str, int] = {}

        for key, value in row.items():
            if not self.is_app_column(key):
                continue

            app_name = _text(value).strip()
            if not app_name:
                continue

            score_column = f"{key}{self.score_column_suffix}"
            score, parsed = parse_score(row.get(score_column))
            if not parsed:
                self.stats['score_parse_failures'] += 1
                logger.debug(f"Unparseable score in '{score_column}' for {app_name}: "
                             f"{row.get(score_column)!r}, using 0")

            applications[app_name] = score

        self.stats['score_entries'] += len(applications)

        return Capability(
            domain=_text(row.get(DOMAIN_COLUMN)),
            vertical=_text(row.get(VERTICAL_COLUMN)),
            function_name=_text(row.get(FUNCTION_COLUMN)),
            function_desc_de=_text(row.get(FUNCTION_DESC_DE_COLUMN)),
            function_desc_en=_text(row.get(FUNCTION_DESC_EN_COLUMN)),
            applications=MappingProxyType(applications),
        )

    def build_capabilities(self, rows: Iterable[Mapping[str, Any]]) -> List[Capability]:
        """Build one Capability per Matrix row, preserving row order."""
        capabilities = [self.build_capability(row) for row in rows]
        self.stats['capabilities'] += len(capabilities)

        if self.stats['score_parse_failures']:
            logger.info(f"{self.stats['score_parse_failures']} score cells could not be parsed "
                        f"and were set to 0")

        return capabilities


def build_applications(rows: Iterable[Mapping[str, Any]]) -> List[Application]:
    """Project Applications rows into records, skipping rows without an appName."""
    applications = []
    skipped = 0

    for row in rows:
        application = Application.from_row(row)
        if not application.app_name:
            skipped += 1
            continue
        applications.append(application)

    if skipped:
        logger.warning(f"Skipped {skipped} application rows without appName")

    return applications
