"""
Capability Import Service - Framework-agnostic workbook import.

Runs the sheet reader, capability builder and index builder over one
workbook and assembles the result into a single immutable snapshot. Used
by the data cache at startup and by the CLI.
"""

import logging
from datetime import datetime
from pathlib import Path
from types import MappingProxyType
from typing import Callable, Optional

from backend.models.schema import CapabilityMapSnapshot
from services.capability_builder import (
    DEFAULT_APP_COLUMN_PATTERN, DEFAULT_SCORE_COLUMN_SUFFIX,
    CapabilityBuilder, build_applications
)
from services.index_builder import (
    build_domains, build_functions_by_vertical, build_verticals_by_domain,
    count_dangling_references
)
from services.sheet_reader import SheetReader

logger = logging.getLogger(__name__)

DEFAULT_APPLICATIONS_SHEET = 'Applications'
DEFAULT_MATRIX_SHEET = 'Matrix'


class CapabilityImportService:
    """
    Builds capability map snapshots from a workbook.

    The service never publishes anything itself; callers decide what to do
    with the returned snapshot.
    """

    def __init__(
        self,
        progress_callback: Optional[Callable[[str, float, str], None]] = None,
        applications_sheet: str = DEFAULT_APPLICATIONS_SHEET,
        matrix_sheet: str = DEFAULT_MATRIX_SHEET,
        app_column_pattern: str = DEFAULT_APP_COLUMN_PATTERN,
        score_column_suffix: str = DEFAULT_SCORE_COLUMN_SUFFIX
    ):
        """
        Initialize import service.

        Args:
            progress_callback: Optional callback for progress updates
                              Signature: callback(stage: str, percent: float, message: str)
            applications_sheet: Name of the sheet listing applications
            matrix_sheet: Name of the sheet holding the capability matrix
            app_column_pattern: Regex matching application name columns in the matrix
            score_column_suffix: Suffix of the score column paired with each application column
        """
        self.progress_callback = progress_callback or (lambda *args: None)
        self.applications_sheet = applications_sheet
        self.matrix_sheet = matrix_sheet
        self.app_column_pattern = app_column_pattern
        self.score_column_suffix = score_column_suffix
        self.stats = {}

    def _emit_progress(self, stage: str, percent: float, message: str):
        """Emit progress update via callback."""
        self.progress_callback(stage, percent, message)
        logger.info(f"Progress: {stage} ({percent:.1f}%) - {message}")

    def build_snapshot(self, source, generation: int = 1) -> CapabilityMapSnapshot:
        """
        Read a workbook and build one complete snapshot.

        Args:
            source: Workbook path or binary file object
            generation: Generation number to stamp on the snapshot

        Returns:
            CapabilityMapSnapshot

        Raises:
            SourceUnavailable: If the workbook cannot be opened
            SheetNotFound: If a required sheet is missing
        """
        self._emit_progress('reading', 0, f"Opening workbook: {source}")

        with SheetReader(source) as reader:
            application_rows = reader.read_sheet(self.applications_sheet)
            self._emit_progress('reading', 25, f"Read {len(application_rows)} application rows")

            matrix_rows = reader.read_sheet(self.matrix_sheet)
            self._emit_progress('reading', 50, f"Read {len(matrix_rows)} matrix rows")

        applications = build_applications(application_rows)

        builder = CapabilityBuilder(self.app_column_pattern, self.score_column_suffix)
        capabilities = builder.build_capabilities(matrix_rows)
        self._emit_progress('building', 75, f"Built {len(capabilities)} capabilities")

        domains = build_domains(capabilities)
        verticals_by_domain = build_verticals_by_domain(capabilities)
        functions_by_vertical = build_functions_by_vertical(capabilities)

        applications_by_name = {}
        for application in applications:
            applications_by_name.setdefault(application.app_name, application)

        self.stats = {
            'applications': len(applications),
            'capabilities': len(capabilities),
            'domains': len(domains),
            'verticals': sum(len(v) for v in verticals_by_domain.values()),
            'functions': sum(len(f) for f in functions_by_vertical.values()),
            'score_entries': builder.stats['score_entries'],
            'score_parse_failures': builder.stats['score_parse_failures'],
            'dangling_references': count_dangling_references(capabilities, applications_by_name),
        }

        snapshot = CapabilityMapSnapshot(
            applications=tuple(applications),
            capabilities=tuple(capabilities),
            domains=tuple(domains),
            verticals_by_domain=MappingProxyType(
                {domain: tuple(verticals) for domain, verticals in verticals_by_domain.items()}
            ),
            functions_by_vertical=MappingProxyType(
                {vertical: tuple(entries) for vertical, entries in functions_by_vertical.items()}
            ),
            applications_by_name=MappingProxyType(applications_by_name),
            source=str(source) if isinstance(source, (str, Path)) else None,
            generation=generation,
            loaded_at=datetime.utcnow(),
        )

        self._emit_progress('complete', 100, f"Indexed {len(domains)} domains")
        logger.info(f"Built generation {generation}: {self.stats}")

        return snapshot
