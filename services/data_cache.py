"""
Data Cache - Process-wide holder of the current capability map snapshot.

Readers call ``snapshot()`` once per request and work against that
immutable object. A reload builds the next generation off to the side and
publishes it with a single reference assignment, so readers never see a
half-built generation and never take a lock.
"""

import logging
import threading
from typing import Any, Dict, Optional

from backend.models.schema import EMPTY_SNAPSHOT, CacheState, CapabilityMapSnapshot
from services.capability_import_service import CapabilityImportService
from services.errors import SheetNotFound, SourceUnavailable

logger = logging.getLogger(__name__)


class DataCache:
    """Holds one complete generation of the capability map."""

    def __init__(self, import_options: Optional[Dict[str, Any]] = None):
        """
        Args:
            import_options: Keyword arguments passed to CapabilityImportService
                            (sheet names, column pattern, score suffix)
        """
        self.import_options = dict(import_options or {})
        self._snapshot: CapabilityMapSnapshot = EMPTY_SNAPSHOT
        self._reload_lock = threading.Lock()
        self.last_error: Optional[str] = None
        self.last_stats: Dict[str, Any] = {}

    def snapshot(self) -> CapabilityMapSnapshot:
        return self._snapshot

    @property
    def state(self) -> CacheState:
        return self._snapshot.state

    @property
    def is_loaded(self) -> bool:
        return self._snapshot.is_loaded

    def reload(self, source) -> bool:
        """
        Rebuild every collection from the workbook and publish them together.

        Ingestion failures are logged and leave the current snapshot in place.

        Returns:
            True if a new generation was published
        """
        with self._reload_lock:
            generation = self._snapshot.generation + 1
            service = CapabilityImportService(**self.import_options)

            try:
                snapshot = service.build_snapshot(source, generation=generation)
            except (SourceUnavailable, SheetNotFound) as e:
                self.last_error = str(e)
                logger.error(f"Capability map load failed, keeping generation "
                             f"{self._snapshot.generation}: {e}")
                return False
            except Exception as e:
                self.last_error = f"Unexpected error reading workbook: {e}"
                logger.error(f"Capability map load failed unexpectedly: {e}", exc_info=True)
                return False

            self._snapshot = snapshot
            self.last_error = None
            self.last_stats = dict(service.stats)

        logger.info(f"Published capability map generation {generation} from {source}")
        return True
