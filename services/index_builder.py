"""
Index Builder - Secondary indexes over capabilities.

Each index is derived in a single pass and keeps first-seen order of the
Matrix rows. Blank domains and verticals are left out.
"""

import logging
from typing import Dict, Iterable, List, Sequence

from backend.models.schema import Capability, FunctionEntry

logger = logging.getLogger(__name__)


def build_domains(capabilities: Iterable[Capability]) -> List[str]:
    """Distinct non-empty domains in first-seen order."""
    seen = {}
    for capability in capabilities:
        if capability.domain:
            seen.setdefault(capability.domain, None)
    return list(seen)


def build_verticals_by_domain(capabilities: Iterable[Capability]) -> Dict[str, List[str]]:
    """Distinct non-empty verticals under each domain, first-seen order."""
    index: Dict[str, Dict[str, None]] = {}
    for capability in capabilities:
        if not capability.domain:
            continue
        verticals = index.setdefault(capability.domain, {})
        if capability.vertical:
            verticals.setdefault(capability.vertical, None)
    return {domain: list(verticals) for domain, verticals in index.items()}


def build_functions_by_vertical(capabilities: Iterable[Capability]) -> Dict[str, List[FunctionEntry]]:
    """
    Functions under each vertical.

    Every Matrix row is one function instance, so repeated rows for the same
    vertical produce repeated entries.
    """
    index: Dict[str, List[FunctionEntry]] = {}
    for capability in capabilities:
        if not capability.vertical:
            continue
        index.setdefault(capability.vertical, []).append(FunctionEntry(
            name=capability.function_name,
            desc_de=capability.function_desc_de,
            desc_en=capability.function_desc_en,
        ))
    return index


def count_dangling_references(capabilities: Sequence[Capability], app_names: Iterable[str]) -> int:
    """Count score-map entries naming an application missing from the Applications sheet."""
    known = set(app_names)
    dangling = 0
    for capability in capabilities:
        for app_name in capability.applications:
            if app_name not in known:
                dangling += 1
    if dangling:
        logger.info(f"{dangling} capability score entries reference unknown applications")
    return dangling
