"""
Query Service - Read operations over a capability map snapshot.

Every function takes the snapshot it should read from, so a request sees
one generation from start to finish. Matching is exact and case-sensitive.
Empty-string filters are treated as absent.
"""

import logging
from typing import Any, Dict, List, Optional

from backend.models.schema import CapabilityMapSnapshot
from services.errors import FunctionNotFound, MissingParameter

logger = logging.getLogger(__name__)


def list_applications(
    snapshot: CapabilityMapSnapshot,
    lifecycle: Optional[str] = None,
    business_owner: Optional[str] = None,
    domain: Optional[str] = None
) -> Dict[str, Any]:
    """
    List applications, optionally filtered.

    Args:
        snapshot: Snapshot to read
        lifecycle: Exact match on ``appLifecycleStatus``
        business_owner: Exact match on ``appBusinessOwner``
        domain: Keep only applications scored by a capability in this domain

    Returns:
        {'count': int, 'applications': [dict, ...]} in storage order
    """
    applications = list(snapshot.applications)

    if lifecycle:
        applications = [a for a in applications if a.get('appLifecycleStatus') == lifecycle]

    if business_owner:
        applications = [a for a in applications if a.get('appBusinessOwner') == business_owner]

    if domain:
        app_names = set()
        for capability in snapshot.capabilities:
            if capability.domain == domain:
                app_names.update(capability.applications)
        applications = [a for a in applications if a.app_name in app_names]

    return {
        'count': len(applications),
        'applications': [a.to_dict() for a in applications],
    }


def list_capabilities(
    snapshot: CapabilityMapSnapshot,
    domain: Optional[str] = None,
    vertical: Optional[str] = None
) -> Dict[str, Any]:
    """List capabilities filtered by domain and/or vertical."""
    capabilities = list(snapshot.capabilities)

    if domain:
        capabilities = [c for c in capabilities if c.domain == domain]

    if vertical:
        capabilities = [c for c in capabilities if c.vertical == vertical]

    return {
        'count': len(capabilities),
        'capabilities': [c.to_dict() for c in capabilities],
    }


def _score_matches(
    score: int,
    exact: Optional[int],
    min_score: Optional[int],
    max_score: Optional[int]
) -> bool:
    if exact is not None:
        return score == exact
    if min_score is not None and score < min_score:
        return False
    if max_score is not None and score > max_score:
        return False
    return True


def applications_by_capability(
    snapshot: CapabilityMapSnapshot,
    function: Optional[str],
    score: Optional[int] = None,
    min_score: Optional[int] = None,
    max_score: Optional[int] = None
) -> Dict[str, Any]:
    """
    Applications scored against a function, with their capability score.

    When several capabilities share the function name the first one wins.
    An exact ``score`` filter takes precedence over the bounds. Score-map
    entries without a matching application record are dropped.

    Raises:
        MissingParameter: If no function name is given
        FunctionNotFound: If no capability has that function name
    """
    if not function:
        raise MissingParameter('function')

    capability = next(
        (c for c in snapshot.capabilities if c.function_name == function), None
    )
    if capability is None:
        raise FunctionNotFound(function)

    results: List[Dict[str, Any]] = []
    for app_name, app_score in capability.applications.items():
        if not _score_matches(app_score, score, min_score, max_score):
            continue

        application = snapshot.applications_by_name.get(app_name)
        if application is None:
            logger.debug(f"Function '{function}' references unknown application '{app_name}'")
            continue

        record = application.to_dict()
        record['capabilityScore'] = app_score
        results.append(record)

    return {
        'function': function,
        'filterScore': score,
        'count': len(results),
        'applications': results,
    }


def list_domains(snapshot: CapabilityMapSnapshot) -> Dict[str, Any]:
    return {'domains': list(snapshot.domains)}


def list_verticals(snapshot: CapabilityMapSnapshot, domain: Optional[str] = None) -> Dict[str, Any]:
    """Verticals of one domain (empty if unknown), or the whole domain index."""
    if domain:
        return {
            'domain': domain,
            'verticals': list(snapshot.verticals_by_domain.get(domain, ())),
        }

    return {
        'verticals': {d: list(v) for d, v in snapshot.verticals_by_domain.items()},
    }


def list_functions(snapshot: CapabilityMapSnapshot, vertical: Optional[str] = None) -> Dict[str, Any]:
    """Functions of one vertical (empty if unknown), or the whole vertical index."""
    if vertical:
        return {
            'vertical': vertical,
            'functions': [f.to_dict() for f in snapshot.functions_by_vertical.get(vertical, ())],
        }

    return {
        'functions': {
            v: [f.to_dict() for f in entries]
            for v, entries in snapshot.functions_by_vertical.items()
        },
    }
