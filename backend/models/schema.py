"""
Record types for the capability map.

Workbook rows are projected into these immutable records. Only Application
keeps an open-ended attribute mapping; every other record has named fields.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple


def _frozen_mapping(data=None) -> Mapping:
    return MappingProxyType(dict(data or {}))


class CacheState(str, Enum):
    """Lifecycle state of the data cache."""
    EMPTY = 'empty'
    LOADED = 'loaded'


@dataclass(frozen=True)
class Application:
    """One row of the Applications sheet, keyed by ``appName``."""

    attributes: Mapping[str, Any] = field(default_factory=_frozen_mapping)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> 'Application':
        return cls(attributes=_frozen_mapping(row))

    @property
    def app_name(self) -> str:
        return str(self.attributes.get('appName', '')).strip()

    def get(self, key: str, default=None):
        return self.attributes.get(key, default)

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.attributes)


@dataclass(frozen=True)
class Capability:
    """One Matrix row: a domain/vertical/function with per-application scores."""

    domain: str = ''
    vertical: str = ''
    function_name: str = ''
    function_desc_de: str = ''
    function_desc_en: str = ''
    applications: Mapping[str, int] = field(default_factory=_frozen_mapping)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'domain': self.domain,
            'vertical': self.vertical,
            'functionName': self.function_name,
            'functionDescDE': self.function_desc_de,
            'functionDescEN': self.function_desc_en,
            'applications': dict(self.applications),
        }


@dataclass(frozen=True)
class FunctionEntry:
    """Function listed under a vertical."""

    name: str = ''
    desc_de: str = ''
    desc_en: str = ''

    def to_dict(self) -> Dict[str, str]:
        return {'name': self.name, 'descDE': self.desc_de, 'descEN': self.desc_en}


@dataclass(frozen=True)
class CapabilityMapSnapshot:
    """
    One generation of the capability map.

    All collections are built together by a single import pass. Generation
    number, source and load time are metadata and excluded from equality.
    """

    applications: Tuple[Application, ...] = ()
    capabilities: Tuple[Capability, ...] = ()
    domains: Tuple[str, ...] = ()
    verticals_by_domain: Mapping[str, Tuple[str, ...]] = field(default_factory=_frozen_mapping)
    functions_by_vertical: Mapping[str, Tuple[FunctionEntry, ...]] = field(default_factory=_frozen_mapping)
    applications_by_name: Mapping[str, Application] = field(
        default_factory=_frozen_mapping, compare=False, repr=False
    )

    source: Optional[str] = field(default=None, compare=False)
    generation: int = field(default=0, compare=False)
    loaded_at: Optional[datetime] = field(default=None, compare=False)

    @property
    def state(self) -> CacheState:
        return CacheState.LOADED if self.generation > 0 else CacheState.EMPTY

    @property
    def is_loaded(self) -> bool:
        return self.state == CacheState.LOADED


EMPTY_SNAPSHOT = CapabilityMapSnapshot()
