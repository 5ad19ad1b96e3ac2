"""
Resource reference handling for custom inquiries.

Preferences point at catalog records (vehicle, tour guide, driver) and
itinerary stops point at places. On write, references are sanitised to a
well-formed identifier or null. On read, they are resolved to display
snapshots. Resolution is best effort: a missing record or a failing lookup
leaves the raw identifier in place and is never raised to the caller.
"""

import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from tripdesk.config.settings import settings
from tripdesk.core.constants import REFERENCE_FIELDS
from tripdesk.core.exceptions import ValidationError
from tripdesk.core.logging import get_logger
from tripdesk.models.base import BaseModel
from tripdesk.repositories.catalog_repository import CatalogRepository
from tripdesk.schemas.common.enums import ResourceKind

logger = get_logger(__name__)

POLICY_LENIENT = "lenient"
POLICY_STRICT = "strict"

REFERENCE_KINDS: Dict[str, ResourceKind] = {
    "selectedVehicle": ResourceKind.VEHICLE,
    "selectedTourGuide": ResourceKind.TOUR_GUIDE,
    "selectedDriver": ResourceKind.DRIVER,
}


class ResolutionState(str, Enum):
    RESOLVED = "resolved"
    UNRESOLVED = "unresolved"
    ABSENT = "absent"


@dataclass(frozen=True)
class Resolution:
    """
    Outcome of looking up one reference.

    ``snapshot`` is set only when resolved; ``raw_id`` only when unresolved.
    """

    state: ResolutionState
    snapshot: Optional[Dict[str, Any]] = None
    raw_id: Optional[str] = None
    legacy: Optional[Dict[str, Any]] = None

    @classmethod
    def resolved(cls, snapshot: Dict[str, Any], legacy: Optional[Dict[str, Any]] = None) -> "Resolution":
        return cls(ResolutionState.RESOLVED, snapshot=snapshot, legacy=legacy)

    @classmethod
    def unresolved(cls, raw_id: str) -> "Resolution":
        return cls(ResolutionState.UNRESOLVED, raw_id=raw_id)

    @classmethod
    def absent(cls) -> "Resolution":
        return cls(ResolutionState.ABSENT)

    @property
    def is_resolved(self) -> bool:
        return self.state is ResolutionState.RESOLVED

    def display(self) -> Any:
        """Value shown to clients: the snapshot, the raw id, or None."""
        if self.state is ResolutionState.RESOLVED:
            return self.snapshot
        if self.state is ResolutionState.UNRESOLVED:
            return self.raw_id
        return None


def normalize_identifier(value: Any) -> Optional[str]:
    """
    Canonical string form of a resource identifier, or None if malformed.
    """
    if isinstance(value, uuid.UUID):
        return str(value)
    if not isinstance(value, str):
        return None
    try:
        return str(uuid.UUID(value.strip()))
    except ValueError:
        return None


def _vehicle_snapshot(record) -> Dict[str, Any]:
    return {
        "id": record.id,
        "name": record.name,
        "type": record.type,
        "capacity": record.passenger_capacity,
    }


def _tour_guide_snapshot(record) -> Dict[str, Any]:
    return {
        "id": record.id,
        "name": record.name,
        "languages": list(record.languages or []),
        "rating": record.rating,
    }


def _driver_snapshot(record) -> Dict[str, Any]:
    return {
        "id": record.id,
        "name": record.name,
        "licenseType": record.license_type,
        "rating": record.rating,
    }


def _place_snapshot(record) -> Dict[str, Any]:
    return {
        "id": record.id,
        "name": record.name,
        "location": record.location,
    }


SNAPSHOT_BUILDERS = {
    ResourceKind.VEHICLE: _vehicle_snapshot,
    ResourceKind.TOUR_GUIDE: _tour_guide_snapshot,
    ResourceKind.DRIVER: _driver_snapshot,
    ResourceKind.PLACE: _place_snapshot,
}


def _legacy_projection(record: BaseModel) -> Dict[str, Any]:
    return {
        "id": record.id,
        "name": record.name,
        "pricePerDay": getattr(record, "price_per_day", None),
    }


class ResourceResolver:
    """
    Sanitise references on write and resolve them for display on read.

    Lookups are memoised for the lifetime of the resolver, which is one
    request.
    """

    def __init__(self, catalog: CatalogRepository, policy: Optional[str] = None):
        self.catalog = catalog
        self.policy = policy or settings.RESOURCE_REFERENCE_POLICY
        self._cache: Dict[Tuple[ResourceKind, str], Resolution] = {}

    @property
    def is_strict(self) -> bool:
        return self.policy == POLICY_STRICT

    # -------------------------------------------------------------------------
    # Write path
    # -------------------------------------------------------------------------

    def sanitize_references(self, preferences: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        """
        Canonicalise preference references before they are stored.

        Legacy inline ``vehicle``/``tourGuide``/``driver`` objects fill the
        matching reference when it is absent and are then dropped. Malformed
        identifiers become null, or raise ``ValidationError`` under the
        strict policy.
        """
        sanitized: Dict[str, Any] = dict(preferences or {})
        field_errors: Dict[str, List[str]] = {}

        for ref_field, legacy_key in REFERENCE_FIELDS.items():
            legacy = sanitized.pop(legacy_key, None)
            value = sanitized.get(ref_field)

            if value is None and isinstance(legacy, Mapping):
                value = legacy.get("id")
            if isinstance(value, Mapping):
                value = value.get("id")

            if value is None or value == "":
                sanitized[ref_field] = None
                continue

            identifier = normalize_identifier(value)
            if identifier is None:
                if self.is_strict:
                    field_errors[f"preferences.{ref_field}"] = [f"Invalid {ref_field} reference"]
                else:
                    logger.warning(f"Dropping malformed {ref_field} reference: {value!r}")
            sanitized[ref_field] = identifier

        if field_errors:
            raise ValidationError("Invalid resource reference", field_errors=field_errors)

        return sanitized

    # -------------------------------------------------------------------------
    # Read path
    # -------------------------------------------------------------------------

    def resolve(self, kind: ResourceKind, raw_id: Any) -> Resolution:
        """Look up one reference without ever raising."""
        if raw_id is None or raw_id == "":
            return Resolution.absent()

        identifier = normalize_identifier(raw_id)
        if identifier is None:
            return Resolution.unresolved(str(raw_id))

        key = (kind, identifier)
        if key in self._cache:
            return self._cache[key]

        try:
            record = self.catalog.find(kind, identifier)
        except Exception as e:
            logger.warning(f"Lookup of {kind.value} {identifier} failed: {e}", exc_info=True)
            record = None

        if record is None:
            resolution = Resolution.unresolved(str(raw_id))
        else:
            resolution = Resolution.resolved(
                SNAPSHOT_BUILDERS[kind](record),
                legacy=_legacy_projection(record),
            )

        self._cache[key] = resolution
        return resolution

    def enrich(self, preferences: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        """
        Display form of stored preferences.

        Resolved references become snapshots and also produce the legacy
        ``vehicle``/``tourGuide``/``driver`` projection. The input is not
        modified.
        """
        enriched: Dict[str, Any] = {
            key: value
            for key, value in (preferences or {}).items()
            if key not in REFERENCE_FIELDS.values()
        }

        for ref_field, legacy_key in REFERENCE_FIELDS.items():
            resolution = self.resolve(REFERENCE_KINDS[ref_field], enriched.get(ref_field))
            enriched[ref_field] = resolution.display()
            if resolution.is_resolved:
                enriched[legacy_key] = resolution.legacy

        return enriched

    def enrich_itinerary(self, items: Optional[Sequence[Mapping[str, Any]]]) -> List[Dict[str, Any]]:
        """Itinerary copies with each place reference resolved for display."""
        enriched = []
        for item in items or []:
            resolution = self.resolve(ResourceKind.PLACE, item.get("place"))
            place = resolution.display()
            enriched.append({**item, "place": place if place is not None else item.get("place")})
        return enriched
