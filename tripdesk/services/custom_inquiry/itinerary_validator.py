"""
Itinerary validation for custom trip inquiries.

Checks the bounds of every stop, reports soft inconsistencies with the trip
details as warnings, and assigns ``order`` from array position. Nothing here
touches the database or mutates its inputs.
"""

from datetime import date, datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Sequence

from tripdesk.core.exceptions import ValidationError
from tripdesk.core.logging import get_logger
from tripdesk.schemas.common.enums import TimeOfDay
from tripdesk.services.base.validation_result import ValidationResult

logger = get_logger(__name__)

MIN_DAY = 1
MAX_DAY = 365
MIN_NIGHTS = 0
MAX_NIGHTS = 30

TIME_OF_DAY_VALUES = [member.value for member in TimeOfDay]


def reindex(items: Sequence[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    """
    Return copies of ``items`` with ``order`` set to position + 1.

    Submitted order is preserved; any client supplied ``order`` is replaced.
    """
    return [{**item, "order": position + 1} for position, item in enumerate(items)]


def ensure_future_start(start_date: datetime, today: Optional[date] = None) -> None:
    """
    Raise ``ValidationError`` unless the trip starts after ``today``.

    Comparison is by calendar date in UTC: a trip starting today is rejected.
    """
    today = today or datetime.now(timezone.utc).date()
    if start_date.tzinfo is not None:
        start_day = start_date.astimezone(timezone.utc).date()
    else:
        start_day = start_date.date()

    if start_day <= today:
        raise ValidationError(
            "Trip start date must be in the future",
            field_errors={"tripDetails.startDate": ["Trip start date must be in the future"]},
        )


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class ItineraryValidator:
    """Validate and normalise a submitted itinerary."""

    def validate(
        self,
        trip_details: Mapping[str, Any],
        raw_itinerary: Optional[Sequence[Mapping[str, Any]]],
    ) -> ValidationResult[List[Dict[str, Any]]]:
        """
        Validate ``raw_itinerary`` against the stop bounds.

        Args:
            trip_details: Trip details with camelCase keys (``totalDays``,
                ``totalNights``)
            raw_itinerary: Submitted stops with camelCase keys

        Returns:
            ValidationResult whose value is the reindexed itinerary

        Raises:
            ValidationError: with messages keyed like ``itinerary[2].day``
        """
        if not raw_itinerary:
            raise ValidationError(
                "Itinerary is invalid",
                field_errors={"itinerary": ["At least one destination is required"]},
            )

        field_errors: Dict[str, List[str]] = {}
        items: List[Dict[str, Any]] = []

        for index, raw in enumerate(raw_itinerary):
            prefix = f"itinerary[{index}]"
            errors = self._check_item(raw)
            for key, message in errors:
                field_errors.setdefault(f"{prefix}.{key}", []).append(message)

            items.append({
                "place": raw.get("place"),
                "day": raw.get("day"),
                "timeOfDay": raw.get("timeOfDay"),
                "nights": raw.get("nights"),
            })

        if field_errors:
            raise ValidationError("Itinerary is invalid", field_errors=field_errors)

        warnings = self._collect_warnings(trip_details, items)
        for warning in warnings:
            logger.warning(f"Itinerary warning: {warning}")

        return ValidationResult(value=reindex(items), warnings=warnings)

    def _check_item(self, raw: Mapping[str, Any]) -> List[tuple]:
        errors = []

        place = raw.get("place")
        if place is None or (isinstance(place, str) and not place.strip()):
            errors.append(("place", "Place is required for each itinerary item"))

        day = raw.get("day")
        if day is None:
            errors.append(("day", "Day is required"))
        elif not _is_int(day):
            errors.append(("day", "Day must be a whole number"))
        elif day < MIN_DAY:
            errors.append(("day", f"Day must be at least {MIN_DAY}"))
        elif day > MAX_DAY:
            errors.append(("day", f"Day cannot exceed {MAX_DAY}"))

        time_of_day = raw.get("timeOfDay")
        if time_of_day not in TIME_OF_DAY_VALUES:
            errors.append(("timeOfDay", f"Time of day must be one of: {', '.join(TIME_OF_DAY_VALUES)}"))

        nights = raw.get("nights")
        if nights is None:
            errors.append(("nights", "Nights is required"))
        elif not _is_int(nights):
            errors.append(("nights", "Nights must be a whole number"))
        elif nights < MIN_NIGHTS:
            errors.append(("nights", "Nights cannot be negative"))
        elif nights > MAX_NIGHTS:
            errors.append(("nights", f"Maximum {MAX_NIGHTS} nights per place"))

        return errors

    def _collect_warnings(
        self,
        trip_details: Mapping[str, Any],
        items: List[Dict[str, Any]],
    ) -> List[str]:
        warnings: List[str] = []

        total_days = trip_details.get("totalDays")
        if _is_int(total_days):
            for index, item in enumerate(items):
                if item["day"] > total_days:
                    warnings.append(
                        f"itinerary[{index}].day {item['day']} is beyond the trip length of {total_days} days"
                    )

        total_nights = trip_details.get("totalNights")
        if _is_int(total_nights):
            nights_sum = sum(item["nights"] for item in items)
            if nights_sum != total_nights:
                warnings.append(
                    f"Itinerary nights add up to {nights_sum}, trip details say {total_nights}"
                )

        return warnings
