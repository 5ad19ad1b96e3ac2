"""
Cost breakdown validation.
"""

import math
from typing import Any, Dict, List, Mapping, Optional

from tripdesk.config.settings import settings
from tripdesk.core.exceptions import ValidationError
from tripdesk.core.logging import get_logger
from tripdesk.services.base.validation_result import ValidationResult

logger = get_logger(__name__)

COST_COMPONENTS = ("hotelCost", "transportCost", "guideCost", "driverCost", "taxes")
TOTAL_FIELD = "totalCost"
TOTAL_TOLERANCE = 0.01


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def components_total(breakdown: Mapping[str, Any]) -> float:
    """Sum of the itemized components, absent ones counting as 0."""
    return float(sum(breakdown.get(name) or 0 for name in COST_COMPONENTS))


class CostAggregator:
    """
    Validate a client supplied cost breakdown.

    By default ``totalCost`` is trusted even when it differs from the sum of
    the components. With ``strict_total`` the two must agree.
    """

    def __init__(self, strict_total: Optional[bool] = None):
        if strict_total is None:
            strict_total = settings.COST_TOTAL_MUST_MATCH
        self.strict_total = strict_total

    def validate_cost(self, cost_breakdown: Optional[Mapping[str, Any]]) -> ValidationResult[Dict[str, float]]:
        """
        Normalise and check ``cost_breakdown`` (camelCase keys).

        Returns:
            ValidationResult holding all five components plus the total

        Raises:
            ValidationError: negative or non-numeric values, missing total,
                or a mismatched total in strict mode
        """
        cost_breakdown = cost_breakdown or {}
        field_errors: Dict[str, List[str]] = {}
        normalised: Dict[str, float] = {}

        for name in COST_COMPONENTS:
            value = cost_breakdown.get(name)
            if value is None:
                value = 0
            if not _is_number(value):
                field_errors[f"costBreakdown.{name}"] = [f"{name} must be a number"]
                continue
            if value < 0:
                field_errors[f"costBreakdown.{name}"] = [f"{name} cannot be negative"]
                continue
            normalised[name] = value

        total = cost_breakdown.get(TOTAL_FIELD)
        if total is None:
            field_errors[f"costBreakdown.{TOTAL_FIELD}"] = ["Total cost is required"]
        elif not _is_number(total) or total < 0:
            field_errors[f"costBreakdown.{TOTAL_FIELD}"] = ["Total cost must be a positive number"]
        else:
            normalised[TOTAL_FIELD] = total

        if field_errors:
            raise ValidationError("Cost breakdown is invalid", field_errors=field_errors)

        warnings: List[str] = []
        expected = components_total(normalised)
        if abs(expected - normalised[TOTAL_FIELD]) > TOTAL_TOLERANCE:
            message = f"Total cost {normalised[TOTAL_FIELD]} does not match the component sum {expected}"
            if self.strict_total:
                raise ValidationError(
                    "Cost breakdown is invalid",
                    field_errors={f"costBreakdown.{TOTAL_FIELD}": [message]},
                )
            logger.warning(message)
            warnings.append(message)

        return ValidationResult(value=normalised, warnings=warnings)
