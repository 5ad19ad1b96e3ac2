"""
Outcome of a successful validation pass.
"""

from dataclasses import dataclass, field
from typing import Generic, List, TypeVar

T = TypeVar("T")


@dataclass
class ValidationResult(Generic[T]):
    """
    Normalised value plus non-fatal findings.

    Failures are not represented here: validators raise
    ``tripdesk.core.exceptions.ValidationError`` instead.
    """

    value: T
    warnings: List[str] = field(default_factory=list)

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)
