from tripdesk.services.base.base_service import BaseService
from tripdesk.services.base.validation_result import ValidationResult

__all__ = [
    "BaseService",
    "ValidationResult",
]
