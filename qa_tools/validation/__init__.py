from qa_tools.validation.validation_utils import (
    ValidationResult,
    ValidationUtils,
    sanitize_for_logging,
)

__all__ = [
    "ValidationResult",
    "ValidationUtils",
    "sanitize_for_logging",
]
