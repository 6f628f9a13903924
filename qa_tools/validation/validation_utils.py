"""
================================================================================
Validation Utilities
================================================================================

Field-presence, format and schema checks used by API tests and factories.

Checks return a ValidationResult instead of raising, so the caller decides
whether a failure is an assertion error, a skip or just a log line.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import copy
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping
from urllib.parse import urlparse


EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(r"^\+?\d{1,3}-?\d{3}-?\d{3}-?\d{4}$")

# Key fragments whose values are replaced before anything is logged
SENSITIVE_KEYS = ("password", "token", "authorization", "secret", "key", "auth")
REDACTED = "***REDACTED***"

# JSON-ish type names accepted by validate_schema
_TYPE_CHECKS = {
    "string": lambda v: isinstance(v, str),
    "number": lambda v: isinstance(v, (int, float)) and not isinstance(v, bool),
    "integer": lambda v: isinstance(v, int) and not isinstance(v, bool),
    "boolean": lambda v: isinstance(v, bool),
    "object": lambda v: isinstance(v, dict),
    "array": lambda v: isinstance(v, list),
}


@dataclass
class ValidationResult:
    """Outcome of a validation call."""

    is_valid: bool
    missing_fields: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.is_valid


class ValidationUtils:
    """
    Stateless validation helpers.

    Usage:
        >>> result = ValidationUtils.validate_required_fields(user, ["id", "email"])
        >>> assert result.is_valid, result.missing_fields
    """

    @staticmethod
    def is_valid_email(email: Any) -> bool:
        return isinstance(email, str) and bool(EMAIL_PATTERN.match(email))

    @staticmethod
    def is_valid_phone(phone: Any) -> bool:
        return isinstance(phone, str) and bool(PHONE_PATTERN.match(phone))

    @staticmethod
    def is_valid_url(url: Any) -> bool:
        """True for absolute URLs with a scheme and a host."""
        if not isinstance(url, str) or not url:
            return False
        parsed = urlparse(url)
        return bool(parsed.scheme) and bool(parsed.netloc)

    @staticmethod
    def validate_required_fields(
        obj: Mapping[str, Any],
        required_fields: Iterable[str],
    ) -> ValidationResult:
        """
        Check that every required field is present and non-empty.

        None and "" count as missing. Dot paths ("address.geo.lat") reach into
        nested mappings.

        Args:
            obj: Object to inspect
            required_fields: Field names or dot paths

        Returns:
            ValidationResult listing the missing fields
        """
        missing: List[str] = []
        for field_name in required_fields:
            value = _lookup(obj, field_name)
            if value is None or value == "":
                missing.append(field_name)

        errors = [f"Missing required field: {name}" for name in missing]
        return ValidationResult(is_valid=not missing, missing_fields=missing, errors=errors)

    @staticmethod
    def validate_schema(
        obj: Mapping[str, Any],
        schema: Mapping[str, Mapping[str, Any]],
    ) -> ValidationResult:
        """
        Validate an object against a flat rule schema.

        Supported rules per field: required, type, min_length, max_length,
        pattern, email.

        Example:
            >>> ValidationUtils.validate_schema(
            ...     {"email": "bad"},
            ...     {"email": {"required": True, "type": "string", "email": True}},
            ... ).errors
            ['email must be a valid email address']
        """
        errors: List[str] = []
        missing: List[str] = []

        for field_name, rules in schema.items():
            value = obj.get(field_name) if isinstance(obj, Mapping) else None

            if value is None or value == "":
                if rules.get("required"):
                    missing.append(field_name)
                    errors.append(f"{field_name} is required")
                continue

            expected_type = rules.get("type")
            if expected_type:
                check = _TYPE_CHECKS.get(expected_type)
                if check is None:
                    errors.append(f"{field_name} has unknown type rule '{expected_type}'")
                    continue
                if not check(value):
                    errors.append(
                        f"{field_name} must be of type {expected_type}, "
                        f"got {type(value).__name__}"
                    )
                    continue

            if isinstance(value, (str, list)):
                min_length = rules.get("min_length")
                max_length = rules.get("max_length")
                if min_length is not None and len(value) < min_length:
                    errors.append(f"{field_name} must be at least {min_length} characters")
                if max_length is not None and len(value) > max_length:
                    errors.append(f"{field_name} must be at most {max_length} characters")

            pattern = rules.get("pattern")
            if pattern and isinstance(value, str) and not re.search(pattern, value):
                errors.append(f"{field_name} does not match pattern {pattern}")

            if rules.get("email") and not ValidationUtils.is_valid_email(value):
                errors.append(f"{field_name} must be a valid email address")

        return ValidationResult(is_valid=not errors, missing_fields=missing, errors=errors)

    @staticmethod
    def deep_equal(left: Any, right: Any) -> bool:
        """Structural equality that does not treat True as 1."""
        if isinstance(left, bool) or isinstance(right, bool):
            return type(left) is type(right) and left == right
        if isinstance(left, Mapping) and isinstance(right, Mapping):
            if set(left.keys()) != set(right.keys()):
                return False
            return all(ValidationUtils.deep_equal(left[k], right[k]) for k in left)
        if isinstance(left, (list, tuple)) and isinstance(right, (list, tuple)):
            if len(left) != len(right):
                return False
            return all(ValidationUtils.deep_equal(a, b) for a, b in zip(left, right))
        return left == right

    @staticmethod
    def sanitize_for_logging(data: Any) -> Any:
        return sanitize_for_logging(data)


def sanitize_for_logging(data: Any) -> Any:
    """
    Return a deep copy of data with sensitive values replaced.

    Any key containing one of SENSITIVE_KEYS (case-insensitive) is redacted
    unless its value is itself a container, which is walked instead.
    """
    clone = copy.deepcopy(data)
    return _sanitize(clone)


def _sanitize(obj: Any) -> Any:
    if isinstance(obj, dict):
        for key, value in obj.items():
            if isinstance(value, (dict, list)):
                obj[key] = _sanitize(value)
            elif any(token in str(key).lower() for token in SENSITIVE_KEYS):
                obj[key] = REDACTED
        return obj
    if isinstance(obj, list):
        return [_sanitize(item) for item in obj]
    return obj


def _lookup(obj: Any, path: str) -> Any:
    current = obj
    for part in path.split("."):
        if isinstance(current, Mapping):
            current = current.get(part)
        else:
            return None
    return current


__all__ = [
    "ValidationUtils",
    "ValidationResult",
    "sanitize_for_logging",
    "EMAIL_PATTERN",
    "PHONE_PATTERN",
]
