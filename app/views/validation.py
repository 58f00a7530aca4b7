"""
Field validation for the teacher form.

Validators are pure functions: they take the raw field value and return a
``ValidationFailure`` or ``None``. Length, range and pattern checks skip empty
values so that an empty field only ever reports ``required``.
"""

import enum
import re
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Optional


class ValidationError(str, enum.Enum):
    REQUIRED = "required"
    MIN_LENGTH = "minlength"
    MAX_LENGTH = "maxlength"
    MIN = "min"
    MAX = "max"
    PATTERN = "pattern"
    FUTURE_DATE = "futureDate"


# Order in which a field's failures are reported, first match wins
ERROR_PRECEDENCE = [
    ValidationError.REQUIRED,
    ValidationError.MIN_LENGTH,
    ValidationError.MAX_LENGTH,
    ValidationError.MIN,
    ValidationError.MAX,
    ValidationError.PATTERN,
    ValidationError.FUTURE_DATE,
]


@dataclass(frozen=True)
class ValidationFailure:
    error: ValidationError
    limit: Optional[int] = None


Validator = Callable[[Any], Optional[ValidationFailure]]

NAME_PATTERN = re.compile(r"^[a-zA-Z\s]+$")
INTEGER_PATTERN = re.compile(r"^\d+$")


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == "")


def _as_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    try:
        return float(str(value).strip())
    except ValueError:
        return None


def parse_date(value: Any) -> Optional[date]:
    """Accept a ``date`` or an ISO ``YYYY-MM-DD`` string; anything else is None."""
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            return None
    return None


def required(value: Any) -> Optional[ValidationFailure]:
    if _is_empty(value) or (isinstance(value, str) and not value.strip()):
        return ValidationFailure(ValidationError.REQUIRED)
    return None


def min_length(length: int) -> Validator:
    def check(value: Any) -> Optional[ValidationFailure]:
        if not _is_empty(value) and len(str(value)) < length:
            return ValidationFailure(ValidationError.MIN_LENGTH, length)
        return None
    return check


def max_length(length: int) -> Validator:
    def check(value: Any) -> Optional[ValidationFailure]:
        if not _is_empty(value) and len(str(value)) > length:
            return ValidationFailure(ValidationError.MAX_LENGTH, length)
        return None
    return check


def min_value(minimum: int) -> Validator:
    def check(value: Any) -> Optional[ValidationFailure]:
        number = None if _is_empty(value) else _as_number(value)
        if number is not None and number < minimum:
            return ValidationFailure(ValidationError.MIN, minimum)
        return None
    return check


def max_value(maximum: int) -> Validator:
    def check(value: Any) -> Optional[ValidationFailure]:
        number = None if _is_empty(value) else _as_number(value)
        if number is not None and number > maximum:
            return ValidationFailure(ValidationError.MAX, maximum)
        return None
    return check


def pattern(regex: re.Pattern) -> Validator:
    def check(value: Any) -> Optional[ValidationFailure]:
        if not _is_empty(value) and not regex.match(str(value)):
            return ValidationFailure(ValidationError.PATTERN)
        return None
    return check


def past_date(today: Optional[date] = None) -> Validator:
    """Date must be strictly before ``today`` (defaults to the current date)."""
    def check(value: Any) -> Optional[ValidationFailure]:
        if _is_empty(value):
            return None
        selected = parse_date(value)
        reference = today or date.today()
        if selected is None or selected >= reference:
            return ValidationFailure(ValidationError.FUTURE_DATE)
        return None
    return check


FIELD_DISPLAY_NAMES = {
    "full_name": "Full Name",
    "date_of_birth": "Date of Birth",
    "number_of_classes": "Number of Classes",
}

PATTERN_MESSAGES = {
    "full_name": "Full name can only contain letters and spaces",
    "number_of_classes": "Number of classes must be a valid number",
}


def field_validators(field: str, today: Optional[date] = None) -> list[Validator]:
    if field == "full_name":
        return [required, min_length(2), max_length(100), pattern(NAME_PATTERN)]
    if field == "date_of_birth":
        return [required, past_date(today)]
    if field == "number_of_classes":
        return [required, min_value(1), max_value(50), pattern(INTEGER_PATTERN)]
    raise KeyError(f"Unknown form field: {field}")


def validate_field(field: str, value: Any, today: Optional[date] = None) -> list[ValidationFailure]:
    failures = []
    for validator in field_validators(field, today):
        failure = validator(value)
        if failure is not None:
            failures.append(failure)
    return failures


def validate_form(values: dict[str, Any], today: Optional[date] = None) -> dict[str, list[ValidationFailure]]:
    """Validate every form field. Fields without failures are left out."""
    errors = {}
    for field in FIELD_DISPLAY_NAMES:
        failures = validate_field(field, values.get(field), today)
        if failures:
            errors[field] = failures
    return errors


def error_message(field: str, failures: list[ValidationFailure]) -> str:
    by_error = {failure.error: failure for failure in failures}
    name = FIELD_DISPLAY_NAMES.get(field, field)

    for error in ERROR_PRECEDENCE:
        failure = by_error.get(error)
        if failure is None:
            continue
        if error is ValidationError.REQUIRED:
            return f"{name} is required"
        if error is ValidationError.MIN_LENGTH:
            return f"{name} must be at least {failure.limit} characters"
        if error is ValidationError.MAX_LENGTH:
            return f"{name} cannot exceed {failure.limit} characters"
        if error is ValidationError.MIN:
            return f"{name} must be at least {failure.limit}"
        if error is ValidationError.MAX:
            return f"{name} cannot exceed {failure.limit}"
        if error is ValidationError.PATTERN:
            if field in PATTERN_MESSAGES:
                return PATTERN_MESSAGES[field]
            continue
        if error is ValidationError.FUTURE_DATE:
            return "Date of birth must be in the past"
    return ""
