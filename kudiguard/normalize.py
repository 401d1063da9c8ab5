"""Coerce user-typed answers into the types the field catalog declares."""

import math
import re
from typing import Any, Dict, Mapping

from kudiguard.errors import InputValidationError
from kudiguard.fields import FieldSpec, fields_for
from kudiguard.state import Intent

TRUE_WORDS = {"true", "yes", "y", "1"}
FALSE_WORDS = {"false", "no", "n", "0"}
SUFFIXES = {"k": 1_000, "m": 1_000_000}
NUMBER_RE = re.compile(r"^(-?\d+(?:\.\d+)?)([km]?)$")


def parse_number(value: Any) -> float:
    """
    Parse 150000, "150,000", "150k" or "1.5m".

    Raises ValueError for anything else, including booleans.
    """
    if isinstance(value, bool):
        raise ValueError("booleans are not numbers")
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip().lower().replace(",", "").replace("₦", "")
        match = NUMBER_RE.match(text)
        if not match:
            raise ValueError(f"{value!r} is not a number")
        digits, suffix = match.groups()
        number = float(digits) * SUFFIXES.get(suffix, 1)
    if math.isnan(number) or math.isinf(number):
        raise ValueError(f"{value!r} is not a finite number")
    return int(number) if number.is_integer() else number


def parse_boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in TRUE_WORDS:
        return True
    if text in FALSE_WORDS:
        return False
    raise ValueError(f"{value!r} is not yes/no")


def coerce_value(spec: FieldSpec, value: Any) -> Any:
    """Coerce and range-check one answer, raising InputValidationError on bad input."""
    try:
        if spec.type == "boolean":
            return parse_boolean(value)
        if spec.type == "enum":
            text = str(value).strip().lower()
            if text not in spec.options:
                raise ValueError(f"must be one of: {', '.join(spec.options)}")
            return text
        number = parse_number(value)
    except ValueError as e:
        raise InputValidationError(
            f"Invalid value for {spec.name}.", f"{spec.name}: {e}", field=spec.name
        ) from e

    if spec.minimum is not None and number < spec.minimum:
        raise InputValidationError(
            f"Invalid value for {spec.name}.", f"{spec.name} cannot be less than {spec.minimum:g}.", field=spec.name
        )
    if spec.maximum is not None and number > spec.maximum:
        raise InputValidationError(
            f"Invalid value for {spec.name}.", f"{spec.name} cannot be more than {spec.maximum:g}.", field=spec.name
        )
    if not spec.can_be_zero_or_none and number <= 0:
        raise InputValidationError(
            f"Invalid value for {spec.name}.", f"{spec.name} must be greater than zero.", field=spec.name
        )
    return number


def normalize_payload(intent: Intent, payload: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Return a new payload holding only ``intent``'s fields, typed and validated.

    Unknown keys are dropped. ``None`` and empty strings stay "not yet known".
    """
    normalized: Dict[str, Any] = {}
    for spec in fields_for(intent):
        value = payload.get(spec.name)
        if value is None or (isinstance(value, str) and not value.strip()):
            continue
        normalized[spec.name] = coerce_value(spec, value)
    return normalized
