"""Work type names and the prefixes used in work order numbers."""

import re

from workorders.models.work_type_counter import WORK_TYPE_CODE_MAX_LENGTH
from workorders.services.exceptions import ValidationError

WORK_TYPES: tuple[str, ...] = (
    "Mechanical",
    "Electrical",
    "Hydraulics",
    "Schedule Check",
    "Electrical Repair",
    "Painting",
    "Miscellaneous",
    "Customer Request",
    "Others",
)

WORK_TYPE_CODES: dict[str, str] = {
    "Mechanical": "M",
    "Electrical": "E",
    "Hydraulics": "H",
    "Schedule Check": "SC",
    "Electrical Repair": "ER",
    "Painting": "P",
    "Miscellaneous": "MS",
    "Customer Request": "CR",
    "Others": "O",
}

_CODES_BY_LOWER_NAME = {name.lower(): code for name, code in WORK_TYPE_CODES.items()}
_WORD_RE = re.compile(r"[A-Za-z0-9]+")


class InvalidWorkTypeError(ValidationError):
    """Work type name cannot be turned into a work type code."""

    pass


def check_code_length(code: str) -> str:
    """Reject codes that do not fit the counter table key."""
    if len(code) > WORK_TYPE_CODE_MAX_LENGTH:
        raise InvalidWorkTypeError(
            f"Work type code {code!r} is longer than {WORK_TYPE_CODE_MAX_LENGTH} characters"
        )
    return code


def is_work_type(value: str) -> bool:
    """Return True if value is one of the predefined work types."""
    return value in WORK_TYPES


def derive_work_type_code(work_type: str) -> str:
    """Map a work type name to its number prefix.

    Known names use the fixed table (case-insensitive). Anything else is
    abbreviated to the first letter of each word, e.g. "Air Conditioning" -> "AC".

    Raises:
        InvalidWorkTypeError: If the name is empty, contains no letters/digits
            or abbreviates to a code longer than WORK_TYPE_CODE_MAX_LENGTH
    """
    name = " ".join((work_type or "").split())
    if not name:
        raise InvalidWorkTypeError("Work type is required")

    code = _CODES_BY_LOWER_NAME.get(name.lower())
    if code:
        return code

    words = _WORD_RE.findall(name)
    if not words:
        raise InvalidWorkTypeError(f"Cannot derive a work type code from {work_type!r}")
    return check_code_length("".join(word[0] for word in words).upper())


def to_proper_case(text: str) -> str:
    """Capitalize the first letter of every word and lowercase the rest."""
    return re.sub(r"\S+", lambda m: m.group(0)[:1].upper() + m.group(0)[1:].lower(), text)
