"""Canonical form of a raw student submission, applied before validation."""
from typing import Any, Dict, Mapping

# field -> case transform applied after stripping whitespace
_TEXT_FIELDS = {
    "rollNumber": str.upper,
    "fullName": None,
    "className": None,
    "section": str.upper,
    "guardianName": None,
    "address": None,
    "email": str.lower,
}


def normalize_student_payload(payload: Mapping[str, Any] = None) -> Dict[str, Any]:
    """
    Return a copy of ``payload`` with the text fields trimmed and cased.

    Only fields present in the input are touched and no defaults are added.
    Values of the wrong type are passed through so validation can report
    them; a numeric rollNumber is turned into its string form.
    """
    normalized = dict(payload or {})

    roll_number = normalized.get("rollNumber")
    if roll_number is not None and not isinstance(roll_number, (str, bool)):
        normalized["rollNumber"] = str(roll_number)

    for field, transform in _TEXT_FIELDS.items():
        value = normalized.get(field)
        if not isinstance(value, str):
            continue
        value = value.strip()
        if transform is not None:
            value = transform(value)
        normalized[field] = value

    return normalized
