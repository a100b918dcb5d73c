import re
from typing import Any, Dict, Optional

SEARCH_FIELDS = ("fullName", "rollNumber", "guardianName")


def build_student_filters(
    search: Optional[str] = None,
    class_name: Optional[str] = None,
    status: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Build the MongoDB predicate used to list students.

    ``search`` is matched as a literal, case-insensitive substring of the
    name, roll number or guardian name. ``class_name`` and ``status`` must
    match exactly. Empty values add no constraint.
    """
    filters: Dict[str, Any] = {}
    if search:
        pattern = {"$regex": re.escape(search), "$options": "i"}
        filters["$or"] = [{field: pattern} for field in SEARCH_FIELDS]
    if class_name:
        filters["className"] = class_name
    if status:
        filters["status"] = status
    return filters
