"""Aggregation pipelines behind GET /students/summary."""
from typing import Any, Dict, Iterable, List

from student_records.schemas.student import StudentSummary

UNKNOWN_LABEL = "Unknown"


def build_status_counts_pipeline() -> List[Dict]:
    return [
        {"$group": {"_id": "$status", "count": {"$sum": 1}}},
    ]


def build_class_counts_pipeline() -> List[Dict]:
    return [
        {"$group": {"_id": "$className", "count": {"$sum": 1}}},
        {"$sort": {"count": -1}},
    ]


def format_counts(rows: Iterable[Dict[str, Any]]) -> Dict[str, int]:
    """Turn ``[{_id, count}]`` rows into a label -> count mapping, keeping row order."""
    counts: Dict[str, int] = {}
    for row in rows:
        key = row.get("_id")
        label = UNKNOWN_LABEL if key is None or key == "" else str(key)
        counts[label] = counts.get(label, 0) + row["count"]
    return counts


def summarize_students(store) -> StudentSummary:
    status_counts = format_counts(store.aggregate(build_status_counts_pipeline()))
    class_counts = format_counts(store.aggregate(build_class_counts_pipeline()))
    return StudentSummary(
        # every record falls in exactly one status bucket
        total=sum(status_counts.values()),
        status=status_counts,
        classes=class_counts,
    )
