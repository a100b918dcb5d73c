import logging
from typing import Any, Dict, List, Optional

from student_records.schemas.student import Student, StudentSummary
from student_records.services.student.filters import build_student_filters
from student_records.services.student.normalizer import normalize_student_payload
from student_records.services.student.store import StudentStore
from student_records.services.student.summary import summarize_students

logger = logging.getLogger(__name__)


def get_student(store: StudentStore, student_id: str) -> Student:
    """Get one student by id"""
    return store.get(student_id)


def list_students(
    store: StudentStore,
    search: Optional[str] = None,
    class_name: Optional[str] = None,
    status: Optional[str] = None,
) -> List[Student]:
    """List students matching the filters, ordered by roll number"""
    filters = build_student_filters(search=search, class_name=class_name, status=status)
    return store.list(filters)


def create_student(store: StudentStore, payload: Dict[str, Any]) -> Student:
    """Create a new student"""
    student = store.create(normalize_student_payload(payload))
    logger.info(f"Created student {student.roll_number} ({student.id})")
    return student


def update_student(store: StudentStore, student_id: str, payload: Dict[str, Any]) -> Student:
    """Update a student's record"""
    student = store.update(student_id, normalize_student_payload(payload))
    logger.info(f"Updated student {student.roll_number} ({student.id})")
    return student


def delete_student(store: StudentStore, student_id: str) -> None:
    """Delete a student"""
    store.delete(student_id)
    logger.info(f"Deleted student {student_id}")


def get_summary(store: StudentStore) -> StudentSummary:
    """Counts over the whole collection, ignoring any list filters"""
    return summarize_students(store)
