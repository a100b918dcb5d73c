from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Query, status

from student_records.api.deps import get_student_store
from student_records.schemas.student import DeleteResponse, Student, StudentSummary
from student_records.services.student import student as crud_student
from student_records.services.student.store import StudentStore

router = APIRouter()


@router.get("", response_model=List[Student])
def get_students(
    search: Optional[str] = Query(None, description="Substring of name, roll number or guardian name"),
    class_name: Optional[str] = Query(None, alias="className"),
    student_status: Optional[str] = Query(None, alias="status"),
    store: StudentStore = Depends(get_student_store)
):
    """
    List students ordered by roll number

    - **search**: case-insensitive match on fullName, rollNumber, guardianName
    - **className**: exact class name
    - **status**: exact status (Active, Graduated, On Leave)
    """
    return crud_student.list_students(
        store, search=search, class_name=class_name, status=student_status
    )


@router.get("/summary", response_model=StudentSummary)
def get_summary(store: StudentStore = Depends(get_student_store)):
    """
    Total number of students with counts per status and per class
    """
    return crud_student.get_summary(store)


@router.get("/{student_id}", response_model=Student)
def get_student(
    student_id: str,
    store: StudentStore = Depends(get_student_store)
):
    return crud_student.get_student(store, student_id)


@router.post("", response_model=Student, status_code=status.HTTP_201_CREATED)
def create_student(
    payload: Dict[str, Any] = Body(...),
    store: StudentStore = Depends(get_student_store)
):
    """
    Create a new student

    Required: **rollNumber**, **fullName**, **className**, **email**,
    **phone**, **guardianName**, **guardianPhone**, **address**.
    rollNumber and email must be unique.
    """
    return crud_student.create_student(store, payload)


@router.put("/{student_id}", response_model=Student)
def update_student(
    student_id: str,
    payload: Dict[str, Any] = Body(...),
    store: StudentStore = Depends(get_student_store)
):
    """
    Update a student; the merged record is validated again in full
    """
    return crud_student.update_student(store, student_id, payload)


@router.delete("/{student_id}", response_model=DeleteResponse)
def delete_student(
    student_id: str,
    store: StudentStore = Depends(get_student_store)
):
    crud_student.delete_student(store, student_id)
    return DeleteResponse(message="Student deleted successfully")
