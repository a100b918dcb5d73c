from fastapi import Request

from student_records.services.student.store import StudentStore


def get_student_store(request: Request) -> StudentStore:
    """
    Dependency returning the student store opened by the app lifespan.
    Tests override it with a store over an in-memory collection.
    """
    return request.app.state.student_store
