# tests/conftest.py

import mongomock
import pytest
from fastapi.testclient import TestClient

from student_records.api.deps import get_student_store
from student_records.main import app
from student_records.services.student.store import StudentStore


def make_payload(**overrides):
    payload = {
        "rollNumber": "r01",
        "fullName": "Asha Verma",
        "gender": "Female",
        "dateOfBirth": "2011-02-14",
        "className": "Grade 7",
        "section": "b",
        "email": "Asha.Verma@Example.com",
        "phone": "9000000001",
        "guardianName": "Sunil Verma",
        "guardianPhone": "9000000002",
        "address": "21 Lake View, Bhopal",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def sample_payload():
    return make_payload()


@pytest.fixture
def collection():
    return mongomock.MongoClient().student_records.students


@pytest.fixture
def store(collection):
    student_store = StudentStore(collection)
    student_store.ensure_indexes()
    return student_store


@pytest.fixture
def populated_store(store):
    store.create(make_payload(rollNumber="R03", email="c@example.com", fullName="Chirag Rao",
                              className="Grade 8", status="Graduated"))
    store.create(make_payload(rollNumber="R01", email="a@example.com", fullName="Asha Verma",
                              className="Grade 7"))
    store.create(make_payload(rollNumber="R02", email="b@example.com", fullName="Bina Das",
                              className="Grade 7", status="On Leave", guardianName="Mohan Das"))
    return store


@pytest.fixture
def client(store):
    app.dependency_overrides[get_student_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()
