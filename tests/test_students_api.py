# tests/test_students_api.py

from bson import ObjectId
from pymongo.errors import PyMongoError

from conftest import make_payload


def create(client, **overrides):
    response = client.post("/students", json=make_payload(**overrides))
    assert response.status_code == 201, response.text
    return response.json()


def test_root(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["docs"] == "/docs"


def test_create_student_normalizes_payload(client):
    data = create(client, rollNumber=" r01 ", email="A@B.com", section=" c ")

    assert data["rollNumber"] == "R01"
    assert data["email"] == "a@b.com"
    assert data["section"] == "C"
    assert data["status"] == "Active"
    assert ObjectId.is_valid(data["_id"])
    assert "createdAt" in data and "updatedAt" in data


def test_create_duplicate_roll_number_case_insensitive(client):
    create(client, rollNumber="R01", email="first@example.com")

    response = client.post("/students", json=make_payload(rollNumber="r01", email="second@example.com"))

    assert response.status_code == 409
    error = response.json()["error"]
    assert error["code"] == "DUPLICATE_KEY"
    assert error["message"] == "rollNumber already exists"


def test_create_duplicate_email_case_insensitive(client):
    create(client, rollNumber="R01", email="same@example.com")

    response = client.post("/students", json=make_payload(rollNumber="R02", email="SAME@example.com"))

    assert response.status_code == 409
    assert response.json()["error"]["details"]["field"] == "email"


def test_create_validation_failure(client):
    payload = make_payload(status="Retired")
    del payload["phone"]

    response = client.post("/students", json=payload)

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"]["code"] == "VALIDATION_ERROR"
    assert set(body["error"]["details"]) == {"phone", "status"}


def test_create_rejects_non_object_body(client):
    response = client.post("/students", json=["not", "a", "record"])

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


def test_list_students_sorted(client):
    create(client, rollNumber="R03", email="c@example.com")
    create(client, rollNumber="R01", email="a@example.com")
    create(client, rollNumber="R02", email="b@example.com")

    response = client.get("/students")

    assert response.status_code == 200
    assert [s["rollNumber"] for s in response.json()] == ["R01", "R02", "R03"]


def test_list_students_filters(client):
    create(client, rollNumber="R01", email="a@example.com", fullName="Asha Verma", className="Grade 7")
    create(client, rollNumber="R02", email="b@example.com", fullName="Bina Das", className="Grade 7",
           status="On Leave")
    create(client, rollNumber="R03", email="c@example.com", fullName="Chirag Rao", className="Grade 8",
           guardianName="Asha Rao")

    def rolls(**params):
        response = client.get("/students", params=params)
        assert response.status_code == 200
        return [s["rollNumber"] for s in response.json()]

    assert rolls(status="Active") == ["R01", "R03"]
    assert rolls(status="On Leave") == ["R02"]
    assert rolls(className="Grade 7") == ["R01", "R02"]
    assert rolls(search="asha") == ["R01", "R03"]
    assert rolls(search="r02") == ["R02"]
    assert rolls(search="asha", className="Grade 8") == ["R03"]
    assert rolls(search="", className="", status="") == ["R01", "R02", "R03"]


def test_list_search_is_literal(client):
    create(client, rollNumber="R01", email="a@example.com", fullName="Asha Verma")

    response = client.get("/students", params={"search": "A.ha"})

    assert response.json() == []


def test_summary(client):
    create(client, rollNumber="R01", email="a@example.com", className="Grade 7")
    create(client, rollNumber="R02", email="b@example.com", className="Grade 7", status="Graduated")
    create(client, rollNumber="R03", email="c@example.com", className="Grade 8")

    response = client.get("/students/summary", params={"status": "Graduated"})

    assert response.status_code == 200
    assert response.json() == {
        "total": 3,
        "status": {"Active": 2, "Graduated": 1},
        "classes": {"Grade 7": 2, "Grade 8": 1},
    }


def test_get_student(client):
    created = create(client)

    response = client.get(f"/students/{created['_id']}")

    assert response.status_code == 200
    assert response.json()["rollNumber"] == "R01"


def test_get_student_not_found(client):
    assert client.get(f"/students/{ObjectId()}").status_code == 404
    response = client.get("/students/not-an-id")
    assert response.status_code == 404
    assert response.json()["error"]["message"] == "Student not found"


def test_update_student(client):
    created = create(client)

    response = client.put(f"/students/{created['_id']}",
                          json={"status": "On Leave", "email": " New@Example.com "})

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "On Leave"
    assert data["email"] == "new@example.com"
    assert data["rollNumber"] == created["rollNumber"]


def test_update_out_of_domain_status_leaves_record(client):
    created = create(client)

    response = client.put(f"/students/{created['_id']}", json={"status": "Expelled"})

    assert response.status_code == 400
    assert client.get(f"/students/{created['_id']}").json()["status"] == "Active"


def test_update_duplicate_email(client):
    create(client, rollNumber="R01", email="a@example.com")
    second = create(client, rollNumber="R02", email="b@example.com")

    response = client.put(f"/students/{second['_id']}", json={"email": "A@example.com"})

    assert response.status_code == 409
    assert response.json()["error"]["message"] == "email already exists"


def test_update_not_found(client):
    response = client.put(f"/students/{ObjectId()}", json={"status": "Active"})

    assert response.status_code == 404


def test_delete_student(client):
    created = create(client)

    response = client.delete(f"/students/{created['_id']}")

    assert response.status_code == 200
    assert response.json() == {"message": "Student deleted successfully"}
    assert client.get(f"/students/{created['_id']}").status_code == 404


def test_delete_unknown_student(client):
    create(client)

    response = client.delete(f"/students/{ObjectId()}")

    assert response.status_code == 404
    assert len(client.get("/students").json()) == 1


def test_list_and_get_document_missing_fields(client, collection):
    create(client, rollNumber="R01", email="a@example.com")
    legacy_id = collection.insert_one({"rollNumber": "R99", "email": "legacy@example.com"}).inserted_id

    listed = client.get("/students")
    fetched = client.get(f"/students/{legacy_id}")
    summary = client.get("/students/summary").json()

    assert listed.status_code == 200
    assert [s["rollNumber"] for s in listed.json()] == ["R01", "R99"]
    assert fetched.status_code == 200
    assert fetched.json()["status"] is None
    assert fetched.json()["_id"] == str(legacy_id)
    assert summary["status"] == {"Active": 1, "Unknown": 1}


def test_store_error_returns_500(client, store, monkeypatch):
    def fail(*args, **kwargs):
        raise PyMongoError("server selection timeout")

    monkeypatch.setattr(store.collection, "find", fail)
    monkeypatch.setattr(store.collection, "aggregate", fail)

    for path in ("/students", "/students/summary"):
        response = client.get(path)

        assert response.status_code == 500
        error = response.json()["error"]
        assert error["code"] == "STORE_ERROR"
        assert "server selection timeout" in error["message"]


def test_unsupported_method_uses_error_envelope(client):
    response = client.patch("/students")

    assert response.status_code == 405
    assert response.json() == {
        "success": False,
        "error": {"code": "HTTP_ERROR", "message": "Method Not Allowed", "details": None},
    }
    assert "GET" in response.headers["allow"]
