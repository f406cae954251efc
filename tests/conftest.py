"""
Lab CIE Portal - Test Configuration and Fixtures
"""
import pytest

from app import create_app
from config.config import TestConfig
from extensions import db as _db
from services.assignment_service import create_assignment
from services.lab_service import create_lab
from services.user_service import create_user

PASSWORD = "secret123"


@pytest.fixture
def app():
    """Fresh app with its own in-memory database for each test"""
    app = create_app(TestConfig)
    with app.app_context():
        _db.create_all()
    yield app
    with app.app_context():
        _db.drop_all()


@pytest.fixture
def ctx(app):
    """App context for calling services directly"""
    with app.app_context():
        yield app
        _db.session.remove()


@pytest.fixture
def seeded(app):
    """Users, labs and two assignments; returns their ids"""
    with app.app_context():
        admin = create_user("Admin", "admin", PASSWORD, "admin")
        fac1 = create_user("Asha Rao", "fac1", PASSWORD, "faculty", department="CSE")
        fac2 = create_user("Ravi Kumar", "fac2", PASSWORD, "faculty", department="CSE")

        students = {}
        for username, name, semester, section, batch in [
            ("1001", "Anil", 3, "A", "Batch-1"),
            ("1002", "Bhavya", 3, "A", "Batch-1"),
            ("1003", "Chetan", 3, "A", "Batch-2"),
            ("1004", "Divya", 3, "A", "Batch-2"),
            ("1005", "Esha", 3, "A", None),
            ("2001", "Farhan", 3, "B", "Batch-1"),
            ("3001", "Gita", 5, "A", None),
        ]:
            user = create_user(name, username, PASSWORD, "student", department="CSE",
                               semester=semester, section=section, batch=batch)
            students[username] = user.user_id

        lab = create_lab("CSL37", "Data Structures Lab", 3, "CSE")
        lab2 = create_lab("CSL38", "Networks Lab", 3, "CSE")

        assignment = create_assignment(
            lab_id=lab.lab_id,
            faculty_id=fac1.user_id,
            section="A",
            academic_year="2024-25",
            semester_type="Even",
            start_date="2025-01-01",
            end_date="2025-02-28",
            day_of_week="Monday"
        )
        batch_assignment = create_assignment(
            lab_id=lab2.lab_id,
            faculty_id=fac2.user_id,
            section="A",
            batch="Batch-2",
            academic_year="2024-25",
            semester_type="Even",
            start_date="2025-01-01",
            end_date="2025-01-31",
            day_of_week="Wednesday"
        )

        ids = {
            "admin": admin.user_id,
            "fac1": fac1.user_id,
            "fac2": fac2.user_id,
            "students": students,
            "lab": lab.lab_id,
            "lab2": lab2.lab_id,
            "assignment": assignment.assignment_id,
            "batch_assignment": batch_assignment.assignment_id,
        }
        _db.session.remove()
    return ids


def login(client, username, password=PASSWORD):
    response = client.post("/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.get_json()
    return client


@pytest.fixture
def admin_client(app, seeded):
    return login(app.test_client(), "admin")


@pytest.fixture
def faculty_client(app, seeded):
    return login(app.test_client(), "fac1")


@pytest.fixture
def student_client(app, seeded):
    return login(app.test_client(), "1001")
