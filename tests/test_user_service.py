"""
Tests for the user directory and labs
"""
import pytest
from werkzeug.security import check_password_hash

from models import User
from services.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from services.lab_service import bulk_create_labs, create_lab, list_labs
from services.ledger_service import submit_marks
from services.user_service import (
    bulk_create_users,
    create_user,
    delete_user,
    get_profile,
    list_users,
    update_password,
)


class TestCreateUser:

    def test_password_is_hashed(self, ctx):
        user = create_user("Hema", "4001", "pw123456", "student", semester=3, section="c")

        assert user.password_hash != "pw123456"
        assert check_password_hash(user.password_hash, "pw123456")
        assert user.section == "C"
        assert user.batch is None

    def test_duplicate_username(self, ctx):
        create_user("Hema", "4001", "pw", "student", semester=3, section="C")

        with pytest.raises(ConflictError):
            create_user("Other", "4001", "pw", "student", semester=3, section="C")

    @pytest.mark.parametrize("kwargs", [
        dict(role="hod"),
        dict(role="student", semester=None),
        dict(role="student", semester=9),
        dict(role="student", section=""),
        dict(role="student", batch="Batch-7"),
    ])
    def test_invalid_input(self, ctx, kwargs):
        payload = dict(name="X", username="x1", password="pw", role="student", semester=3, section="A")
        payload.update(kwargs)

        with pytest.raises(ValidationError):
            create_user(**payload)

    def test_bulk_import_reports_bad_rows(self, ctx):
        created, failed = bulk_create_users([
            {"name": "A", "username": "5001", "password": "pw", "role": "student", "semester": 1, "section": "A"},
            {"name": "B", "username": "5001", "password": "pw", "role": "student", "semester": 1, "section": "A"},
            {"name": "C", "username": "5003", "password": "pw", "role": "student"},
        ])

        assert [u.username for u in created] == ["5001"]
        assert [f["row"] for f in failed] == [1, 2]

    def test_profile_has_no_password(self, ctx, seeded):
        profile = get_profile(seeded["students"]["1001"])

        assert profile["username"] == "1001"
        assert "password_hash" not in profile and "password" not in profile

    def test_list_users_by_role(self, ctx, seeded):
        assert [u.username for u in list_users(role="faculty")] == ["fac1", "fac2"]


class TestDeleteUser:

    def test_admin_cannot_delete_self(self, ctx, seeded):
        with pytest.raises(ConflictError):
            delete_user(seeded["admin"], acting_user_id=seeded["admin"])

        assert User.query.filter_by(username="admin").first() is not None

    def test_delete_user(self, ctx, seeded):
        delete_user(seeded["students"]["3001"], acting_user_id=seeded["admin"])

        assert User.query.filter_by(username="3001").first() is None

    def test_delete_missing_user(self, ctx, seeded):
        with pytest.raises(NotFoundError):
            delete_user(9999, acting_user_id=seeded["admin"])

    def test_referenced_users_are_kept(self, ctx, seeded):
        submit_marks(seeded["assignment"], "2025-01-06",
                     [{"student_id": seeded["students"]["1001"], "marks": 5}],
                     entered_by=seeded["fac1"])

        with pytest.raises(ConflictError):
            delete_user(seeded["fac1"], acting_user_id=seeded["admin"])
        with pytest.raises(ConflictError):
            delete_user(seeded["students"]["1001"], acting_user_id=seeded["admin"])


class TestUpdatePassword:

    def test_update_password(self, ctx, seeded):
        update_password(seeded["students"]["1001"], "secret123", "newsecret")

        user = User.query.filter_by(username="1001").one()
        assert check_password_hash(user.password_hash, "newsecret")

    def test_wrong_current_password(self, ctx, seeded):
        with pytest.raises(AuthorizationError):
            update_password(seeded["students"]["1001"], "wrong", "newsecret")

    def test_empty_new_password(self, ctx, seeded):
        with pytest.raises(ValidationError):
            update_password(seeded["students"]["1001"], "secret123", " ")


class TestLabs:

    def test_create_and_filter(self, ctx):
        create_lab("csl57", "Web Lab", 5, "CSE")
        create_lab("CSL37", "DS Lab", 3, "CSE")

        assert [lab.lab_code for lab in list_labs()] == ["CSL37", "CSL57"]
        assert [lab.lab_code for lab in list_labs(semester="5")] == ["CSL57"]

    def test_bulk_labs(self, ctx):
        created, failed = bulk_create_labs([
            {"lab_code": "L1", "lab_name": "One", "semester": 1, "department": "CSE"},
            {"lab_code": "L2", "lab_name": "", "semester": 1, "department": "CSE"},
        ])

        assert len(created) == 1
        assert failed[0]["lab_code"] == "L2"
