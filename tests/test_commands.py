"""
Tests for the flask CLI maintenance commands
"""
from models import User


def test_seed_admin_is_idempotent(app):
    runner = app.test_cli_runner()

    first = runner.invoke(args=["seed-admin", "--username", "root", "--password", "pw123456"])
    second = runner.invoke(args=["seed-admin", "--username", "root", "--password", "pw123456"])

    assert "created" in first.output
    assert "already exists" in second.output
    with app.app_context():
        assert User.query.filter_by(username="root", role="admin").count() == 1


def test_assign_batches(app, seeded):
    result = app.test_cli_runner().invoke(args=["assign-batches", "--extra-to", "Batch-1"])

    assert result.exit_code == 0, result.output
    assert "Semester 3 | Section A -> total 5 | Batch-1: 3, Batch-2: 2" in result.output
    with app.app_context():
        assert User.query.filter_by(username="1003").one().batch == "Batch-1"
