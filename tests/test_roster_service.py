"""
Tests for resolving the students of a lab assignment
"""
import pytest

from services.exceptions import NotFoundError
from services.roster_service import resolve_batch_filter, resolve_students


def usernames(students):
    return [s.username for s in students]


class TestBatchFilter:

    @pytest.mark.parametrize("override, assignment_batch, expected", [
        (None, "All", None),
        ("All", "All", None),
        ("Batch-1", "All", "Batch-1"),
        (None, "Batch-2", "Batch-2"),
        ("All", "Batch-2", "Batch-2"),
        ("batch-1", "Batch-2", "Batch-1"),
        ("", "Batch-2", "Batch-2"),
    ])
    def test_precedence(self, override, assignment_batch, expected):
        assert resolve_batch_filter(override, assignment_batch) == expected


class TestResolveStudents:

    def test_all_batches_sorted_by_username(self, ctx, seeded):
        students = resolve_students(seeded["assignment"])

        assert usernames(students) == ["1001", "1002", "1003", "1004", "1005"]

    def test_assignment_batch_applies_without_override(self, ctx, seeded):
        students = resolve_students(seeded["batch_assignment"])

        # Students with no batch attend every batch
        assert usernames(students) == ["1003", "1004", "1005"]

    def test_batch_override(self, ctx, seeded):
        students = resolve_students(seeded["batch_assignment"], batch="Batch-1")

        assert usernames(students) == ["1001", "1002", "1005"]

    def test_section_override(self, ctx, seeded):
        students = resolve_students(seeded["assignment"], section="b")

        assert usernames(students) == ["2001"]

    def test_other_semesters_excluded(self, ctx, seeded):
        assert "3001" not in usernames(resolve_students(seeded["assignment"]))

    def test_missing_assignment(self, ctx, seeded):
        with pytest.raises(NotFoundError):
            resolve_students(4242)
