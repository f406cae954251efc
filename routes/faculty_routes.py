from flask import Blueprint, jsonify, request, send_file
from flask_login import current_user

from services.aggregator_service import export_marks_sheet, get_assignment_progress, render_marks_sheet
from services.assignment_service import get_assignment, list_assignments_for_faculty
from services.ledger_service import get_history, submit_marks
from services.roster_service import resolve_students
from utils.decorators import role_required

faculty_bp = Blueprint("faculty", __name__, url_prefix="/faculty")


@faculty_bp.route("/labs")
@role_required("faculty")
def assigned_labs():
    return jsonify({"labs": list_assignments_for_faculty(current_user.user_id)})


@faculty_bp.route("/labs/<int:assignment_id>/students")
@role_required("faculty")
def lab_students(assignment_id):
    students = resolve_students(
        assignment_id,
        section=request.args.get("section"),
        batch=request.args.get("batch"),
        faculty_id=current_user.user_id
    )
    return jsonify({"students": [s.to_dict() for s in students]})


@faculty_bp.route("/labs/<int:assignment_id>/marks", methods=["POST"])
@role_required("faculty")
def enter_marks(assignment_id):
    data = request.get_json(silent=True) or {}
    result = submit_marks(
        assignment_id,
        data.get("date"),
        data.get("entries") or [],
        entered_by=current_user.user_id,
        section=data.get("section"),
        batch=data.get("batch"),
        faculty_id=current_user.user_id
    )
    payload = result.to_dict()
    payload["status"] = "success" if not result.failed else "partial"
    return jsonify(payload)


@faculty_bp.route("/labs/<int:assignment_id>/marks", methods=["GET"])
@role_required("faculty")
def marks_history(assignment_id):
    return jsonify({"marks": get_history(assignment_id, faculty_id=current_user.user_id)})


@faculty_bp.route("/labs/<int:assignment_id>/progress")
@role_required("faculty")
def lab_progress(assignment_id):
    return jsonify({"weeks": get_assignment_progress(assignment_id, faculty_id=current_user.user_id)})


@faculty_bp.route("/labs/<int:assignment_id>/marks/export")
@role_required("faculty")
def export_marks(assignment_id):
    file_format = request.args.get("format", "csv")
    assignment = get_assignment(assignment_id, faculty_id=current_user.user_id)
    df = export_marks_sheet(assignment.assignment_id)
    output = render_marks_sheet(df, file_format)

    if file_format == "excel":
        mimetype = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
        download_name = f"marks_{assignment.assignment_id}.xlsx"
    else:
        mimetype = "text/csv"
        download_name = f"marks_{assignment.assignment_id}.csv"

    return send_file(output, mimetype=mimetype, as_attachment=True, download_name=download_name)
