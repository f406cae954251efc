from flask import Blueprint, jsonify, request
from flask_login import current_user

from services.assignment_service import create_assignment, describe_assignment, list_assignments
from services.lab_service import bulk_create_labs, create_lab, list_labs
from services.user_service import bulk_create_users, create_user, delete_user, list_users
from utils.decorators import role_required

admin_bp = Blueprint("admin", __name__, url_prefix="/admin")


# =========================================================
# USERS
# =========================================================
@admin_bp.route("/users", methods=["POST"])
@role_required("admin")
def add_user():
    data = request.get_json(silent=True) or {}
    user = create_user(
        name=data.get("name"),
        username=data.get("username"),
        password=data.get("password"),
        role=data.get("role"),
        department=data.get("department"),
        semester=data.get("semester"),
        section=data.get("section"),
        batch=data.get("batch")
    )
    return jsonify({
        "status": "success",
        "message": f"{user.role} added successfully",
        "user": user.to_dict()
    }), 201


@admin_bp.route("/users/bulk", methods=["POST"])
@role_required("admin")
def bulk_import_users():
    data = request.get_json(silent=True) or {}
    created, failed = bulk_create_users(data.get("users") or [])
    return jsonify({
        "status": "success",
        "message": f"{len(created)} users imported successfully",
        "users": [u.to_dict() for u in created],
        "failed": failed
    }), 201


@admin_bp.route("/users", methods=["GET"])
@role_required("admin")
def get_users():
    users = list_users(role=request.args.get("role"))
    return jsonify({"users": [u.to_dict() for u in users]})


@admin_bp.route("/users/<int:user_id>", methods=["DELETE"])
@role_required("admin")
def remove_user(user_id):
    # Self-deletion is rejected by the service
    delete_user(user_id, acting_user_id=current_user.user_id)
    return jsonify({"status": "success", "message": "User deleted successfully"})


# =========================================================
# LABS
# =========================================================
@admin_bp.route("/labs", methods=["POST"])
@role_required("admin")
def add_lab():
    data = request.get_json(silent=True) or {}
    lab = create_lab(
        lab_code=data.get("lab_code"),
        lab_name=data.get("lab_name"),
        semester=data.get("semester"),
        department=data.get("department")
    )
    return jsonify({"status": "success", "lab": lab.to_dict()}), 201


@admin_bp.route("/labs/bulk", methods=["POST"])
@role_required("admin")
def bulk_import_labs():
    data = request.get_json(silent=True) or {}
    created, failed = bulk_create_labs(data.get("labs") or [])
    return jsonify({
        "status": "success",
        "message": f"{len(created)} labs imported successfully",
        "labs": [lab.to_dict() for lab in created],
        "failed": failed
    }), 201


@admin_bp.route("/labs", methods=["GET"])
@role_required("admin")
def get_labs():
    labs = list_labs(semester=request.args.get("semester"))
    return jsonify({"labs": [lab.to_dict() for lab in labs]})


# =========================================================
# LAB ASSIGNMENTS
# =========================================================
@admin_bp.route("/assignments", methods=["POST"])
@role_required("admin")
def assign_lab():
    data = request.get_json(silent=True) or {}
    assignment = create_assignment(
        lab_id=data.get("lab_id"),
        faculty_id=data.get("faculty_id"),
        section=data.get("section"),
        academic_year=data.get("academic_year"),
        semester_type=data.get("semester_type"),
        start_date=data.get("start_date"),
        end_date=data.get("end_date"),
        day_of_week=data.get("day_of_week"),
        batch=data.get("batch")
    )
    return jsonify({
        "status": "success",
        "message": "Lab assigned successfully",
        "assignment": describe_assignment(assignment)
    }), 201


@admin_bp.route("/assignments", methods=["GET"])
@role_required("admin")
def get_assignments():
    return jsonify({"assignments": list_assignments()})
