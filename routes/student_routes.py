from flask import Blueprint, jsonify
from flask_login import current_user

from services.aggregator_service import get_student_view
from services.user_service import get_profile
from utils.decorators import role_required

student_bp = Blueprint("student", __name__, url_prefix="/student")


@student_bp.route("/me/marks")
@role_required("student")
def my_marks():
    return jsonify({"labs": get_student_view(current_user.user_id)})


@student_bp.route("/me/profile")
@role_required("student")
def my_profile():
    return jsonify({"student": get_profile(current_user.user_id)})
