from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required, login_user, logout_user

from services.auth_service import authenticate_user
from services.user_service import update_password

# Define the blueprint
auth_bp = Blueprint("auth", __name__)


# =========================================================
# LOGIN ROUTE
# =========================================================
@auth_bp.route("/login", methods=["POST"])
def login():
    data = request.get_json(silent=True) or request.form
    username = (data.get("username") or "").strip()
    password = data.get("password") or ""

    # 1. Basic Validation
    if not username or not password:
        return jsonify({"error": "Username and password are required", "category": "validation"}), 400

    # 2. Authenticate User
    user = authenticate_user(username, password)
    if not user:
        return jsonify({"error": "Invalid username or password", "category": "authentication"}), 401

    # 3. Log the user in with Flask-Login
    login_user(user)

    return jsonify({"status": "success", "user": user.to_dict()})


# =========================================================
# LOGOUT ROUTE
# =========================================================
@auth_bp.route("/logout", methods=["POST"])
def logout():
    logout_user()
    return jsonify({"status": "success"})


# =========================================================
# PASSWORD CHANGE (any role)
# =========================================================
@auth_bp.route("/password", methods=["POST"])
@login_required
def change_password():
    data = request.get_json(silent=True) or {}
    update_password(
        current_user.user_id,
        data.get("current_password"),
        data.get("new_password")
    )
    return jsonify({"status": "success", "message": "Password updated"})
