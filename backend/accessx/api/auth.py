"""Instructor authentication endpoints."""
from flask import Blueprint, request
from flask_jwt_extended import jwt_required, get_jwt_identity
from accessx import limiter
from accessx.services.auth_service import AuthService
from accessx.utils.helpers import success_response, error_response

auth_bp = Blueprint("auth", __name__)

@auth_bp.route("/register", methods=["POST"])
@limiter.limit("10 per hour")
def register():
    """Register an instructor account."""
    data = request.get_json(silent=True) or {}

    instructor = AuthService.register(
        data.get("email", ""),
        data.get("password", ""),
        data.get("walletAddress", "")
    )
    return success_response(data=instructor, message="Instructor registered"), 201

@auth_bp.route("/login", methods=["POST"])
@limiter.limit("5 per minute")
def login():
    """Instructor login."""
    data = request.get_json(silent=True)

    if not data:
        return error_response("Request body must be JSON", 400)

    result = AuthService.login(data.get("email", ""), data.get("password", ""))
    return success_response(data=result, message="Login successful")

@auth_bp.route("/me", methods=["GET"])
@jwt_required()
def me():
    """Current instructor profile."""
    instructor = AuthService.get_by_wallet(get_jwt_identity())
    if not instructor:
        return error_response("Instructor not found", 404)
    return success_response(data=instructor.to_dict())
