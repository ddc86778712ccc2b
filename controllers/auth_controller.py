# controllers/auth_controller.py
from flask import Blueprint, request, g

from controllers.auth_helpers import auth_required
from middlewares.auth import extract_bearer
from services.password_service import PasswordService
from services.token_service import TokenService
from services.user_service import UserService
from utils.exceptions import BizError
from utils.permissions import get_current_identity
from utils.response import json_response


auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")


@auth_bp.errorhandler(BizError)
def _biz_error(e: BizError):
    return json_response(e.to_dict(), e.code)


@auth_bp.post("/register")
def register():
    data = request.get_json(silent=True) or {}
    result = UserService.register(
        name=data.get("name"),
        username=data.get("username"),
        password=data.get("password"),
        role=data.get("role"),
    )
    return json_response(result)


@auth_bp.post("/login")
def login():
    data = request.get_json(silent=True) or {}
    result = UserService.authenticate(data.get("username"), data.get("password") or "")
    return json_response(result)


@auth_bp.post("/logout")
def logout():
    token = extract_bearer(request.headers.get("Authorization"))
    if token:
        TokenService.revoke(token)
    return json_response({"message": "Logged out"})


@auth_bp.put("/password")
@auth_required()
def change_password():
    data = request.get_json(silent=True) or {}
    identity = get_current_identity()
    result = PasswordService.change_password(
        user=g.current_user,
        current_password=data.get("currentPassword") or "",
        new_password=data.get("newPassword") or "",
        current_token=identity.token,
    )
    return json_response(result)


@auth_bp.put("/profile")
@auth_required()
def update_profile():
    data = request.get_json(silent=True) or {}
    user = UserService.update_profile(
        g.current_user,
        name=data.get("name"),
        username=data.get("username"),
    )
    return json_response({"user": user.to_public_dict()})
