"""User and team endpoints."""

from flask import Blueprint, jsonify

from bizledger.domain.company import UserService
from bizledger.web import get_services
from bizledger.web.auth import current_principal, login_required
from bizledger.web.serializers import team_member_to_json, user_to_json

users_bp = Blueprint("users", __name__)


@users_bp.get("/users")
@login_required
def list_team():
    """List the members of the caller's company."""
    users = UserService(get_services().db).list_team(current_principal())
    return jsonify([team_member_to_json(user) for user in users])


@users_bp.get("/user/profile")
@login_required(require_company=False)
def profile():
    """Return the caller's own user record."""
    user = UserService(get_services().db).get_profile(current_principal())
    return jsonify(user=user_to_json(user))
