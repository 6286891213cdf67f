"""
Customer account endpoints.
"""

from flask import Blueprint, jsonify, request

from ...exceptions import NotFoundError
from ...processing.account_service import AccountService
from ...storage.repository import SecurePayRepository


def create_users_blueprint(
    repository: SecurePayRepository, account_service: AccountService
) -> Blueprint:
    """Build the users blueprint."""
    users_bp = Blueprint("users", __name__)

    @users_bp.route("/api/users", methods=["GET"])
    def get_users():
        """List accounts."""
        return jsonify([user.to_dict() for user in repository.get_users()])

    @users_bp.route("/api/users", methods=["POST"])
    def create_user():
        """Create a customer account."""
        user = account_service.create_user(request.get_json(silent=True) or {})
        return jsonify(user.to_dict()), 201

    @users_bp.route("/api/users/<user_id>", methods=["GET"])
    def get_user(user_id):
        """Get a specific account."""
        user = repository.find_user(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return jsonify(user.to_dict())

    return users_bp
