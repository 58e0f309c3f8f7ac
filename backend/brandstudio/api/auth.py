from flask import current_app, g, jsonify, request

from brandstudio.application.builder.deeplink import ENTITY_PARAMS, compose_deeplink
from brandstudio.application.tokens.issue_token import (
    issue_builder_token,
    issue_session_token,
)
from brandstudio.domain.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ValidationError,
)
from brandstudio.extensions import db
from brandstudio.models.user import User
from brandstudio.utils.decorators import session_user_required
from . import api_bp


def _json_body():
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Invalid request body")
    return data


@api_bp.route("/auth/login", methods=["POST"])
def login():
    data = request.get_json(silent=True)
    if not data or not isinstance(data, dict):
        raise ValidationError("Invalid request body")

    email = data.get("email")
    password = data.get("password")

    if not isinstance(email, str) or not email or not password:
        raise ValidationError("Email and password required")

    user = User.query.filter_by(email=email.strip().lower()).first()

    if not user or not user.check_password(password):
        raise AuthenticationError("Invalid credentials", "INVALID_CREDENTIALS")

    if not user.is_active:
        raise AuthorizationError("User account disabled")

    return jsonify({
        "access_token": issue_session_token(user=user),
        "user": {
            "id": user.id,
            "email": user.email,
            "role": user.role,
            "brand_id": user.brand_id,
        },
    }), 200


@api_bp.route("/token", methods=["POST"])
@session_user_required
def mint_builder_token():
    data = _json_body()

    issued = issue_builder_token(
        session=db.session,
        user=g.current_user,
        brand_id=data.get("brand_id"),
        scopes=data.get("scopes"),
    )

    return jsonify({
        "token": issued["token"],
        "brand_id": issued["brand_id"],
        "scope": issued["scope"],
        "expires_at": issued["expires_at"],
        "api_url": current_app.config["API_BASE_URL"],
    }), 200


@api_bp.route("/builder/deeplink", methods=["POST"])
@session_user_required
def builder_deeplink():
    """Mint a token and wrap it in the URL that opens the page builder."""
    data = _json_body()

    issued = issue_builder_token(
        session=db.session,
        user=g.current_user,
        brand_id=data.get("brand_id"),
    )

    refs = {name: data.get(name) for name in ENTITY_PARAMS}
    url = compose_deeplink(
        brand_id=issued["brand_id"],
        token=issued["token"],
        api_base=current_app.config["API_BASE_URL"],
        builder_base=current_app.config["BUILDER_BASE_URL"],
        **refs,
    )

    return jsonify({
        "url": url,
        "token": issued["token"],
        "brand_id": issued["brand_id"],
        "expires_at": issued["expires_at"],
    }), 200
