from flask import Blueprint, g, jsonify

from brandstudio.application.content.read_content import published_layouts
from brandstudio.extensions import db

layouts_bp = Blueprint("layouts_api", __name__, url_prefix="/layouts-api")


@layouts_bp.before_request
def use_structured_errors():
    g.error_envelope = "structured"


@layouts_bp.route("/<brand_id>/published", methods=["GET"])
def get_published_layouts(brand_id):
    """Everything the site shell needs in one call; empty defaults when unpublished."""
    return jsonify(published_layouts(session=db.session, brand_id=brand_id))
