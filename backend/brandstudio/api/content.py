"""
Content API blueprints, one per family.

Each family gets the same explicit route table; pages and news add a few
routes of their own. Reads are public, every write verifies the builder
token before anything else happens.
"""
from flask import Blueprint, g, jsonify, request

from brandstudio.application.content.assign_news import assign_news, respond_to_assignment
from brandstudio.application.content.delete_content import delete_content
from brandstudio.application.content.publish_content import publish_content
from brandstudio.application.content.read_content import (
    get_item,
    list_items,
    list_menu_pages,
    list_published_items,
    published_view,
)
from brandstudio.application.content.save_draft import save_draft
from brandstudio.application.content.unpublish_content import unpublish_content
from brandstudio.application.content.update_menu_settings import update_menu_settings
from brandstudio.domain.exceptions import ValidationError
from brandstudio.domain.families import FAMILIES
from brandstudio.domain.invariants.content import assert_scope
from brandstudio.extensions import db
from brandstudio.models.content_mixin import STATUS_PUBLISHED
from brandstudio.repositories.content import ContentRepository
from brandstudio.utils.decorators import (
    builder_token_required,
    roles_required,
    session_user_required,
)
from brandstudio.utils.optimistic_lock import read_lock_headers


def json_body():
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Invalid request body")
    return data


def build_content_blueprint(family) -> Blueprint:
    bp = Blueprint(family.blueprint_name, __name__, url_prefix=family.url_prefix)

    if family.structured_errors:
        @bp.before_request
        def use_structured_errors():
            g.error_envelope = "structured"

    def repo():
        return ContentRepository(db.session, family)

    def authorize_write():
        assert_scope(g.claims, family.scope)

    # ------------------------
    # Reads
    # ------------------------

    def list_view():
        return jsonify(list_items(
            repo=repo(),
            brand_id=request.args.get("brand_id"),
            status=request.args.get("status"),
            slug=request.args.get("slug"),
            page=request.args.get("page", type=int),
            per_page=request.args.get("per_page", type=int),
        ))

    def list_published_view():
        brand_id = request.args.get("brand_id")

        if family.key == "pages":
            return jsonify(list_menu_pages(
                repo=repo(),
                brand_id=brand_id,
                menu_key=request.args.get("menu_key"),
            ))

        return jsonify(list_published_items(
            repo=repo(),
            brand_id=brand_id,
            status=request.args.get("status", STATUS_PUBLISHED),
            include_assigned=request.args.get("include_assigned") == "true",
        ))

    def get_view(entity_id):
        return jsonify(get_item(
            repo=repo(),
            brand_id=request.args.get("brand_id"),
            entity_id=entity_id,
        ))

    def published_snapshot_view(brand_id):
        return jsonify(published_view(
            repo=repo(),
            brand_id=brand_id,
            slug=request.args.get("slug"),
        ))

    # ------------------------
    # Writes
    # ------------------------

    @builder_token_required
    def save_draft_view():
        authorize_write()
        expected_version, unmodified_since = read_lock_headers(request.headers)

        return jsonify(save_draft(
            repo=repo(),
            claims=g.claims,
            data=json_body(),
            expected_version=expected_version,
            unmodified_since=unmodified_since,
        ))

    @builder_token_required
    def publish_view(entity_id=None):
        authorize_write()
        return jsonify(publish_content(
            repo=repo(), claims=g.claims, data=json_body(), entity_id=entity_id
        ))

    @builder_token_required
    def unpublish_view(entity_id=None):
        authorize_write()
        return jsonify(unpublish_content(
            repo=repo(), claims=g.claims, data=json_body(), entity_id=entity_id
        ))

    @builder_token_required
    def delete_view(entity_id):
        authorize_write()
        return jsonify(delete_content(repo=repo(), claims=g.claims, entity_id=entity_id))

    routes = [
        ("GET", "", "list", list_view),
        ("GET", "/list", "list_published", list_published_view),
        ("GET", "/<entity_id>", "get", get_view),
        ("GET", "/<brand_id>/published", "published", published_snapshot_view),
        ("POST", "/saveDraft", "save_draft", save_draft_view),
        ("POST", "/publish", "publish", publish_view),
        ("POST", "/unpublish", "unpublish", unpublish_view),
        ("POST", "/<entity_id>/publish", "publish_by_id", publish_view),
        ("POST", "/<entity_id>/unpublish", "unpublish_by_id", unpublish_view),
        ("DELETE", "/<entity_id>", "delete", delete_view),
    ]

    # ------------------------
    # Family specific
    # ------------------------

    if family.key == "pages":
        @builder_token_required
        def menu_settings_view():
            authorize_write()
            return jsonify(update_menu_settings(repo=repo(), claims=g.claims, data=json_body()))

        routes.append(("POST", "/updateMenuSettings", "update_menu_settings", menu_settings_view))

    if family.key == "news":
        @session_user_required
        @roles_required("admin", "operator")
        def assign_view(entity_id):
            data = json_body()
            return jsonify(assign_news(
                session=db.session, news_id=entity_id, brand_ids=data.get("brand_ids")
            )), 201

        @builder_token_required
        def respond_view(assignment_id):
            authorize_write()
            return jsonify(respond_to_assignment(
                session=db.session,
                claims=g.claims,
                assignment_id=assignment_id,
                data=json_body(),
            ))

        routes.append(("POST", "/<entity_id>/assign", "assign", assign_view))
        routes.append(("POST", "/assignments/<assignment_id>", "respond", respond_view))

    for method, rule, endpoint, view in routes:
        bp.add_url_rule(rule, endpoint=endpoint, view_func=view, methods=[method])

    return bp


def register_content_blueprints(app):
    for family in FAMILIES.values():
        app.register_blueprint(build_content_blueprint(family))
