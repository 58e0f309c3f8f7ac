"""
Tests for news items and cross-brand news assignments.

Tests cover:
- Typed extras on news
- Admin assignment of news to brands (session + role)
- Brand accepting/rejecting assignments (builder token)
- GET /news-api/list?include_assigned=true
"""
import pytest

from brandstudio.extensions import db
from brandstudio.models import NewsBrandAssignment


@pytest.fixture
def polar_news(save_draft, publish, other_brand_id, other_auth_headers):
    """A published news item owned by the other brand."""

    def _create(slug="northern-lights", **extras):
        news = save_draft(
            "news",
            headers=other_auth_headers,
            brand_id=other_brand_id,
            title=slug.replace("-", " ").title(),
            slug=slug,
            author_type="admin",
            **extras,
        ).get_json()
        publish("news", news["id"], headers=other_auth_headers, body_html="<article/>")
        return news["id"]

    return _create


def _assign(client, headers, news_id, brand_ids):
    return client.post(f"/news-api/{news_id}/assign", json={"brand_ids": brand_ids}, headers=headers)


class TestNewsExtras:
    """Tests for news-specific fields."""

    def test_extras_round_trip(self, client, save_draft, brand_id):
        news = save_draft(
            "news",
            title="Summer sale",
            slug="summer-sale",
            excerpt="Half price",
            tags=["sale", "summer"],
        ).get_json()

        item = client.get(f"/news-api/{news['id']}?brand_id={brand_id}").get_json()["item"]
        assert item["excerpt"] == "Half price"
        assert item["tags"] == ["sale", "summer"]
        assert item["is_mandatory"] is False

    def test_tags_must_be_a_list(self, save_draft):
        response = save_draft("news", title="Sale", slug="sale", tags="sale")
        assert response.status_code == 400

    def test_unknown_fields_are_ignored(self, save_draft):
        response = save_draft("news", title="Sale", slug="sale", color="red")
        assert response.status_code == 200


class TestNewsAssignment:
    """Tests for offering news to brands."""

    def test_admin_assigns_pending(self, client, admin_session_headers, polar_news, brand_id):
        response = _assign(client, admin_session_headers, polar_news(), [brand_id])

        assert response.status_code == 201
        items = response.get_json()["items"]
        assert len(items) == 1
        assert items[0]["brand_id"] == brand_id
        assert items[0]["status"] == "pending"

    def test_mandatory_news_is_imposed(self, client, admin_session_headers, polar_news, brand_id):
        news_id = polar_news(slug="safety-notice", is_mandatory=True)

        response = _assign(client, admin_session_headers, news_id, [brand_id])

        assert response.get_json()["items"][0]["status"] == "mandatory"

    def test_reassigning_keeps_brand_answer(self, app, client, admin_session_headers, auth_headers, polar_news, brand_id):
        news_id = polar_news()
        assignment_id = _assign(client, admin_session_headers, news_id, [brand_id]).get_json()["items"][0]["id"]
        client.post(
            f"/news-api/assignments/{assignment_id}", json={"status": "rejected"}, headers=auth_headers
        )

        _assign(client, admin_session_headers, news_id, [brand_id])

        with app.app_context():
            assert NewsBrandAssignment.query.count() == 1
            assert db.session.get(NewsBrandAssignment, assignment_id).status == "rejected"

    def test_brand_user_cannot_assign(self, client, session_headers, polar_news, brand_id):
        response = _assign(client, session_headers, polar_news(), [brand_id])
        assert response.status_code == 403

    def test_builder_token_cannot_assign(self, client, auth_headers, polar_news, brand_id):
        response = _assign(client, auth_headers, polar_news(), [brand_id])
        assert response.status_code == 401

    def test_unknown_brand_is_404(self, client, admin_session_headers, polar_news):
        response = _assign(client, admin_session_headers, polar_news(), ["no-such-brand"])
        assert response.status_code == 404

    def test_brand_ids_must_be_a_list_of_ids(self, app, client, admin_session_headers, polar_news, brand_id):
        news_id = polar_news()

        for brand_ids in (5, brand_id, [], [{"id": brand_id}]):
            response = _assign(client, admin_session_headers, news_id, brand_ids)

            assert response.status_code == 400
            assert response.get_json() == {"error": "brand_ids must be a non-empty list of strings"}

        with app.app_context():
            assert NewsBrandAssignment.query.count() == 0


class TestAssignmentResponse:
    """Tests for POST /news-api/assignments/<id>."""

    def test_accepted_news_is_listed(self, client, admin_session_headers, auth_headers, save_draft, publish, polar_news, brand_id):
        own = save_draft("news", title="Our news", slug="our-news").get_json()
        publish("news", own["id"], body_html="<article/>")

        news_id = polar_news()
        assignment_id = _assign(client, admin_session_headers, news_id, [brand_id]).get_json()["items"][0]["id"]

        listed = client.get(f"/news-api/list?brand_id={brand_id}&include_assigned=true").get_json()
        assert [item["id"] for item in listed["items"]] == [own["id"]]

        response = client.post(
            f"/news-api/assignments/{assignment_id}", json={"status": "accepted"}, headers=auth_headers
        )
        assert response.status_code == 200
        assert response.get_json()["status"] == "accepted"

        listed = client.get(f"/news-api/list?brand_id={brand_id}&include_assigned=true").get_json()
        by_id = {item["id"]: item for item in listed["items"]}
        assert set(by_id) == {own["id"], news_id}
        assert by_id[news_id]["assignment_status"] == "accepted"
        assert by_id[news_id]["author_type"] == "admin"
        assert by_id[own["id"]]["assignment_status"] is None

    def test_without_flag_only_own_news(self, client, admin_session_headers, auth_headers, polar_news, brand_id):
        news_id = polar_news(slug="mandatory-news", is_mandatory=True)
        _assign(client, admin_session_headers, news_id, [brand_id])

        assert client.get(f"/news-api/list?brand_id={brand_id}").get_json()["items"] == []

        listed = client.get(f"/news-api/list?brand_id={brand_id}&include_assigned=true").get_json()
        assert [item["id"] for item in listed["items"]] == [news_id]

    def test_mandatory_cannot_be_rejected(self, client, admin_session_headers, auth_headers, polar_news, brand_id):
        news_id = polar_news(slug="safety-notice", is_mandatory=True)
        assignment_id = _assign(client, admin_session_headers, news_id, [brand_id]).get_json()["items"][0]["id"]

        response = client.post(
            f"/news-api/assignments/{assignment_id}", json={"status": "rejected"}, headers=auth_headers
        )
        assert response.status_code == 400

    def test_other_brand_cannot_answer(self, client, admin_session_headers, other_auth_headers, polar_news, brand_id):
        assignment_id = _assign(client, admin_session_headers, polar_news(), [brand_id]).get_json()["items"][0]["id"]

        response = client.post(
            f"/news-api/assignments/{assignment_id}", json={"status": "accepted"}, headers=other_auth_headers
        )
        assert response.status_code == 403

    def test_invalid_answer_is_400(self, client, admin_session_headers, auth_headers, polar_news, brand_id):
        assignment_id = _assign(client, admin_session_headers, polar_news(), [brand_id]).get_json()["items"][0]["id"]

        response = client.post(
            f"/news-api/assignments/{assignment_id}", json={"status": "maybe"}, headers=auth_headers
        )
        assert response.status_code == 400
