"""
Tests for the dashboard-facing routes.

Tests cover:
- POST /auth/login
- POST /token and POST /builder/deeplink
- Health check, CORS preflight and JSON errors for unknown routes
"""
from brandstudio.application.builder.deeplink import parse_deeplink
from brandstudio.extensions import db
from brandstudio.models import User


class TestLogin:
    """Tests for POST /auth/login."""

    def test_login_returns_session_token(self, client, brand_user_id, brand_id):
        response = client.post(
            "/auth/login",
            json={"email": "Editor@Sunset.test", "password": "correct-horse-battery"},
        )

        assert response.status_code == 200
        data = response.get_json()
        assert data["access_token"]
        assert data["user"]["brand_id"] == brand_id
        assert data["user"]["role"] == "brand"

    def test_wrong_password_is_401(self, client, brand_user_id):
        response = client.post(
            "/auth/login", json={"email": "editor@sunset.test", "password": "nope"}
        )

        assert response.status_code == 401
        assert response.get_json() == {"error": "Invalid credentials"}

    def test_missing_fields_is_400(self, client):
        response = client.post("/auth/login", json={"email": "editor@sunset.test"})
        assert response.status_code == 400

    def test_inactive_user_is_403(self, app, client, brand_user_id):
        with app.app_context():
            db.session.get(User, brand_user_id).is_active = False
            db.session.commit()

        response = client.post(
            "/auth/login",
            json={"email": "editor@sunset.test", "password": "correct-horse-battery"},
        )
        assert response.status_code == 403


class TestMintToken:
    """Tests for POST /token."""

    def test_mints_token_for_own_brand(self, client, session_headers, brand_id):
        response = client.post("/token", json={}, headers=session_headers)

        assert response.status_code == 200
        data = response.get_json()
        assert data["brand_id"] == brand_id
        assert data["api_url"] == "https://api.test"
        assert data["expires_at"]

        save = client.post(
            "/pages-api/saveDraft",
            json={"brand_id": brand_id, "title": "Home", "slug": "home"},
            headers={"Authorization": f"Bearer {data['token']}"},
        )
        assert save.status_code == 200

    def test_other_brand_is_403(self, client, session_headers, other_brand_id):
        response = client.post("/token", json={"brand_id": other_brand_id}, headers=session_headers)
        assert response.status_code == 403

    def test_admin_chooses_brand(self, client, admin_session_headers, other_brand_id):
        response = client.post("/token", json={"brand_id": other_brand_id}, headers=admin_session_headers)

        assert response.status_code == 200
        assert response.get_json()["brand_id"] == other_brand_id

    def test_requested_scopes(self, client, session_headers):
        response = client.post("/token", json={"scopes": ["pages:read"]}, headers=session_headers)
        assert response.get_json()["scope"] == ["pages:read"]

    def test_scopes_must_be_a_list(self, client, session_headers):
        for scopes in (5, "pages:write", [{"scope": "pages:write"}]):
            response = client.post("/token", json={"scopes": scopes}, headers=session_headers)

            assert response.status_code == 400
            assert response.get_json() == {"error": "scopes must be a list of strings"}

    def test_requires_session(self, client):
        response = client.post("/token", json={})

        assert response.status_code == 401
        assert "error" in response.get_json()

    def test_builder_token_is_not_a_session(self, client, auth_headers):
        response = client.post("/token", json={}, headers=auth_headers)

        assert response.status_code == 401
        assert response.get_json() == {"error": "A dashboard session token is required"}


class TestBuilderDeeplink:
    """Tests for POST /builder/deeplink."""

    def test_deeplink_carries_token_and_entity(self, client, session_headers, brand_id):
        response = client.post(
            "/builder/deeplink", json={"page_id": "page-1"}, headers=session_headers
        )

        assert response.status_code == 200
        data = response.get_json()
        params = parse_deeplink(data["url"])
        assert params["builder_base"] == "https://builder.test/index.html"
        assert params["brand_id"] == brand_id
        assert params["token"] == data["token"]
        assert params["api"] == "https://api.test"
        assert params["page_id"] == "page-1"
        assert "menu_id" not in params


class TestPlumbing:
    """Health, CORS and error shape."""

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.get_json()["status"] == "ok"

    def test_cors_preflight(self, client):
        response = client.options(
            "/pages-api/saveDraft",
            headers={
                "Origin": "https://builder.example",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Authorization, Content-Type, If-Match",
            },
        )

        assert response.status_code == 200
        # Flask-Cors 6 echoes the origin where older releases send a wildcard
        assert response.headers["Access-Control-Allow-Origin"] in ("*", "https://builder.example")
        assert response.headers["Access-Control-Max-Age"] == "86400"
        allowed = response.headers["Access-Control-Allow-Headers"].lower()
        assert "authorization" in allowed
        assert "if-match" in allowed

    def test_unknown_route_is_json_404(self, client):
        response = client.get("/nowhere")

        assert response.status_code == 404
        assert "error" in response.get_json()

    def test_openapi_is_served(self, client):
        response = client.get("/openapi/brandstudio.yaml")

        assert response.status_code == 200
        assert b"Brand Studio API" in response.data
