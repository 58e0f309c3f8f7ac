"""
Shared pytest fixtures.

Every test gets a fresh app bound to an in-memory SQLite database. Fixtures
open their own app context and hand back plain ids/strings, so nothing
leaks between requests through a shared context.
"""
from datetime import timedelta

import pytest

from brandstudio import create_app
from brandstudio.application.tokens.issue_token import issue_builder_token
from brandstudio.extensions import db
from brandstudio.models import Brand, User

PASSWORD = "correct-horse-battery"


@pytest.fixture
def app():
    app = create_app("testing")

    with app.app_context():
        db.create_all()

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def _create_brand(app, name, slug):
    with app.app_context():
        brand = Brand(name=name, slug=slug)
        db.session.add(brand)
        db.session.commit()
        return brand.id


def _create_user(app, email, role, brand_id=None, is_active=True):
    with app.app_context():
        user = User(email=email, role=role, brand_id=brand_id, is_active=is_active)
        user.set_password(PASSWORD)
        db.session.add(user)
        db.session.commit()
        return user.id


@pytest.fixture
def brand_id(app):
    return _create_brand(app, "Sunset Travel", "sunset-travel")


@pytest.fixture
def other_brand_id(app):
    return _create_brand(app, "Polar Trips", "polar-trips")


@pytest.fixture
def brand_user_id(app, brand_id):
    return _create_user(app, "editor@sunset.test", "brand", brand_id)


@pytest.fixture
def other_user_id(app, other_brand_id):
    return _create_user(app, "editor@polar.test", "brand", other_brand_id)


@pytest.fixture
def admin_user_id(app):
    return _create_user(app, "admin@studio.test", "admin")


@pytest.fixture
def make_token(app, brand_user_id):
    """Mint a builder token; defaults to the Sunset editor and full scopes."""

    def _make(user_id=None, brand_id=None, scopes=None, ttl=None):
        with app.app_context():
            user = db.session.get(User, user_id or brand_user_id)
            return issue_builder_token(
                session=db.session,
                user=user,
                brand_id=brand_id,
                scopes=scopes,
                ttl=ttl,
            )["token"]

    return _make


@pytest.fixture
def auth_headers(make_token):
    return {"Authorization": f"Bearer {make_token()}"}


@pytest.fixture
def other_auth_headers(make_token, other_user_id):
    return {"Authorization": f"Bearer {make_token(user_id=other_user_id)}"}


@pytest.fixture
def expired_headers(make_token):
    return {"Authorization": f"Bearer {make_token(ttl=timedelta(minutes=-5))}"}


def login_headers(client, email):
    response = client.post("/auth/login", json={"email": email, "password": PASSWORD})
    assert response.status_code == 200, response.get_json()
    return {"Authorization": f"Bearer {response.get_json()['access_token']}"}


@pytest.fixture
def session_headers(client, brand_user_id):
    return login_headers(client, "editor@sunset.test")


@pytest.fixture
def admin_session_headers(client, admin_user_id):
    return login_headers(client, "admin@studio.test")


@pytest.fixture
def save_draft(client, auth_headers, brand_id):
    """POST /<family>-api/saveDraft as the Sunset editor unless told otherwise."""

    def _save(family="pages", headers=None, **body):
        body.setdefault("brand_id", brand_id)
        return client.post(
            f"/{family}-api/saveDraft", json=body, headers=headers or auth_headers
        )

    return _save


@pytest.fixture
def publish(client, auth_headers):
    def _publish(family, entity_id, headers=None, **body):
        return client.post(
            f"/{family}-api/{entity_id}/publish", json=body, headers=headers or auth_headers
        )

    return _publish
