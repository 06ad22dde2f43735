from datetime import datetime, timedelta, timezone

import pytest

from config import Config
from desamedia import create_app
from desamedia.errors import AuthenticationFailed, ValidationError
from desamedia.models.user import AuthorProfile
from desamedia.services.article_service import ArticleService
from desamedia.services.content_store import ARTICLES, USERS, MemoryContentStore

NOW = datetime(2026, 1, 5, 8, 0, tzinfo=timezone.utc)

LONG_CONTENT = (
    "Panen padi di Desa Sukamaju tahun ini meningkat berkat irigasi baru "
    "yang dibangun bersama warga."
)


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret"
    FIREBASE_ENABLED = False
    CONTENT_STORE = "memory"
    STORAGE_BACKEND = "local"
    FIREBASE_WEB_API_KEY = None
    LOG_LEVEL = "WARNING"


class FakeIdentity:
    """Pengganti IdentityService: cookie = "cookie-<uid>"."""

    def __init__(self):
        self.accounts = {}
        self.signed_out = []

    def add_account(self, username, password, uid):
        self.accounts[username] = (password, uid)

    def _result(self, username):
        _, uid = self.accounts[username]
        return {"uid": uid, "email": f"{username}@desamedia.id", "id_token": f"token-{uid}"}

    def sign_in(self, username, password):
        account = self.accounts.get(username)
        if not account or account[0] != password:
            raise AuthenticationFailed()
        return self._result(username)

    def sign_up(self, username, password, display_name=None):
        if username in self.accounts:
            raise ValidationError("Username sudah terdaftar, silakan login")
        self.add_account(username, password, f"uid-{username}")
        return self._result(username)

    def create_session_cookie(self, id_token, days):
        return "cookie-" + id_token[len("token-"):]

    def verify_id_token(self, id_token):
        if not id_token.startswith("token-"):
            raise AuthenticationFailed("Token login tidak valid")
        uid = id_token[len("token-"):]
        return {"uid": uid, "email": self._email(uid)}

    def verify_session(self, cookie):
        if not cookie or not cookie.startswith("cookie-"):
            return None
        uid = cookie[len("cookie-"):]
        return {"uid": uid, "email": self._email(uid)}

    def sign_out(self, uid):
        if uid:
            self.signed_out.append(uid)

    def _email(self, uid):
        for username, (_, account_uid) in self.accounts.items():
            if account_uid == uid:
                return f"{username}@desamedia.id"
        return f"{uid}@desamedia.id"


def make_doc(title, category="Pertanian", status="published", views=0, days_ago=0, **extra):
    doc = {
        "title": title,
        "category": category,
        "status": status,
        "content": extra.pop("content", LONG_CONTENT),
        "author": extra.pop("author", "budi"),
        "authorId": extra.pop("authorId", "uid-budi"),
        "views": views,
        "tags": extra.pop("tags", []),
        "createdAt": NOW - timedelta(days=days_ago),
    }
    doc.update(extra)
    return doc


@pytest.fixture
def store():
    return MemoryContentStore(clock=lambda: NOW)


@pytest.fixture
def service(store):
    return ArticleService(store)


@pytest.fixture
def app(tmp_path):
    class _Config(TestConfig):
        UPLOAD_FOLDER = str(tmp_path / "uploads")

    app = create_app(_Config)
    identity = FakeIdentity()
    identity.add_account("budi", "rahasia123", "uid-budi")
    identity.add_account("sari", "rahasia456", "uid-sari")
    app.extensions["identity"] = identity
    return app


@pytest.fixture
def app_store(app):
    return app.extensions["content_store"]


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def seed(app_store):
    def _seed(*docs):
        return [app_store.add(ARTICLES, doc) for doc in docs]
    return _seed


@pytest.fixture
def login(client, app_store):
    """Set cookie session Firebase langsung, tanpa lewat form login."""
    def _login(uid="uid-budi", username="budi"):
        app_store.set(USERS, uid, AuthorProfile.new_for_identity(uid, f"{username}@desamedia.id").to_dict())
        client.set_cookie("session", f"cookie-{uid}")
        return client
    return _login
