from desamedia.services.content_store import USERS


def login_form(client, username="budi", password="rahasia123", **extra):
    data = {"username": username, "password": password}
    data.update(extra)
    return client.post("/auth/login", data=data)


def test_login_page(client):
    resp = client.get("/auth/login?next=/penulis/profil")
    assert resp.status_code == 200
    assert 'value="/penulis/profil"' in resp.get_data(as_text=True)


def test_login_sets_cookie_and_session(client, app_store):
    resp = login_form(client)
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/penulis/dashboard")
    assert "session=cookie-uid-budi" in " ".join(resp.headers.getlist("Set-Cookie"))

    with client.session_transaction() as sess:
        assert sess["currentUser"]["uid"] == "uid-budi"
        assert sess["currentUser"]["role"] == "penulis"

    # profil dibuat saat login pertama
    assert app_store.get(USERS, "uid-budi")["username"] == "budi"


def test_login_follows_safe_next(client):
    resp = login_form(client, next="/penulis/profil")
    assert resp.headers["Location"].endswith("/penulis/profil")


def test_login_ignores_external_next(client):
    resp = login_form(client, next="//evil.example/x")
    assert resp.headers["Location"].endswith("/penulis/dashboard")


def test_login_wrong_password(client):
    resp = client.post("/auth/login", data={"username": "budi", "password": "salah"}, follow_redirects=True)
    assert "Username atau password salah" in resp.get_data(as_text=True)
    with client.session_transaction() as sess:
        assert "currentUser" not in sess


def test_login_requires_fields(client):
    resp = client.post("/auth/login", data={"username": "", "password": ""}, follow_redirects=True)
    assert "Username dan password wajib diisi" in resp.get_data(as_text=True)


def test_logged_in_user_skips_login_page(client, login):
    login()
    resp = client.get("/auth/login")
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/penulis/dashboard")


def test_logout_clears_only_auth_state(client, app):
    login_form(client)
    with client.session_transaction() as sess:
        sess["editingArticleId"] = "abc"
        sess["searchTerm"] = "panen"
        sess["currentFilter"] = "Pertanian"

    resp = client.get("/auth/logout")
    assert resp.status_code == 302

    with client.session_transaction() as sess:
        assert "currentUser" not in sess
        assert "editingArticleId" not in sess
        assert sess["searchTerm"] == "panen"
        assert sess["currentFilter"] == "Pertanian"

    assert app.extensions["identity"].signed_out == ["uid-budi"]
    assert client.get("/penulis/dashboard").status_code == 302


def test_register_creates_profile(client, app_store):
    resp = client.post("/auth/daftar", data={"username": "Rina", "password": "rahasia789", "name": "Rina Wati"})
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/penulis/dashboard")

    profile = app_store.get(USERS, "uid-rina")
    assert profile["name"] == "Rina Wati"
    assert profile["role"] == "penulis"


def test_register_existing_username(client):
    resp = client.post(
        "/auth/daftar",
        data={"username": "budi", "password": "rahasia123"},
        follow_redirects=True,
    )
    assert "Username sudah terdaftar, silakan login" in resp.get_data(as_text=True)


def test_register_validation(client):
    resp = client.post("/auth/daftar", data={"username": "b", "password": "1"}, follow_redirects=True)
    html = resp.get_data(as_text=True)
    assert "Password minimal 6 karakter" in html


# =========================
# SESSION LOGIN (Firebase JS SDK)
# =========================
def test_session_login_with_id_token(client):
    resp = client.post("/sessionLogin", json={"idToken": "token-uid-budi"})
    assert resp.status_code == 200
    assert resp.get_json() == {"status": "ok", "role": "penulis"}
    assert "session=cookie-uid-budi" in " ".join(resp.headers.getlist("Set-Cookie"))


def test_session_login_missing_token(client):
    resp = client.post("/sessionLogin", json={})
    assert resp.status_code == 400


def test_session_login_invalid_token(client):
    resp = client.post("/sessionLogin", json={"idToken": "palsu"})
    assert resp.status_code == 401


def test_session_logout(client, login):
    login()
    resp = client.post("/sessionLogout")
    assert resp.get_json() == {"status": "ok"}


def test_login_ignores_backslash_next(client):
    resp = login_form(client, next="/\\evil.example/x")
    assert resp.headers["Location"].endswith("/penulis/dashboard")
