import logging
from datetime import timedelta

import requests
from firebase_admin import auth as fb_auth
from firebase_admin.exceptions import FirebaseError

from desamedia.errors import AuthenticationFailed, CollaboratorUnavailable, ValidationError

logger = logging.getLogger(__name__)

SIGN_IN_URL = "https://identitytoolkit.googleapis.com/v1/accounts:signInWithPassword"

# pesan error dari Identity Toolkit -> pesan untuk user
_SIGN_IN_ERRORS = {
    "EMAIL_NOT_FOUND": "Username tidak ditemukan",
    "INVALID_PASSWORD": "Password salah",
    "INVALID_LOGIN_CREDENTIALS": "Username atau password salah",
    "USER_DISABLED": "Akun dinonaktifkan",
    "TOO_MANY_ATTEMPTS_TRY_LATER": "Terlalu banyak percobaan, coba lagi nanti",
}


class IdentityService:
    """
    Firebase Auth.

    Login email/password lewat REST Identity Toolkit (butuh Web API key),
    pembuatan user dan session cookie lewat Firebase Admin SDK.
    """

    def __init__(self, api_key: str | None, email_domain: str, http=None, timeout: int = 10):
        self.api_key = api_key
        self.email_domain = email_domain
        self.http = http or requests.Session()
        self.timeout = timeout

    def email_for(self, username: str) -> str:
        username = (username or "").strip().lower()
        if "@" in username:
            return username
        return f"{username}@{self.email_domain}"

    def sign_in(self, username: str, password: str) -> dict:
        """Kembalikan {'uid', 'email', 'id_token'} atau raise AuthenticationFailed."""
        if not self.api_key:
            raise CollaboratorUnavailable("Firebase Web API key belum dikonfigurasi")

        email = self.email_for(username)
        try:
            resp = self.http.post(
                SIGN_IN_URL,
                params={"key": self.api_key},
                json={"email": email, "password": password, "returnSecureToken": True},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error("Identity Toolkit tidak bisa dihubungi: %s", e)
            raise CollaboratorUnavailable("Layanan login tidak bisa dihubungi") from e

        try:
            body = resp.json()
        except ValueError:
            body = {}
        if resp.status_code != 200:
            code = (body.get("error") or {}).get("message", "")
            # contoh: "INVALID_PASSWORD : ..." -> ambil kode di depan
            code = code.split(" ", 1)[0]
            logger.info("Login gagal email=%s code=%s", email, code)
            raise AuthenticationFailed(_SIGN_IN_ERRORS.get(code))

        return {"uid": body["localId"], "email": body.get("email", email), "id_token": body["idToken"]}

    def sign_up(self, username: str, password: str, display_name: str | None = None) -> dict:
        email = self.email_for(username)
        try:
            user = fb_auth.create_user(email=email, password=password, display_name=display_name or None)
        except fb_auth.EmailAlreadyExistsError as e:
            raise ValidationError("Username sudah terdaftar, silakan login") from e
        except ValueError as e:
            raise ValidationError(str(e)) from e
        except FirebaseError as e:
            logger.error("Gagal membuat user %s: %s", email, e)
            raise CollaboratorUnavailable() from e

        logger.info("User baru dibuat uid=%s", user.uid)
        return self.sign_in(email, password)

    def create_session_cookie(self, id_token: str, days: int) -> str:
        try:
            return fb_auth.create_session_cookie(id_token, expires_in=timedelta(days=days))
        except (ValueError, FirebaseError) as e:
            raise AuthenticationFailed("Token login tidak valid") from e

    def verify_id_token(self, id_token: str) -> dict:
        try:
            return fb_auth.verify_id_token(id_token, check_revoked=True)
        except (ValueError, FirebaseError) as e:
            raise AuthenticationFailed("Token login tidak valid") from e

    def verify_session(self, session_cookie: str | None) -> dict | None:
        if not session_cookie:
            return None
        try:
            return fb_auth.verify_session_cookie(session_cookie, check_revoked=True)
        except (ValueError, FirebaseError):
            return None

    def sign_out(self, uid: str | None) -> None:
        if not uid:
            return
        try:
            fb_auth.revoke_refresh_tokens(uid)
        except (ValueError, FirebaseError) as e:
            # cookie tetap dihapus di sisi browser
            logger.warning("Gagal revoke token uid=%s: %s", uid, e)
