import logging

from desamedia.errors import PortalError, ValidationError
from desamedia.models.user import AuthorProfile
from desamedia.services.content_store import SERVER_TIME, USERS
from desamedia.utils.validators import validate_profile_form

logger = logging.getLogger(__name__)


class ProfileService:
    def __init__(self, store):
        self.store = store

    def get(self, uid: str) -> AuthorProfile | None:
        data = self.store.get(USERS, uid)
        return AuthorProfile.from_doc(uid, data) if data else None

    def ensure(self, uid: str, email: str, name: str | None = None) -> AuthorProfile:
        """Ambil profil, buat profil default kalau user baru pertama kali login."""
        profile = self.get(uid)
        if profile:
            return profile

        profile = AuthorProfile.new_for_identity(uid, email)
        if name:
            profile.name = name
        data = profile.to_dict()
        data["createdAt"] = SERVER_TIME
        self.store.set(USERS, uid, data)
        logger.info("Profil penulis dibuat uid=%s username=%s", uid, profile.username)
        return profile

    def find_by_username(self, username: str) -> AuthorProfile | None:
        if not username:
            return None
        try:
            rows = self.store.query(USERS, where=[("username", "==", username)], limit=1)
        except PortalError as e:
            logger.error("Gagal memuat profil penulis %s: %s", username, e)
            return None
        if not rows:
            return None
        uid, data = rows[0]
        return AuthorProfile.from_doc(uid, data)

    def save(self, uid: str, form: dict) -> AuthorProfile:
        errors = validate_profile_form(form)
        if errors:
            raise ValidationError(errors)

        self.store.set(USERS, uid, {
            "name": form["name"].strip(),
            "email": form["email"].strip(),
            "bio": (form.get("bio") or "").strip(),
            "photo": (form.get("photo") or "").strip(),
            "updatedAt": SERVER_TIME,
        }, merge=True)
        logger.info("Profil diperbarui uid=%s", uid)
        return self.get(uid)
