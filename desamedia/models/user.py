from dataclasses import dataclass

ROLE_PENULIS = "penulis"
ROLE_EDITOR = "editor"
AUTHOR_ROLES = (ROLE_PENULIS, ROLE_EDITOR)

DEFAULT_BIO = (
    "Penulis aktif di DesaMedia yang berdedikasi menyampaikan "
    "informasi terpercaya untuk masyarakat desa."
)


@dataclass
class AuthorProfile:
    uid: str
    username: str
    email: str = ""
    name: str = ""
    bio: str = ""
    photo: str = ""
    role: str = ROLE_PENULIS

    @property
    def display_name(self) -> str:
        return self.name or self.username

    @property
    def initial(self) -> str:
        return (self.display_name[:1] or "?").upper()

    @property
    def display_bio(self) -> str:
        return self.bio or DEFAULT_BIO

    @classmethod
    def new_for_identity(cls, uid: str, email: str) -> "AuthorProfile":
        """Profil default saat user pertama kali login."""
        username = email.split("@")[0]
        is_editor = username == ROLE_EDITOR
        return cls(
            uid=uid,
            username=username,
            email=email,
            name="Editor Utama" if is_editor else "Penulis Desa",
            role=ROLE_EDITOR if is_editor else ROLE_PENULIS,
        )

    @classmethod
    def from_doc(cls, uid: str, data: dict) -> "AuthorProfile":
        email = data.get("email") or ""
        return cls(
            uid=uid,
            username=data.get("username") or email.split("@")[0],
            email=email,
            name=data.get("name") or "",
            bio=data.get("bio") or "",
            photo=data.get("photo") or "",
            role=data.get("role") or ROLE_PENULIS,
        )

    def to_dict(self) -> dict:
        return {
            "username": self.username,
            "email": self.email,
            "name": self.name,
            "bio": self.bio,
            "photo": self.photo,
            "role": self.role,
        }

    def to_session(self) -> dict:
        """Versi ringkas untuk key `currentUser` di session."""
        return {
            "uid": self.uid,
            "username": self.username,
            "email": self.email,
            "role": self.role,
            "name": self.display_name,
        }

    def __repr__(self):
        return f"<AuthorProfile {self.username}>"
