import logging
import os
import time

from firebase_admin import storage
from google.api_core import exceptions as gexc
from requests import RequestException
from werkzeug.utils import secure_filename

from desamedia.errors import CollaboratorUnavailable, UploadFailed, ValidationError

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_EXT = {"png", "jpg", "jpeg", "gif", "webp"}


def _allowed_ext(filename: str) -> bool:
    return "." in filename and filename.rsplit(".", 1)[1].lower() in ALLOWED_IMAGE_EXT


def read_image(file, max_size: int) -> bytes:
    """Validasi file upload (werkzeug FileStorage) lalu kembalikan isinya."""
    if not file or not file.filename:
        raise ValidationError("Harap pilih file gambar terlebih dahulu")

    mimetype = file.mimetype or ""
    if not _allowed_ext(file.filename) or not mimetype.startswith("image/"):
        raise ValidationError("Hanya file gambar yang diizinkan")

    data = file.read()
    if len(data) > max_size:
        raise ValidationError(f"Ukuran file maksimal {max_size // (1024 * 1024)}MB")
    if not data:
        raise ValidationError("File gambar kosong")
    return data


def image_key(owner_uid: str, filename: str, namespace: str = "articles") -> str:
    # timestamp di depan supaya nama file unik
    return f"{namespace}/{owner_uid}/{int(time.time())}_{secure_filename(filename)}"


class LocalStorage:
    """Simpan ke folder static (seperti upload lokal), URL relatif ke /static."""

    def __init__(self, upload_folder: str, url_prefix: str = "/static/uploads"):
        self.upload_folder = upload_folder
        self.url_prefix = url_prefix.rstrip("/")

    def upload(self, key: str, data: bytes, content_type: str) -> str:
        path = os.path.join(self.upload_folder, *key.split("/"))
        try:
            os.makedirs(os.path.dirname(path), exist_ok=True)
            with open(path, "wb") as fh:
                fh.write(data)
        except OSError as e:
            logger.error("Gagal menyimpan %s: %s", path, e)
            raise UploadFailed() from e
        return f"{self.url_prefix}/{key}"


class FirebaseStorage:
    def __init__(self, bucket_name: str | None = None):
        try:
            self.bucket = storage.bucket(bucket_name)
        except ValueError as e:
            raise CollaboratorUnavailable("Firebase Storage belum dikonfigurasi") from e

    def upload(self, key: str, data: bytes, content_type: str) -> str:
        blob = self.bucket.blob(key)
        try:
            blob.upload_from_string(data, content_type=content_type)
            blob.make_public()
        except (gexc.GoogleAPIError, RequestException) as e:
            logger.error("Upload ke bucket gagal key=%s: %s", key, e)
            raise UploadFailed() from e
        return blob.public_url


def build_storage(config):
    if config.get("STORAGE_BACKEND") == "local":
        return LocalStorage(config["UPLOAD_FOLDER"])
    return FirebaseStorage(config.get("FIREBASE_STORAGE_BUCKET"))


def upload_article_image(storage_backend, file, owner_uid: str, max_size: int) -> str:
    data = read_image(file, max_size)
    key = image_key(owner_uid, file.filename)
    url = storage_backend.upload(key, data, file.mimetype)
    logger.info("Gambar artikel diupload key=%s", key)
    return url
