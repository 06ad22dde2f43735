import io
import os

import pytest
from werkzeug.datastructures import FileStorage

from desamedia.errors import UploadFailed, ValidationError
from desamedia.services.storage_service import (
    LocalStorage,
    image_key,
    read_image,
    upload_article_image,
)

MAX = 2 * 1024 * 1024


def upload(data=b"\x89PNG....", filename="foto.png", content_type="image/png"):
    return FileStorage(stream=io.BytesIO(data), filename=filename, content_type=content_type)


def test_read_image_ok():
    assert read_image(upload(), MAX) == b"\x89PNG...."


def test_read_image_requires_file():
    with pytest.raises(ValidationError, match="Harap pilih file gambar"):
        read_image(None, MAX)


def test_read_image_rejects_non_image():
    with pytest.raises(ValidationError, match="Hanya file gambar"):
        read_image(upload(filename="dokumen.pdf", content_type="application/pdf"), MAX)


def test_read_image_too_large():
    with pytest.raises(ValidationError, match="maksimal 2MB"):
        read_image(upload(data=b"x" * (MAX + 1)), MAX)


def test_read_image_empty():
    with pytest.raises(ValidationError):
        read_image(upload(data=b""), MAX)


def test_image_key_is_namespaced_and_safe():
    key = image_key("uid-1", "../foto desa.png")
    namespace, owner, name = key.split("/")
    assert (namespace, owner) == ("articles", "uid-1")
    assert name.endswith("_foto_desa.png")


def test_local_storage_writes_file(tmp_path):
    storage = LocalStorage(str(tmp_path))
    url = upload_article_image(storage, upload(), "uid-1", MAX)

    assert url.startswith("/static/uploads/articles/uid-1/")
    relative = url[len("/static/uploads/"):]
    assert os.path.exists(os.path.join(tmp_path, *relative.split("/")))


def test_local_storage_failure(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("bukan folder")
    storage = LocalStorage(str(blocker))
    with pytest.raises(UploadFailed):
        storage.upload("articles/u/a.png", b"data", "image/png")
