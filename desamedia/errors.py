class PortalError(Exception):
    """Base error portal. `status_code` dipakai saat diubah jadi respon HTTP."""

    status_code = 500
    message = "Terjadi kesalahan pada server"

    def __init__(self, message=None):
        super().__init__(message or self.message)
        self.message = message or self.message


class CollaboratorUnavailable(PortalError):
    """Store / auth / storage belum diinisialisasi atau tidak bisa dihubungi."""

    status_code = 503
    message = "Layanan belum siap, silakan coba lagi nanti"


class QueryPreconditionFailed(PortalError):
    """Query butuh index yang belum dibuat. Dipulihkan secara lokal."""

    status_code = 500
    message = "Index query belum dibuat"


class ValidationError(PortalError):
    status_code = 400
    message = "Data tidak valid"

    def __init__(self, errors):
        if isinstance(errors, str):
            errors = [errors]
        self.errors = list(errors)
        super().__init__(self.errors[0] if self.errors else None)


class UploadFailed(PortalError):
    status_code = 502
    message = "Upload gagal, periksa koneksi lalu coba lagi"


class AuthenticationFailed(PortalError):
    status_code = 401
    message = "Username atau password salah"


class NotFound(PortalError):
    status_code = 404
    message = "Artikel tidak ditemukan"


class Forbidden(PortalError):
    status_code = 403
    message = "Anda tidak memiliki izin untuk aksi ini"
