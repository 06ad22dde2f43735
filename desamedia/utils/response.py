from flask import jsonify

def response(status_code, message, data=None):
    """
    Format standar respon API DesaMedia:
    {"status": <kode>, "message": <pesan>, "data": <isi>}
    """
    return jsonify({"status": status_code, "message": message, "data": data}), status_code

def success(data=None, message="Berhasil", status_code=200):
    return response(status_code, message, data)

def error(message="Terjadi kesalahan", status_code=400, data=None):
    return response(status_code, message, data)

def from_exception(exc):
    """PortalError -> respon error; ValidationError membawa daftar pesannya di `data`."""
    errors = getattr(exc, "errors", None)
    return error(exc.message, exc.status_code, {"errors": errors} if errors else None)
