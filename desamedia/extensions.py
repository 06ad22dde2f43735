from flask import current_app
from flask_cors import CORS

cors = CORS()


# Layanan dibuat sekali di create_app lalu disimpan di app.extensions
def get_articles():
    return current_app.extensions["article_service"]


def get_profiles():
    return current_app.extensions["profile_service"]


def get_identity():
    return current_app.extensions["identity"]


def get_storage():
    return current_app.extensions["storage"]


def get_state():
    return current_app.extensions["portal_state"]
