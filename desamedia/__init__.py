from flask import Flask, render_template, request
from config import Config
from desamedia.extensions import cors
from desamedia.extensions_firebase import init_firebase
from desamedia.errors import PortalError
from desamedia.logging_config import configure_logging
from desamedia import state
from desamedia.signals import identity_changed
from desamedia.utils.response import error, from_exception


def _wants_json() -> bool:
    return request.path.startswith("/api/")


def register_error_handlers(app):
    @app.errorhandler(PortalError)
    def handle_portal_error(e):
        app.logger.warning("%s pada %s: %s", type(e).__name__, request.path, e.message)
        if _wants_json():
            return from_exception(e)
        return render_template("errors/error.html", message=e.message, status=e.status_code), e.status_code

    @app.errorhandler(403)
    def handle_forbidden(e):
        message = "Akses hanya untuk penulis & editor"
        if _wants_json():
            return error(message, 403)
        return render_template("errors/error.html", message=message, status=403), 403

    @app.errorhandler(404)
    def handle_not_found(e):
        if _wants_json():
            return error("Data tidak ditemukan", 404)
        return render_template("errors/error.html", message="Halaman tidak ditemukan", status=404), 404


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    configure_logging(app)
    cors.init_app(app, resources={r"/api/*": {"origins": "*"}})

    # Init Firebase Admin
    if app.config.get("FIREBASE_ENABLED", True):
        init_firebase(app.config["FIREBASE_SERVICE_ACCOUNT"], app.config.get("FIREBASE_STORAGE_BUCKET"))

    # ==== LAYANAN (store, artikel, profil, auth, storage) ====
    from desamedia.services.article_service import ArticleService
    from desamedia.services.content_store import build_content_store
    from desamedia.services.identity_service import IdentityService
    from desamedia.services.profile_service import ProfileService
    from desamedia.services.storage_service import build_storage

    store = build_content_store(app.config)
    app.extensions["content_store"] = store
    app.extensions["article_service"] = ArticleService(store, app.config.get("LISTING_LIMIT", 50))
    app.extensions["profile_service"] = ProfileService(store)
    app.extensions["identity"] = IdentityService(
        app.config.get("FIREBASE_WEB_API_KEY"),
        app.config["AUTH_EMAIL_DOMAIN"],
    )
    app.extensions["storage"] = build_storage(app.config)

    state.init_app(app)

    from desamedia.web import session_state
    identity_changed.connect(session_state.on_identity_changed)

    # Register blueprints
    from desamedia.routes.article_routes import article_bp

    from desamedia.web.public_routes import public_bp
    from desamedia.web.auth_routes import auth_bp
    from desamedia.web.author_routes import author_bp
    from desamedia.web.author_articles import author_article_bp

    from desamedia.web.firebase_session_routes import web_session_bp

    app.register_blueprint(article_bp)

    app.register_blueprint(public_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(author_bp)
    app.register_blueprint(author_article_bp)

    # Firebase session endpoints for web
    app.register_blueprint(web_session_bp)

    register_error_handlers(app)

    @app.context_processor
    def inject_session_user():
        return {"current_user": session_state.recall(session_state.CURRENT_USER)}

    return app
