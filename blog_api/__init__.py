# blog_api/__init__.py

# =====================================================================================
# 1. Environment (loaded before anything reads os.getenv)
# =====================================================================================
from dotenv import load_dotenv
load_dotenv()

# =====================================================================================
# 2. Module imports
# =====================================================================================
import os
import logging
from flask import Flask, jsonify
from marshmallow import ValidationError
from werkzeug.exceptions import HTTPException

# - configuration
from blog_api.core.config import config_by_name
from blog_api.core.database import init_db
from blog_api.core.exceptions import ForbiddenError, NotFoundError

# - API blueprints
from blog_api.api.posts.routes import posts_bp
from blog_api.api.comments.routes import comments_bp
from blog_api.api.uploads.routes import uploads_bp

# - service modules
from blog_api.services.storage_service import StorageService
from blog_api.api.users.services import UserService
from blog_api.api.posts.services import PostService


def create_app(config_name=None, db=None, bucket=None):
    """
    Flask application factory.

    :param config_name: key of config_by_name; defaults to FLASK_ENV or 'development'
    :param db: pymongo Database to use instead of connecting to MONGO_URI (tests)
    :param bucket: Storage bucket to use instead of the configured one (tests)
    """
    # =====================================================================================
    # 3. Flask app and configuration
    # =====================================================================================
    config_name = config_name or os.getenv('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    app.json.ensure_ascii = False

    logging.basicConfig(
        level=app.config.get('LOG_LEVEL', 'INFO'),
        format='%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
    )

    if not app.config.get('JWT_SECRET_KEY'):
        raise ValueError("JWT_SECRET_KEY must be set in .env or the config class.")

    # =====================================================================================
    # 4. Database
    # =====================================================================================
    db = init_db(app, db=db)

    # =====================================================================================
    # 5. Service instances, stored on app.services (dependency injection)
    # =====================================================================================
    app.services = {}

    try:
        storage_instance = StorageService()
        storage_instance.init_app(app, bucket=bucket)
        app.services['storage'] = storage_instance
    except Exception as e:
        logging.error(f"Failed to initialize storage service: {e}")
        raise

    app.services['users'] = UserService(db=db)
    app.services['posts'] = PostService(db=db, user_service=app.services['users'])

    # =====================================================================================
    # 6. Blueprints
    # =====================================================================================
    app.register_blueprint(posts_bp, url_prefix='/api/posts')
    app.register_blueprint(comments_bp, url_prefix='/api/posts')
    app.register_blueprint(uploads_bp, url_prefix='/api/upload')

    # =====================================================================================
    # 7. Global error handlers
    # =====================================================================================
    @app.errorhandler(ValidationError)
    def handle_marshmallow_validation(err):
        response = {"error_code": "VALIDATION_ERROR", "details": err.messages}
        return jsonify(response), 400

    @app.errorhandler(NotFoundError)
    def handle_not_found(err):
        return jsonify({"error_code": err.error_code, "message": err.message}), 404

    @app.errorhandler(ForbiddenError)
    def handle_forbidden(err):
        return jsonify({"error_code": "FORBIDDEN", "message": err.message}), 403

    @app.errorhandler(HTTPException)
    def handle_http_exception(err):
        response = {"error_code": (err.name or "HTTP_ERROR").upper().replace(' ', '_'), "message": err.description}
        return jsonify(response), err.code

    @app.errorhandler(Exception)
    def handle_generic_exception(err):
        # Anything not handled above
        logging.error(f"An unhandled exception occurred: {err}", exc_info=True)
        response = {"error_code": "INTERNAL_SERVER_ERROR", "message": "An unexpected server error occurred."}
        return jsonify(response), 500

    logging.info(f"Flask app created for '{config_name}' environment.")

    return app
