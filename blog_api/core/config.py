# blog_api/core/config.py

import os
import tempfile


class Config:
    """Settings shared by every environment. Values are read from the environment (.env)."""
    # Signs and verifies the Bearer tokens issued by the auth service.
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY')

    MONGO_URI = os.getenv('MONGO_URI', 'mongodb://localhost:27017')
    MONGO_DB_NAME = os.getenv('MONGO_DB_NAME', 'blog')

    STORAGE_BUCKET = os.getenv('STORAGE_BUCKET')
    # Service account JSON for Cloud Storage; application default credentials when unset.
    STORAGE_CREDENTIALS_PATH = os.getenv('STORAGE_CREDENTIALS_PATH')
    # Folder inside the bucket where uploaded post images are stored.
    UPLOAD_BUCKET_FOLDER = os.getenv('UPLOAD_BUCKET_FOLDER', 'blog-images')
    # Local scratch directory for incoming files before they are pushed to the bucket.
    UPLOAD_TMP_DIR = os.getenv('UPLOAD_TMP_DIR', 'uploads')
    MAX_CONTENT_LENGTH = int(os.getenv('MAX_UPLOAD_BYTES', 5 * 1024 * 1024))

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')


class DevelopmentConfig(Config):
    """Local development: debug mode and a local MongoDB."""
    DEBUG = True
    MONGO_DB_NAME = os.getenv('DEV_MONGO_DB_NAME', 'blog_dev')


class TestingConfig(Config):
    """Test runs. The database and the bucket are injected by the test fixtures."""
    TESTING = True
    DEBUG = False
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY', 'testing-secret-key-with-at-least-32-bytes')
    MONGO_DB_NAME = 'blog_test'
    STORAGE_BUCKET = os.getenv('STORAGE_BUCKET', 'blog-api-test')
    UPLOAD_TMP_DIR = tempfile.gettempdir()


class ProductionConfig(Config):
    DEBUG = False


# Maps FLASK_ENV values to configuration classes; used by create_app().
config_by_name = dict(
    development=DevelopmentConfig,
    testing=TestingConfig,
    production=ProductionConfig
)
