# blog_api/services/storage_service.py
import os
import uuid
import logging
import tempfile
from flask import Flask
from google.cloud import storage
from werkzeug.datastructures import FileStorage


class StorageService:
    """
    Google Cloud Storage wrapper used for post images.
    The bucket is attached in init_app, either from configuration or injected directly.
    """

    def __init__(self):
        """The bucket stays None until init_app is called."""
        self.bucket = None
        self.folder = None
        self.tmp_dir = None

    def init_app(self, app: Flask, bucket=None):
        """
        Called once from create_app to configure the bucket.

        :param app: Flask application
        :param bucket: an already constructed bucket (tests); resolved from STORAGE_BUCKET otherwise
        """
        self.folder = app.config.get('UPLOAD_BUCKET_FOLDER', 'blog-images').strip('/')
        self.tmp_dir = app.config.get('UPLOAD_TMP_DIR') or tempfile.gettempdir()
        os.makedirs(self.tmp_dir, exist_ok=True)

        if bucket is not None:
            self.bucket = bucket
        else:
            bucket_name = app.config.get('STORAGE_BUCKET')
            if not bucket_name:
                raise ValueError("STORAGE_BUCKET must be set in .env or the config class.")
            cred_path = app.config.get('STORAGE_CREDENTIALS_PATH')
            if cred_path:
                if not os.path.exists(cred_path):
                    raise FileNotFoundError(f"Storage credentials file not found: {cred_path}")
                client = storage.Client.from_service_account_json(cred_path)
            else:
                client = storage.Client()
            self.bucket = client.bucket(bucket_name)
        logging.info(f"StorageService: bucket {self.bucket.name} ready.")

    def upload_image(self, file: FileStorage) -> str:
        """
        Uploads an incoming file to the bucket and returns its public URL.

        The file is first written to a temporary local file, which is removed
        afterwards whether or not the upload succeeded.

        :param file: the uploaded file from request.files
        :return: publicly accessible URL of the stored object
        """
        if not self.bucket:
            raise RuntimeError("StorageService is not initialized. Call init_app first.")

        extension = os.path.splitext(file.filename or '')[1].lower()
        destination_blob_name = f"{self.folder}/{uuid.uuid4()}{extension}"

        fd, tmp_path = tempfile.mkstemp(suffix=extension, dir=self.tmp_dir)
        os.close(fd)
        try:
            file.save(tmp_path)
            blob = self.bucket.blob(destination_blob_name)
            blob.upload_from_filename(tmp_path, content_type=file.mimetype or 'application/octet-stream')
            blob.make_public()
            logging.info(f"Image uploaded to {destination_blob_name}")
            return blob.public_url
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
