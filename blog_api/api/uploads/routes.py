# blog_api/api/uploads/routes.py

import logging
from flask import request, jsonify, Blueprint, current_app

# All routes here live under '/api/upload'.
uploads_bp = Blueprint('uploads', __name__)


@uploads_bp.route('', methods=['POST'])
def upload_image():
    """
    Uploads a single image (multipart field 'image') to Cloud Storage.
    The returned URL can be used as a post's imageUrl.
    """
    file = request.files.get('image')
    if file is None or not file.filename:
        return jsonify({"error_code": "NO_FILE", "message": "No file uploaded"}), 400

    storage_service = current_app.services['storage']

    try:
        url = storage_service.upload_image(file)
        return jsonify({"message": "Image uploaded successfully", "url": url}), 200

    except Exception as e:
        logging.error(f"Image upload failed (filename: {file.filename}): {e}", exc_info=True)
        return jsonify({"error_code": "UPLOAD_FAILED", "message": "Upload failed"}), 500
