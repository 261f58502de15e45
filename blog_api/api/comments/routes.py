# blog_api/api/comments/routes.py
import logging
from flask import Blueprint, request, jsonify, current_app
from marshmallow import ValidationError

from blog_api.api.comments.schemas import CommentCreateSchema, CommentResponseSchema
from blog_api.core.exceptions import ForbiddenError, NotFoundError
from blog_api.core.security import get_current_actor, jwt_required

# Registered under /api/posts: comments only exist inside a post.
comments_bp = Blueprint('comments_bp', __name__)


@comments_bp.route('/<string:post_id>/comments', methods=['POST'])
@jwt_required
def create_comment(post_id: str):
    """
    Adds a comment to a post on behalf of the caller.
    - Returns the created comment with 201 Created.
    """
    post_service = current_app.services['posts']
    actor = get_current_actor()
    try:
        data = CommentCreateSchema().load(request.get_json(silent=True) or {})
        new_comment = post_service.add_comment(post_id, actor.user_id, data['text'])
        return jsonify({
            "message": "Comment added successfully",
            "comment": CommentResponseSchema().dump(new_comment)
        }), 201
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except NotFoundError as e:
        return jsonify({"error_code": e.error_code, "message": e.message}), 404


@comments_bp.route('/<string:post_id>/comments/<string:comment_id>', methods=['DELETE'])
@jwt_required
def delete_comment(post_id: str, comment_id: str):
    """Deletes one comment. Only its author or an administrator may do this."""
    post_service = current_app.services['posts']
    actor = get_current_actor()
    try:
        post_service.delete_comment(post_id, comment_id, actor.user_id, actor.role)
        return jsonify({"message": "Comment deleted successfully"}), 200
    except ForbiddenError as e:
        logging.warning(f"Comment deletion refused (comment_id: {comment_id}, user: {actor.user_id})")
        return jsonify({"error_code": "FORBIDDEN", "message": e.message}), 403
    except NotFoundError as e:
        return jsonify({"error_code": e.error_code, "message": e.message}), 404
