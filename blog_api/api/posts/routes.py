# blog_api/api/posts/routes.py
import logging
from flask import Blueprint, request, jsonify, current_app
from marshmallow import ValidationError

from blog_api.api.posts.schemas import PostCreateSchema, PostUpdateSchema, PostResponseSchema
from blog_api.core.exceptions import ForbiddenError, NotFoundError
from blog_api.core.security import get_current_actor, jwt_required


posts_bp = Blueprint('posts_bp', __name__)


@posts_bp.route('', methods=['GET'])
def get_posts():
    """
    Lists all posts, newest first.
    - ?search= narrows the list to posts whose title, content or category contains the term.
    """
    post_service = current_app.services['posts']
    search = request.args.get('search', None, type=str)
    posts = post_service.get_posts(search)
    return jsonify({"posts": PostResponseSchema(many=True).dump(posts)}), 200


@posts_bp.route('/<string:post_id>', methods=['GET'])
def get_post(post_id: str):
    """Returns a single post with its author and comments resolved."""
    post_service = current_app.services['posts']
    try:
        post = post_service.get_post_by_id(post_id)
        return jsonify({"post": PostResponseSchema().dump(post)}), 200
    except NotFoundError as e:
        return jsonify({"error_code": e.error_code, "message": e.message}), 404


@posts_bp.route('', methods=['POST'])
@jwt_required
def create_post():
    """
    Creates a new post owned by the caller.
    - The body is validated with PostCreateSchema.
    - Returns the created post with 201 Created.
    """
    post_service = current_app.services['posts']
    actor = get_current_actor()
    try:
        data = PostCreateSchema().load(request.get_json(silent=True) or {})
        new_post = post_service.create_post(
            actor.user_id, data['title'], data['content'], data['category'], data.get('image_url')
        )
        return jsonify({"post": PostResponseSchema().dump(new_post)}), 201
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400


@posts_bp.route('/<string:post_id>', methods=['PUT', 'PATCH'])
@jwt_required
def update_post(post_id: str):
    """Updates a post. Only the author or an administrator may do this."""
    post_service = current_app.services['posts']
    actor = get_current_actor()
    try:
        patch = PostUpdateSchema().load(request.get_json(silent=True) or {})
        updated_post = post_service.update_post(post_id, actor.user_id, actor.role, patch)
        return jsonify({
            "message": "Post updated successfully",
            "post": PostResponseSchema().dump(updated_post)
        }), 200
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except ForbiddenError as e:
        return jsonify({"error_code": "FORBIDDEN", "message": e.message}), 403
    except NotFoundError as e:
        return jsonify({"error_code": e.error_code, "message": e.message}), 404


@posts_bp.route('/<string:post_id>', methods=['DELETE'])
@jwt_required
def delete_post(post_id: str):
    """Deletes a post and its comments. Only the author or an administrator may do this."""
    post_service = current_app.services['posts']
    actor = get_current_actor()
    try:
        post_service.delete_post(post_id, actor.user_id, actor.role)
        return jsonify({"message": "Post deleted successfully"}), 200
    except ForbiddenError as e:
        logging.warning(f"Post deletion refused (post_id: {post_id}, user: {actor.user_id})")
        return jsonify({"error_code": "FORBIDDEN", "message": e.message}), 403
    except NotFoundError as e:
        return jsonify({"error_code": e.error_code, "message": e.message}), 404
