# blog_api/core/security.py
import jwt
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import wraps
from flask import request, jsonify, g, current_app

from blog_api.core.permissions import DEFAULT_ROLE

ALGORITHM = "HS256"


@dataclass(frozen=True)
class Actor:
    """The authenticated user behind the current request."""
    user_id: str
    role: str = DEFAULT_ROLE


def create_access_token(user_id: str, role: str = DEFAULT_ROLE, expires_in: timedelta = timedelta(hours=1)) -> str:
    """
    Issues a token in the format jwt_required accepts.
    The token subject is the user id; the role travels in the 'role' claim.
    """
    expire = datetime.now(timezone.utc) + expires_in
    to_encode = {"sub": str(user_id), "role": role, "exp": expire, "type": "access"}
    return jwt.encode(to_encode, current_app.config['JWT_SECRET_KEY'], algorithm=ALGORITHM)


def _unauthorized(message: str):
    return jsonify({"error_code": "UNAUTHORIZED", "message": message}), 401


def jwt_required(f):
    """Rejects the request with 401 unless it carries a valid Bearer access token; sets g.actor."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        auth_header = request.headers.get("Authorization")
        if not auth_header or not auth_header.startswith("Bearer "):
            return _unauthorized("Not authorized, no token")

        token = auth_header.split(" ", 1)[1].strip()

        try:
            payload = jwt.decode(token, current_app.config['JWT_SECRET_KEY'], algorithms=[ALGORITHM])
        except jwt.ExpiredSignatureError:
            return _unauthorized("Token has expired")
        except jwt.InvalidTokenError:
            return _unauthorized("Not authorized, token failed")

        if payload.get("type", "access") != "access" or not payload.get("sub"):
            return _unauthorized("Not authorized, token failed")

        g.actor = Actor(user_id=str(payload["sub"]), role=payload.get("role") or DEFAULT_ROLE)
        return f(*args, **kwargs)

    return decorated_function


def get_current_actor() -> Actor:
    """The Actor set by jwt_required for the current request."""
    return g.actor
