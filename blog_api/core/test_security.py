# blog_api/core/test_security.py
from datetime import timedelta

import jwt
from flask import jsonify

from blog_api.core.security import ALGORITHM, create_access_token, get_current_actor, jwt_required


def _register_probe(app):
    @app.route('/_probe')
    @jwt_required
    def probe():
        actor = get_current_actor()
        return jsonify({"user_id": actor.user_id, "role": actor.role})


def test_valid_token_sets_actor(app):
    _register_probe(app)
    with app.app_context():
        token = create_access_token('u1', role='admin')

    response = app.test_client().get('/_probe', headers={'Authorization': f'Bearer {token}'})

    assert response.status_code == 200
    assert response.get_json() == {"user_id": "u1", "role": "admin"}


def test_missing_role_claim_defaults_to_user(app):
    _register_probe(app)
    token = jwt.encode({"sub": "u2"}, app.config['JWT_SECRET_KEY'], algorithm=ALGORITHM)

    response = app.test_client().get('/_probe', headers={'Authorization': f'Bearer {token}'})

    assert response.get_json()["role"] == "user"


def test_missing_header_is_unauthorized(app):
    _register_probe(app)
    response = app.test_client().get('/_probe')
    assert response.status_code == 401
    assert response.get_json()["error_code"] == "UNAUTHORIZED"


def test_tampered_token_is_unauthorized(app):
    _register_probe(app)
    token = jwt.encode({"sub": "u1"}, 'some-other-secret-that-is-long-enough', algorithm=ALGORITHM)
    response = app.test_client().get('/_probe', headers={'Authorization': f'Bearer {token}'})
    assert response.status_code == 401


def test_expired_token_is_unauthorized(app):
    _register_probe(app)
    with app.app_context():
        token = create_access_token('u1', expires_in=timedelta(seconds=-10))

    response = app.test_client().get('/_probe', headers={'Authorization': f'Bearer {token}'})

    assert response.status_code == 401
    assert response.get_json()["message"] == "Token has expired"


def test_refresh_token_is_rejected(app):
    _register_probe(app)
    token = jwt.encode({"sub": "u1", "type": "refresh"}, app.config['JWT_SECRET_KEY'], algorithm=ALGORITHM)
    response = app.test_client().get('/_probe', headers={'Authorization': f'Bearer {token}'})
    assert response.status_code == 401
