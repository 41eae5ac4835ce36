"""Bearer-token authentication for protected routes.

Flask-Login asks :func:`load_user_from_request` for the caller on every
request touching ``current_user``. A missing, malformed or unverifiable
token, or a token naming a user that no longer exists, leaves the caller
anonymous, and ``login_required`` then answers 401 before the view runs.
"""
import logging

from .errors import InvalidToken, error_response
from .extensions import login_manager
from .services import get_services

logger = logging.getLogger(__name__)

AUTH_HEADER = "Authorization"
AUTH_SCHEME = "bearer"


def bearer_token(req):
    scheme, _, token = req.headers.get(AUTH_HEADER, "").partition(" ")
    token = token.strip()
    if scheme.lower() != AUTH_SCHEME or not token:
        return None
    return token


@login_manager.request_loader
def load_user_from_request(req):
    token = bearer_token(req)
    if token is None:
        return None

    services = get_services()
    try:
        user_id = services.tokens.verify(token)
    except InvalidToken:
        logger.info("Rejected bearer token on %s %s", req.method, req.path)
        return None

    user = services.credentials.find_by_id(user_id)
    if user is None:
        logger.info("Bearer token names unknown user %s", user_id)
    return user


@login_manager.unauthorized_handler
def unauthorized():
    return error_response("Please authenticate", 401)
