import logging

from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

from ..errors import InvalidToken

logger = logging.getLogger(__name__)


class TokenService:
    """Issues and verifies signed bearer tokens carrying a user id.

    Tokens are stateless: nothing is stored, every request re-checks the
    signature against ``JWT_SECRET_KEY``. Expiry is only enforced when
    ``JWT_ACCESS_TOKEN_EXPIRES`` is configured. Both methods need an
    application context.
    """

    def issue(self, user_id: int) -> str:
        return create_access_token(identity=str(user_id))

    def verify(self, token: str) -> int:
        try:
            claims = decode_token(token)
        except (PyJWTError, JWTExtendedException, ValueError) as exc:
            logger.debug("Token rejected: %s", exc)
            raise InvalidToken("Token could not be verified") from exc

        if claims.get("type") != "access":
            raise InvalidToken("Not an access token")
        try:
            return int(claims["sub"])
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidToken("Token carries no user id") from exc
