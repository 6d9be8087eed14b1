"""Token authentication.

A single strategy: HS256-signed JWTs carrying the user ID as ``sub``. The
tenant is read from the user's current record on every request, so moving a
user to another company takes effect without reissuing tokens.
"""

import logging
from datetime import datetime, timedelta, UTC
from typing import Optional

import jwt

from bizledger.config import Settings
from bizledger.database.base import Database
from bizledger.domain.entities import Principal, User
from bizledger.domain.errors import AuthenticationError, NoCompanyError, no_company

logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer "
TOKEN_COOKIE = "token"


class TokenAuthenticator:
    """Issue tokens and resolve them into principals."""

    def __init__(
        self,
        db: Database,
        secret: str,
        algorithm: str = "HS256",
        token_ttl: timedelta = timedelta(days=30),
    ):
        """Initialize authenticator.

        Args:
            db: Database instance used to look up users
            secret: Signing secret
            algorithm: JWT algorithm
            token_ttl: Lifetime of issued tokens
        """
        self.db = db
        self.secret = secret
        self.algorithm = algorithm
        self.token_ttl = token_ttl

    @classmethod
    def from_settings(cls, db: Database, settings: Settings) -> "TokenAuthenticator":
        return cls(
            db,
            secret=settings.require_jwt_secret(),
            algorithm=settings.jwt_algorithm,
            token_ttl=settings.token_ttl,
        )

    def issue_token(self, user: User, now: Optional[datetime] = None) -> str:
        """Sign a token for a user."""
        now = now or datetime.now(UTC)
        payload = {
            "sub": str(user.id),
            "email": user.email,
            "role": user.role,
            "companyId": user.company_id,
            "iat": now,
            "exp": now + self.token_ttl,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def resolve_principal(self, token: Optional[str], require_company: bool = True) -> Principal:
        """Resolve a token into the authenticated principal.

        Args:
            token: Encoded JWT
            require_company: Reject users that are not attached to a company

        Raises:
            AuthenticationError: If the token is missing, invalid, expired, or
                names an unknown or inactive user
            NoCompanyError: If the user is not attached to a company
        """
        if not token:
            raise AuthenticationError("Unauthorized")

        try:
            claims = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError as e:
            logger.info("Rejected expired token")
            raise AuthenticationError("Unauthorized") from e
        except jwt.InvalidTokenError as e:
            logger.info("Rejected invalid token: %s", e)
            raise AuthenticationError("Unauthorized") from e

        try:
            user_id = int(claims["sub"])
        except (TypeError, ValueError) as e:
            raise AuthenticationError("Unauthorized") from e

        user = self.db.get_user(user_id)
        if user is None or not user.is_active:
            logger.info("Rejected token for unknown or inactive user %s", user_id)
            raise AuthenticationError("Unauthorized")

        principal = Principal(
            id=user.id, email=user.email, role=user.role, company_id=user.company_id
        )
        if require_company and principal.company_id is None:
            raise NoCompanyError(no_company(user.email))
        return principal


def extract_token(authorization: Optional[str], cookie: Optional[str] = None) -> Optional[str]:
    """Pick the credential from an Authorization header or the token cookie."""
    if authorization and authorization.lower().startswith(BEARER_PREFIX):
        token = authorization[len(BEARER_PREFIX):].strip()
        if token:
            return token
    return cookie or None
