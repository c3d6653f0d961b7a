"""Bearer token verification for Firebase-issued ID tokens."""

import logging

import jwt
from jwt import PyJWKClient, PyJWKClientError

from bookings.domain import CallerIdentity
from bookings.domain.errors import InvalidCredentialsError
from bookings.gateways.interfaces import IdentityVerifier

logger = logging.getLogger(__name__)

GOOGLE_JWKS_URL = (
    "https://www.googleapis.com/service_accounts/v1/jwk/"
    "securetoken@system.gserviceaccount.com"
)


class FirebaseTokenVerifier(IdentityVerifier):
    """Validates Firebase ID tokens against Google's published signing keys."""

    def __init__(self, project_id: str, jwks_url: str = GOOGLE_JWKS_URL) -> None:
        self.project_id = project_id
        self.issuer = f"https://securetoken.google.com/{project_id}"
        self.jwks_url = jwks_url
        self._jwks_client: PyJWKClient | None = None

    @property
    def jwks_client(self) -> PyJWKClient:
        """Lazy-load JWKS client."""
        if self._jwks_client is None:
            self._jwks_client = PyJWKClient(self.jwks_url, cache_keys=True, lifespan=3600)
        return self._jwks_client

    def verify(self, token: str) -> CallerIdentity:
        if not self.project_id:
            logger.error("Identity project id is not configured")
            raise InvalidCredentialsError("Invalid token")
        try:
            signing_key = self.jwks_client.get_signing_key_from_jwt(token)
            claims = jwt.decode(
                token,
                signing_key.key,
                algorithms=["RS256"],
                audience=self.project_id,
                issuer=self.issuer,
                options={"require": ["exp", "iat", "sub"]},
            )
        except PyJWKClientError as exc:
            logger.warning("JWKS client error: %s", exc)
            raise InvalidCredentialsError("Invalid token") from exc
        except jwt.ExpiredSignatureError as exc:
            logger.info("Expired ID token")
            raise InvalidCredentialsError("Token expired") from exc
        except jwt.PyJWTError as exc:
            logger.warning("Token verification error: %s", exc)
            raise InvalidCredentialsError("Invalid token") from exc

        email = claims.get("email")
        if not email:
            raise InvalidCredentialsError("Token carries no email")
        return CallerIdentity(email=email, uid=claims.get("sub"), claims=claims)
