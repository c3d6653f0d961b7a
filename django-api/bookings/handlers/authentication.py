"""Bearer credential authentication for DRF."""

from rest_framework.authentication import BaseAuthentication, get_authorization_header
from rest_framework.exceptions import AuthenticationFailed

from bookings.container import get_container
from bookings.domain.errors import AuthenticationError


class BearerIdentityAuthentication(BaseAuthentication):
    """Authenticates ``Authorization: Bearer <token>`` through the identity verifier.

    ``request.user`` becomes the verified CallerIdentity.
    """

    keyword = "Bearer"

    def authenticate(self, request):
        header = get_authorization_header(request).decode("latin-1")
        if not header:
            return None
        parts = header.split(" ", 1)
        if len(parts) != 2 or parts[0] != self.keyword or not parts[1].strip():
            raise AuthenticationFailed("Unauthorized: Missing Bearer token")

        token = parts[1].strip()
        try:
            identity = get_container().identity.verify(token)
        except AuthenticationError as exc:
            raise AuthenticationFailed(exc.message) from exc
        return identity, token

    def authenticate_header(self, request) -> str:
        return self.keyword
