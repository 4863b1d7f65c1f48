# services/identity.py
"""
Identity provider wrapper (Firebase Auth).

The backend never sees passwords after signup and never issues
sessions; it only verifies ID tokens minted by the provider.
"""

import logging
from typing import Optional

from firebase_admin import auth

from services.errors import Unauthenticated, ValidationError

logger = logging.getLogger(__name__)


class FirebaseIdentityProvider:
    """Verifies bearer tokens and creates accounts through Firebase Auth."""

    def verify_token(self, token: str) -> str:
        """Return the user id for a valid ID token."""
        if not token:
            raise Unauthenticated()
        try:
            decoded = auth.verify_id_token(token)
        except (ValueError, auth.InvalidIdTokenError, auth.ExpiredIdTokenError,
                auth.RevokedIdTokenError, auth.CertificateFetchError, auth.UserDisabledError) as e:
            logger.info("Token verification failed: %s", e)
            raise Unauthenticated()

        uid = decoded.get("uid")
        if not uid:
            raise Unauthenticated("User ID not found")
        return uid

    def create_user(self, email: str, password: str, display_name: Optional[str] = None) -> str:
        """Create an account with a confirmed email and return its id."""
        try:
            user = auth.create_user(
                email=email,
                password=password,
                display_name=display_name or None,
                email_verified=True,
            )
        except (ValueError, auth.EmailAlreadyExistsError) as e:
            logger.info("Sign up rejected for %s: %s", email, e)
            raise ValidationError(str(e))
        return user.uid


def bearer_token(authorization: Optional[str]) -> str:
    """Extract the token from an `Authorization: Bearer <token>` header."""
    if not authorization:
        raise Unauthenticated("Missing Authorization Header")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise Unauthenticated("Invalid Authorization Header")
    return token.strip()
