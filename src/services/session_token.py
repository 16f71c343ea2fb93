"""Signed session tokens (JWT).

Tokens carry the user ID and an expiry and are verified locally with the
secret the codec was built with. No collaborator call is involved.
"""

import base64
import logging
from datetime import datetime, timedelta, timezone

from jose import ExpiredSignatureError, JWTError, jwt
from jose.exceptions import JWTClaimsError

from domain.model.errors import InvalidJWTError, InvalidJWTSignatureError
from domain.model.user import SessionClaims

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"
SESSION_VALIDITY = timedelta(hours=24)


class SessionTokenCodec:
    """Issues and verifies HS256 session tokens."""

    def __init__(self, secret_key: str, validity: timedelta = SESSION_VALIDITY):
        if not secret_key:
            raise ValueError(
                "secret_key is required. "
                "Generate a secure key with: openssl rand -hex 32"
            )
        self._secret_key = secret_key
        self.validity = validity

    def issue(self, user_id: str) -> str:
        """Create a signed token for ``user_id`` expiring after ``validity``."""
        expire = datetime.now(timezone.utc) + self.validity
        payload = {
            "user_id": user_id,
            "exp": expire,
        }
        return jwt.encode(payload, self._secret_key, algorithm=JWT_ALGORITHM)

    def verify(self, token: str) -> SessionClaims:
        """Verify signature and expiry and return the claims.

        Raises:
            InvalidJWTSignatureError: token was not signed with our secret
                (including a disallowed algorithm)
            InvalidJWTError: token is malformed, expired, or missing claims
        """
        # Structure first, so a garbled token is never reported as a bad signature
        segments = token.split(".")
        if len(segments) != 3 or not all(_is_canonical_b64url(s) for s in segments):
            raise InvalidJWTError()
        try:
            jwt.get_unverified_header(token)
            jwt.get_unverified_claims(token)
        except JWTError as e:
            logger.debug("Malformed session token", extra={"error": str(e)})
            raise InvalidJWTError() from e

        try:
            claims = jwt.decode(token, self._secret_key, algorithms=[JWT_ALGORITHM])
        except ExpiredSignatureError as e:
            raise InvalidJWTError("jwt has expired") from e
        except JWTClaimsError as e:
            raise InvalidJWTError(str(e)) from e
        except JWTError as e:
            logger.debug("Session token signature rejected", extra={"error": str(e)})
            raise InvalidJWTSignatureError() from e

        # A decoded token is only valid with both claims present
        user_id = claims.get("user_id")
        exp = claims.get("exp")
        if not isinstance(user_id, str) or not user_id or exp is None:
            raise InvalidJWTError("jwt is missing required claims")

        try:
            expires_at = datetime.fromtimestamp(exp, tz=timezone.utc)
        except (OverflowError, OSError, ValueError, TypeError) as e:
            raise InvalidJWTError("jwt exp is out of range") from e

        return SessionClaims(user_id=user_id, expires_at=expires_at)


def _is_canonical_b64url(segment: str) -> bool:
    """True if ``segment`` is the exact unpadded base64url encoding of its bytes.

    The decoder ignores the unused low bits of a segment's last character,
    so two spellings can decode to the same signature. Only one is accepted.
    """
    try:
        raw = base64.urlsafe_b64decode(segment + "=" * (-len(segment) % 4))
    except ValueError:
        return False
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii") == segment
