"""
Security helpers for password hashing and JWT authentication.

``CredentialService`` implements a lightweight JSON Web Token (JWT)
mechanism using HMAC‑SHA256 signatures and base64url encoding, plus
PBKDF2‑HMAC password hashing with a per‑password salt.  The signing
secret is handed to the service when it is constructed; the
application builds exactly one instance in ``create_app`` and stores it
on ``app.state``.

The module also provides the FastAPI dependencies that guard protected
routes (``get_current_user_id``) and the single ownership predicate
used before any post or comment is modified (``ensure_author``).
"""

import base64
import hashlib
import hmac
import json
import logging
import os
import time
from typing import Any, Dict, Optional

from fastapi import Depends, Request
from fastapi.security import APIKeyHeader

from .exceptions import ForbiddenError, InvalidTokenError, NotAuthorizedError


logger = logging.getLogger(__name__)

PBKDF2_ITERATIONS = 100_000
DEFAULT_TOKEN_TTL = 60 * 60


def _b64_url_encode(data: bytes) -> str:
    """Base64‑url encode bytes without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    """Decode base64‑url encoded string, adding padding if necessary."""
    padding = '=' * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


class CredentialService:
    """Hashes passwords and issues/verifies bearer tokens.

    Parameters
    ----------
    secret : str
        Process‑wide signing secret.  Must be non‑empty.
    token_ttl : int
        Lifetime of issued tokens in seconds (one hour by default).
    """

    def __init__(self, secret: str, token_ttl: int = DEFAULT_TOKEN_TTL) -> None:
        if not secret:
            raise ValueError("A signing secret is required")
        self._secret = secret.encode("utf-8")
        self.token_ttl = token_ttl

    def _sign(self, message: bytes) -> bytes:
        return hmac.new(self._secret, message, hashlib.sha256).digest()

    # -- passwords ---------------------------------------------------------

    def hash_password(self, password: str) -> str:
        """Hash a password using PBKDF2‑HMAC with SHA‑256.

        A 16‑byte random salt is generated for each password.  The
        result contains the salt and the derived key in hex, separated
        by ``$``.
        """
        salt = os.urandom(16)
        dk = hashlib.pbkdf2_hmac('sha256', password.encode('utf-8'), salt, PBKDF2_ITERATIONS)
        return f"{salt.hex()}${dk.hex()}"

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Check a plain password against a stored ``salt$hash`` string.

        Malformed stored values never match.
        """
        try:
            salt_hex, hash_hex = hashed_password.split('$', 1)
            salt = bytes.fromhex(salt_hex)
            stored_hash = bytes.fromhex(hash_hex)
        except (AttributeError, ValueError):
            return False
        dk = hashlib.pbkdf2_hmac('sha256', plain_password.encode('utf-8'), salt, PBKDF2_ITERATIONS)
        return hmac.compare_digest(dk, stored_hash)

    # -- tokens ------------------------------------------------------------

    def issue_token(self, subject_id: str, now: Optional[int] = None) -> str:
        """Create a signed token for ``subject_id``.

        The payload carries ``userId``, ``iat`` and ``exp`` (``iat`` plus
        the configured lifetime).  The token has the usual
        ``header.payload.signature`` shape.
        """
        issued_at = int(time.time()) if now is None else now
        claims = {"userId": subject_id, "iat": issued_at, "exp": issued_at + self.token_ttl}
        header = {"alg": "HS256", "typ": "JWT"}
        header_b64 = _b64_url_encode(json.dumps(header, separators=(',', ':')).encode("utf-8"))
        payload_b64 = _b64_url_encode(json.dumps(claims, separators=(',', ':')).encode("utf-8"))
        signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
        signature_b64 = _b64_url_encode(self._sign(signing_input))
        return f"{header_b64}.{payload_b64}.{signature_b64}"

    def verify_token(self, token: str, now: Optional[int] = None) -> str:
        """Verify a token and return its subject id.

        Raises
        ------
        InvalidTokenError
            If the token is malformed, its signature does not match, it
            has expired or it carries no subject.
        """
        parts = token.split('.') if token else []
        if len(parts) != 3:
            raise InvalidTokenError("Malformed token")
        header_b64, payload_b64, signature_b64 = parts
        signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
        try:
            actual_sig = _b64_url_decode(signature_b64)
        except ValueError as e:
            raise InvalidTokenError("Malformed token") from e
        # Nothing from the token is parsed until its signature matches.
        if not hmac.compare_digest(self._sign(signing_input), actual_sig):
            raise InvalidTokenError("Bad signature")
        try:
            header = json.loads(_b64_url_decode(header_b64).decode("utf-8"))
            claims: Dict[str, Any] = json.loads(_b64_url_decode(payload_b64).decode("utf-8"))
        except (ValueError, RecursionError) as e:
            raise InvalidTokenError("Malformed token") from e
        if not isinstance(header, dict) or header.get("alg") != "HS256":
            raise InvalidTokenError("Unsupported token algorithm")
        if not isinstance(claims, dict):
            raise InvalidTokenError("Malformed token")
        current = int(time.time()) if now is None else now
        exp = claims.get("exp")
        if not isinstance(exp, (int, float)) or int(exp) <= current:
            raise InvalidTokenError("Token expired")
        subject = claims.get("userId")
        if not isinstance(subject, str) or not subject:
            raise InvalidTokenError("Token has no subject")
        return subject


# ---------------------------------------------------------------------------
# FastAPI dependencies
# ---------------------------------------------------------------------------

# The raw header value is the token itself; no scheme is required.
authorization_header = APIKeyHeader(name="authorization", auto_error=False)


def get_credentials(request: Request) -> CredentialService:
    """Return the credential service built by ``create_app``."""
    return request.app.state.credentials


def get_current_user_id(
    token: Optional[str] = Depends(authorization_header),
    credentials: CredentialService = Depends(get_credentials),
) -> str:
    """Dependency that binds the caller's identity to the request.

    A missing header is treated as an empty token.  A leading
    ``Bearer`` scheme is accepted and stripped.  Every failure, whether
    no token or a bad one, raises ``NotAuthorizedError`` so the route
    body never runs.
    """
    raw = (token or "").strip()
    if raw[:7].lower() == "bearer ":
        raw = raw[7:].strip()
    try:
        return credentials.verify_token(raw)
    except InvalidTokenError as e:
        logger.debug("Rejected bearer token: %s", e)
        raise NotAuthorizedError()


def ensure_author(caller_id: str, author_id: str) -> None:
    """Allow a mutation only when the caller wrote the resource."""
    if caller_id != author_id:
        logger.warning("User %s attempted to modify a resource owned by %s", caller_id, author_id)
        raise ForbiddenError()
