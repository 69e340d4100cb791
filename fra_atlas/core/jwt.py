"""Supabase access token verification.

HS256 tokens are checked against the project's JWT secret; RS256/ES256
tokens against the public keys published in the project's JWKS.
"""

from typing import Any

import jwt

from fra_atlas.core.config import settings
from fra_atlas.core.jwks import JWKKey, jwks_service
from fra_atlas.schemas.auth import JWTClaims
from fra_atlas.utils.logging import get_logger

LOGGER = get_logger(__name__)

REQUIRED_CLAIMS = ["sub", "exp", "iat", "iss"]


class JWTVerifier:
    """Verifies Supabase access tokens and returns their claims."""

    def __init__(self, supabase_url: str, jwt_secret: str = ""):
        self.supabase_url = supabase_url.rstrip("/")
        self.expected_issuer = f"{self.supabase_url}/auth/v1"
        self.jwt_secret = jwt_secret

    async def verify_token(self, token: str) -> JWTClaims:
        """Verify and decode a Supabase JWT.

        Args:
            token: Access token from the Authorization header

        Returns:
            Decoded and validated claims

        Raises:
            jwt.InvalidTokenError: If the token is malformed, expired, signed
                with an unknown key or issued by another project
        """
        try:
            header = jwt.get_unverified_header(token)
        except jwt.DecodeError as e:
            raise jwt.InvalidTokenError("Malformed token") from e

        alg = header.get("alg")

        if alg == "HS256":
            if not self.jwt_secret:
                raise jwt.InvalidTokenError("HS256 token received but SUPABASE_JWT_SECRET is not configured")
            key: Any = self.jwt_secret
        elif alg in ("RS256", "ES256"):
            kid = header.get("kid")
            if not kid:
                raise jwt.InvalidTokenError("JWT header missing 'kid'")
            try:
                jwk_key = await jwks_service.get_key(kid)
            except RuntimeError as e:
                LOGGER.error(f"Unable to load signing keys: {e}")
                raise jwt.InvalidTokenError("Signing keys unavailable") from e
            if jwk_key is None:
                raise jwt.InvalidTokenError(f"No matching key found for kid: {kid}")
            key = self._public_key(jwk_key)
        else:
            raise jwt.InvalidTokenError(f"Unsupported algorithm: {alg}")

        try:
            payload = jwt.decode(
                token,
                key,
                algorithms=[alg],
                audience="authenticated",
                issuer=self.expected_issuer,
                options={"require": REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError as e:
            LOGGER.warning(f"Token expired: {e}")
            raise
        except jwt.InvalidTokenError as e:
            LOGGER.warning(f"Invalid token: {e}")
            raise

        return JWTClaims(**payload)

    @staticmethod
    def _public_key(jwk_key: JWKKey) -> Any:
        """Convert a JWK into a key object PyJWT can verify with."""
        try:
            return jwt.PyJWK(jwk_key.model_dump(exclude_none=True)).key
        except (jwt.PyJWKError, ValueError) as e:
            raise jwt.InvalidTokenError(f"Unusable signing key {jwk_key.kid}: {e}") from e


jwt_verifier = JWTVerifier(
    supabase_url=settings.supabase_url,
    jwt_secret=settings.supabase_jwt_secret,
)
