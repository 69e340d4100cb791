"""JWKS (JSON Web Key Set) cache for Supabase asymmetric signing keys."""

import asyncio
import time
from typing import Dict, Optional

import aiohttp
from pydantic import BaseModel

from fra_atlas.core.config import settings
from fra_atlas.utils.logging import get_logger

LOGGER = get_logger(__name__)


class JWKKey(BaseModel):
    """JSON Web Key (RSA or EC public key)."""

    kid: str
    kty: str
    alg: Optional[str] = None
    use: Optional[str] = None
    # RSA
    n: Optional[str] = None
    e: Optional[str] = None
    # EC
    crv: Optional[str] = None
    x: Optional[str] = None
    y: Optional[str] = None


class JWKSResponse(BaseModel):
    keys: list[JWKKey]


class JWKSService:
    """Fetches the project's JWKS and keeps it in memory for ``cache_ttl`` seconds."""

    def __init__(self, supabase_url: str, cache_ttl: int = 3600, timeout: int = 30):
        self.supabase_url = supabase_url.rstrip("/")
        self.jwks_url = f"{self.supabase_url}/auth/v1/.well-known/jwks.json"
        self.cache_ttl = cache_ttl
        self.timeout = timeout

        self._keys_cache: Optional[Dict[str, JWKKey]] = None
        self._cache_timestamp: Optional[float] = None
        self._lock = asyncio.Lock()

    async def get_keys(self) -> Dict[str, JWKKey]:
        """Get the signing keys, refreshing the cache when it has expired.

        Raises:
            RuntimeError: If keys cannot be fetched
        """
        async with self._lock:
            if self._is_cache_valid():
                return dict(self._keys_cache)

            LOGGER.info("Fetching fresh JWKS keys from Supabase")
            keys = await self._fetch_keys()
            self._keys_cache = dict(keys)
            self._cache_timestamp = time.time()
            return keys

    async def get_key(self, kid: str) -> Optional[JWKKey]:
        keys = await self.get_keys()
        return keys.get(kid)

    def _is_cache_valid(self) -> bool:
        if self._keys_cache is None or self._cache_timestamp is None:
            return False
        return (time.time() - self._cache_timestamp) < self.cache_ttl

    async def _fetch_keys(self) -> Dict[str, JWKKey]:
        try:
            timeout = aiohttp.ClientTimeout(total=self.timeout)
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.get(self.jwks_url) as response:
                    if response.status != 200:
                        raise RuntimeError(f"JWKS endpoint returned {response.status}: {await response.text()}")
                    data = await response.json()
        except aiohttp.ClientError as e:
            LOGGER.error(f"Network error fetching JWKS: {e}")
            raise RuntimeError(f"Failed to fetch JWKS keys: {e}") from e

        keys = {key.kid: key for key in JWKSResponse(**data).keys}
        LOGGER.info(f"Fetched {len(keys)} JWKS keys")
        return keys


jwks_service = JWKSService(
    supabase_url=settings.supabase_url,
    cache_ttl=settings.supabase_jwks_cache_ttl,
)
