"""
Firebase ID token verification
"""

import logging
import re
import time

import httpx
from jose import JWTError, jwt

from travelio.core.errors import UnauthorizedError

logger = logging.getLogger(__name__)

_MAX_AGE = re.compile(r"max-age=(\d+)")


class FirebaseTokenVerifier:
    """
    Verifies Firebase ID tokens (RS256) against Google's published x509
    certificates and returns the principal's email.

    Certificates are cached for as long as the certs endpoint's
    Cache-Control max-age allows.
    """

    def __init__(self, project_id: str | None, certs_url: str, http_client: httpx.AsyncClient | None = None):
        self.project_id = project_id
        self.certs_url = certs_url
        self._http = http_client or httpx.AsyncClient(timeout=10.0)
        self._certs: dict[str, str] = {}
        self._certs_expire_at = 0.0

    async def _get_certs(self) -> dict[str, str]:
        if self._certs and time.monotonic() < self._certs_expire_at:
            return self._certs

        response = await self._http.get(self.certs_url)
        response.raise_for_status()
        self._certs = response.json()

        match = _MAX_AGE.search(response.headers.get("cache-control", ""))
        max_age = int(match.group(1)) if match else 0
        self._certs_expire_at = time.monotonic() + max_age
        return self._certs

    async def verify(self, token: str | None) -> str:
        if not token:
            raise UnauthorizedError()
        if not self.project_id:
            logger.error("FIREBASE_PROJECT_ID is not configured; rejecting token")
            raise UnauthorizedError()

        try:
            header = jwt.get_unverified_header(token)
            certs = await self._get_certs()
            cert = certs.get(header.get("kid"))
            if cert is None:
                raise UnauthorizedError()

            claims = jwt.decode(
                token,
                cert,
                algorithms=["RS256"],
                audience=self.project_id,
                issuer=f"https://securetoken.google.com/{self.project_id}",
                options={"verify_at_hash": False},
            )
        except (JWTError, httpx.HTTPError) as e:
            logger.info("Token verification failed: %s", e)
            raise UnauthorizedError() from e

        email = claims.get("email")
        if not email:
            raise UnauthorizedError()
        return email

    async def close(self):
        await self._http.aclose()
