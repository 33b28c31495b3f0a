# storefront/services/identity_provider.py
from dataclasses import dataclass

import requests

from storefront.domain.errors import Internal, Unauthorized
from storefront.utils.logging import get_logger
from storefront.utils.retry import http_retry

logger = get_logger(__name__)

GOOGLE_TOKENINFO_URL = "https://oauth2.googleapis.com/tokeninfo"
GOOGLE_ISSUERS = ("accounts.google.com", "https://accounts.google.com")


@dataclass(frozen=True)
class FederatedProfile:
    email: str
    name: str
    picture: str = ""


class GoogleIdentityClient:
    """Weryfikacja Google ID tokena przez endpoint tokeninfo."""

    def __init__(self, client_id: str | None, timeout: int = 3, session: requests.Session | None = None):
        self.client_id = client_id
        self.timeout = timeout
        self.http = session or requests.Session()

    @http_retry()
    def _tokeninfo(self, credential: str) -> requests.Response:
        logger.info("GoogleIdentityClient GET tokeninfo")
        return self.http.get(GOOGLE_TOKENINFO_URL, params={"id_token": credential}, timeout=self.timeout)

    def verify(self, credential: str) -> FederatedProfile:
        if not self.client_id:
            raise Internal("Google login is not configured")

        resp = self._tokeninfo(credential)
        if resp.status_code != 200:
            raise Unauthorized("Invalid Google credential")

        data = resp.json()
        if data.get("aud") != self.client_id or data.get("iss") not in GOOGLE_ISSUERS:
            logger.warning("Google credential issued for another audience")
            raise Unauthorized("Invalid Google credential")

        if str(data.get("email_verified", "")).lower() != "true" or not data.get("email"):
            raise Unauthorized("Google account email is not verified")

        email = data["email"].strip().lower()
        return FederatedProfile(
            email=email,
            name=data.get("name") or email.split("@")[0],
            picture=data.get("picture") or "",
        )
