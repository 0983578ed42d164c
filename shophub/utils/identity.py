"""
OpenID Connect client for the external identity provider.

Only the authorization-code flow is used: the provider authenticates the
browser, we exchange the code and read the userinfo claims. The session keeps
nothing but the subject id that Flask-Login stores.
"""
from typing import Any, Dict, Optional
from urllib.parse import urlencode

import requests
from flask import Flask

from shophub.utils.exceptions import IdentityProviderError
from shophub.utils.logging import get_logger

log = get_logger(__name__)


class IdentityProvider:
    def __init__(self) -> None:
        self.issuer: str = ""
        self.client_id: str = ""
        self.client_secret: str = ""
        self.scopes: str = "openid email profile"
        self.timeout: float = 10
        self.session = requests.Session()
        self._metadata: Optional[Dict[str, Any]] = None

    def init_app(self, app: Flask) -> None:
        self.issuer = (app.config.get("OIDC_ISSUER_URL") or "").rstrip("/")
        self.client_id = app.config.get("OIDC_CLIENT_ID", "")
        self.client_secret = app.config.get("OIDC_CLIENT_SECRET", "")
        self.scopes = app.config.get("OIDC_SCOPES", self.scopes)
        self.timeout = app.config.get("OIDC_TIMEOUT", self.timeout)
        self._metadata = None
        app.extensions["identity"] = self

    @property
    def configured(self) -> bool:
        return bool(self.issuer and self.client_id)

    @property
    def metadata(self) -> Dict[str, Any]:
        """Discovery document, fetched once per app."""
        if not self.configured:
            raise RuntimeError("Identity provider not configured. Set OIDC_ISSUER_URL and OIDC_CLIENT_ID.")
        if self._metadata is None:
            url = f"{self.issuer}/.well-known/openid-configuration"
            self._metadata = self._request("GET", url).json()
            log.info("Loaded OIDC discovery document from %s", url)
        return self._metadata

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
            return response
        except requests.RequestException as e:
            log.warning(f"Identity provider request failed ({method} {url}): {e}")
            raise IdentityProviderError() from e

    def authorization_url(self, redirect_uri: str, state: str) -> str:
        params = {
            "response_type": "code",
            "client_id": self.client_id,
            "redirect_uri": redirect_uri,
            "scope": self.scopes,
            "state": state,
        }
        return f"{self.metadata['authorization_endpoint']}?{urlencode(params)}"

    def fetch_claims(self, code: str, redirect_uri: str) -> Dict[str, Any]:
        """Exchange an authorization code and return the userinfo claims."""
        tokens = self._request(
            "POST",
            self.metadata["token_endpoint"],
            data={
                "grant_type": "authorization_code",
                "code": code,
                "redirect_uri": redirect_uri,
                "client_id": self.client_id,
                "client_secret": self.client_secret,
            },
        ).json()
        access_token = tokens.get("access_token")
        if not access_token:
            raise IdentityProviderError("Identity provider returned no access token")

        claims = self._request(
            "GET",
            self.metadata["userinfo_endpoint"],
            headers={"Authorization": f"Bearer {access_token}"},
        ).json()
        if not claims.get("sub"):
            raise IdentityProviderError("Identity provider returned no subject")
        return claims

    def logout_url(self, post_logout_redirect_uri: str) -> Optional[str]:
        endpoint = self.metadata.get("end_session_endpoint")
        if not endpoint:
            return None
        params = {
            "client_id": self.client_id,
            "post_logout_redirect_uri": post_logout_redirect_uri,
        }
        return f"{endpoint}?{urlencode(params)}"
