"""
HTTP client for the Catalog API: authenticated GET/POST with JSON bodies.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Type, TypeVar

import requests
from pydantic import BaseModel, ValidationError

from ..catalog.models import CatalogModel, ErrorResponse

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://connect.squareup.com"

ResponseT = TypeVar("ResponseT", bound=BaseModel)


class CatalogApiError(Exception):
    """Raised when the Catalog API cannot be reached or answers nonsense."""


class CatalogHttpClient:
    """
    Thin wrapper around ``requests`` for one account's access token.

    Successful (200) responses are decoded into the requested pydantic model.
    Error responses are logged and reported as None, matching how callers
    decide whether to continue.
    """

    def __init__(
        self,
        access_token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = 30.0,
        api_version: Optional[str] = None,
    ) -> None:
        self.access_token = access_token
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.api_version = api_version

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self.access_token}",
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        if self.api_version:
            headers["Square-Version"] = self.api_version
        return headers

    def _url(self, path: str) -> str:
        if path.startswith("http://") or path.startswith("https://"):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    def get(
        self,
        path: str,
        response_model: Type[ResponseT],
        params: Optional[Dict[str, Any]] = None,
    ) -> Optional[ResponseT]:
        url = self._url(path)
        logger.info("GET %s", url)
        try:
            resp = requests.get(url, params=params, headers=self._headers(), timeout=self.timeout_seconds)
        except requests.RequestException as e:
            raise CatalogApiError(f"GET {url} failed: {e}") from e
        return self._parse_response(resp, response_model)

    def post(
        self,
        path: str,
        body: CatalogModel,
        response_model: Type[ResponseT],
    ) -> Optional[ResponseT]:
        url = self._url(path)
        logger.info("POST %s", url)
        payload = body.to_payload()
        try:
            resp = requests.post(url, json=payload, headers=self._headers(), timeout=self.timeout_seconds)
        except requests.RequestException as e:
            raise CatalogApiError(f"POST {url} failed: {e}") from e
        return self._parse_response(resp, response_model)

    def _parse_response(
        self,
        resp: requests.Response,
        response_model: Type[ResponseT],
    ) -> Optional[ResponseT]:
        if resp.status_code != 200:
            self.log_http_error(resp)
            return None
        try:
            return response_model.model_validate_json(resp.content)
        except ValidationError as e:
            raise CatalogApiError(f"Unexpected response from {resp.url}: {e}") from e

    def log_http_error(self, resp: requests.Response) -> None:
        """Log the errors carried by a non-200 response."""
        body = resp.text
        if not body:
            # No body usually means the request never reached the API.
            logger.error("%s (%s)", resp.status_code, resp.reason)
            return

        try:
            error_response = ErrorResponse.model_validate_json(body)
        except ValidationError:
            error_response = None

        if error_response is None or not error_response.errors:
            logger.error("[%s %s] %s", resp.status_code, resp.reason, body)
            return

        for error in error_response.errors:
            logger.error("[%s] %s", error.code, error.detail)
