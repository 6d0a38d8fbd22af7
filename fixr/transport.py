"""
HTTP dispatch for FIXR calls.

Every request gets the configured User-Agent. JSON calls also carry FIXR's
platform/version headers, spelled exactly as FIXR expects; the Stripe token
endpoint takes a form body and none of them.
"""
from typing import Optional

import httpx
from loguru import logger

from .config import ClientConfig
from .envelope import ResponseParams, decode_json_response
from .errors import RequestConstructionError, TransportError

JSON_CONTENT_TYPE = "application/json"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class Transport:
    """Builds, sends and decodes requests. Never retries."""

    def __init__(self, config: ClientConfig, http_client: Optional[httpx.Client] = None):
        self.config = config
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(timeout=config.timeout)

    def get(self, url: str, obj: ResponseParams, authenticated: bool = False, token: str = "") -> None:
        authorization = f"Token {token}" if authenticated else None
        self._request("GET", url, obj, authorization=authorization)

    def post(self, url: str, body: bytes, obj: ResponseParams, authenticated: bool = False,
             token: str = "", authorization: Optional[str] = None) -> None:
        if authenticated and authorization is None:
            authorization = f"Token {token}"
        self._request("POST", url, obj, body=body, authorization=authorization)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def _headers(self, url: str, authorization: Optional[str]) -> list:
        # A list of pairs keeps the names byte-for-byte as written here
        headers = [("User-Agent", self.config.user_agent)]
        if authorization is not None:
            headers.append(("Authorization", authorization))
        if url == self.config.card_url:
            headers.append(("Content-Type", FORM_CONTENT_TYPE))
        else:
            headers.append(("Content-Type", JSON_CONTENT_TYPE))
            headers.append(("FIXR-Platform", self.config.platform))
            headers.append(("FIXR-Platform-Version", self.config.platform_version))
            headers.append(("FIXR-App-Version", self.config.app_version))
        return headers

    def _request(self, method: str, url: str, obj: ResponseParams,
                 body: Optional[bytes] = None, authorization: Optional[str] = None) -> None:
        try:
            request = self._client.build_request(
                method, url, content=body, headers=self._headers(url, authorization)
            )
        except (httpx.InvalidURL, httpx.UnsupportedProtocol, ValueError, TypeError) as e:
            raise RequestConstructionError(f"error creating {method} request: {e}") from e

        logger.debug("→ {} {}", method, request.url)
        try:
            response = self._client.send(request, stream=True)
        except httpx.UnsupportedProtocol as e:
            raise RequestConstructionError(f"error creating {method} request: {e}") from e
        except httpx.RequestError as e:
            logger.debug("✗ {} {}: {}", method, request.url, e)
            raise TransportError(f"error executing request: {e}") from e

        try:
            try:
                response.read()
            except httpx.RequestError as e:
                raise TransportError(f"error executing request: {e}") from e
            logger.debug("← {} {} {}", response.status_code, method, request.url)
            decode_json_response(response, obj)
        finally:
            response.close()
