"""HTTP client for the ViSearch API.

Every call follows the same sequence: build the request, add the
Authorization and User-Agent headers, execute it on the pooled transport and
wrap the response. Nothing is retried; failures surface as the errors in
``visearch.errors``.
"""

from __future__ import annotations

import logging
import os
from typing import IO, Optional, Union

from requests import PreparedRequest

from .auth import Credentials, add_auth_header, add_user_agent_header
from .config import ClientConfig, Settings, settings
from .errors import NetworkError, UnauthorizedError
from .request_building import (
    Params,
    build_get_request,
    build_multipart_request,
    build_post_request,
    check_url,
)
from .response import ResponseEnvelope, wrap_response
from .transport import Transport

logger = logging.getLogger(__name__)


class ViSearchHttpClient:
    def __init__(
        self,
        endpoint: str,
        access_key: str,
        secret_key: str,
        client_config: Optional[ClientConfig] = None,
        transport: Optional[Transport] = None,
    ) -> None:
        self._endpoint = endpoint
        self._credentials = Credentials(access_key, secret_key)
        if client_config is None:
            client_config = transport.config if transport is not None else ClientConfig()
        self._config = client_config
        self._transport = transport or Transport(self._config)

    @classmethod
    def from_settings(cls, settings_obj: Optional[Settings] = None) -> "ViSearchHttpClient":
        """Build a client from the global settings (env overlaid)."""
        s = settings_obj or settings()
        if not s.access_key or not s.secret_key:
            raise UnauthorizedError("Access key and secret key are required")
        return cls(s.endpoint, s.access_key, s.secret_key, client_config=s.client_config)

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def client_config(self) -> ClientConfig:
        return self._config

    def get(self, path: str, params: Optional[Params] = None) -> ResponseEnvelope:
        return self._send(build_get_request(self._endpoint + path, params))

    def post(self, path: str, params: Optional[Params] = None) -> ResponseEnvelope:
        return self._send(build_post_request(self._endpoint + path, params))

    def post_image(
        self,
        path: str,
        params: Optional[Params],
        file: Union[str, "os.PathLike[str]"],
    ) -> ResponseEnvelope:
        """Upload the image at ``file``; the file is closed before this returns."""
        url = check_url(self._endpoint + path)
        try:
            fp = open(file, "rb")
        except OSError as exc:
            logger.warning("Could not open image file %s: %s", file, exc)
            raise NetworkError(f"Could not read image file {file}") from exc
        with fp:
            request = build_multipart_request(url, params, fp, os.path.basename(os.fspath(file)))
            return self._send(request)

    def post_image_stream(
        self,
        path: str,
        params: Optional[Params],
        stream: IO[bytes],
        filename: Optional[str],
    ) -> ResponseEnvelope:
        """Upload image bytes read from ``stream``; the caller keeps ownership of it."""
        return self._send(build_multipart_request(self._endpoint + path, params, stream, filename))

    def _send(self, request: PreparedRequest) -> ResponseEnvelope:
        add_auth_header(request, self._credentials)
        add_user_agent_header(request, self._config)
        logger.debug("Sending %s %s", request.method, request.url)
        return wrap_response(self._transport.execute(request))

    def close(self) -> None:
        self._transport.close()

    def __enter__(self) -> "ViSearchHttpClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
