from __future__ import annotations

import logging
from typing import Optional

import requests
from requests.adapters import HTTPAdapter

from .config import ClientConfig
from .errors import NetworkError

logger = logging.getLogger(__name__)


class Transport:
    """Pooled, synchronous request executor shared by one client.

    Pool size is fixed at construction: ``max_connection`` is used both as the
    number of per-host pools and as each pool's size, and callers block once
    every connection is checked out. A caller-supplied ``session`` is used
    as is: its adapters, and so its pooling, are left untouched.
    """

    def __init__(self, config: Optional[ClientConfig] = None, session: Optional[requests.Session] = None) -> None:
        self._config = config or ClientConfig()
        if session is not None:
            self._session = session
            return
        self._session = requests.Session()
        adapter = HTTPAdapter(
            pool_connections=self._config.max_connection,
            pool_maxsize=self._config.max_connection,
            pool_block=True,
            max_retries=0,
        )
        self._session.mount("http://", adapter)
        self._session.mount("https://", adapter)

    @property
    def config(self) -> ClientConfig:
        return self._config

    def execute(self, request: requests.PreparedRequest) -> requests.Response:
        """Send ``request`` and return the response with its body still unread.

        Raises:
            NetworkError: on any I/O failure, with the original exception as cause.
        """
        try:
            # proxies/verify/cert from the environment, plus stream=True
            send_kwargs = self._session.merge_environment_settings(request.url, {}, True, None, None)
            response = self._session.send(
                request,
                timeout=self._config.timeouts,
                allow_redirects=True,
                **send_kwargs,
            )
        except (requests.RequestException, OSError) as exc:
            logger.warning("%s %s failed: %s", request.method, request.url, exc)
            raise NetworkError() from exc
        logger.debug("%s %s -> %s", request.method, request.url, response.status_code)
        return response

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "Transport":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
