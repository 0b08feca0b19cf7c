from __future__ import annotations

from typing import Any, TypeVar
from urllib.parse import urljoin

import requests
import structlog
from pydantic import BaseModel
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

T = TypeVar("T", bound=BaseModel)


class BaseAPIClient:
    """
    Small JSON-over-HTTP helper with:
      • exponential retry on 5xx
      • configurable timeout
      • Pydantic parsing and validation of the reply
    """

    def __init__(
        self,
        *,
        base_url: str,
        default_headers: dict[str, str] | None = None,
        timeout: float = 5.0,
        retries: int = 3,
    ) -> None:
        self.log = structlog.get_logger(__name__).bind(component=type(self).__name__)
        self.base_url = base_url.rstrip("/") + "/"
        self.timeout = timeout

        self.log.debug("api_client.configured", base_url=self.base_url, timeout=timeout)

        # session + retry -----------------------------------------------------------------
        self.session = requests.Session()
        if default_headers:
            self.session.headers.update(default_headers)

        retry_cfg = Retry(
            total=retries,
            backoff_factor=0.3,
            status_forcelist=[500, 502, 503, 504],
            allowed_methods=None,
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry_cfg)
        for scheme in ("https://", "http://"):
            self.session.mount(scheme, adapter)

    def _url(self, path: str, path_params: dict[str, Any] | None = None) -> str:
        return urljoin(self.base_url, path.format(**(path_params or {})).lstrip("/"))

    # --------------------------------------------------------------------- HTTP POST --
    def _post(
        self,
        path: str,
        *,
        json: dict[str, Any],
        response_model: type[T],
        path_params: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> T:
        """
        POST a JSON body and return the validated Pydantic object.
        Query-string `params` are kept out of the logs (they may carry keys).
        """
        url = self._url(path, path_params)
        log = self.log.bind(method="POST", url=url, model=response_model.__name__)
        log.debug("api_client.request_sent")

        try:
            resp = self.session.post(url, params=params, json=json, timeout=self.timeout)
            log.debug("api_client.response_received", status_code=resp.status_code)
            resp.raise_for_status()
            result = response_model.model_validate(resp.json())
            log.info("api_client.response_validated")
            return result

        except Exception as exc:  # noqa: BLE001
            # requests embeds the full URL (and so the key) in its messages
            status = getattr(getattr(exc, "response", None), "status_code", None)
            log.error("api_client.post_failed", error=type(exc).__name__, status_code=status)
            raise
