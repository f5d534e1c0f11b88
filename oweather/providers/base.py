from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

import requests
from requests import Response


class WeatherError(RuntimeError):
    """Base error for a failed weather lookup."""


class TransportError(WeatherError):
    """Raised when the provider could not be reached at all."""


class DecodeError(WeatherError):
    """Raised when the response body is not a usable weather payload."""


class ProviderError(WeatherError):
    """Raised when the provider answers with its own non-success status."""

    def __init__(self, message: Optional[str] = None, code: object = None) -> None:
        super().__init__(message or "unknown error")
        self.message = message
        self.code = code


class LocationNotFound(WeatherError):
    """Raised for a successful response that lacks the location's country."""


@dataclass
class RequestConfig:
    # None leaves the timeout to the calling environment.
    timeout: Optional[float] = None


class HttpProvider:
    """Base class for providers that issue a single GET per lookup.

    HTTP error statuses are handed back as data: the provider encodes its
    own status inside the JSON body, so only a failure to talk to the server
    at all is turned into :class:`TransportError`.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        request_config: Optional[RequestConfig] = None,
    ) -> None:
        self.request_config = request_config or RequestConfig()
        self.session = session or requests.Session()
        self._log = logging.getLogger(self.__class__.__name__)
        self._testing_mode = os.environ.get("TESTING_MODE", "0") == "1"

    def _request(self, method: str, url: str, **kwargs) -> Response:
        try:
            response = self.session.request(
                method,
                url,
                timeout=self.request_config.timeout,
                **kwargs,
            )
        except requests.RequestException as exc:
            self._log.error("Request to %s failed", url, exc_info=exc)
            raise TransportError("request failed") from exc
        self._log_response(url, kwargs.get("params") or {}, response)
        return response

    def _log_response(self, url: str, params: dict, response: Response) -> None:
        if not self._testing_mode:
            return
        safe_params = {key: value for key, value in params.items() if key != "appid"}
        self._log.info(
            "Provider request",
            extra={"url": url, "params": safe_params, "status": response.status_code, "body": response.text[:500]},
        )


__all__ = [
    "WeatherError",
    "TransportError",
    "DecodeError",
    "ProviderError",
    "LocationNotFound",
    "RequestConfig",
    "HttpProvider",
]
