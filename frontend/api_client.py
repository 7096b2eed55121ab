"""
frontend/api_client.py

HTTP client the dashboard uses to reach the AgriFlow API.

Methods never raise on transport or HTTP failures; they return an
:class:`ApiResult` whose ``error`` explains what went wrong.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import requests

from app.config import FrontendSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ApiResult:
    """
    Outcome of one API call.
    """

    data: Any = None
    error: str | None = None
    status_code: int | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class AgriFlowClient:
    """
    Thin wrapper over the comparison and crop calendar endpoints.
    """

    def __init__(
        self,
        *,
        settings: FrontendSettings,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = settings.api_url.rstrip("/")
        self._timeout_seconds = settings.timeout_seconds
        self._session = session or requests.Session()

    def list_states(self) -> ApiResult:
        result = self._request_json("GET", "/api/comparison-states")
        if result.data is not None and not isinstance(result.data.get("states"), list):
            return ApiResult(error="State list response was malformed.", status_code=result.status_code)
        return result

    def get_comparison(self, state: str) -> ApiResult:
        """
        Fetch comparison data. Error payloads still carry empty data and metrics.
        """

        result = self._request_json("GET", "/api/comparison-data", params={"state": state})
        if result.data is not None and result.data.get("error"):
            return ApiResult(
                data=result.data,
                error=result.data["error"],
                status_code=result.status_code,
            )
        return result

    def clear_comparison_cache(self, state: str | None = None) -> ApiResult:
        params = {"state": state} if state else None
        return self._request_json("POST", "/api/comparison-data", params=params)

    def get_crop_calendar_csv(self, state: str) -> ApiResult:
        response = self._send("GET", "/api/crop-calendar", params={"state": state})
        if isinstance(response, ApiResult):
            return response
        if response.status_code != 200:
            return ApiResult(
                error=self._error_message(response, f"Failed to fetch data for {state}"),
                status_code=response.status_code,
            )
        return ApiResult(data=response.text, status_code=response.status_code)

    def _request_json(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
    ) -> ApiResult:
        response = self._send(method, path, params=params)
        if isinstance(response, ApiResult):
            return response
        try:
            payload = response.json()
        except ValueError:
            return ApiResult(
                error=f"{path}: response was not valid JSON.",
                status_code=response.status_code,
            )
        if not isinstance(payload, dict):
            return ApiResult(error=f"{path}: unexpected response shape.", status_code=response.status_code)
        # Error payloads are still well-formed; keep them for rendering.
        if response.status_code >= 400 and not payload.get("error"):
            return ApiResult(
                error=f"{path} failed with HTTP {response.status_code}.",
                status_code=response.status_code,
            )
        return ApiResult(data=payload, status_code=response.status_code)

    def _send(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
    ) -> requests.Response | ApiResult:
        url = f"{self._base_url}{path}"
        try:
            return self._session.request(method, url, params=params, timeout=self._timeout_seconds)
        except requests.RequestException as exc:
            logger.warning("API request failed method=%s url=%s: %s", method, url, exc)
            return ApiResult(error=f"Could not reach the AgriFlow API: {exc}")

    @staticmethod
    def _error_message(response: requests.Response, default: str) -> str:
        try:
            payload = response.json()
        except ValueError:
            return default
        if isinstance(payload, dict) and payload.get("error"):
            return str(payload["error"])
        return default
