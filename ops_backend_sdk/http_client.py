from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable
from urllib.parse import urljoin

import requests
from requests.adapters import HTTPAdapter

from .config import ClientConfig
from .error_mapper import map_error
from .exceptions import TransportError
from .tracing import TRACE_HEADER, TraceContext

ResponseHook = Callable[[requests.Response], None]

logger = logging.getLogger(__name__)

RETRYABLE_METHODS = frozenset({"GET", "HEAD"})


@dataclass
class HttpClient:
    """Thin transport over a pooled requests session for the REST backend."""

    config: ClientConfig
    trace: TraceContext | None = None
    session: requests.Session | None = None

    def __post_init__(self) -> None:
        if self.session is None:
            self.session = requests.Session()
            adapter = HTTPAdapter(
                pool_connections=self.config.max_connections,
                pool_maxsize=self.config.max_connections,
            )
            self.session.mount("http://", adapter)
            self.session.mount("https://", adapter)

    def _build_url(self, path: str) -> str:
        base = self.config.api_base_url.rstrip("/") + "/"
        return urljoin(base, path.lstrip("/"))

    def _headers(self, extra: dict[str, str] | None, trace_id: str) -> dict[str, str]:
        headers = {"Accept": "application/json", "apikey": self.config.api_key}
        if extra:
            headers.update(extra)
        headers[TRACE_HEADER] = trace_id
        return headers

    def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        json_body: dict[str, Any] | list[Any] | None = None,
        data: bytes | None = None,
        params: dict[str, Any] | None = None,
        response_hook: ResponseHook | None = None,
        retry_mutation: bool = False,
        module: str = "unknown",
        operation: str = "unknown",
    ) -> dict[str, Any] | list[Any] | None:
        """Send one call, retrying reads on transport failures and 5xx answers.

        Writes are sent once unless ``retry_mutation`` marks them idempotent.
        Non-2xx answers raise the mapped ``ApiError`` subclass.
        """
        if self.session is None:
            raise RuntimeError("HTTP session not initialized")
        trace_context = self.trace or TraceContext()
        verb = method.upper()
        url = self._build_url(path)
        request_headers = self._headers(headers, trace_context.ensure())
        attempts = self.config.retries + 1 if verb in RETRYABLE_METHODS or retry_mutation else 1

        started = time.monotonic()
        response = None
        for attempt in range(attempts):
            last = attempt >= attempts - 1
            try:
                response = self.session.request(
                    method=verb,
                    url=url,
                    headers=request_headers,
                    json=json_body,
                    data=data,
                    params=params,
                    timeout=(self.config.connect_timeout_seconds, self.config.read_timeout_seconds),
                    verify=self.config.verify_ssl,
                )
            except requests.RequestException as exc:
                if last:
                    self._log_call(module, operation, started, "error", trace_context.trace_id)
                    raise TransportError(
                        code="TRANSPORT_ERROR",
                        message=str(exc),
                        details={"type": type(exc).__name__},
                        trace_id=trace_context.trace_id,
                        status_code=0,
                        raw_payload=None,
                    ) from exc
                logger.warning("transport error on %s %s, retrying (attempt %s)", verb, path, attempt + 1)
            else:
                if response.status_code < 500 or last:
                    break
                logger.warning("server error %s on %s %s, retrying", response.status_code, verb, path)
            time.sleep(self.config.retry_backoff_seconds * (2**attempt))

        trace_context.update_from_headers(response.headers)
        if response_hook:
            response_hook(response)
        if response.ok:
            self._log_call(module, operation, started, "success", trace_context.trace_id)
            if not response.content:
                return None
            return response.json()

        try:
            payload = response.json()
        except json.JSONDecodeError:
            payload = {"message": response.text}
        if not isinstance(payload, dict):
            payload = {}
        trace_context.update_from_payload(payload)
        self._log_call(module, operation, started, "error", trace_context.trace_id)
        raise map_error(response.status_code, payload, trace_context.trace_id)

    @staticmethod
    def _log_call(module: str, operation: str, started: float, result: str, trace_id: str | None) -> None:
        logger.debug(
            "%s.%s %s in %sms trace_id=%s",
            module,
            operation,
            result,
            int((time.monotonic() - started) * 1000),
            trace_id,
        )
