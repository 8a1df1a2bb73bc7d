from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Protocol

import requests

from fabricpop.http.response import HttpResponse
from fabricpop.utils.logging import get_logger


@dataclass(frozen=True)
class RequestSpec:
    """Specification for an HTTP request."""

    url: str
    method: str = "GET"
    headers: Dict[str, str] = field(default_factory=dict)
    params: Dict[str, Any] = field(default_factory=dict)
    body: Any = None


class HttpClient(Protocol):
    """Protocol for HTTP clients."""

    def send(self, req: RequestSpec) -> HttpResponse: ...


class RequestsHttpClient:
    """HTTP client using the requests library. Single attempt per request."""

    def __init__(self, timeout_s: int = 30):
        self.session = requests.Session()
        self.timeout_s = timeout_s
        self.log = get_logger("fabricpop.http")

    def send(self, req: RequestSpec) -> HttpResponse:
        """Send an HTTP request."""
        self.log.debug("%s %s", req.method, req.url)
        r = self.session.request(
            method=req.method,
            url=req.url,
            headers=req.headers,
            params=req.params,
            json=req.body if isinstance(req.body, (dict, list)) else None,
            data=None if isinstance(req.body, (dict, list)) else req.body,
            timeout=self.timeout_s,
        )
        ct = r.headers.get("Content-Type", "")

        js = None
        if "application/json" in ct:
            try:
                js = r.json()
            except ValueError:
                js = None

        return HttpResponse(status_code=r.status_code, headers=dict(r.headers), text=r.text, json=js)
