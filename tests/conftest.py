"""Pytest fixtures：基于 ``httpx.MockTransport`` 的 RDF4J 服务桩。"""
from __future__ import annotations

import json
from collections import deque
from typing import Any

import httpx
import pytest

from rdf4j_client import RDF4JClient

BASE_URL = "http://rdf4j.test/rdf4j-server"


class WireStub:
    """记录发出的请求，并按入队顺序返回预设响应；队列为空时返回 204。"""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._responses: deque[Any] = deque()

    def queue(
        self,
        status: int = 200,
        *,
        text: str | None = None,
        data: Any = None,
        content_type: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        merged = dict(headers or {})
        content = b""
        if data is not None:
            content = json.dumps(data).encode("utf-8")
            merged.setdefault("Content-Type", content_type or "application/sparql-results+json")
        elif text is not None:
            content = text.encode("utf-8")
            merged.setdefault("Content-Type", content_type or "text/plain;charset=UTF-8")
        self._responses.append(httpx.Response(status, content=content, headers=merged))

    def fail_with(self, exc_type: type[httpx.HTTPError]) -> None:
        """下一次请求抛出指定的 httpx 异常。"""

        self._responses.append(exc_type)

    def handler(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        if not self._responses:
            return httpx.Response(204)
        item = self._responses.popleft()
        if isinstance(item, type):
            raise item("simulated failure", request=request)
        return item

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


def _select_result(vars: list[str], rows: list[dict[str, Any]]) -> dict[str, Any]:
    """构造 SPARQL JSON 结果，``rows`` 中的值直接作为 literal 单元格。"""

    bindings = [{name: {"type": "literal", "value": value} for name, value in row.items()} for row in rows]
    return {"head": {"vars": vars}, "results": {"bindings": bindings}}


@pytest.fixture
def wire() -> WireStub:
    return WireStub()


@pytest.fixture
def transport(wire: WireStub) -> httpx.MockTransport:
    return httpx.MockTransport(wire.handler)


@pytest.fixture
def client(transport: httpx.MockTransport) -> RDF4JClient:
    return RDF4JClient(BASE_URL, transport=transport)


@pytest.fixture
def select_result():
    return _select_result
