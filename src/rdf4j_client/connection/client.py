"""RDF4J REST HTTP 传输层。

提供 `RDF4JTransport` 协议与基于 httpx 的 `HttpClient` 实现：

* 每次请求独立创建 ``httpx.AsyncClient``，超时按请求覆盖、默认取客户端配置；
* ``params`` 中值为 ``None`` 的项不会出现在请求中；
* 字符串请求体默认 ``text/plain``，dict/list 请求体按 JSON 序列化；
* 响应按 ``Content-Type`` 解码：JSON/``+json`` 返回对象，其余返回文本，
  204 或无内容类型返回 ``None``，声明为 JSON 但无法解析时抛出 :class:`MalformedResponseError`；
* 非 2xx 响应统一抛出 :class:`ExternalServiceError`，不做任何重试。

Basic Auth 凭据在构造时转换为 ``httpx.BasicAuth``，作用于该实例的所有请求。"""
from __future__ import annotations

import json
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Protocol

import httpx

from rdf4j_client.exceptions import (
    ErrorCode,
    ExternalServiceError,
    MalformedResponseError,
    RDF4JError,
    error_code_for_status,
)
from rdf4j_client.log import LoggerFactory
from rdf4j_client.observability import observe_rdf4j_failure, observe_rdf4j_response
from rdf4j_client.types import ContentType

ParamValue = str | int | float | bool | Enum | None


class Probe(str, Enum):
    """探测请求的三态结果。"""

    FOUND = "found"
    NOT_FOUND = "not_found"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class ProbeResult:
    """探测结果：``outcome`` 为三态之一，成功时 ``body`` 为解码后的响应体。"""

    outcome: Probe
    body: Any = None
    error: RDF4JError | None = None

    @property
    def found(self) -> bool:
        return self.outcome is Probe.FOUND


@dataclass(frozen=True, slots=True)
class HttpResponse:
    """带响应头的解码结果。"""

    body: Any
    headers: httpx.Headers
    status: int


class RDF4JTransport(Protocol):
    """上层客户端依赖的最小传输协议。"""

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, ParamValue] | None = None,
        body: str | bytes | dict[str, Any] | list[Any] | None = None,
        content_type: str | None = None,
        accept: str | None = None,
        headers: Mapping[str, str] | None = None,
        timeout: float | None = None,
    ) -> Any:
        """发送请求并返回解码后的响应体。"""

    async def request_with_headers(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, ParamValue] | None = None,
        body: str | bytes | dict[str, Any] | list[Any] | None = None,
        content_type: str | None = None,
        accept: str | None = None,
        headers: Mapping[str, str] | None = None,
        timeout: float | None = None,
    ) -> HttpResponse:
        """发送请求并同时返回响应头与状态码。"""

    async def probe(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, ParamValue] | None = None,
        accept: str | None = None,
    ) -> ProbeResult:
        """发送探测请求，失败不抛异常。"""


class HttpClient:
    """与 RDF4J REST 接口交互的 HTTP 客户端。"""

    def __init__(
        self,
        base_url: str,
        *,
        auth: tuple[str, str] | None = None,
        timeout: float = 30.0,
        headers: Mapping[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """构造 HTTP 客户端。

        参数：
            base_url：RDF4J 服务根地址，例如 ``"http://localhost:8080/rdf4j-server"``，末尾 ``/`` 会被去掉。
            auth：可选的 Basic Auth 凭据 ``("username", "password")``。
            timeout：默认超时时间（秒），必须 > 0。
            headers：附加到每个请求的默认请求头。
            transport：可选的 httpx 传输层，测试中可注入 ``httpx.MockTransport``。"""

        if timeout <= 0:
            raise ValueError("timeout must be positive")
        self.base_url = base_url.rstrip("/")
        self._default_timeout = float(timeout)
        self._default_headers: dict[str, str] = dict(headers or {})
        self._auth = httpx.BasicAuth(*auth) if auth else None
        self._transport = transport
        self._logger = LoggerFactory.create_default_logger(__name__)

    @property
    def default_timeout(self) -> float:
        return self._default_timeout

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, ParamValue] | None = None,
        body: str | bytes | dict[str, Any] | list[Any] | None = None,
        content_type: str | None = None,
        accept: str | None = None,
        headers: Mapping[str, str] | None = None,
        timeout: float | None = None,
    ) -> Any:
        """发送请求并返回解码后的响应体。

        参数：
            method：HTTP 方法，例如 ``"GET"``。
            path：相对服务根的路径，例如 ``"/repositories/demo/size"``。
            params：查询参数，值为 ``None`` 的键会被省略。
            body：请求体；``str``/``bytes`` 原样发送，dict/list 序列化为 JSON。
            content_type：请求体类型，缺省时按 body 类型推断。
            accept：期望的响应类型，例如 ``ContentType.SPARQL_RESULTS_JSON``。
            headers：本次请求额外的请求头，覆盖同名默认头。
            timeout：本次请求超时（秒），``None`` 表示使用默认值。

        异常：非 2xx 响应、超时、连接失败或 URL 非法时抛出 :class:`ExternalServiceError`；
        标为 JSON 的响应体无法解析时抛出 :class:`MalformedResponseError`。"""

        response = await self._send(
            method,
            path,
            params=params,
            body=body,
            content_type=content_type,
            accept=accept,
            headers=headers,
            timeout=timeout,
        )
        return self._decode(response)

    async def request_with_headers(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, ParamValue] | None = None,
        body: str | bytes | dict[str, Any] | list[Any] | None = None,
        content_type: str | None = None,
        accept: str | None = None,
        headers: Mapping[str, str] | None = None,
        timeout: float | None = None,
    ) -> HttpResponse:
        """与 :meth:`request` 相同，但额外返回响应头与状态码。"""

        response = await self._send(
            method,
            path,
            params=params,
            body=body,
            content_type=content_type,
            accept=accept,
            headers=headers,
            timeout=timeout,
        )
        return HttpResponse(body=self._decode(response), headers=response.headers, status=response.status_code)

    async def get(self, path: str, **kwargs: Any) -> Any:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> Any:
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> Any:
        return await self.request("PUT", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> Any:
        return await self.request("DELETE", path, **kwargs)

    async def head(self, path: str, **kwargs: Any) -> None:
        await self.request("HEAD", path, **kwargs)

    async def probe(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, ParamValue] | None = None,
        accept: str | None = None,
    ) -> ProbeResult:
        """发送探测请求（通常为 HEAD/GET），将结果归类为 :class:`Probe`。

        只有调用方明确需要“失败即否定”的场景才使用本方法，异常不会向上传播，
        由调用方决定如何合并 ``NOT_FOUND`` 与 ``FAILED``。"""

        try:
            body = await self.request(method, path, params=params, accept=accept)
        except ExternalServiceError as exc:
            if exc.status == 404:
                return ProbeResult(Probe.NOT_FOUND, error=exc)
            self._logger.warning("探测请求失败: %s %s -> %s", method, path, exc)
            return ProbeResult(Probe.FAILED, error=exc)
        except RDF4JError as exc:
            self._logger.warning("探测响应无法解码: %s %s -> %s", method, path, exc)
            return ProbeResult(Probe.FAILED, error=exc)
        return ProbeResult(Probe.FOUND, body=body)

    # ---- 内部工具 -----------------------------------------------------

    async def _send(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, ParamValue] | None,
        body: str | bytes | dict[str, Any] | list[Any] | None,
        content_type: str | None,
        accept: str | None,
        headers: Mapping[str, str] | None,
        timeout: float | None,
    ) -> httpx.Response:
        """执行底层 HTTP 请求，记录指标并转换错误。"""

        url = self.build_url(path)
        query = self._clean_params(params)
        content, resolved_type = self._prepare_body(body, content_type)

        merged: dict[str, str] = {**self._default_headers, **(headers or {})}
        if resolved_type:
            merged["Content-Type"] = resolved_type
        if accept:
            merged["Accept"] = _text(accept)

        resolved_timeout = self._resolve_timeout(timeout)
        self._logger.debug("RDF4J 请求: %s %s params=%s", method, url, query)

        start = time.perf_counter()
        try:
            async with httpx.AsyncClient(timeout=resolved_timeout, transport=self._transport) as client:
                response = await client.request(
                    method,
                    url,
                    params=query or None,
                    content=content,
                    headers=merged,
                    auth=self._auth,
                )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            reason = self._exception_reason(exc)
            observe_rdf4j_failure(method, reason)
            raise ExternalServiceError(
                self._exception_code(exc),
                "RDF4J 请求未完成",
                details={"url": url, "reason": reason, "error": str(exc)},
            ) from exc

        duration = time.perf_counter() - start
        observe_rdf4j_response(method, response.status_code, duration)
        if response.is_success:
            return response

        reason = self._response_reason(response.status_code)
        observe_rdf4j_failure(method, reason)
        self._logger.warning("RDF4J 返回错误: %s %s -> %s", method, url, response.status_code)
        raise self._http_error(response, url)

    def build_url(self, path: str) -> str:
        """拼接服务根地址与相对路径。"""

        return f"{self.base_url}/{path.lstrip('/')}"

    @staticmethod
    def _clean_params(params: Mapping[str, ParamValue] | None) -> dict[str, str | int | float]:
        """去掉 ``None`` 值，布尔转为 ``true``/``false``，枚举取其值。"""

        cleaned: dict[str, str | int | float] = {}
        for key, value in (params or {}).items():
            if value is None:
                continue
            if isinstance(value, bool):
                cleaned[key] = "true" if value else "false"
            elif isinstance(value, Enum):
                cleaned[key] = value.value
            else:
                cleaned[key] = value
        return cleaned

    @staticmethod
    def _prepare_body(
        body: str | bytes | dict[str, Any] | list[Any] | None,
        content_type: str | None,
    ) -> tuple[bytes | None, str | None]:
        """序列化请求体并确定 ``Content-Type``。"""

        if body is None:
            return None, None
        if isinstance(body, bytes):
            return body, _text(content_type) if content_type else ContentType.TEXT.value
        if isinstance(body, str):
            return body.encode("utf-8"), _text(content_type) if content_type else ContentType.TEXT.value
        return json.dumps(body).encode("utf-8"), _text(content_type) if content_type else ContentType.JSON.value

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        """按响应 ``Content-Type`` 解码响应体。"""

        content_type = response.headers.get("content-type", "")
        if response.status_code == 204 or not content_type or response.request.method == "HEAD":
            return None
        if "application/json" in content_type or "+json" in content_type:
            if not response.content:
                return None
            try:
                return response.json()
            except ValueError as exc:
                raise MalformedResponseError("响应不是合法 JSON", body=response.text[:1024]) from exc
        return response.text

    def _resolve_timeout(self, timeout: float | None) -> httpx.Timeout:
        effective = self._default_timeout if timeout is None else timeout
        return httpx.Timeout(effective, connect=effective)

    @staticmethod
    def _http_error(response: httpx.Response, url: str) -> ExternalServiceError:
        """将 HTTP 错误响应转换为 :class:`ExternalServiceError`。"""

        parsed: Any = None
        text = response.text
        if text:
            try:
                parsed = json.loads(text)
            except ValueError:
                parsed = None
        status = response.status_code
        return ExternalServiceError(
            error_code_for_status(status),
            f"HTTP {status}: {response.reason_phrase}",
            status=status,
            status_text=response.reason_phrase,
            response=parsed,
            details={"url": url, "message": text[:1024]},
        )

    @staticmethod
    def _response_reason(status_code: int) -> str:
        """根据状态码映射统一的失败原因标签。"""

        if status_code >= 500:
            return "server_error"
        if status_code == 429:
            return "rate_limited"
        if status_code == 408:
            return "timeout"
        if status_code == 409:
            return "conflict"
        return "client_error"

    @staticmethod
    def _exception_reason(exc: Exception) -> str:
        """将异常对象归类为标准原因标签。"""

        if isinstance(exc, httpx.ConnectTimeout):
            return "connect_timeout"
        if isinstance(exc, httpx.TimeoutException):
            return "timeout"
        if isinstance(exc, httpx.ConnectError):
            return "connect_error"
        return "transport_error"

    @staticmethod
    def _exception_code(exc: Exception) -> ErrorCode:
        """超时与传输层失败可重试；URL 非法、解码失败等其余情况归为通用错误。"""

        if isinstance(exc, httpx.TimeoutException):
            return ErrorCode.RDF4J_TIMEOUT
        if isinstance(exc, httpx.TransportError):
            return ErrorCode.RDF4J_CONNECT_ERROR
        return ErrorCode.RDF4J_HTTP_ERROR


def _text(value: str | Enum) -> str:
    return value.value if isinstance(value, Enum) else value


__all__ = ["HttpClient", "HttpResponse", "Probe", "ProbeResult", "RDF4JTransport", "ParamValue"]
