"""RDF4J 客户端统一异常定义。

异常分为两类：

* 远端错误 :class:`ExternalServiceError`：HTTP 非 2xx 响应，或超时/连接失败，
  携带 ``status``、``status_text`` 与尽力解析出的错误响应体；
* 本地错误：事务已关闭（:class:`TransactionInactiveError`）、事务创建响应缺少
  ``Location``（:class:`MissingTransactionIdError`）、响应体无法按约定解码
  （:class:`MalformedResponseError`）。本地错误没有状态码。

调用方应按异常类型与 :class:`ErrorCode` 分支，而不是匹配错误消息文本。"""
from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """错误码枚举。"""

    BAD_REQUEST = "BAD_REQUEST"
    UNAUTHENTICATED = "UNAUTHENTICATED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    RDF4J_HTTP_ERROR = "RDF4J_HTTP_ERROR"
    RDF4J_TIMEOUT = "RDF4J_TIMEOUT"
    RDF4J_CONNECT_ERROR = "RDF4J_CONNECT_ERROR"
    TRANSACTION_INACTIVE = "TRANSACTION_INACTIVE"
    MISSING_TRANSACTION_ID = "MISSING_TRANSACTION_ID"
    MALFORMED_RESPONSE = "MALFORMED_RESPONSE"


_TRANSIENT_STATUS = {408, 429}


class RDF4JError(Exception):
    """所有客户端异常的基类。"""

    def __init__(self, code: ErrorCode, message: str, *, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    @property
    def status(self) -> int | None:
        """本地错误没有 HTTP 状态码。"""

        return None

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"


class ExternalServiceError(RDF4JError):
    """RDF4J 服务端返回错误或请求未能完成。

    参数：
        code：错误码，例如 :attr:`ErrorCode.NOT_FOUND`。
        message：错误描述，例如 ``"HTTP 404: Not Found"``。
        status：HTTP 状态码；超时或连接失败时为 ``None``。
        status_text：HTTP 状态描述，例如 ``"Not Found"``。
        response：解析后的错误响应体（JSON），无法解析时为 ``None``。"""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        *,
        status: int | None = None,
        status_text: str = "",
        response: Any = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(code, message, details=details)
        self._status = status
        self.status_text = status_text
        self.response = response

    @property
    def status(self) -> int | None:
        return self._status

    @property
    def transient(self) -> bool:
        """是否属于可重试的瞬时错误（超时、连接失败、408/429/5xx）。"""

        if self._status is None:
            return self.code in {ErrorCode.RDF4J_TIMEOUT, ErrorCode.RDF4J_CONNECT_ERROR}
        return self._status >= 500 or self._status in _TRANSIENT_STATUS


class TransactionInactiveError(RDF4JError):
    """事务已提交或回滚后仍被使用。"""

    def __init__(self, transaction_id: str) -> None:
        super().__init__(
            ErrorCode.TRANSACTION_INACTIVE,
            "Transaction is no longer active",
            details={"transactionId": transaction_id},
        )


class MissingTransactionIdError(RDF4JError):
    """创建事务的响应中没有可用的 ``Location`` 头。"""

    def __init__(self, repository_id: str, location: str | None) -> None:
        super().__init__(
            ErrorCode.MISSING_TRANSACTION_ID,
            "Failed to get transaction ID from response",
            details={"repositoryId": repository_id, "location": location},
        )


class MalformedResponseError(RDF4JError):
    """响应体无法按约定格式解码。"""

    def __init__(self, message: str, *, body: Any = None) -> None:
        super().__init__(ErrorCode.MALFORMED_RESPONSE, message, details={"body": body})


def error_code_for_status(status: int) -> ErrorCode:
    """将 HTTP 状态码映射为错误码。"""

    if status == 400:
        return ErrorCode.BAD_REQUEST
    if status == 401:
        return ErrorCode.UNAUTHENTICATED
    if status == 403:
        return ErrorCode.FORBIDDEN
    if status == 404:
        return ErrorCode.NOT_FOUND
    if status == 409:
        return ErrorCode.CONFLICT
    return ErrorCode.RDF4J_HTTP_ERROR


__all__ = [
    "ErrorCode",
    "RDF4JError",
    "ExternalServiceError",
    "TransactionInactiveError",
    "MissingTransactionIdError",
    "MalformedResponseError",
    "error_code_for_status",
]
