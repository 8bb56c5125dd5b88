"""RDF4J 服务端事务句柄。

一个 :class:`TransactionClient` 对应服务端的一个事务资源
``/repositories/{repo}/transactions/{txn}``。所有子操作都发往同一个地址，通过
``action`` 参数与 HTTP 方法区分意图（QUERY/UPDATE/ADD/DELETE/GET/SIZE/PING，
PUT+COMMIT 提交，DELETE+ROLLBACK 回滚）。

状态机只有两个状态：Active（初始）与 Closed（终态）。只有提交或回滚请求成功后才
进入 Closed；请求失败时句柄保持 Active，调用方可以重试提交/回滚，或先用
:meth:`TransactionClient.ping`/:meth:`TransactionClient.size` 确认服务端状态。
Closed 状态下的任何操作都会在发出请求前抛出 :class:`TransactionInactiveError`。

每个句柄持有自己的 ``asyncio.Lock``：活性检查与请求在锁内完成，同一句柄上的
并发调用会被串行化，提交/回滚不会与进行中的操作交错。"""
from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator
from urllib.parse import quote

from rdf4j_client.connection.client import RDF4JTransport
from rdf4j_client.exceptions import MalformedResponseError, TransactionInactiveError
from rdf4j_client.log import LoggerFactory
from rdf4j_client.query.params import (
    AddOptions,
    QueryOptions,
    StatementFilter,
    encode_add_params,
    encode_query_body_params,
    encode_statement_params,
)
from rdf4j_client.types import ContentType, TransactionAction


class TransactionClient:
    """事务内的查询、更新与语句操作。"""

    def __init__(self, http: RDF4JTransport, repository_id: str, transaction_id: str) -> None:
        self._http = http
        self._repository_id = repository_id
        self._transaction_id = transaction_id
        self._active = True
        self._lock = asyncio.Lock()
        self._logger = LoggerFactory.create_default_logger(__name__)

    @property
    def id(self) -> str:
        """服务端分配的事务 ID。"""

        return self._transaction_id

    @property
    def repository_id(self) -> str:
        return self._repository_id

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def path(self) -> str:
        return f"/repositories/{quote(self._repository_id, safe='')}/transactions/{self._transaction_id}"

    async def query(self, sparql: str, options: QueryOptions | None = None) -> dict[str, Any]:
        """在事务内执行 SPARQL 查询，返回 SPARQL JSON 结果。"""

        opts = options or QueryOptions()
        params = {"action": TransactionAction.QUERY, **encode_query_body_params(sparql, opts)}
        async with self._guard():
            return await self._http.request(
                "POST",
                self.path,
                params=params,
                body=sparql,
                content_type=ContentType.SPARQL_QUERY,
                accept=ContentType.SPARQL_RESULTS_JSON,
                timeout=opts.timeout,
            )

    async def update(self, sparql: str, *, timeout: float | None = None) -> None:
        """在事务内执行 SPARQL UPDATE。"""

        async with self._guard():
            await self._http.request(
                "POST",
                self.path,
                params={"action": TransactionAction.UPDATE},
                body=sparql,
                content_type=ContentType.SPARQL_UPDATE,
                timeout=timeout,
            )

    async def add(self, data: str | bytes, options: AddOptions) -> None:
        """在事务内上传 RDF 数据，``options.content_type`` 指明序列化格式。"""

        async with self._guard():
            await self._http.request(
                "PUT",
                self.path,
                params={"action": TransactionAction.ADD, **encode_add_params(options)},
                body=data,
                content_type=options.content_type,
            )

    async def delete(self, statement_filter: StatementFilter | None = None) -> None:
        """在事务内删除匹配过滤条件的语句。"""

        params = {"action": TransactionAction.DELETE, **encode_statement_params(statement_filter, include_infer=False)}
        async with self._guard():
            await self._http.request("POST", self.path, params=params)

    async def get_statements(
        self,
        statement_filter: StatementFilter | None = None,
        *,
        accept: ContentType | str = ContentType.TURTLE,
    ) -> str:
        """读取事务视图中匹配的语句，默认返回 Turtle 文本。"""

        params = {"action": TransactionAction.GET, **encode_statement_params(statement_filter)}
        async with self._guard():
            return await self._http.request("POST", self.path, params=params, accept=accept)

    async def size(self, context: str | None = None) -> int:
        """返回事务视图中的语句数量。"""

        async with self._guard():
            body = await self._http.request(
                "POST",
                self.path,
                params={"action": TransactionAction.SIZE, "context": context},
                accept=ContentType.TEXT,
            )
        return parse_size(body)

    async def ping(self) -> None:
        """刷新服务端事务超时，不修改数据。"""

        async with self._guard():
            await self._http.request("POST", self.path, params={"action": TransactionAction.PING})

    async def commit(self) -> None:
        """提交事务；请求成功后句柄进入 Closed。"""

        async with self._guard():
            await self._http.request("PUT", self.path, params={"action": TransactionAction.COMMIT})
            self._active = False
        self._logger.info("事务已提交: repo=%s txn=%s", self._repository_id, self._transaction_id)

    async def rollback(self) -> None:
        """回滚事务；请求成功后句柄进入 Closed。"""

        async with self._guard():
            await self._http.request("DELETE", self.path, params={"action": TransactionAction.ROLLBACK})
            self._active = False
        self._logger.info("事务已回滚: repo=%s txn=%s", self._repository_id, self._transaction_id)

    @asynccontextmanager
    async def _guard(self) -> AsyncIterator[None]:
        async with self._lock:
            self._ensure_active()
            yield

    def _ensure_active(self) -> None:
        if not self._active:
            raise TransactionInactiveError(self._transaction_id)

    def __repr__(self) -> str:
        state = "active" if self._active else "closed"
        return f"TransactionClient(repository={self._repository_id!r}, id={self._transaction_id!r}, {state})"


def parse_size(body: Any) -> int:
    """解析纯文本的语句数量，非数字时抛出 :class:`MalformedResponseError`。"""

    try:
        return int(str(body).strip())
    except (TypeError, ValueError) as exc:
        raise MalformedResponseError("size 响应不是整数", body=body) from exc


__all__ = ["TransactionClient", "parse_size"]
