"""单个仓库上的 SPARQL、语句、命名空间与事务操作。

所有请求都发往 ``/repositories/{id}`` 下的固定子路径（``/statements``、``/size``、
``/contexts``、``/namespaces``、``/transactions``、``/rdf-graphs``），每个方法只构造
一次请求并做最少量的响应解码。"""
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator
from urllib.parse import quote

from rdf4j_client.connection.client import RDF4JTransport
from rdf4j_client.converter.result_mapper import ResultMapper
from rdf4j_client.exceptions import MissingTransactionIdError, RDF4JError
from rdf4j_client.graph.store import GraphStoreClient
from rdf4j_client.log import LoggerFactory
from rdf4j_client.query.params import (
    AddOptions,
    QueryOptions,
    StatementFilter,
    UpdateOptions,
    encode_add_params,
    encode_query_body_params,
    encode_query_params,
    encode_statement_params,
    encode_update_params,
)
from rdf4j_client.transaction.client import TransactionClient, parse_size
from rdf4j_client.types import ContentType, IsolationLevel


class RepositoryClient:
    """仓库级操作入口，通常通过 :meth:`RDF4JClient.repository` 获得。"""

    def __init__(self, http: RDF4JTransport, repository_id: str, *, mapper: ResultMapper | None = None) -> None:
        self._http = http
        self._repository_id = repository_id
        self._mapper = mapper or ResultMapper()
        self._logger = LoggerFactory.create_default_logger(__name__)

    @property
    def id(self) -> str:
        return self._repository_id

    @property
    def base_path(self) -> str:
        return f"/repositories/{quote(self._repository_id, safe='')}"

    async def get_config(self) -> str:
        """读取仓库配置（Turtle）。"""

        return await self._http.request("GET", f"{self.base_path}/config", accept=ContentType.TURTLE)

    # ---- SPARQL 查询 --------------------------------------------------

    async def query(self, sparql: str, options: QueryOptions | None = None) -> dict[str, Any]:
        """以 GET 执行查询，查询语句放在 URL 参数中，适合较短的查询。"""

        opts = options or QueryOptions()
        return await self._http.request(
            "GET",
            self.base_path,
            params=encode_query_params(sparql, opts),
            accept=ContentType.SPARQL_RESULTS_JSON,
            timeout=opts.timeout,
        )

    async def query_post(self, sparql: str, options: QueryOptions | None = None) -> dict[str, Any]:
        """以 POST 执行查询，查询语句放在请求体中，其余选项仍作为 URL 参数。"""

        opts = options or QueryOptions()
        return await self._http.request(
            "POST",
            self.base_path,
            params=encode_query_body_params(sparql, opts),
            body=sparql,
            content_type=ContentType.SPARQL_QUERY,
            accept=ContentType.SPARQL_RESULTS_JSON,
            timeout=opts.timeout,
        )

    async def select(self, sparql: str, options: QueryOptions | None = None) -> list[dict[str, Any]]:
        """执行 SELECT 并把绑定映射为带类型转换的行，见 :meth:`ResultMapper.map_bindings`。"""

        return self._mapper.map_result(await self.query(sparql, options))

    async def construct(
        self,
        sparql: str,
        options: QueryOptions | None = None,
        *,
        accept: ContentType | str = ContentType.TURTLE,
    ) -> str:
        """执行 CONSTRUCT，返回指定 RDF 格式的文本。"""

        opts = options or QueryOptions()
        return await self._http.request(
            "GET",
            self.base_path,
            params=encode_query_params(sparql, opts),
            accept=accept,
            timeout=opts.timeout,
        )

    async def describe(self, resource: str, *, accept: ContentType | str = ContentType.TURTLE) -> str:
        """对单个资源执行 ``DESCRIBE <resource>``。"""

        return await self._http.request(
            "GET",
            self.base_path,
            params={"query": f"DESCRIBE <{resource}>"},
            accept=accept,
        )

    async def ask(self, sparql: str, options: QueryOptions | None = None) -> bool:
        opts = options or QueryOptions()
        result = await self._http.request(
            "GET",
            self.base_path,
            params=encode_query_params(sparql, opts),
            accept=ContentType.SPARQL_RESULTS_JSON,
            timeout=opts.timeout,
        )
        return self._mapper.boolean(result)

    # ---- SPARQL 更新 --------------------------------------------------

    async def update(self, sparql: str, *, timeout: float | None = None) -> None:
        await self._http.request(
            "POST",
            f"{self.base_path}/statements",
            body=sparql,
            content_type=ContentType.SPARQL_UPDATE,
            timeout=timeout,
        )

    async def update_with_graphs(self, sparql: str, options: UpdateOptions) -> None:
        """执行 UPDATE 并指定 using/using-named/remove/insert 图。"""

        await self._http.request(
            "POST",
            f"{self.base_path}/statements",
            params=encode_update_params(options),
            body=sparql,
            content_type=ContentType.SPARQL_UPDATE,
            timeout=options.timeout,
        )

    # ---- 语句 ---------------------------------------------------------

    async def add(self, data: str | bytes, options: AddOptions) -> None:
        """追加 RDF 数据。"""

        await self._http.request(
            "POST",
            f"{self.base_path}/statements",
            params=encode_add_params(options),
            body=data,
            content_type=options.content_type,
        )

    async def replace(self, data: str | bytes, options: AddOptions) -> None:
        """替换全部语句（给出 ``context`` 时只替换该上下文）。"""

        await self._http.request(
            "PUT",
            f"{self.base_path}/statements",
            params=encode_add_params(options),
            body=data,
            content_type=options.content_type,
        )

    async def get_statements(
        self,
        statement_filter: StatementFilter | None = None,
        *,
        accept: ContentType | str = ContentType.TURTLE,
    ) -> str:
        return await self._http.request(
            "GET",
            f"{self.base_path}/statements",
            params=encode_statement_params(statement_filter),
            accept=accept,
        )

    async def delete(self, statement_filter: StatementFilter | None = None) -> None:
        """删除匹配的语句；不带过滤条件时删除全部。"""

        await self._http.request(
            "DELETE",
            f"{self.base_path}/statements",
            params=encode_statement_params(statement_filter, include_infer=False),
        )

    async def export(self, *, accept: ContentType | str = ContentType.TURTLE, context: str | None = None) -> str:
        return await self._http.request(
            "GET",
            f"{self.base_path}/statements",
            params={"context": context},
            accept=accept,
        )

    async def clear(self, context: str | None = None) -> None:
        await self._http.request("DELETE", f"{self.base_path}/statements", params={"context": context})

    # ---- 规模与上下文 -------------------------------------------------

    async def size(self, context: str | None = None) -> int:
        """返回语句数量；响应不是整数时抛出 :class:`MalformedResponseError`。"""

        body = await self._http.request(
            "GET",
            f"{self.base_path}/size",
            params={"context": context},
            accept=ContentType.TEXT,
        )
        return parse_size(body)

    async def contexts(self) -> list[str]:
        """命名图列表，顺序与服务端一致。"""

        result = await self._http.request(
            "GET", f"{self.base_path}/contexts", accept=ContentType.SPARQL_RESULTS_JSON
        )
        return self._mapper.contexts(result)

    # ---- 命名空间 -----------------------------------------------------

    async def namespaces(self) -> dict[str, str]:
        result = await self._http.request(
            "GET", f"{self.base_path}/namespaces", accept=ContentType.SPARQL_RESULTS_JSON
        )
        return self._mapper.namespaces(result)

    async def get_namespace(self, prefix: str) -> str | None:
        """读取前缀对应的命名空间；未找到或请求失败时返回 ``None``。"""

        probe = await self._http.probe(
            "GET", f"{self.base_path}/namespaces/{quote(prefix, safe='')}", accept=ContentType.TEXT
        )
        if not probe.found:
            return None
        return probe.body

    async def set_namespace(self, prefix: str, namespace: str) -> None:
        await self._http.request(
            "PUT",
            f"{self.base_path}/namespaces/{quote(prefix, safe='')}",
            body=namespace,
            content_type=ContentType.TEXT,
        )

    async def delete_namespace(self, prefix: str) -> None:
        await self._http.request("DELETE", f"{self.base_path}/namespaces/{quote(prefix, safe='')}")

    async def clear_namespaces(self) -> None:
        await self._http.request("DELETE", f"{self.base_path}/namespaces")

    # ---- 事务 ---------------------------------------------------------

    async def begin_transaction(self, isolation_level: IsolationLevel | str | None = None) -> TransactionClient:
        """创建服务端事务，事务 ID 取自响应 ``Location`` 头的最后一段。

        异常：``Location`` 缺失或为空时抛出 :class:`MissingTransactionIdError`。"""

        response = await self._http.request_with_headers(
            "POST",
            f"{self.base_path}/transactions",
            params={"isolation-level": isolation_level},
            accept=ContentType.TEXT,
        )
        location = response.headers.get("location")
        transaction_id = (location or "").rstrip("/").rsplit("/", 1)[-1]
        if not transaction_id:
            raise MissingTransactionIdError(self._repository_id, location)
        self._logger.info("事务已创建: repo=%s txn=%s", self._repository_id, transaction_id)
        return TransactionClient(self._http, self._repository_id, transaction_id)

    @asynccontextmanager
    async def transaction(
        self, isolation_level: IsolationLevel | str | None = None
    ) -> AsyncIterator[TransactionClient]:
        """事务上下文：正常退出时提交，块内抛出异常时回滚并继续抛出。

        任务被取消（``CancelledError``）或 ``KeyboardInterrupt`` 同样触发回滚；回滚本身失败时
        只记录 WARNING，向上抛出的始终是块内的原始异常。

        块内已经手动提交或回滚时退出不再做任何操作。"""

        txn = await self.begin_transaction(isolation_level)
        try:
            yield txn
        except BaseException:
            if txn.is_active:
                try:
                    await txn.rollback()
                except RDF4JError as exc:
                    self._logger.warning("事务回滚失败: txn=%s error=%s", txn.id, exc)
            raise
        if txn.is_active:
            await txn.commit()

    # ---- Graph Store --------------------------------------------------

    def graph_store(self) -> GraphStoreClient:
        return GraphStoreClient(self._http, self._repository_id)

    def __repr__(self) -> str:
        return f"RepositoryClient(id={self._repository_id!r})"


__all__ = ["RepositoryClient"]
