"""RDF4J REST API 顶层客户端。

负责仓库的发现、创建与删除，并作为 :class:`RepositoryClient` 的工厂。"""
from __future__ import annotations

from typing import Mapping
from urllib.parse import quote

import httpx

from rdf4j_client.config import RDF4JSettings
from rdf4j_client.connection.client import HttpClient
from rdf4j_client.converter.result_mapper import ResultMapper
from rdf4j_client.log import LoggerFactory
from rdf4j_client.models import Repository, RepositoryConfig
from rdf4j_client.repository.client import RepositoryClient
from rdf4j_client.repository.templates import render_default_config
from rdf4j_client.types import ContentType


class RDF4JClient:
    """RDF4J 服务客户端。

    示例::

        client = RDF4JClient("http://localhost:8080/rdf4j-server", auth=("admin", "secret"))
        repo = client.repository("demo")
        rows = await repo.select("SELECT * WHERE { ?s ?p ?o } LIMIT 10")
    """

    def __init__(
        self,
        base_url: str,
        *,
        auth: tuple[str, str] | None = None,
        timeout: float = 30.0,
        headers: Mapping[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """参数含义见 :class:`HttpClient`，``timeout`` 单位为秒。"""

        self._http = HttpClient(base_url, auth=auth, timeout=timeout, headers=headers, transport=transport)
        self._mapper = ResultMapper()
        self._logger = LoggerFactory.create_default_logger(__name__)

    @classmethod
    def from_settings(
        cls,
        settings: RDF4JSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "RDF4JClient":
        """根据 :class:`RDF4JSettings`（缺省时读取环境变量）构造客户端。"""

        cfg = settings or RDF4JSettings()
        return cls(
            cfg.base_url,
            auth=cfg.auth,
            timeout=cfg.timeout,
            headers=cfg.headers,
            transport=transport,
        )

    @property
    def http_client(self) -> HttpClient:
        """底层 HTTP 客户端，可用于发送自定义请求。"""

        return self._http

    async def get_protocol(self) -> str:
        """服务端协议版本，例如 ``"12"``。"""

        return await self._http.request("GET", "/protocol", accept=ContentType.TEXT)

    async def list_repositories(self) -> list[Repository]:
        result = await self._http.request("GET", "/repositories", accept=ContentType.SPARQL_RESULTS_JSON)
        return self._mapper.repositories(result)

    async def create_repository(self, config: RepositoryConfig) -> None:
        """创建仓库；未提供 ``config_turtle`` 时按 ``config.type`` 生成默认配置。"""

        turtle = config.config_turtle or render_default_config(config)
        await self._http.request(
            "PUT",
            _repository_path(config.id),
            body=turtle,
            content_type=ContentType.TURTLE,
        )
        self._logger.info("仓库已创建: %s", config.id)

    async def delete_repository(self, repository_id: str) -> None:
        await self._http.request("DELETE", _repository_path(repository_id))
        self._logger.info("仓库已删除: %s", repository_id)

    async def repository_exists(self, repository_id: str) -> bool:
        """HEAD 探测仓库；不存在或请求失败均返回 ``False``。"""

        probe = await self._http.probe("HEAD", _repository_path(repository_id))
        return probe.found

    def repository(self, repository_id: str) -> RepositoryClient:
        return RepositoryClient(self._http, repository_id, mapper=self._mapper)


def _repository_path(repository_id: str) -> str:
    return f"/repositories/{quote(repository_id, safe='')}"


__all__ = ["RDF4JClient"]
