"""SPARQL 1.1 Graph Store Protocol 客户端。

三种寻址方式，操作语义一致（get 读取、put 替换、post 追加、delete 删除）：

1. 默认图：``rdf-graphs/service?default``；
2. 间接引用命名图：``rdf-graphs/service`` + ``graph=<图 URI>`` 查询参数；
3. 直接引用命名图：``rdf-graphs/{图名}``，图名做百分号编码。

:meth:`GraphStoreClient.exists` 只是一次 HEAD 探测，空图也可能返回成功；
需要可靠判断图是否有数据时应检查仓库的 contexts 列表。"""
from __future__ import annotations

from urllib.parse import quote

from rdf4j_client.connection.client import RDF4JTransport
from rdf4j_client.types import ContentType


class GraphStoreClient:
    """单个仓库上的 Graph Store 操作。"""

    def __init__(self, http: RDF4JTransport, repository_id: str) -> None:
        self._http = http
        self._repository_id = repository_id

    @property
    def base_path(self) -> str:
        return f"/repositories/{quote(self._repository_id, safe='')}/rdf-graphs"

    @property
    def _service(self) -> str:
        return f"{self.base_path}/service"

    @property
    def _default_graph(self) -> str:
        return f"{self._service}?default"

    def _direct(self, graph_name: str) -> str:
        return f"{self.base_path}/{quote(graph_name, safe='')}"

    # ---- 默认图 -------------------------------------------------------

    async def get_default(self, accept: ContentType | str = ContentType.TURTLE) -> str:
        return await self._http.request("GET", self._default_graph, accept=accept)

    async def put_default(self, data: str | bytes, content_type: ContentType | str) -> None:
        """用 ``data`` 替换默认图内容。"""

        await self._http.request("PUT", self._default_graph, body=data, content_type=content_type)

    async def post_default(self, data: str | bytes, content_type: ContentType | str) -> None:
        """向默认图追加数据。"""

        await self._http.request("POST", self._default_graph, body=data, content_type=content_type)

    async def delete_default(self) -> None:
        await self._http.request("DELETE", self._default_graph)

    # ---- 间接引用的命名图 ---------------------------------------------

    async def get(self, graph_uri: str, accept: ContentType | str = ContentType.TURTLE) -> str:
        return await self._http.request("GET", self._service, params={"graph": graph_uri}, accept=accept)

    async def put(self, graph_uri: str, data: str | bytes, content_type: ContentType | str) -> None:
        await self._http.request(
            "PUT", self._service, params={"graph": graph_uri}, body=data, content_type=content_type
        )

    async def post(self, graph_uri: str, data: str | bytes, content_type: ContentType | str) -> None:
        await self._http.request(
            "POST", self._service, params={"graph": graph_uri}, body=data, content_type=content_type
        )

    async def delete(self, graph_uri: str) -> None:
        await self._http.request("DELETE", self._service, params={"graph": graph_uri})

    # ---- 直接引用的命名图 ---------------------------------------------

    async def get_direct(self, graph_name: str, accept: ContentType | str = ContentType.TURTLE) -> str:
        return await self._http.request("GET", self._direct(graph_name), accept=accept)

    async def put_direct(self, graph_name: str, data: str | bytes, content_type: ContentType | str) -> None:
        await self._http.request("PUT", self._direct(graph_name), body=data, content_type=content_type)

    async def post_direct(self, graph_name: str, data: str | bytes, content_type: ContentType | str) -> None:
        await self._http.request("POST", self._direct(graph_name), body=data, content_type=content_type)

    async def delete_direct(self, graph_name: str) -> None:
        await self._http.request("DELETE", self._direct(graph_name))

    async def exists(self, graph_uri: str) -> bool:
        """HEAD 探测命名图；任何失败都视为不存在。"""

        probe = await self._http.probe("HEAD", self._service, params={"graph": graph_uri})
        return probe.found


__all__ = ["GraphStoreClient"]
