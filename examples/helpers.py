"""示例脚本共享工具：按环境变量构造客户端并准备演示仓库。"""
from __future__ import annotations

from rdf4j_client import (
    AddOptions,
    ContentType,
    RDF4JClient,
    RDF4JSettings,
    RepositoryClient,
    RepositoryConfig,
    configure_logging,
)

DEMO_REPOSITORY = "rdf4j-client-demo"

DEMO_DATA = """\
@prefix ex: <http://example.org/> .
@prefix rdfs: <http://www.w3.org/2000/01/rdf-schema#> .

ex:alice a ex:Person ; rdfs:label "Alice"@en ; ex:age 34 .
ex:bob a ex:Person ; rdfs:label "Bob"@en ; ex:age 29 ; ex:knows ex:alice .
"""


def build_client() -> RDF4JClient:
    """读取 ``RDF4J_*`` 环境变量构造客户端，并打开包日志输出。"""

    settings = RDF4JSettings()
    configure_logging(settings.log_level)
    return RDF4JClient.from_settings(settings)


async def ensure_demo_repository(client: RDF4JClient) -> RepositoryClient:
    """确保演示仓库存在且只包含示例数据。"""

    if not await client.repository_exists(DEMO_REPOSITORY):
        await client.create_repository(RepositoryConfig(id=DEMO_REPOSITORY, title="rdf4j-client demo"))
    repo = client.repository(DEMO_REPOSITORY)
    await repo.replace(DEMO_DATA, AddOptions(content_type=ContentType.TURTLE))
    await repo.set_namespace("ex", "http://example.org/")
    return repo
