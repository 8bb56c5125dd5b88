"""仓库客户端与默认配置模板导出。"""
from rdf4j_client.repository.client import RepositoryClient
from rdf4j_client.repository.templates import render_default_config

__all__ = ["RepositoryClient", "render_default_config"]
