"""Graph Store Protocol 客户端导出。"""
from rdf4j_client.graph.store import GraphStoreClient

__all__ = ["GraphStoreClient"]
