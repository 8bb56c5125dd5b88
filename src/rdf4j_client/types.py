"""内容类型与协议枚举。"""
from __future__ import annotations

from enum import Enum


class ContentType(str, Enum):
    """RDF/SPARQL 序列化格式标签，用于 ``Content-Type`` 与 ``Accept``。"""

    # RDF
    TURTLE = "text/turtle"
    NTRIPLES = "application/n-triples"
    NQUADS = "application/n-quads"
    RDFXML = "application/rdf+xml"
    JSONLD = "application/ld+json"
    TRIG = "application/trig"
    TRIX = "application/trix"
    BINARY_RDF = "application/x-binary-rdf"
    RDF_JSON = "application/rdf+json"
    N3 = "text/rdf+n3"

    # SPARQL
    SPARQL_QUERY = "application/sparql-query"
    SPARQL_UPDATE = "application/sparql-update"
    SPARQL_RESULTS_JSON = "application/sparql-results+json"
    SPARQL_RESULTS_XML = "application/sparql-results+xml"
    BINARY_RDF_RESULTS = "application/x-binary-rdf-results-table"

    RDF_TRANSACTION = "application/x-rdftransaction"

    JSON = "application/json"
    FORM = "application/x-www-form-urlencoded"
    TEXT = "text/plain"

    def __str__(self) -> str:
        return self.value


class IsolationLevel(str, Enum):
    """事务隔离级别。"""

    NONE = "NONE"
    READ_UNCOMMITTED = "READ_UNCOMMITTED"
    READ_COMMITTED = "READ_COMMITTED"
    SNAPSHOT_READ = "SNAPSHOT_READ"
    SNAPSHOT = "SNAPSHOT"
    SERIALIZABLE = "SERIALIZABLE"


class RepositoryType(str, Enum):
    """仓库配置模板类型。"""

    MEMORY = "memory"
    NATIVE = "native"
    MEMORY_RDFS = "memory-rdfs"
    MEMORY_RDFS_DT = "memory-rdfs-dt"
    NATIVE_RDFS = "native-rdfs"
    NATIVE_RDFS_DT = "native-rdfs-dt"
    MEMORY_SHACL = "memory-shacl"
    NATIVE_SHACL = "native-shacl"
    MEMORY_SPIN = "memory-spin"
    NATIVE_SPIN = "native-spin"
    MEMORY_LUCENE = "memory-lucene"
    NATIVE_LUCENE = "native-lucene"
    MEMORY_CUSTOMRULE = "memory-customrule"
    NATIVE_CUSTOMRULE = "native-customrule"
    REMOTE = "remote"
    SPARQL = "sparql"
    FEDERATION = "federation"


class TransactionAction(str, Enum):
    """事务资源上的 ``action`` 参数取值。"""

    ADD = "ADD"
    DELETE = "DELETE"
    GET = "GET"
    QUERY = "QUERY"
    UPDATE = "UPDATE"
    SIZE = "SIZE"
    PING = "PING"
    COMMIT = "COMMIT"
    ROLLBACK = "ROLLBACK"


__all__ = ["ContentType", "IsolationLevel", "RepositoryType", "TransactionAction"]
