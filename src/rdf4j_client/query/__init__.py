"""查询选项模型与参数编码函数的便捷导出。"""
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
    indexed_params,
)

__all__ = [
    "AddOptions",
    "QueryOptions",
    "StatementFilter",
    "UpdateOptions",
    "encode_add_params",
    "encode_query_body_params",
    "encode_query_params",
    "encode_statement_params",
    "encode_update_params",
    "indexed_params",
]
