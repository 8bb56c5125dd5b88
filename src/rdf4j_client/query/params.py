"""查询/更新/语句过滤参数模型与编码函数。

本模块采用 Pydantic v2 模型描述调用方可选项，并提供纯函数把它们编码为扁平的
``dict[str, 参数值]``，编码规则与 RDF4J REST 协议保持一致：

- 列表形式的图 URI（default-graph-uri 等）展开为重复键：第一个元素使用原键名，
  其后元素在键名后直接追加从 0 开始的下标，例如第二个元素为 ``default-graph-uri1``；
- 变量绑定的键统一加 ``$`` 前缀（已有前缀时保持不变）；
- 语句过滤中的 ``context`` 为列表时以逗号拼接为单个值；
- 值为 ``None`` 的字段不会出现在结果中；布尔与数字保持原样，由传输层转为字符串。
"""
from __future__ import annotations

from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from rdflib.term import Node

from rdf4j_client.types import ContentType

GraphUris = Union[str, list[str], None]
EncodedParams = dict[str, Union[str, int, float, bool]]


class QueryOptions(BaseModel):
    """SPARQL 查询选项。

    参数：
        infer: 是否包含推理结果，``None`` 表示服务端默认（true）；
        timeout: 本次请求超时（秒）；
        default_graph_uri / named_graph_uri: 单个或多个图 URI；
        bindings: 变量绑定，例如 ``{"s": "<http://example.org/a>"}``；
        distinct / limit / offset: 结果去重与分页。
    """

    model_config = ConfigDict(frozen=True)

    infer: bool | None = None
    timeout: float | None = Field(default=None, gt=0)
    default_graph_uri: GraphUris = None
    named_graph_uri: GraphUris = None
    bindings: dict[str, str] | None = None
    distinct: bool | None = None
    limit: int | None = Field(default=None, ge=0)
    offset: int | None = Field(default=None, ge=0)


class UpdateOptions(BaseModel):
    """SPARQL UPDATE 的数据集选项。"""

    model_config = ConfigDict(frozen=True)

    using_graph_uri: GraphUris = None
    using_named_graph_uri: GraphUris = None
    remove_graph_uri: str | None = None
    insert_graph_uri: str | None = None
    timeout: float | None = Field(default=None, gt=0)


class StatementFilter(BaseModel):
    """语句过滤条件。

    ``subj``/``pred``/``obj`` 为 N-Triples 编码的项，例如 ``"<http://example.org/s>"``
    或 ``'"hello"@en'``；也可以直接传入 rdflib 的 ``URIRef``/``Literal``/``BNode``，
    会通过 ``n3()`` 编码。"""

    model_config = ConfigDict(frozen=True)

    subj: str | None = None
    pred: str | None = None
    obj: str | None = None
    context: str | list[str] | None = None
    infer: bool | None = None

    @field_validator("subj", "pred", "obj", mode="before")
    @classmethod
    def _encode_term(cls, value: Any) -> Any:
        if isinstance(value, Node):
            return value.n3()
        return value

    @field_validator("context", mode="before")
    @classmethod
    def _encode_context(cls, value: Any) -> Any:
        if isinstance(value, Node):
            return value.n3()
        if isinstance(value, (list, tuple)):
            return [item.n3() if isinstance(item, Node) else item for item in value]
        return value


class AddOptions(BaseModel):
    """上传 RDF 数据时的选项，``content_type`` 必须显式给出。"""

    model_config = ConfigDict(frozen=True)

    content_type: ContentType | str
    context: str | None = None
    base_uri: str | None = None

    @field_validator("context", mode="before")
    @classmethod
    def _encode_context(cls, value: Any) -> Any:
        if isinstance(value, Node):
            return value.n3()
        return value


def indexed_params(key: str, value: GraphUris) -> EncodedParams:
    """将单值或列表展开为带下标的重复键。

    示例：``indexed_params("default-graph-uri", ["a", "b"])`` 返回
    ``{"default-graph-uri": "a", "default-graph-uri1": "b"}``。"""

    if value is None:
        return {}
    values = [value] if isinstance(value, str) else list(value)
    return {f"{key}{index if index > 0 else ''}": uri for index, uri in enumerate(values)}


def binding_params(bindings: dict[str, str] | None) -> EncodedParams:
    """为变量绑定的键加上 ``$`` 前缀。"""

    if not bindings:
        return {}
    return {(name if name.startswith("$") else f"${name}"): value for name, value in bindings.items()}


def encode_query_params(query: str, options: QueryOptions | None = None) -> EncodedParams:
    """编码 SPARQL 查询参数（包含 ``query`` 与 ``queryLn``）。"""

    opts = options or QueryOptions()
    params = _compact(
        {
            "query": query,
            "queryLn": "sparql",
            "infer": opts.infer,
            "distinct": opts.distinct,
            "limit": opts.limit,
            "offset": opts.offset,
        }
    )
    params.update(indexed_params("default-graph-uri", opts.default_graph_uri))
    params.update(indexed_params("named-graph-uri", opts.named_graph_uri))
    params.update(binding_params(opts.bindings))
    return params


def encode_query_body_params(query: str, options: QueryOptions | None = None) -> EncodedParams:
    """查询语句放在请求体时使用：与 :func:`encode_query_params` 相同但去掉 ``query``。"""

    params = encode_query_params(query, options)
    params.pop("query", None)
    return params


def encode_update_params(options: UpdateOptions | None = None) -> EncodedParams:
    """编码 SPARQL UPDATE 的数据集参数。"""

    if options is None:
        return {}
    params = _compact(
        {
            "remove-graph-uri": options.remove_graph_uri,
            "insert-graph-uri": options.insert_graph_uri,
        }
    )
    params.update(indexed_params("using-graph-uri", options.using_graph_uri))
    params.update(indexed_params("using-named-graph-uri", options.using_named_graph_uri))
    return params


def encode_statement_params(
    statement_filter: StatementFilter | None = None,
    *,
    include_infer: bool = True,
) -> EncodedParams:
    """编码语句过滤参数。删除操作不接受 ``infer``，传 ``include_infer=False``。"""

    flt = statement_filter or StatementFilter()
    context = ",".join(flt.context) if isinstance(flt.context, list) else flt.context
    return _compact(
        {
            "subj": flt.subj,
            "pred": flt.pred,
            "obj": flt.obj,
            "context": context,
            "infer": flt.infer if include_infer else None,
        }
    )


def encode_add_params(options: AddOptions) -> EncodedParams:
    """编码上传 RDF 数据时的 ``context`` 与 ``baseURI``。"""

    return _compact({"context": options.context, "baseURI": options.base_uri})


def _compact(values: dict[str, Any]) -> EncodedParams:
    return {key: value for key, value in values.items() if value is not None}


__all__ = [
    "QueryOptions",
    "UpdateOptions",
    "StatementFilter",
    "AddOptions",
    "indexed_params",
    "binding_params",
    "encode_query_params",
    "encode_query_body_params",
    "encode_update_params",
    "encode_statement_params",
    "encode_add_params",
]
