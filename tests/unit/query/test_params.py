from __future__ import annotations

"""查询/更新/语句过滤参数编码测试。"""

import pytest
from pydantic import ValidationError
from rdflib import Literal, URIRef

from rdf4j_client.query.params import (
    AddOptions,
    QueryOptions,
    StatementFilter,
    UpdateOptions,
    binding_params,
    encode_add_params,
    encode_query_body_params,
    encode_query_params,
    encode_statement_params,
    encode_update_params,
    indexed_params,
)
from rdf4j_client.types import ContentType


def test_indexed_params_first_key_is_bare() -> None:
    assert indexed_params("default-graph-uri", ["urn:a", "urn:b", "urn:c"]) == {
        "default-graph-uri": "urn:a",
        "default-graph-uri1": "urn:b",
        "default-graph-uri2": "urn:c",
    }
    assert indexed_params("named-graph-uri", "urn:single") == {"named-graph-uri": "urn:single"}
    assert indexed_params("named-graph-uri", None) == {}


def test_binding_params_adds_dollar_prefix() -> None:
    assert binding_params({"s": "<urn:s>", "$o": '"x"'}) == {"$s": "<urn:s>", "$o": '"x"'}
    assert binding_params(None) == {}


def test_encode_query_params_full() -> None:
    options = QueryOptions(
        infer=False,
        default_graph_uri=["urn:g1", "urn:g2"],
        named_graph_uri="urn:n1",
        bindings={"s": "<urn:s>"},
        distinct=True,
        limit=10,
        offset=20,
    )

    params = encode_query_params("SELECT * WHERE { ?s ?p ?o }", options)

    assert params == {
        "query": "SELECT * WHERE { ?s ?p ?o }",
        "queryLn": "sparql",
        "infer": False,
        "distinct": True,
        "limit": 10,
        "offset": 20,
        "default-graph-uri": "urn:g1",
        "default-graph-uri1": "urn:g2",
        "named-graph-uri": "urn:n1",
        "$s": "<urn:s>",
    }


def test_encode_query_params_omits_unset_fields() -> None:
    assert encode_query_params("ASK {}") == {"query": "ASK {}", "queryLn": "sparql"}


def test_body_params_drop_query() -> None:
    params = encode_query_body_params("SELECT * {}", QueryOptions(limit=1))
    assert "query" not in params
    assert params == {"queryLn": "sparql", "limit": 1}


def test_encode_update_params() -> None:
    options = UpdateOptions(
        using_graph_uri=["urn:u1", "urn:u2"],
        using_named_graph_uri="urn:un",
        remove_graph_uri="urn:r",
        insert_graph_uri="urn:i",
    )

    assert encode_update_params(options) == {
        "remove-graph-uri": "urn:r",
        "insert-graph-uri": "urn:i",
        "using-graph-uri": "urn:u1",
        "using-graph-uri1": "urn:u2",
        "using-named-graph-uri": "urn:un",
    }
    assert encode_update_params(None) == {}


def test_statement_filter_joins_context_list() -> None:
    flt = StatementFilter(subj="<urn:s>", context=["<urn:g1>", "<urn:g2>"], infer=True)

    assert encode_statement_params(flt) == {"subj": "<urn:s>", "context": "<urn:g1>,<urn:g2>", "infer": True}


def test_statement_filter_without_infer_for_delete() -> None:
    flt = StatementFilter(pred="<urn:p>", infer=False)

    assert encode_statement_params(flt, include_infer=False) == {"pred": "<urn:p>"}
    assert encode_statement_params(None) == {}


def test_statement_filter_accepts_rdflib_terms() -> None:
    flt = StatementFilter(
        subj=URIRef("http://example.org/s"),
        obj=Literal("hello", lang="en"),
        context=[URIRef("http://example.org/g")],
    )

    assert flt.subj == "<http://example.org/s>"
    assert flt.obj == '"hello"@en'
    assert encode_statement_params(flt)["context"] == "<http://example.org/g>"


def test_add_params() -> None:
    options = AddOptions(content_type=ContentType.TURTLE, context="<urn:g>", base_uri="http://example.org/")
    assert encode_add_params(options) == {"context": "<urn:g>", "baseURI": "http://example.org/"}
    assert encode_add_params(AddOptions(content_type="text/turtle")) == {}


def test_add_options_require_content_type() -> None:
    with pytest.raises(ValidationError):
        AddOptions()  # type: ignore[call-arg]


@pytest.mark.parametrize("field", ["limit", "offset"])
def test_query_options_reject_negative_paging(field: str) -> None:
    with pytest.raises(ValidationError):
        QueryOptions(**{field: -1})


def test_query_options_reject_non_positive_timeout() -> None:
    with pytest.raises(ValidationError):
        QueryOptions(timeout=0)


def test_options_are_immutable() -> None:
    options = QueryOptions(limit=1)
    with pytest.raises(ValidationError):
        options.limit = 2  # type: ignore[misc]
