from __future__ import annotations

"""RepositoryClient 测试：查询、更新、语句、命名空间与事务入口。"""

import asyncio

import pytest

from rdf4j_client import RDF4JClient
from rdf4j_client.exceptions import MalformedResponseError, MissingTransactionIdError
from rdf4j_client.query.params import AddOptions, QueryOptions, StatementFilter, UpdateOptions
from rdf4j_client.repository.client import RepositoryClient
from rdf4j_client.types import ContentType, IsolationLevel


REPO_PATH = "/rdf4j-server/repositories/demo"


@pytest.fixture
def repo(client: RDF4JClient) -> RepositoryClient:
    return client.repository("demo")


# ---- 查询 -------------------------------------------------------------


@pytest.mark.asyncio
async def test_query_get_puts_sparql_in_url(repo: RepositoryClient, wire, select_result) -> None:
    wire.queue(data=select_result(["s"], [{"s": "a"}]))

    result = await repo.query("SELECT ?s WHERE { ?s ?p ?o }", QueryOptions(limit=5, default_graph_uri=["urn:g1", "urn:g2"]))

    request = wire.last
    assert request.method == "GET"
    assert request.url.path == REPO_PATH
    assert request.url.params["query"] == "SELECT ?s WHERE { ?s ?p ?o }"
    assert request.url.params["queryLn"] == "sparql"
    assert request.url.params["limit"] == "5"
    assert request.url.params["default-graph-uri1"] == "urn:g2"
    assert request.headers["Accept"] == "application/sparql-results+json"
    assert request.content == b""
    assert result["results"]["bindings"][0]["s"]["value"] == "a"


@pytest.mark.asyncio
async def test_query_post_puts_sparql_in_body(repo: RepositoryClient, wire, select_result) -> None:
    wire.queue(data=select_result(["s"], []))

    await repo.query_post("SELECT ?s WHERE { ?s ?p ?o }", QueryOptions(bindings={"s": "<urn:s>"}))

    request = wire.last
    assert request.method == "POST"
    assert "query" not in request.url.params
    assert request.url.params["$s"] == "<urn:s>"
    assert request.headers["Content-Type"] == "application/sparql-query"
    assert request.content == b"SELECT ?s WHERE { ?s ?p ?o }"


@pytest.mark.asyncio
async def test_select_maps_rows(repo: RepositoryClient, wire) -> None:
    wire.queue(
        data={
            "head": {"vars": ["n", "label"]},
            "results": {
                "bindings": [
                    {
                        "n": {
                            "type": "literal",
                            "value": "3",
                            "datatype": "http://www.w3.org/2001/XMLSchema#integer",
                        }
                    }
                ]
            },
        }
    )

    rows = await repo.select("SELECT ?n ?label {}")

    assert rows == [{"n": {"value": 3, "raw": "3", "type": "literal", "datatype": "http://www.w3.org/2001/XMLSchema#integer"}, "label": None}]


@pytest.mark.asyncio
async def test_ask_returns_boolean(repo: RepositoryClient, wire) -> None:
    wire.queue(data={"head": {}, "boolean": True})
    assert await repo.ask("ASK { ?s ?p ?o }") is True


@pytest.mark.asyncio
async def test_ask_rejects_unexpected_body(repo: RepositoryClient, wire, select_result) -> None:
    wire.queue(data=select_result(["s"], []))
    with pytest.raises(MalformedResponseError):
        await repo.ask("ASK { ?s ?p ?o }")


@pytest.mark.asyncio
async def test_construct_and_describe_request_rdf(repo: RepositoryClient, wire) -> None:
    wire.queue(text="@prefix ex: <http://example.org/> .", content_type="text/turtle")
    wire.queue(text="<urn:a> <urn:p> <urn:o> .", content_type="application/n-triples")

    turtle = await repo.construct("CONSTRUCT WHERE { ?s ?p ?o }")
    assert wire.last.headers["Accept"] == "text/turtle"
    assert turtle.startswith("@prefix")

    await repo.describe("urn:a", accept=ContentType.NTRIPLES)
    assert wire.last.url.params["query"] == "DESCRIBE <urn:a>"
    assert wire.last.headers["Accept"] == "application/n-triples"


# ---- 更新与语句 -------------------------------------------------------


@pytest.mark.asyncio
async def test_update_posts_to_statements(repo: RepositoryClient, wire) -> None:
    await repo.update("INSERT DATA { <urn:s> <urn:p> <urn:o> }")

    request = wire.last
    assert request.method == "POST"
    assert request.url.path == f"{REPO_PATH}/statements"
    assert request.headers["Content-Type"] == "application/sparql-update"


@pytest.mark.asyncio
async def test_update_with_graphs_encodes_dataset(repo: RepositoryClient, wire) -> None:
    await repo.update_with_graphs(
        "DELETE WHERE { ?s ?p ?o }",
        UpdateOptions(using_graph_uri=["urn:a", "urn:b"], remove_graph_uri="urn:r"),
    )

    params = wire.last.url.params
    assert params["using-graph-uri"] == "urn:a"
    assert params["using-graph-uri1"] == "urn:b"
    assert params["remove-graph-uri"] == "urn:r"


@pytest.mark.asyncio
async def test_add_and_replace_methods(repo: RepositoryClient, wire) -> None:
    options = AddOptions(content_type=ContentType.TURTLE, base_uri="http://example.org/")

    await repo.add("<a> <b> <c> .", options)
    assert wire.last.method == "POST"
    assert wire.last.url.params["baseURI"] == "http://example.org/"
    assert wire.last.headers["Content-Type"] == "text/turtle"

    await repo.replace("<a> <b> <c> .", options)
    assert wire.last.method == "PUT"


@pytest.mark.asyncio
async def test_delete_joins_contexts(repo: RepositoryClient, wire) -> None:
    await repo.delete(StatementFilter(context=["<urn:g1>", "<urn:g2>"], infer=False))

    request = wire.last
    assert request.method == "DELETE"
    assert request.url.params["context"] == "<urn:g1>,<urn:g2>"
    assert "infer" not in request.url.params


@pytest.mark.asyncio
async def test_clear_without_context_sends_no_params(repo: RepositoryClient, wire) -> None:
    await repo.clear()

    assert wire.last.method == "DELETE"
    assert wire.last.url.query == b""


@pytest.mark.asyncio
async def test_size_and_contexts(repo: RepositoryClient, wire, select_result) -> None:
    wire.queue(text="12345")
    wire.queue(data=select_result(["contextID"], [{"contextID": "urn:g2"}, {"contextID": "urn:g1"}]))

    assert await repo.size() == 12345
    assert wire.last.url.path == f"{REPO_PATH}/size"
    assert await repo.contexts() == ["urn:g2", "urn:g1"]


# ---- 命名空间 ---------------------------------------------------------


@pytest.mark.asyncio
async def test_namespaces_mapping(repo: RepositoryClient, wire, select_result) -> None:
    wire.queue(
        data=select_result(
            ["prefix", "namespace"],
            [{"prefix": "ex", "namespace": "http://example.org/"}, {"prefix": "rdf", "namespace": "http://www.w3.org/1999/02/22-rdf-syntax-ns#"}],
        )
    )

    assert await repo.namespaces() == {
        "ex": "http://example.org/",
        "rdf": "http://www.w3.org/1999/02/22-rdf-syntax-ns#",
    }


@pytest.mark.asyncio
async def test_get_namespace(repo: RepositoryClient, wire) -> None:
    wire.queue(text="http://example.org/")
    wire.queue(404)
    wire.queue(500, text="boom")

    assert await repo.get_namespace("ex") == "http://example.org/"
    assert await repo.get_namespace("missing") is None
    assert await repo.get_namespace("broken") is None


@pytest.mark.asyncio
async def test_set_and_delete_namespace(repo: RepositoryClient, wire) -> None:
    await repo.set_namespace("ex", "http://example.org/")
    assert wire.last.method == "PUT"
    assert wire.last.url.path == f"{REPO_PATH}/namespaces/ex"
    assert wire.last.content == b"http://example.org/"

    await repo.delete_namespace("ex")
    assert wire.last.method == "DELETE"

    await repo.clear_namespaces()
    assert wire.last.url.path == f"{REPO_PATH}/namespaces"


# ---- 事务 -------------------------------------------------------------


@pytest.mark.asyncio
async def test_begin_transaction_reads_location(repo: RepositoryClient, wire) -> None:
    wire.queue(201, headers={"Location": "http://rdf4j.test/rdf4j-server/repositories/demo/transactions/64a5937f-c112"})

    txn = await repo.begin_transaction(IsolationLevel.SNAPSHOT)

    assert wire.last.method == "POST"
    assert wire.last.url.path == f"{REPO_PATH}/transactions"
    assert wire.last.url.params["isolation-level"] == "SNAPSHOT"
    assert txn.id == "64a5937f-c112"
    assert txn.repository_id == "demo"
    assert txn.is_active


@pytest.mark.asyncio
async def test_begin_transaction_without_location(repo: RepositoryClient, wire) -> None:
    wire.queue(201)

    with pytest.raises(MissingTransactionIdError):
        await repo.begin_transaction()

    assert "isolation-level" not in wire.last.url.params


@pytest.mark.asyncio
async def test_transaction_context_commits(repo: RepositoryClient, wire) -> None:
    wire.queue(201, headers={"Location": "/repositories/demo/transactions/t1"})

    async with repo.transaction() as txn:
        await txn.update("INSERT DATA { <urn:s> <urn:p> <urn:o> }")

    assert not txn.is_active
    actions = [r.url.params.get("action") for r in wire.requests]
    assert actions == [None, "UPDATE", "COMMIT"]


@pytest.mark.asyncio
async def test_transaction_context_rolls_back_on_error(repo: RepositoryClient, wire) -> None:
    wire.queue(201, headers={"Location": "/repositories/demo/transactions/t2"})

    with pytest.raises(RuntimeError):
        async with repo.transaction() as txn:
            raise RuntimeError("abort")

    assert not txn.is_active
    assert wire.last.method == "DELETE"
    assert wire.last.url.params["action"] == "ROLLBACK"


@pytest.mark.asyncio
async def test_transaction_context_skips_closed_handle(repo: RepositoryClient, wire) -> None:
    wire.queue(201, headers={"Location": "/repositories/demo/transactions/t3"})

    async with repo.transaction() as txn:
        await txn.rollback()

    assert [r.url.params.get("action") for r in wire.requests] == [None, "ROLLBACK"]


def test_graph_store_is_bound_to_repository(repo: RepositoryClient) -> None:
    store = repo.graph_store()
    assert store.base_path == "/repositories/demo/rdf-graphs"


@pytest.mark.asyncio
async def test_get_namespace_with_undecodable_body(repo: RepositoryClient, wire) -> None:
    wire.queue(200, text="{not json", content_type="application/json")

    assert await repo.get_namespace("ex") is None


@pytest.mark.asyncio
async def test_repository_id_and_prefix_are_percent_encoded(client: RDF4JClient, wire) -> None:
    repo = client.repository("team/a?b")

    await repo.set_namespace("ex#1", "http://example.org/")

    assert wire.last.url.raw_path == b"/rdf4j-server/repositories/team%2Fa%3Fb/namespaces/ex%231"


@pytest.mark.asyncio
async def test_transaction_context_rolls_back_on_cancel(repo: RepositoryClient, wire) -> None:
    wire.queue(201, headers={"Location": "/repositories/demo/transactions/t4"})

    with pytest.raises(asyncio.CancelledError):
        async with repo.transaction():
            raise asyncio.CancelledError()

    assert wire.last.method == "DELETE"
    assert wire.last.url.params["action"] == "ROLLBACK"


@pytest.mark.asyncio
async def test_transaction_context_keeps_original_error_when_rollback_fails(repo: RepositoryClient, wire) -> None:
    wire.queue(201, headers={"Location": "/repositories/demo/transactions/t5"})
    wire.queue(200, text="{not json", content_type="application/json")

    with pytest.raises(RuntimeError, match="abort"):
        async with repo.transaction() as txn:
            raise RuntimeError("abort")

    assert txn.is_active
    assert wire.last.url.params["action"] == "ROLLBACK"
