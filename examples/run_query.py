"""Example: run SELECT/ASK queries against a live RDF4J server.

运行方式：
    RDF4J_BASE_URL=http://localhost:8080/rdf4j-server python examples/run_query.py
"""
from __future__ import annotations

import asyncio

from rdf4j_client import QueryOptions

from helpers import build_client, ensure_demo_repository


async def main() -> None:
    client = build_client()
    print("Protocol version:", await client.get_protocol())

    repo = await ensure_demo_repository(client)

    sparql = """
        PREFIX ex: <http://example.org/>
        PREFIX rdfs: <http://www.w3.org/2000/01/rdf-schema#>
        SELECT ?person ?label ?age WHERE {
            ?person a ex:Person ; rdfs:label ?label ; ex:age ?age .
        } ORDER BY ?age
    """
    rows = await repo.select(sparql, QueryOptions(limit=10))
    for row in rows:
        print(row["label"]["value"], row["age"]["value"])

    # 绑定 ?person，只查 bob 认识谁
    knows = await repo.query_post(
        "SELECT ?friend WHERE { ?person <http://example.org/knows> ?friend }",
        QueryOptions(bindings={"person": "<http://example.org/bob>"}),
    )
    print("bob knows:", [b["friend"]["value"] for b in knows["results"]["bindings"]])

    print("Anyone older than 30?", await repo.ask("ASK { ?p <http://example.org/age> ?a FILTER(?a > 30) }"))
    print("Namespaces:", await repo.namespaces())
    print("Statements:", await repo.size())


if __name__ == "__main__":
    asyncio.run(main())
