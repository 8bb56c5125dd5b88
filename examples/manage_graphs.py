"""Example: manage named graphs through the Graph Store Protocol."""
from __future__ import annotations

import asyncio

from rdf4j_client import ContentType, ExternalServiceError

from helpers import build_client, ensure_demo_repository

GRAPH = "http://example.org/graphs/friends"


async def main() -> None:
    client = build_client()
    repo = await ensure_demo_repository(client)
    store = repo.graph_store()

    await store.put(
        GRAPH,
        "<http://example.org/alice> <http://example.org/knows> <http://example.org/bob> .",
        ContentType.NTRIPLES,
    )
    print("Graph exists:", await store.exists(GRAPH))
    print("Contexts:", await repo.contexts())
    print(await store.get(GRAPH, accept=ContentType.NTRIPLES))

    try:
        await store.delete(GRAPH)
    except ExternalServiceError as exc:
        print("delete failed:", exc.status, exc.details)
        raise
    print("Statements in default graph:", len((await store.get_default(ContentType.NTRIPLES)).splitlines()))


if __name__ == "__main__":
    asyncio.run(main())
