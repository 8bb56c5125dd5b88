"""Example: commit and roll back server-side transactions."""
from __future__ import annotations

import asyncio

from rdf4j_client import AddOptions, ContentType, IsolationLevel, TransactionInactiveError

from helpers import build_client, ensure_demo_repository


async def main() -> None:
    client = build_client()
    repo = await ensure_demo_repository(client)
    before = await repo.size()

    async with repo.transaction(IsolationLevel.SNAPSHOT) as txn:
        await txn.add(
            "<http://example.org/carol> <http://example.org/knows> <http://example.org/bob> .",
            AddOptions(content_type=ContentType.NTRIPLES),
        )
        print("Inside transaction:", await txn.size(), "statements")
    print("After commit:", await repo.size(), "statements (was", before, ")")

    txn = await repo.begin_transaction()
    await txn.update("DELETE WHERE { ?s ?p ?o }")
    print("Transaction view after delete:", await txn.size())
    await txn.rollback()
    print("After rollback:", await repo.size())

    try:
        await txn.ping()
    except TransactionInactiveError as exc:
        print("Closed handle rejected:", exc)


if __name__ == "__main__":
    asyncio.run(main())
