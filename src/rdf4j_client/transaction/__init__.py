from rdf4j_client.transaction.client import TransactionClient

__all__ = ["TransactionClient"]
