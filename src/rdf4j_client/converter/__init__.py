from rdf4j_client.converter.result_mapper import ResultMapper

__all__ = ["ResultMapper"]
