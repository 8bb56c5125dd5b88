"""HTTP 传输层导出。"""
from rdf4j_client.connection.client import HttpClient, HttpResponse, Probe, ProbeResult, RDF4JTransport

__all__ = ["HttpClient", "HttpResponse", "Probe", "ProbeResult", "RDF4JTransport"]
