from .client import RDF4JClient
from .config import RDF4JSettings
from .connection import HttpClient, HttpResponse, Probe, ProbeResult
from .converter import ResultMapper
from .exceptions import (
    ErrorCode,
    ExternalServiceError,
    MalformedResponseError,
    MissingTransactionIdError,
    RDF4JError,
    TransactionInactiveError,
)
from .graph import GraphStoreClient
from .log import LoggerFactory, configure_logging
from .query import AddOptions, QueryOptions, StatementFilter, UpdateOptions
from .models import Repository, RepositoryConfig
from .repository import RepositoryClient
from .transaction import TransactionClient
from .types import ContentType, IsolationLevel, RepositoryType, TransactionAction

__version__ = "0.1.0"

__all__ = [
    "RDF4JClient",
    "RDF4JSettings",
    "HttpClient",
    "HttpResponse",
    "Probe",
    "ProbeResult",
    "ResultMapper",
    "ErrorCode",
    "RDF4JError",
    "ExternalServiceError",
    "MalformedResponseError",
    "MissingTransactionIdError",
    "TransactionInactiveError",
    "GraphStoreClient",
    "LoggerFactory",
    "configure_logging",
    "AddOptions",
    "QueryOptions",
    "StatementFilter",
    "UpdateOptions",
    "Repository",
    "RepositoryClient",
    "RepositoryConfig",
    "TransactionClient",
    "ContentType",
    "IsolationLevel",
    "RepositoryType",
    "TransactionAction",
]
