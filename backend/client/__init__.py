"""
Trak client SDK.

Async access to the Trak API with a query cache, mutations with
declared invalidations and notifications, and an explicit session.
"""

from .api import TrakApi
from .cache import QueryCache, QueryState
from .config import ClientSettings, get_client_settings
from .errors import (
    ApiRequestError,
    MalformedResponseError,
    SessionContextError,
    TrakClientError,
    extract_error_message,
)
from .hints import FileHintStore, HintStore, MemoryHintStore
from .mutations import MutationSpec, TrakMutations, run_mutation
from .notifications import (
    ConsoleNotifier,
    LoggingNotifier,
    Notifier,
    RecordingNotifier,
    Toast,
    ToastVariant,
)
from .queries import TrakQueries, query_key
from .session import Session, current_session, session_scope

__all__ = [
    "TrakApi",
    "QueryCache",
    "QueryState",
    "ClientSettings",
    "get_client_settings",
    "ApiRequestError",
    "MalformedResponseError",
    "SessionContextError",
    "TrakClientError",
    "extract_error_message",
    "FileHintStore",
    "HintStore",
    "MemoryHintStore",
    "MutationSpec",
    "TrakMutations",
    "run_mutation",
    "ConsoleNotifier",
    "LoggingNotifier",
    "Notifier",
    "RecordingNotifier",
    "Toast",
    "ToastVariant",
    "TrakQueries",
    "query_key",
    "Session",
    "current_session",
    "session_scope",
]
