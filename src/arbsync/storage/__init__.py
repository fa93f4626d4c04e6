"""Host persistence of ARB documents.

Python 3.13+.
"""

from .loading import (
    DocumentLoadResult,
    DocumentStore,
    LoadSummary,
    PathDocumentStore,
    SaveResult,
    SaveSummary,
    load_document_set,
    save_dirty,
)

__all__ = [
    "DocumentLoadResult",
    "DocumentStore",
    "LoadSummary",
    "PathDocumentStore",
    "SaveResult",
    "SaveSummary",
    "load_document_set",
    "save_dirty",
]
