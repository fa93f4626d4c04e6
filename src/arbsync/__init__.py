"""arbsync - multi-locale ARB translation synchronization.

Keeps a set of per-locale ARB documents consistent: every key exists in
every locale, descriptions are shared across locales, and every change is
tracked so the host persists exactly the documents that changed.

Public API:
    DocumentSet - Synchronization engine over per-locale documents
    Document, Entry, Placeholder - Document model
    parse_document / serialize_document - ARB persisted-form codec
    to_rows / from_rows - Spreadsheet export/import
    CodeGenerator - Typed accessor generation (Dart or Python)
    load_document_set / save_dirty - Host persistence helpers

Exceptions:
    ArbError - Base exception class
    ArbParseError - Malformed ARB text
    SyncError - Rejected synchronization operation
    TabularError - Rejected spreadsheet import

Submodules:
    arbsync.model - Document model and type aliases
    arbsync.arb - ARB parse/serialize
    arbsync.sync - DocumentSet and mutation records
    arbsync.tabular - Row codec and .xlsx workbooks
    arbsync.codegen - Intermediate representation and backends
    arbsync.storage - DocumentStore protocol and filesystem store
    arbsync.diagnostics - Error types, codes and formatting
"""

# Essential Public API - Minimal exports for clean namespace
from .arb import parse_document, serialize_document
from .codegen import CodeGenerator, DartBackend, PythonBackend
from .config import GeneratorConfig, SyncConfig
from .diagnostics import ArbError, ArbParseError, SyncError, TabularError
from .model import Document, Entry, Placeholder
from .storage import PathDocumentStore, load_document_set, save_dirty
from .sync import DocumentSet
from .tabular import from_rows, to_rows

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("arbsync")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

# Persisted documents are always UTF-8 JSON
__recommended_encoding__ = "UTF-8"

__all__ = [
    "ArbError",
    "ArbParseError",
    "CodeGenerator",
    "DartBackend",
    "Document",
    "DocumentSet",
    "Entry",
    "GeneratorConfig",
    "PathDocumentStore",
    "Placeholder",
    "PythonBackend",
    "SyncConfig",
    "SyncError",
    "TabularError",
    "__recommended_encoding__",
    "__version__",
    "from_rows",
    "load_document_set",
    "parse_document",
    "save_dirty",
    "serialize_document",
    "to_rows",
]
