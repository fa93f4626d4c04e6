"""ARB persisted-form codec.

Converts between raw ARB (JSON) text and Document objects. Reading and
writing the text itself is a host concern (see ``arbsync.storage``).

Python 3.13+.
"""

from .parser import parse_document
from .serializer import document_to_json, serialize_document

__all__ = [
    "document_to_json",
    "parse_document",
    "serialize_document",
]
