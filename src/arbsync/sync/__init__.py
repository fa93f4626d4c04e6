"""Cross-document synchronization.

Submodules:
    document_set - DocumentSet (synchronization engine, dirty tracking)
    mutations    - Mutation records and their application

Python 3.13+.
"""

from arbsync.sync.document_set import DocumentSet
from arbsync.sync.mutations import Mutation, apply_mutation

__all__ = [
    "DocumentSet",
    "Mutation",
    "apply_mutation",
]
