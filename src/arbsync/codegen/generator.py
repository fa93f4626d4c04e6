"""Code generator facade.

Python 3.13+.
"""

from __future__ import annotations

import logging

from arbsync.codegen.backends import Backend, DartBackend
from arbsync.codegen.ir import GeneratedModule, build_module
from arbsync.config import GeneratorConfig
from arbsync.sync import DocumentSet

__all__ = ["CodeGenerator"]

logger = logging.getLogger(__name__)


class CodeGenerator:
    """Generate typed accessor source from a DocumentSet.

    Stateless apart from its backend and configuration; the DocumentSet is
    only read.

    Example:
        >>> generator = CodeGenerator()
        >>> source = generator.generate(docs)
        >>> "abstract class AppLocalizations" in source
        True
    """

    __slots__ = ("_backend", "_config")

    def __init__(
        self,
        backend: Backend | None = None,
        config: GeneratorConfig | None = None,
    ) -> None:
        self._backend: Backend = backend if backend is not None else DartBackend()
        self._config = config if config is not None else GeneratorConfig()

    @property
    def backend(self) -> Backend:
        return self._backend

    @property
    def config(self) -> GeneratorConfig:
        return self._config

    @property
    def output_path(self) -> str:
        """Suggested output location relative to the project root."""
        return f"{self._config.output_dir.rstrip('/')}/{self._config.output_file}"

    def build(self, document_set: DocumentSet) -> GeneratedModule:
        """Build the intermediate representation without rendering it."""
        return build_module(document_set, self._config)

    def generate(self, document_set: DocumentSet) -> str:
        """Render accessor source for the current snapshot."""
        module = self.build(document_set)
        source = self._backend.render(module)
        stubs = sum(
            1 for impl in module.locales for accessor in impl.accessors if accessor.is_stub
        )
        logger.info(
            "Generated %s accessors: %d keys, %d locales, %d stubs",
            self._backend.name,
            len(module.accessors),
            len(module.locales),
            stubs,
        )
        return source
