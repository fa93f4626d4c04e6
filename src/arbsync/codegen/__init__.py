"""Accessor code generation.

Submodules:
    ir        - Typed intermediate representation and locale resolution
    backends  - DartBackend, PythonBackend
    generator - CodeGenerator facade

Python 3.13+.
"""

from arbsync.codegen.backends import Backend, DartBackend, PythonBackend
from arbsync.codegen.generator import CodeGenerator
from arbsync.codegen.ir import (
    AccessorImpl,
    AccessorSpec,
    DispatchRule,
    GeneratedModule,
    LocaleImpl,
    Parameter,
    Segment,
    build_module,
    resolve_locale,
    split_interpolation,
)

__all__ = [
    "AccessorImpl",
    "AccessorSpec",
    "Backend",
    "CodeGenerator",
    "DartBackend",
    "DispatchRule",
    "GeneratedModule",
    "LocaleImpl",
    "Parameter",
    "PythonBackend",
    "Segment",
    "build_module",
    "resolve_locale",
    "split_interpolation",
]
