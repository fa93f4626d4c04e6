"""Target-language renderers for GeneratedModule.

A backend turns the intermediate representation into source text. The
output is a pure function of the module, so equal snapshots always render
byte-identical files.

Backends:
    DartBackend   - Flutter localizations (abstract class, delegate, lookup)
    PythonBackend - abc.ABC contract with one subclass per locale

Python 3.13+.
"""

from __future__ import annotations

import re
from typing import Protocol

from arbsync.codegen.ir import (
    AccessorImpl,
    AccessorSpec,
    GeneratedModule,
    LocaleImpl,
    Parameter,
    Segment,
)
from arbsync.enums import SegmentKind

__all__ = ["Backend", "DartBackend", "PythonBackend"]


class Backend(Protocol):
    """Renders a GeneratedModule to source text."""

    name: str
    file_extension: str

    def render(self, module: GeneratedModule) -> str: ...


def _doc_lines(text: str | None, prefix: str) -> list[str]:
    if not text:
        return []
    return [f"{prefix}{line}".rstrip() for line in text.splitlines()]


# ============================================================================
# DART
# ============================================================================

_DART_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "$": "\\$",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}
_DART_ESCAPE_RE = re.compile(r'[\\"$\n\r\t]')


def _dart_escape(text: str) -> str:
    return _DART_ESCAPE_RE.sub(lambda m: _DART_ESCAPES[m.group(0)], text)


def _dart_literal(segments: tuple[Segment, ...]) -> str:
    parts: list[str] = []
    for index, segment in enumerate(segments):
        if segment.kind is SegmentKind.TEXT:
            parts.append(_dart_escape(segment.text))
            continue
        following = segments[index + 1] if index + 1 < len(segments) else None
        glued = (
            following is not None
            and following.kind is SegmentKind.TEXT
            and (following.text[:1].isalnum() or following.text[:1] == "_")
        )
        parts.append(f"${{{segment.text}}}" if glued else f"${segment.text}")
    return '"' + "".join(parts) + '"'


def _dart_parameters(parameters: tuple[Parameter, ...]) -> str:
    return ", ".join(f"required {p.type_name} {p.name}" for p in parameters)


def _dart_signature(accessor: AccessorSpec | AccessorImpl) -> str:
    if accessor.is_getter:
        return f"String get {accessor.name}"
    return f"String {accessor.name}({{{_dart_parameters(accessor.parameters)}}})"


def _dart_locale(impl: LocaleImpl) -> str:
    if impl.region is None:
        return f"Locale('{impl.language}')"
    return f"Locale('{impl.language}', '{impl.region}')"


class DartBackend:
    """Render Flutter localizations source.

    Emits the abstract contract with its delegate, one ``extends`` class per
    locale and a ``lookup<Class>(Locale)`` function that tries language and
    country first, then language alone, then throws ``FlutterError``.
    """

    name = "dart"
    file_extension = ".dart"

    def render(self, module: GeneratedModule) -> str:
        sections = [
            self._header(module),
            self._contract(module),
            self._delegate(module),
            self._lookup(module),
            *(self._locale_class(module, impl) for impl in module.locales),
        ]
        return "\n\n".join(sections) + "\n"

    def _header(self, module: GeneratedModule) -> str:
        return "\n".join(
            [
                f"// {module.header}",
                "",
                "import 'dart:async';",
                "",
                "import 'package:flutter/foundation.dart';",
                "import 'package:flutter/widgets.dart';",
                "import 'package:flutter_localizations/flutter_localizations.dart';",
            ]
        )

    def _contract(self, module: GeneratedModule) -> str:
        name = module.class_name
        lines = [
            f"/// Callers can lookup localized strings with an instance of {name}",
            f"/// returned by `{name}.of(context)`.",
            f"abstract class {name} {{",
            f"  {name}(String locale) : localeName = locale;",
            "",
            "  final String localeName;",
            "",
            f"  static {name} of(BuildContext context) {{",
            f"    return Localizations.of<{name}>(context, {name})!;",
            "  }",
            "",
            f"  static const LocalizationsDelegate<{name}> delegate = _{name}Delegate();",
            "",
            "  static const List<LocalizationsDelegate<dynamic>> localizationsDelegates =",
            "      <LocalizationsDelegate<dynamic>>[",
            "    delegate,",
            "    GlobalMaterialLocalizations.delegate,",
            "    GlobalWidgetsLocalizations.delegate,",
            "    GlobalCupertinoLocalizations.delegate,",
            "  ];",
            "",
            "  static const List<Locale> supportedLocales = <Locale>[",
            *(f"    {_dart_locale(impl)}," for impl in module.locales),
            "  ];",
        ]
        for accessor in module.accessors:
            lines.append("")
            lines.extend(_doc_lines(accessor.description, "  /// "))
            lines.append(f"  {_dart_signature(accessor)};")
        lines.append("}")
        return "\n".join(lines)

    def _delegate(self, module: GeneratedModule) -> str:
        name = module.class_name
        languages = ", ".join(f"'{language}'" for language in module.languages)
        return "\n".join(
            [
                f"class _{name}Delegate extends LocalizationsDelegate<{name}> {{",
                f"  const _{name}Delegate();",
                "",
                "  @override",
                f"  Future<{name}> load(Locale locale) {{",
                f"    return SynchronousFuture<{name}>(lookup{name}(locale));",
                "  }",
                "",
                "  @override",
                "  bool isSupported(Locale locale) =>",
                f"      <String>[{languages}].contains(locale.languageCode);",
                "",
                "  @override",
                f"  bool shouldReload(_{name}Delegate old) => false;",
                "}",
            ]
        )

    def _lookup(self, module: GeneratedModule) -> str:
        name = module.class_name
        lines = [f"{name} lookup{name}(Locale locale) {{"]
        for rule in module.dispatch:
            condition = f"locale.languageCode == '{rule.language}'"
            if rule.region is not None:
                condition += f" && locale.countryCode == '{rule.region}'"
            lines.extend(
                [
                    f"  if ({condition}) {{",
                    f"    return {rule.class_name}();",
                    "  }",
                ]
            )
        lines.extend(
            [
                "",
                "  throw FlutterError(",
                f"    '{name}.delegate failed to load unsupported locale \"$locale\". This is likely '",
                "    'an issue with the localizations generation tool.',",
                "  );",
                "}",
            ]
        )
        return "\n".join(lines)

    def _locale_class(self, module: GeneratedModule, impl: LocaleImpl) -> str:
        label = f"{impl.display_name} (`{impl.locale}`)" if impl.display_name else f"`{impl.locale}`"
        lines = [
            f"/// The translations for {label}.",
            f"class {impl.class_name} extends {module.class_name} {{",
            f"  {impl.class_name}([String locale = '{impl.locale}']) : super(locale);",
        ]
        for accessor in impl.accessors:
            lines.extend(
                [
                    "",
                    "  @override",
                    f"  {_dart_signature(accessor)} => {_dart_literal(accessor.segments)};",
                ]
            )
        lines.append("}")
        return "\n".join(lines)


# ============================================================================
# PYTHON
# ============================================================================

_PYTHON_TYPES = {
    "String": "str",
    "int": "int",
    "double": "float",
    "num": "float",
    "bool": "bool",
}


def _snake_case(name: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


def _python_parameters(parameters: tuple[Parameter, ...]) -> str:
    if not parameters:
        return "self"
    declared = ", ".join(
        f"{p.name}: {_PYTHON_TYPES.get(p.type_name, 'object')}" for p in parameters
    )
    return f"self, *, {declared}"


def _python_expression(segments: tuple[Segment, ...]) -> str:
    parts = [
        repr(segment.text) if segment.kind is SegmentKind.TEXT else f"str({segment.text})"
        for segment in segments
    ]
    return " + ".join(parts)


class PythonBackend:
    """Render an importable Python module.

    The contract is an ``abc.ABC`` with abstract properties for keys without
    parameters and keyword-only abstract methods for the others. Each locale
    becomes a subclass, and ``lookup_<name>(tag)`` resolves a tag with the
    same precedence as the Dart lookup, raising ``LookupError`` when no
    locale matches.
    """

    name = "python"
    file_extension = ".py"

    def render(self, module: GeneratedModule) -> str:
        sections = [
            self._header(module),
            self._contract(module),
            *(self._locale_class(module, impl) for impl in module.locales),
            self._lookup(module),
        ]
        return "\n\n\n".join(sections) + "\n"

    def _header(self, module: GeneratedModule) -> str:
        locales = "".join(f"{impl.locale!r}, " for impl in module.locales).rstrip(" ")
        return "\n".join(
            [
                f"# {module.header}",
                "",
                "from __future__ import annotations",
                "",
                "import abc",
                "",
                f"SUPPORTED_LOCALES: tuple[str, ...] = ({locales})",
            ]
        )

    def _contract(self, module: GeneratedModule) -> str:
        lines = [
            f"class {module.class_name}(abc.ABC):",
            "    locale_name: str = ''",
        ]
        for accessor in module.accessors:
            lines.append("")
            lines.extend(_doc_lines(accessor.description, "    # "))
            if accessor.is_getter:
                lines.append("    @property")
            lines.extend(
                [
                    "    @abc.abstractmethod",
                    f"    def {accessor.name}({_python_parameters(accessor.parameters)}) -> str: ...",
                ]
            )
        return "\n".join(lines)

    def _locale_class(self, module: GeneratedModule, impl: LocaleImpl) -> str:
        label = f"{impl.display_name} ({impl.locale})" if impl.display_name else impl.locale
        lines = [
            f"# Translations for {label}",
            f"class {impl.class_name}({module.class_name}):",
            f"    locale_name = {impl.locale!r}",
        ]
        for accessor in impl.accessors:
            lines.append("")
            if accessor.is_getter:
                lines.append("    @property")
            lines.extend(
                [
                    f"    def {accessor.name}({_python_parameters(accessor.parameters)}) -> str:",
                    f"        return {_python_expression(accessor.segments)}",
                ]
            )
        return "\n".join(lines)

    def _lookup(self, module: GeneratedModule) -> str:
        name = module.class_name
        lines = [
            f"def lookup_{_snake_case(name)}(tag: str) -> {name}:",
            "    language, _, rest = tag.replace('-', '_').partition('_')",
            "    region = rest.split('_')[0]",
        ]
        for rule in module.dispatch:
            condition = f"language == {rule.language!r}"
            if rule.region is not None:
                condition += f" and region == {rule.region!r}"
            lines.extend([f"    if {condition}:", f"        return {rule.class_name}()"])
        lines.append(f"    raise LookupError(f'{name} has no translations for locale {{tag!r}}')")
        return "\n".join(lines)
