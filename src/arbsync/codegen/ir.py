"""Typed intermediate representation of generated accessor code.

``build_module()`` turns a DocumentSet snapshot into a GeneratedModule:
one accessor contract per canonical key, one implementation per locale and
the locale dispatch table. Backends render the module to target source;
nothing here knows about any target language.

Python 3.13+.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from arbsync.config import GeneratorConfig
from arbsync.enums import SegmentKind
from arbsync.locale_utils import locale_display_name, normalize_locale, split_locale
from arbsync.model import Entry, LocaleCode, Placeholder
from arbsync.sync import DocumentSet

__all__ = [
    "AccessorImpl",
    "AccessorSpec",
    "DispatchRule",
    "GeneratedModule",
    "LocaleImpl",
    "Parameter",
    "Segment",
    "build_module",
    "resolve_locale",
    "split_interpolation",
]

logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")
_NON_IDENTIFIER_RE = re.compile(r"[^0-9A-Za-z_]")


@dataclass(frozen=True, slots=True)
class Parameter:
    """Accessor parameter derived from a placeholder.

    Attributes:
        name: Placeholder name
        type_name: Declared placeholder type, or the configured generic type
    """

    name: str
    type_name: str


@dataclass(frozen=True, slots=True)
class Segment:
    """Piece of an accessor body.

    Attributes:
        kind: TEXT for literal text, PARAMETER for a parameter reference
        text: Literal text, or the referenced parameter name
    """

    kind: SegmentKind
    text: str


@dataclass(frozen=True, slots=True)
class AccessorSpec:
    """Member of the generated base contract.

    An accessor without parameters is rendered as a getter/property.
    """

    name: str
    parameters: tuple[Parameter, ...]
    description: str | None = None

    @property
    def is_getter(self) -> bool:
        return not self.parameters


@dataclass(frozen=True, slots=True)
class AccessorImpl:
    """Locale-specific accessor body.

    Attributes:
        name: Accessor name (the translation key)
        parameters: Same parameters as the contract member
        segments: Body as literal text and parameter references
        is_stub: True when the locale does not define the key and the
            body is the configured stub marker
    """

    name: str
    parameters: tuple[Parameter, ...]
    segments: tuple[Segment, ...]
    is_stub: bool = False

    @property
    def is_getter(self) -> bool:
        return not self.parameters


@dataclass(frozen=True, slots=True)
class LocaleImpl:
    """Implementation class for one locale.

    Attributes:
        locale: Locale tag of the source document (e.g., "pt_BR")
        language: Language part of the tag
        region: Region part of the tag (None when absent)
        class_name: Generated class name (base name + upper-cased tag)
        display_name: Human readable locale name from CLDR, if known
        accessors: One implementation per canonical key, in key order
    """

    locale: LocaleCode
    language: str
    region: str | None
    class_name: str
    display_name: str | None
    accessors: tuple[AccessorImpl, ...]


@dataclass(frozen=True, slots=True)
class DispatchRule:
    """One step of runtime locale resolution.

    Rules are tried in order. ``region`` None matches on language alone.
    """

    language: str
    region: str | None
    locale: LocaleCode
    class_name: str


@dataclass(frozen=True, slots=True)
class GeneratedModule:
    """Complete generator output for one DocumentSet snapshot.

    Attributes:
        class_name: Name of the base contract
        accessors: Contract members, one per canonical key (sorted)
        locales: Implementation per locale, in document order
        dispatch: Locale resolution rules, exact matches first
        header: Comment placed at the top of generated files
    """

    class_name: str
    accessors: tuple[AccessorSpec, ...]
    locales: tuple[LocaleImpl, ...]
    dispatch: tuple[DispatchRule, ...]
    header: str

    @property
    def languages(self) -> tuple[str, ...]:
        """Distinct languages in document order."""
        return tuple(dict.fromkeys(impl.language for impl in self.locales))


def split_interpolation(value: str, names: Sequence[str]) -> tuple[Segment, ...]:
    """Split a translated value into literal text and parameter references.

    Only ``{name}`` tokens whose name is in ``names`` become references;
    any other brace text is kept literally.

    Example:
        >>> [s.text for s in split_interpolation("Hi {name}, {other}!", ["name"])]
        ['Hi ', 'name', ', {other}!']
    """
    declared = set(names)
    segments: list[Segment] = []
    position = 0
    for match in _TOKEN_RE.finditer(value):
        name = match.group(1)
        if name not in declared:
            logger.debug("Leaving unmatched token '{%s}' as literal text", name)
            continue
        literal = value[position : match.start()]
        if literal:
            segments.append(Segment(SegmentKind.TEXT, literal))
        segments.append(Segment(SegmentKind.PARAMETER, name))
        position = match.end()
    tail = value[position:]
    if tail or not segments:
        segments.append(Segment(SegmentKind.TEXT, tail))
    return tuple(segments)


def resolve_locale(tag: str, locales: Sequence[LocaleCode]) -> LocaleCode | None:
    """Pick the locale generated code dispatches ``tag`` to.

    Precedence: exact language and region; the region-less locale of the
    language; the first locale of the language. Returns None when no
    locale shares the language (the generated code raises in that case).

    Example:
        >>> resolve_locale("en_GB", ["en_US", "en", "fr"])
        'en'
        >>> resolve_locale("en_US", ["en_US", "en"])
        'en_US'
        >>> resolve_locale("de", ["en", "fr"]) is None
        True
    """
    language, region = split_locale(tag)
    same_language = [locale for locale in locales if split_locale(locale)[0] == language]
    if region is not None:
        for locale in same_language:
            if split_locale(locale)[1] == region:
                return locale
    for locale in same_language:
        if split_locale(locale)[1] is None:
            return locale
    return same_language[0] if same_language else None


def _parameters(
    placeholders: Mapping[str, Placeholder] | None, generic_type: str
) -> tuple[Parameter, ...]:
    if not placeholders:
        return ()
    return tuple(
        Parameter(name, placeholder.type or generic_type)
        for name, placeholder in placeholders.items()
    )


def _impl(
    canonical: Entry,
    parameters: tuple[Parameter, ...],
    entry: Entry | None,
    stub_marker: str,
) -> AccessorImpl:
    if entry is None:
        return AccessorImpl(
            canonical.key, parameters, (Segment(SegmentKind.TEXT, stub_marker),), is_stub=True
        )
    names = [parameter.name for parameter in parameters]
    return AccessorImpl(canonical.key, parameters, split_interpolation(entry.value, names))


def _class_suffix(locale: LocaleCode) -> str:
    """Identifier-safe form of a locale tag (``pt-BR`` -> ``PT_BR``)."""
    return _NON_IDENTIFIER_RE.sub("_", normalize_locale(locale)).upper()


def _dispatch(locales: Sequence[LocaleImpl]) -> tuple[DispatchRule, ...]:
    rules = [
        DispatchRule(impl.language, impl.region, impl.locale, impl.class_name)
        for impl in locales
        if impl.region is not None
    ]
    by_locale = {impl.locale: impl for impl in locales}
    tags = [impl.locale for impl in locales]
    for language in dict.fromkeys(impl.language for impl in locales):
        fallback = resolve_locale(language, tags)
        if fallback is not None:
            impl = by_locale[fallback]
            rules.append(DispatchRule(language, None, impl.locale, impl.class_name))
    return tuple(rules)


def build_module(document_set: DocumentSet, config: GeneratorConfig) -> GeneratedModule:
    """Build the intermediate representation of a DocumentSet.

    Every locale implements every canonical key. Keys a locale lacks get a
    stub returning ``config.stub_marker``. Parameters come from the
    canonical placeholders of the key, so all implementations share the
    contract signature.

    Args:
        document_set: Snapshot to generate from (not modified)
        config: Naming and stub settings

    Returns:
        GeneratedModule ready for a backend
    """
    canonical_entries = document_set.canonical_entries()
    contract: list[AccessorSpec] = []
    parameters_by_key: dict[str, tuple[Parameter, ...]] = {}
    for canonical in canonical_entries:
        parameters = _parameters(canonical.placeholders, config.generic_type)
        parameters_by_key[canonical.key] = parameters
        contract.append(AccessorSpec(canonical.key, parameters, canonical.description))

    locales: list[LocaleImpl] = []
    for document in document_set:
        language, region = split_locale(document.locale)
        accessors = tuple(
            _impl(
                canonical,
                parameters_by_key[canonical.key],
                document.get(canonical.key),
                config.stub_marker,
            )
            for canonical in canonical_entries
        )
        stubs = sum(1 for accessor in accessors if accessor.is_stub)
        if stubs:
            logger.debug("Locale '%s' gets %d stub accessors", document.locale, stubs)
        locales.append(
            LocaleImpl(
                locale=document.locale,
                language=language,
                region=region,
                class_name=f"{config.class_name}{_class_suffix(document.locale)}",
                display_name=locale_display_name(document.locale),
                accessors=accessors,
            )
        )

    return GeneratedModule(
        class_name=config.class_name,
        accessors=tuple(contract),
        locales=tuple(locales),
        dispatch=_dispatch(locales),
        header=config.header,
    )
