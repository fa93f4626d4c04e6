"""Tests for accessor code generation: IR, Dart and Python backends."""

from types import SimpleNamespace

import pytest
from hypothesis import given

from arbsync import CodeGenerator, Document, DocumentSet, Entry, GeneratorConfig, Placeholder
from arbsync.codegen import (
    DartBackend,
    PythonBackend,
    build_module,
    resolve_locale,
    split_interpolation,
)
from arbsync.enums import SegmentKind
from tests.strategies import document_sets


def _run_python(source: str) -> SimpleNamespace:
    """Execute generated Python source and return its namespace."""
    namespace: dict[str, object] = {}
    exec(compile(source, "<generated>", "exec"), namespace)  # noqa: S102
    return SimpleNamespace(**namespace)


@pytest.fixture
def hello_docs() -> DocumentSet:
    return DocumentSet(
        [
            Document(
                "app_en.arb",
                "en",
                [
                    Entry("greeting", "Hi", "Home title"),
                    Entry("hello", "Hi {name}", placeholders={"name": Placeholder(type="String")}),
                ],
            ),
            Document(
                "app_fr.arb",
                "fr",
                [Entry("hello", "Salut {name}", placeholders={"name": Placeholder(type="String")})],
            ),
        ]
    )


class TestInterpolation:
    """split_interpolation() segment rules."""

    def test_declared_tokens_become_parameters(self) -> None:
        segments = split_interpolation("Hi {name}!", ["name"])
        assert [(s.kind, s.text) for s in segments] == [
            (SegmentKind.TEXT, "Hi "),
            (SegmentKind.PARAMETER, "name"),
            (SegmentKind.TEXT, "!"),
        ]

    def test_undeclared_tokens_stay_literal(self) -> None:
        segments = split_interpolation("{count} of {total}", ["total"])
        assert [s.text for s in segments] == ["{count} of ", "total"]

    def test_empty_value_is_one_empty_text_segment(self) -> None:
        (segment,) = split_interpolation("", [])
        assert segment.kind is SegmentKind.TEXT
        assert segment.text == ""

    def test_icu_syntax_is_left_alone(self) -> None:
        value = "{count, plural, =0{none} other{some}}"
        assert [s.text for s in split_interpolation(value, ["count"])] == [value]


class TestResolveLocale:
    """Dispatch precedence shared by every backend."""

    @pytest.mark.parametrize(
        ("tag", "expected"),
        [
            ("en_US", "en_US"),
            ("en-US", "en_US"),
            ("en_GB", "en"),
            ("en", "en"),
            ("fr_CA", "fr_FR"),
            ("de", None),
        ],
    )
    def test_precedence(self, tag: str, expected: str | None) -> None:
        assert resolve_locale(tag, ["en_US", "en", "fr_FR"]) == expected


class TestBuildModule:
    """GeneratedModule construction."""

    def test_missing_key_becomes_stub(self, hello_docs: DocumentSet) -> None:
        module = build_module(hello_docs, GeneratorConfig())
        fr = next(impl for impl in module.locales if impl.locale == "fr")
        greeting = next(a for a in fr.accessors if a.name == "greeting")
        assert greeting.is_stub
        assert greeting.segments[0].text == "TODO"

    def test_contract_uses_canonical_metadata(self, hello_docs: DocumentSet) -> None:
        module = build_module(hello_docs, GeneratorConfig())
        assert [a.name for a in module.accessors] == ["greeting", "hello"]
        greeting, hello = module.accessors
        assert greeting.description == "Home title"
        assert greeting.is_getter
        assert [(p.name, p.type_name) for p in hello.parameters] == [("name", "String")]

    def test_untyped_placeholder_uses_generic_type(self) -> None:
        docs = DocumentSet(
            [Document("app_en.arb", "en", [Entry("n", "{x}", placeholders={"x": Placeholder()})])]
        )
        module = build_module(docs, GeneratorConfig(generic_type="Object"))
        assert module.accessors[0].parameters[0].type_name == "Object"

    def test_class_names_and_display_names(self, hello_docs: DocumentSet) -> None:
        module = build_module(hello_docs, GeneratorConfig(class_name="L10n"))
        assert [impl.class_name for impl in module.locales] == ["L10nEN", "L10nFR"]
        assert module.locales[1].display_name == "French"

    def test_hyphenated_locale_gives_identifier_class_name(self) -> None:
        docs = DocumentSet([Document("app_pt-BR.arb", "pt-BR", [Entry("k", "v")])])
        (impl,) = build_module(docs, GeneratorConfig()).locales
        assert impl.class_name == "AppLocalizationsPT_BR"
        assert (impl.language, impl.region) == ("pt", "BR")

        generated = _run_python(CodeGenerator(backend=PythonBackend()).generate(docs))
        assert generated.lookup_app_localizations("pt_BR").k == "v"
        assert "class AppLocalizationsPT_BR extends AppLocalizations {" in CodeGenerator().generate(docs)

    def test_dispatch_puts_exact_matches_first(self) -> None:
        docs = DocumentSet(
            [Document("app_en.arb", "en"), Document("app_en_US.arb", "en_US")]
        )
        module = build_module(docs, GeneratorConfig())
        assert [(r.language, r.region, r.locale) for r in module.dispatch] == [
            ("en", "US", "en_US"),
            ("en", None, "en"),
        ]

    @given(document_sets())
    def test_every_locale_implements_every_key(self, docs: DocumentSet) -> None:
        module = build_module(docs, GeneratorConfig())
        keys = [a.name for a in module.accessors]
        for impl in module.locales:
            assert [a.name for a in impl.accessors] == keys
            for accessor in impl.accessors:
                assert accessor.is_stub == (docs.entry_for(impl.locale, accessor.name) is None)


class TestPythonBackend:
    """Generated Python is executable and behaves like the Dart output."""

    def test_placeholder_substitution(self, hello_docs: DocumentSet) -> None:
        generated = _run_python(CodeGenerator(backend=PythonBackend()).generate(hello_docs))
        assert generated.lookup_app_localizations("en").hello(name="Ana") == "Hi Ana"
        assert generated.lookup_app_localizations("fr").hello(name="Ana") == "Salut Ana"

    def test_stub_policy(self, hello_docs: DocumentSet) -> None:
        generated = _run_python(CodeGenerator(backend=PythonBackend()).generate(hello_docs))
        assert generated.lookup_app_localizations("en").greeting == "Hi"
        assert generated.lookup_app_localizations("fr").greeting == "TODO"

    def test_unresolved_locale_raises(self, hello_docs: DocumentSet) -> None:
        generated = _run_python(CodeGenerator(backend=PythonBackend()).generate(hello_docs))
        with pytest.raises(LookupError, match="'de'"):
            generated.lookup_app_localizations("de")

    def test_region_fallback(self) -> None:
        docs = DocumentSet(
            [
                Document("app_en.arb", "en", [Entry("color", "colour")]),
                Document("app_en_US.arb", "en_US", [Entry("color", "color")]),
            ]
        )
        generated = _run_python(CodeGenerator(backend=PythonBackend()).generate(docs))
        assert generated.lookup_app_localizations("en_US").color == "color"
        assert generated.lookup_app_localizations("en-GB").color == "colour"
        assert generated.SUPPORTED_LOCALES == ("en", "en_US")

    def test_lookup_agrees_with_resolve_locale(self) -> None:
        docs = DocumentSet(
            [
                Document("app_en.arb", "en", [Entry("color", "colour")]),
                Document("app_en_US.arb", "en_US", [Entry("color", "color")]),
            ]
        )
        generated = _run_python(CodeGenerator(backend=PythonBackend()).generate(docs))
        for tag in ("en_US_POSIX", "en-US-u-ca", "en_GB", "en"):
            expected = resolve_locale(tag, docs.locales)
            assert generated.lookup_app_localizations(tag).locale_name == expected

    def test_contract_is_abstract(self, hello_docs: DocumentSet) -> None:
        generated = _run_python(CodeGenerator(backend=PythonBackend()).generate(hello_docs))
        with pytest.raises(TypeError):
            generated.AppLocalizations()

    def test_quotes_and_braces_survive(self) -> None:
        value = "It's \"{n}\" \\ {other} 100%"
        docs = DocumentSet(
            [Document("app_en.arb", "en", [Entry("odd", value, placeholders={"n": Placeholder()})])]
        )
        generated = _run_python(CodeGenerator(backend=PythonBackend()).generate(docs))
        assert generated.lookup_app_localizations("en").odd(n=5) == "It's \"5\" \\ {other} 100%"

    def test_empty_set_renders(self) -> None:
        generated = _run_python(CodeGenerator(backend=PythonBackend()).generate(DocumentSet()))
        assert generated.SUPPORTED_LOCALES == ()


class TestDartBackend:
    """Generated Dart source text."""

    def test_contract_and_locale_classes(self, hello_docs: DocumentSet) -> None:
        source = CodeGenerator().generate(hello_docs)
        assert source.startswith("// GENERATED CODE - DO NOT MODIFY BY HAND\n")
        assert "abstract class AppLocalizations {" in source
        assert "  /// Home title\n  String get greeting;" in source
        assert "  String hello({required String name});" in source
        assert "class AppLocalizationsEN extends AppLocalizations {" in source
        assert "/// The translations for French (`fr`)." in source

    def test_bodies_and_stub(self, hello_docs: DocumentSet) -> None:
        source = CodeGenerator().generate(hello_docs)
        assert '  String get greeting => "Hi";' in source
        assert '  String get greeting => "TODO";' in source
        assert '  String hello({required String name}) => "Salut $name";' in source

    def test_delegate_and_lookup(self, hello_docs: DocumentSet) -> None:
        source = CodeGenerator().generate(hello_docs)
        assert "Locale('en'),\n    Locale('fr')," in source
        assert "<String>['en', 'fr'].contains(locale.languageCode);" in source
        assert "AppLocalizations lookupAppLocalizations(Locale locale) {" in source
        assert "if (locale.languageCode == 'fr') {\n    return AppLocalizationsFR();" in source
        assert "throw FlutterError(" in source

    def test_region_lookup_precedes_language(self) -> None:
        docs = DocumentSet([Document("app_en.arb", "en"), Document("app_en_US.arb", "en_US")])
        source = CodeGenerator().generate(docs)
        exact = source.index("locale.languageCode == 'en' && locale.countryCode == 'US'")
        language_only = source.index("if (locale.languageCode == 'en') {")
        assert exact < language_only
        assert "Locale('en', 'US')," in source

    def test_escaping(self) -> None:
        docs = DocumentSet(
            [
                Document(
                    "app_en.arb",
                    "en",
                    [
                        Entry("price", 'Say "hi" for $5 \\ now'),
                        Entry("items", "{count}items", placeholders={"count": Placeholder(type="int")}),
                    ],
                )
            ]
        )
        source = CodeGenerator(backend=DartBackend()).generate(docs)
        assert 'String get price => "Say \\"hi\\" for \\$5 \\\\ now";' in source
        assert 'String items({required int count}) => "${count}items";' in source

    def test_custom_class_name_and_stub_marker(self, hello_docs: DocumentSet) -> None:
        config = GeneratorConfig(class_name="L10n", stub_marker="MISSING")
        source = CodeGenerator(config=config).generate(hello_docs)
        assert "abstract class L10n {" in source
        assert '"MISSING"' in source

    def test_output_is_deterministic(self, hello_docs: DocumentSet) -> None:
        generator = CodeGenerator()
        assert generator.generate(hello_docs) == generator.generate(hello_docs.copy())

    def test_output_path(self) -> None:
        assert CodeGenerator().output_path == "lib/generated/l10n.dart"

    def test_invalid_class_name_rejected(self) -> None:
        with pytest.raises(ValueError, match="class_name"):
            GeneratorConfig(class_name="my-class")
