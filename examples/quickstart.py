"""Quickstart example for arbsync.

Walks through a typical editing session: load ARB files from a project,
add and edit keys across locales, round-trip a spreadsheet, save only the
changed files and generate accessor code.
"""

import json
import logging
import tempfile
from pathlib import Path

from arbsync import (
    CodeGenerator,
    PathDocumentStore,
    PythonBackend,
    load_document_set,
    save_dirty,
)
from arbsync.diagnostics import DuplicateKeyError
from arbsync.tabular import export_workbook, import_workbook

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

with tempfile.TemporaryDirectory() as tmpdir:
    root = Path(tmpdir)
    l10n = root / "lib" / "l10n"
    l10n.mkdir(parents=True)
    (l10n / "app_en.arb").write_text(
        json.dumps(
            {
                "@@locale": "en",
                "hello": "Hi {name}",
                "@hello": {"description": "Greeting", "placeholders": {"name": {"type": "String"}}},
            }
        ),
        encoding="utf-8",
    )
    (l10n / "app_fr.arb").write_text(json.dumps({"@@locale": "fr"}), encoding="utf-8")

    # Example 1: Load every document under the project
    print("=" * 50)
    print("Example 1: Load")
    print("=" * 50)

    store = PathDocumentStore(root)
    docs, summary = load_document_set(store)
    print(summary)
    print("Missing in fr:", docs.missing_keys("fr"))
    # Output: Missing in fr: ('hello',)

    # Example 2: Synchronized edits
    print("\n" + "=" * 50)
    print("Example 2: Synchronized Edits")
    print("=" * 50)

    docs.update_description("hello", "Greeting on the home screen")
    docs.update_value("fr", "hello", "Salut {name}")
    docs.add_key("title", "en", "Home", "Window title")
    try:
        docs.add_key("title", "fr", "Accueil")
    except DuplicateKeyError as e:
        print(e)
    for entry in docs.canonical_entries():
        print(entry.key, "|", entry.description, "|", docs.entry_for("fr", entry.key).value)

    # Example 3: Spreadsheet round trip
    print("\n" + "=" * 50)
    print("Example 3: Spreadsheet")
    print("=" * 50)

    workbook = root / "translations.xlsx"
    export_workbook(docs, workbook)
    import_workbook(workbook, docs)
    print("Dirty:", [d.locale for d in docs.dirty_documents()])

    # Example 4: Save changed documents only
    print("\n" + "=" * 50)
    print("Example 4: Save")
    print("=" * 50)

    print(save_dirty(store, docs))
    print((l10n / "app_fr.arb").read_text(encoding="utf-8"))

    # Example 5: Generate accessors and run them
    print("\n" + "=" * 50)
    print("Example 5: Code Generation")
    print("=" * 50)

    print(CodeGenerator().generate(docs)[:400], "...")
    namespace: dict[str, object] = {}
    exec(CodeGenerator(backend=PythonBackend()).generate(docs), namespace)  # noqa: S102
    fr = namespace["lookup_app_localizations"]("fr_CA")  # type: ignore[operator]
    print(fr.hello(name="Ana"))
    # Output: Salut Ana
