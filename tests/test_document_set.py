"""Tests for DocumentSet synchronization operations and invariants."""

import pytest
from hypothesis import assume, given, settings
from hypothesis import strategies as st

from arbsync import Document, DocumentSet, Entry, Placeholder, serialize_document
from arbsync.diagnostics import (
    DuplicateKeyError,
    DuplicateLocaleError,
    InvalidKeyError,
    UnknownKeyError,
    UnknownLocaleError,
)
from arbsync.enums import MutationKind
from arbsync.sync import Mutation
from tests.strategies import descriptions, document_sets, translation_keys, translation_values


def _serialized(docs: DocumentSet) -> list[str]:
    return [serialize_document(document) for document in docs]


class TestCanonicalView:
    """Canonical keys and merged entries."""

    @given(document_sets())
    def test_canonical_entries_are_the_key_union(self, docs: DocumentSet) -> None:
        union = set()
        for document in docs:
            union.update(document.keys())
        canonical = [entry.key for entry in docs.canonical_entries()]
        assert canonical == sorted(union)
        assert list(docs.canonical_keys()) == canonical

    def test_first_defining_document_supplies_metadata(self) -> None:
        docs = DocumentSet(
            [
                Document("app_en.arb", "en", [Entry("k", "v")]),
                Document("app_fr.arb", "fr", [Entry("k", "w", "From fr")]),
                Document("app_de.arb", "de", [Entry("k", "x", "From de")]),
            ]
        )
        (entry,) = docs.canonical_entries()
        assert entry.description == "From fr"
        assert entry.value == ""

    def test_canonical_entry_of_absent_key(self, en_fr: DocumentSet) -> None:
        assert en_fr.canonical_entry("missing") is None

    def test_missing_keys(self, en_fr: DocumentSet) -> None:
        assert en_fr.missing_keys("fr") == ("farewell",)
        assert en_fr.missing_keys("en") == ()
        assert en_fr.locales_with("farewell") == ("en",)

    def test_entry_for_unknown_locale_is_none(self, en_fr: DocumentSet) -> None:
        assert en_fr.entry_for("de", "greeting") is None
        assert en_fr.entry_for("fr", "farewell") is None


class TestAddKey:
    """add_key() synchronization."""

    @given(
        document_sets(min_locales=1),
        translation_keys(),
        translation_values,
        descriptions,
        st.data(),
    )
    def test_key_and_description_reach_every_document(
        self,
        docs: DocumentSet,
        key: str,
        value: str,
        description: str | None,
        data: st.DataObject,
    ) -> None:
        assume(key not in docs.canonical_keys())
        origin = data.draw(st.sampled_from(docs.locales))

        docs.add_key(key, origin, value, description)

        for document in docs:
            entry = document.get(key)
            assert entry is not None
            assert entry.description == description
            assert entry.value == (value if document.locale == origin else "")
            assert docs.is_dirty(document.locale)

    def test_duplicate_rejected_without_mutation(self, en_fr: DocumentSet) -> None:
        before = _serialized(en_fr)
        with pytest.raises(DuplicateKeyError) as exc_info:
            en_fr.add_key("farewell", "fr", "Adieu")
        assert exc_info.value.key == "farewell"
        assert _serialized(en_fr) == before
        assert en_fr.dirty_documents() == ()

    def test_unknown_origin_locale(self, en_fr: DocumentSet) -> None:
        with pytest.raises(UnknownLocaleError):
            en_fr.add_key("new", "de", "Neu")
        assert en_fr.dirty_documents() == ()

    @pytest.mark.parametrize("key", ["", "@new"])
    def test_invalid_key(self, en_fr: DocumentSet, key: str) -> None:
        with pytest.raises(InvalidKeyError):
            en_fr.add_key(key, "en", "x")

    def test_returns_one_insert_per_document(self, en_fr: DocumentSet) -> None:
        plan = en_fr.add_key("title", "en", "Title", "", placeholders=None)
        assert [(m.kind, m.locale, m.value) for m in plan] == [
            (MutationKind.INSERT, "en", "Title"),
            (MutationKind.INSERT, "fr", ""),
        ]
        assert en_fr.entry_for("fr", "title").description is None  # type: ignore[union-attr]

    def test_new_key_is_appended(self, en_fr: DocumentSet) -> None:
        en_fr.add_key("aaa", "en", "first by name")
        assert en_fr.document("en").keys()[-1] == "aaa"


class TestUpdateValue:
    """update_value() touches exactly one document."""

    def test_only_target_locale_changes(self, en_fr: DocumentSet) -> None:
        en_fr.update_value("fr", "greeting", "Bonjour {name}")
        assert en_fr.entry_for("fr", "greeting").value == "Bonjour {name}"  # type: ignore[union-attr]
        assert en_fr.entry_for("en", "greeting").value == "Hi {name}"  # type: ignore[union-attr]
        assert en_fr.is_dirty("fr")
        assert not en_fr.is_dirty("en")

    def test_same_value_is_a_no_op(self, en_fr: DocumentSet) -> None:
        assert en_fr.update_value("en", "farewell", "Bye") == ()
        assert not en_fr.is_dirty("en")

    def test_key_missing_in_locale(self, en_fr: DocumentSet) -> None:
        with pytest.raises(UnknownKeyError) as exc_info:
            en_fr.update_value("fr", "farewell", "Adieu")
        assert exc_info.value.locale == "fr"
        assert "farewell" not in en_fr.document("fr")

    def test_unknown_locale(self, en_fr: DocumentSet) -> None:
        with pytest.raises(UnknownLocaleError) as exc_info:
            en_fr.update_value("de", "greeting", "Hallo")
        assert exc_info.value.locale == "de"


class TestUpdateDescription:
    """update_description() propagation and healing."""

    @given(document_sets(min_locales=1), st.data())
    def test_description_propagates(self, docs: DocumentSet, data: st.DataObject) -> None:
        keys = docs.canonical_keys()
        assume(keys)
        key = data.draw(st.sampled_from(keys))

        docs.update_description(key, "X")

        assert docs.canonical_entry(key).description == "X"  # type: ignore[union-attr]
        for document in docs:
            assert document.get(key).description == "X"  # type: ignore[union-attr]

    def test_missing_translations_are_healed(self, en_fr: DocumentSet) -> None:
        plan = en_fr.update_description("farewell", "Closing line")
        healed = en_fr.entry_for("fr", "farewell")
        assert healed is not None
        assert healed.value == ""
        assert healed.description == "Closing line"
        assert {m.kind for m in plan} == {MutationKind.INSERT, MutationKind.SET_DESCRIPTION}

    def test_healed_entry_gets_canonical_placeholders(self) -> None:
        docs = DocumentSet(
            [
                Document(
                    "app_en.arb",
                    "en",
                    [Entry("hello", "Hi {name}", placeholders={"name": Placeholder(type="String")})],
                ),
                Document("app_fr.arb", "fr"),
            ]
        )
        docs.update_description("hello", "Greeting")
        assert docs.entry_for("fr", "hello").placeholder_names == ("name",)  # type: ignore[union-attr]

    def test_empty_description_clears(self, en_fr: DocumentSet) -> None:
        en_fr.update_description("greeting", "")
        assert en_fr.entry_for("en", "greeting").description is None  # type: ignore[union-attr]
        assert en_fr.entry_for("fr", "greeting").description is None  # type: ignore[union-attr]

    def test_unchanged_description_is_a_no_op(self, en_fr: DocumentSet) -> None:
        assert en_fr.update_description("greeting", "Home title") == ()
        assert en_fr.dirty_documents() == ()

    def test_unknown_key(self, en_fr: DocumentSet) -> None:
        with pytest.raises(UnknownKeyError):
            en_fr.update_description("nope", "X")


class TestUpdatePlaceholders:
    """update_placeholders() follows the description rule."""

    def test_placeholders_reach_every_document(self, en_fr: DocumentSet) -> None:
        placeholders = {"count": Placeholder(type="int")}
        en_fr.update_placeholders("farewell", placeholders)
        for document in en_fr:
            assert document.get("farewell").placeholders == placeholders  # type: ignore[union-attr]

    def test_none_removes_placeholders(self, en_fr: DocumentSet) -> None:
        en_fr.update_placeholders("greeting", None)
        assert en_fr.canonical_entry("greeting").placeholders is None  # type: ignore[union-attr]


class TestUpdateEntry:
    """update_entry() combines a value edit with a description edit."""

    def test_value_is_local_description_is_shared(self, en_fr: DocumentSet) -> None:
        en_fr.update_entry("fr", "greeting", value="Coucou {name}", description="Top")
        assert en_fr.entry_for("fr", "greeting").value == "Coucou {name}"  # type: ignore[union-attr]
        assert en_fr.entry_for("en", "greeting").value == "Hi {name}"  # type: ignore[union-attr]
        assert en_fr.entry_for("en", "greeting").description == "Top"  # type: ignore[union-attr]

    def test_rejected_before_any_change(self, en_fr: DocumentSet) -> None:
        before = _serialized(en_fr)
        with pytest.raises(UnknownKeyError):
            en_fr.update_entry("fr", "farewell", value="Adieu", description="Closing")
        assert _serialized(en_fr) == before


class TestDeleteKey:
    """delete_key() removes the key everywhere."""

    @given(document_sets(), st.data())
    def test_key_absent_everywhere_afterwards(self, docs: DocumentSet, data: st.DataObject) -> None:
        keys = docs.canonical_keys()
        assume(keys)
        key = data.draw(st.sampled_from(keys))
        docs.delete_key(key)
        for document in docs:
            assert key not in document
        assert key not in docs.canonical_keys()

    def test_deleting_absent_key_is_a_no_op(self, en_fr: DocumentSet) -> None:
        assert en_fr.delete_key("missing") == ()
        assert en_fr.dirty_documents() == ()

    def test_only_documents_with_the_key_are_dirty(self, en_fr: DocumentSet) -> None:
        en_fr.delete_key("farewell")
        assert [d.locale for d in en_fr.dirty_documents()] == ["en"]


class TestDocumentManagement:
    """Registration, refresh, copies and dirty tracking."""

    def test_duplicate_locale_rejected(self, en_fr: DocumentSet) -> None:
        with pytest.raises(DuplicateLocaleError):
            en_fr.add_document(Document("other/app_en.arb", "en"))

    def test_unknown_document(self, en_fr: DocumentSet) -> None:
        with pytest.raises(UnknownLocaleError):
            en_fr.document("de")

    def test_replace_document_keeps_order_and_clears_dirty(self, en_fr: DocumentSet) -> None:
        en_fr.add_key("x", "en", "X")
        en_fr.replace_document(Document("lib/l10n/app_en.arb", "en", [Entry("reloaded", "R")]))
        assert en_fr.locales == ("en", "fr")
        assert not en_fr.is_dirty("en")
        assert en_fr.is_dirty("fr")
        assert en_fr.document("en").keys() == ("reloaded",)

    def test_copy_is_independent(self, en_fr: DocumentSet) -> None:
        snapshot = en_fr.copy()
        assert snapshot == en_fr
        en_fr.update_value("en", "farewell", "Later")
        assert snapshot != en_fr
        assert snapshot.entry_for("en", "farewell").value == "Bye"  # type: ignore[union-attr]

    def test_mark_clean(self, en_fr: DocumentSet) -> None:
        en_fr.add_key("x", "en", "X")
        en_fr.mark_clean("en")
        assert [d.locale for d in en_fr.dirty_documents()] == ["fr"]
        en_fr.mark_clean()
        assert en_fr.dirty_documents() == ()

    def test_container_protocol(self, en_fr: DocumentSet) -> None:
        assert len(en_fr) == 2
        assert "fr" in en_fr
        assert "de" not in en_fr
        assert [d.locale for d in en_fr] == ["en", "fr"]


@pytest.mark.fuzz
class TestSynchronizationFuzz:
    """Long operation sequences keep touched keys synchronized."""

    @settings(max_examples=1000)
    @given(
        document_sets(max_locales=6),
        st.lists(translation_keys(), min_size=1, max_size=6),
        st.data(),
    )
    def test_touched_keys_are_synchronized(
        self, docs: DocumentSet, keys: list[str], data: st.DataObject
    ) -> None:
        touched: dict[str, str | None] = {}
        for key in keys:
            description = data.draw(descriptions)
            if key in docs.canonical_keys():
                docs.update_description(key, description)
            else:
                docs.add_key(key, data.draw(st.sampled_from(docs.locales)), "v", description)
            touched[key] = description or None

        for key, description in touched.items():
            for document in docs:
                entry = document.get(key)
                assert entry is not None
                assert entry.description == description


class TestApply:
    """Replaying planned mutations onto another set."""

    def test_plan_replays_onto_a_copy(self, en_fr: DocumentSet) -> None:
        replica = en_fr.copy()
        plan = en_fr.add_key("title", "en", "Title", "Window title")
        plan += en_fr.update_value("fr", "greeting", "Coucou {name}")

        replica.apply(plan)

        assert _serialized(replica) == _serialized(en_fr)
        assert {d.locale for d in replica.dirty_documents()} == {"en", "fr"}

    def test_apply_to_missing_key_raises(self, en_fr: DocumentSet) -> None:
        with pytest.raises(KeyError):
            en_fr.apply([Mutation(MutationKind.SET_VALUE, "fr", "farewell", "Adieu")])
