"""Tests for locale tag helpers."""

import pytest
from hypothesis import given

from arbsync.locale_utils import (
    locale_display_name,
    locale_from_filename,
    normalize_locale,
    split_locale,
)
from tests.strategies import locale_codes


class TestLocaleFromFilename:
    """Derive a document's locale from its file name."""

    @pytest.mark.parametrize(
        ("file_name", "expected"),
        [
            ("app_en.arb", "en"),
            ("intl_fr.arb", "fr"),
            ("app_pt_BR.arb", "pt_BR"),
            ("de.arb", "de"),
            ("lib/l10n/app_es_MX.arb", "es_MX"),
            ("C:\\project\\l10n\\intl_ja.arb", "ja"),
            ("strings_lv.arb", "lv"),
        ],
    )
    def test_recognized_names(self, file_name: str, expected: str) -> None:
        assert locale_from_filename(file_name) == expected

    @pytest.mark.parametrize("file_name", ["messages.arb", "app.arb", "app_english.arb", ""])
    def test_unparsable_names_use_default(self, file_name: str) -> None:
        assert locale_from_filename(file_name) == "default"

    def test_custom_default(self) -> None:
        assert locale_from_filename("messages.arb", default="und") == "und"

    @given(locale_codes)
    def test_app_prefix_round_trip(self, locale: str) -> None:
        assert locale_from_filename(f"app_{locale}.arb") == locale


class TestSplitLocale:
    """Split tags into language and region."""

    @pytest.mark.parametrize(
        ("tag", "expected"),
        [
            ("en", ("en", None)),
            ("en_US", ("en", "US")),
            ("pt-BR", ("pt", "BR")),
            ("default", ("default", None)),
        ],
    )
    def test_split(self, tag: str, expected: tuple[str, str | None]) -> None:
        assert split_locale(tag) == expected

    def test_normalize_locale(self) -> None:
        assert normalize_locale("en-US") == "en_US"


class TestLocaleDisplayName:
    """Babel-backed display names."""

    def test_known_locale(self) -> None:
        assert locale_display_name("fr") == "French"
        assert locale_display_name("pt_BR") == "Portuguese (Brazil)"

    def test_sentinel_locale_has_no_name(self) -> None:
        assert locale_display_name("default") is None
