"""Unit tests for the translation table."""

import pytest

from pantry_chef.locales.translations import SUPPORTED_LOCALES, TRANSLATIONS, get_language_name, translate


class TestTranslationTable:
    """Every locale carries the same keys as English."""

    @pytest.mark.parametrize("locale", SUPPORTED_LOCALES)
    def test_locale_has_all_keys(self, locale):
        assert set(TRANSLATIONS[locale]) == set(TRANSLATIONS["en"])

    @pytest.mark.parametrize("locale", SUPPORTED_LOCALES)
    def test_model_response_message_names_model(self, locale):
        assert "my/model" in translate(locale, "errorOpenRouterModelResponse", model="my/model")


class TestLookup:
    """Tests for get_language_name and translate fallbacks."""

    def test_language_name(self):
        assert get_language_name("en") == "English"
        assert get_language_name("es") == "Español"

    def test_unknown_locale_falls_back_to_english(self):
        assert get_language_name("xx") == "English"
        assert translate("xx", "errorAddOneIngredient") == "Please add at least one ingredient."

    def test_unknown_key_returns_key(self):
        assert translate("en", "noSuchKey") == "noSuchKey"

    def test_localized_message(self):
        assert translate("fr", "errorAddOneIngredient") == "Veuillez ajouter au moins un ingrédient."
