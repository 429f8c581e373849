"""Unit tests for the translation lookup."""

import pytest

from admin_duplicatable.i18n import (
    DEFAULT_MESSAGES,
    DUPLICATE_MODEL,
    DUPLICATED,
    NOT_DUPLICATED,
    Translator,
)


class TestDefaults:
    """English fallbacks."""

    @pytest.mark.parametrize(
        "key, expected",
        [
            (DUPLICATE_MODEL, "Duplicate Post"),
            (DUPLICATED, "Post was successfully duplicated."),
            (NOT_DUPLICATED, "Post could not be duplicated."),
        ],
    )
    def test_builtin_messages(self, key, expected):
        assert Translator().t(key, model="Post") == expected

    def test_explicit_default_wins_over_builtin(self):
        assert Translator().t(DUPLICATE_MODEL, default="Copy {model}", model="Post") == "Copy Post"

    def test_unknown_key_without_default_returns_key(self):
        assert Translator().t("missing_key") == "missing_key"

    def test_default_messages_cover_all_keys(self):
        assert set(DEFAULT_MESSAGES) == {DUPLICATE_MODEL, DUPLICATED, NOT_DUPLICATED}


class TestCatalog:
    """Catalog lookups."""

    def test_catalog_entry_wins(self):
        translator = Translator({"admin": {DUPLICATE_MODEL: "Dupliquer {model}"}})
        assert translator.t(DUPLICATE_MODEL, default="Duplicate {model}", model="Article") == (
            "Dupliquer Article"
        )

    def test_other_keys_fall_back(self):
        translator = Translator({"admin": {DUPLICATE_MODEL: "Dupliquer {model}"}})
        assert translator.t(DUPLICATED, model="Article") == "Article was successfully duplicated."

    def test_scope_argument(self):
        translator = Translator({"backoffice": {DUPLICATE_MODEL: "Clone {model}"}})
        assert translator.t(DUPLICATE_MODEL, model="Post") == "Duplicate Post"
        assert translator.t(DUPLICATE_MODEL, scope="backoffice", model="Post") == "Clone Post"

    def test_default_scope(self):
        translator = Translator({"backoffice": {DUPLICATE_MODEL: "Clone {model}"}}, scope="backoffice")
        assert translator.t(DUPLICATE_MODEL, model="Post") == "Clone Post"

    def test_bad_placeholder_renders_template(self):
        translator = Translator({"admin": {DUPLICATE_MODEL: "Duplicate {resource}"}})
        assert translator.t(DUPLICATE_MODEL, model="Post") == "Duplicate {resource}"

    @pytest.mark.parametrize(
        "template",
        [
            "Dupliquer {model",
            "Dupliquer model}",
            "Dupliquer {model.plural}",
            "Dupliquer {0}",
            "Dupliquer {model!z}",
        ],
    )
    def test_malformed_template_renders_template(self, template):
        translator = Translator({"admin": {DUPLICATE_MODEL: template}})
        assert translator.t(DUPLICATE_MODEL, model="Post") == template
