"""Tests for processor options."""

import json

import pytest

from styledpass.config import DEFAULT_EXTENSIONS, StyledOptions, load_options, options_from_mapping


class TestStyledOptions:
    def test_defaults(self):
        options = StyledOptions()
        assert options.extensions == DEFAULT_EXTENSIONS
        assert options.variable_name_slug is None
        assert options.class_name_slug is None
        assert options.display_name is False
        assert options.tag == "styled"

    def test_is_frozen(self):
        with pytest.raises(AttributeError):
            StyledOptions().tag = "css"  # type: ignore[misc]


class TestOptionsFromMapping:
    def test_camel_case_keys(self):
        options = options_from_mapping({
            "variableNameSlug": "[componentName]-[index]",
            "classNameSlug": "[title]",
            "displayName": True,
            "extensions": [".js"],
        })
        assert options.variable_name_slug == "[componentName]-[index]"
        assert options.class_name_slug == "[title]"
        assert options.display_name is True
        assert options.extensions == (".js",)

    def test_unknown_key(self):
        with pytest.raises(ValueError, match="variable_name_slug"):
            options_from_mapping({"variable_name_slug": "x"})


class TestLoadOptions:
    def test_reads_json(self, tmp_path):
        path = tmp_path / "styled.json"
        path.write_text(json.dumps({"tag": "css", "root": "/app"}))
        options = load_options(path)
        assert options.tag == "css"
        assert options.root == "/app"

    def test_rejects_non_object(self, tmp_path):
        path = tmp_path / "styled.json"
        path.write_text("[]")
        with pytest.raises(ValueError, match="expected a JSON object"):
            load_options(path)
