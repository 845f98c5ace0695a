"""Unit tests for job parameter resolution."""

import pytest

from umltools.config import Settings
from umltools.services.parameters import (
    DictParameterProvider,
    SettingsParameterProvider,
    resolve_parameters,
    resolve_text,
)


@pytest.fixture
def provider():
    return DictParameterProvider(
        {
            "project": {"name": "bank", "sourceDir": "src/main/java", "enabled": True},
            "flat.key": "flat",
            "count": 3,
        }
    )


class TestDictParameterProvider:
    def test_nested_lookup(self, provider):
        assert provider.get("project.name") == "bank"

    def test_flat_dotted_key_wins(self, provider):
        assert provider.get("flat.key") == "flat"

    def test_non_string_values(self, provider):
        assert provider.get("count") == "3"
        assert provider.get("project.enabled") == "true"

    def test_missing_key(self, provider):
        assert provider.get("project.version") is None
        assert provider.get("nothing") is None

    def test_mapping_is_not_a_value(self, provider):
        assert provider.get("project") is None


class TestSettingsParameterProvider:
    def test_reads_job_parameters(self):
        settings = Settings(job_parameters={"team": {"lead": "kim"}})
        assert SettingsParameterProvider(settings).get("team.lead") == "kim"


class TestResolveText:
    def test_whole_string(self, provider):
        assert resolve_text("${project.name}", provider) == "bank"

    def test_embedded(self, provider):
        assert resolve_text("out/${project.name}/${count}", provider) == "out/bank/3"

    def test_missing_uses_marker(self, provider):
        assert resolve_text("${project.version}", provider) == "not-found"
        assert resolve_text("v${x}", provider, not_found="?") == "v?"

    def test_text_without_placeholders(self, provider):
        assert resolve_text("plain", provider) == "plain"


class TestResolveParameters:
    def test_walks_nested_structure(self, provider):
        data = {
            "name": "${project.name}",
            "exportSteps": [{"path": "${project.sourceDir}", "fileExtension": "java"}],
            "count": 1,
            "enabled": False,
            "nothing": None,
        }
        resolved = resolve_parameters(data, provider)
        assert resolved == {
            "name": "bank",
            "exportSteps": [{"path": "src/main/java", "fileExtension": "java"}],
            "count": 1,
            "enabled": False,
            "nothing": None,
        }

    def test_template_and_document_are_untouched(self, provider):
        data = {
            "exportSteps": [{"template": "class ${definition.name}"}],
            "importSteps": [{"document": "{\"x\": \"${project.name}\"}"}],
        }
        resolved = resolve_parameters(data, provider)
        assert resolved["exportSteps"][0]["template"] == "class ${definition.name}"
        assert resolved["importSteps"][0]["document"] == "{\"x\": \"${project.name}\"}"

    def test_value_with_quotes_cannot_break_structure(self):
        provider = DictParameterProvider({"name": 'evil", "x": "y'})
        resolved = resolve_parameters({"name": "${name}"}, provider)
        assert resolved == {"name": 'evil", "x": "y'}

    def test_input_is_not_modified(self, provider):
        data = {"name": "${project.name}"}
        resolve_parameters(data, provider)
        assert data == {"name": "${project.name}"}
