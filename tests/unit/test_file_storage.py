"""Unit tests for FileStorage.

Covers text I/O, model persistence and read-back, template lookup,
and generated code placement under the output directory.
"""

import json

import pytest

from umltools.exceptions import InputValidationError, StorageError
from umltools.models import ModelDefinition, PackageDefinition


class TestTextFiles:
    async def test_write_then_read(self, temp_storage, tmp_path):
        location = await temp_storage.write_text("notes/a.txt", "hello")
        assert location == tmp_path / "notes" / "a.txt"
        assert await temp_storage.read_text("notes/a.txt") == "hello"

    async def test_read_missing_file(self, temp_storage):
        with pytest.raises(StorageError) as exc_info:
            await temp_storage.read_text("missing.txt")
        assert exc_info.value.error_code == "ERR_STORE_001"

    async def test_absolute_location(self, temp_storage, tmp_path):
        target = tmp_path / "abs.txt"
        await temp_storage.write_text(target, "x")
        assert target.read_text(encoding="utf-8") == "x"

    def test_no_directories_created_on_init(self, temp_storage, tmp_path):
        assert list(tmp_path.iterdir()) == []


class TestModels:
    async def test_save_default_location(self, temp_storage, tmp_path, sample_class):
        model = ModelDefinition(name="bank")
        model.add_class(sample_class)

        location = await temp_storage.save_model(model)

        assert location == tmp_path / "generated" / "uml" / "bank.json"
        data = json.loads(location.read_text(encoding="utf-8"))
        assert data["classes"][0]["name"] == "Account"
        assert "defaultPackage" in data

    async def test_save_and_load(self, temp_storage, sample_class):
        model = ModelDefinition(name="bank")
        model.add_class(sample_class)
        model.add_package(PackageDefinition(name="com.example.bank"))
        model.promote_default_package()

        location = await temp_storage.save_model(model, "models/bank.json")
        loaded = await temp_storage.load_model(location)

        assert loaded.name == "bank"
        assert [c.name for c in loaded.classes] == ["Account"]
        assert loaded.default_package.name == "com.example.bank"

    async def test_load_invalid_model(self, temp_storage):
        await temp_storage.write_text("bad.json", json.dumps({"classes": "nope"}))
        with pytest.raises(StorageError):
            await temp_storage.load_model("bad.json")

    async def test_load_non_json_model(self, temp_storage):
        await temp_storage.write_text("bad.json", "not json")
        with pytest.raises(StorageError):
            await temp_storage.load_model("bad.json")

    def test_model_name_is_validated(self, temp_storage):
        with pytest.raises(InputValidationError):
            temp_storage.model_location("../escape")


class TestTemplates:
    async def test_read_template(self, temp_storage, tmp_path):
        (tmp_path / "template").mkdir()
        (tmp_path / "template" / "classTemplate.java").write_text("class ${definition.name}", encoding="utf-8")

        assert await temp_storage.read_template("classTemplate", "java") == "class ${definition.name}"
        assert await temp_storage.read_template("classTemplate", ".java") == "class ${definition.name}"

    async def test_missing_template(self, temp_storage):
        with pytest.raises(StorageError):
            await temp_storage.read_template("nothing", "java")


class TestGeneratedCode:
    def test_code_location(self, temp_storage, tmp_path):
        location = temp_storage.code_location("src/main/java", ["com", "example"], "Account", "java")
        assert location == tmp_path / "generated" / "src" / "main" / "java" / "com" / "example" / "Account.java"

    def test_code_location_without_path_or_package(self, temp_storage, tmp_path):
        assert temp_storage.code_location("", [], "Account", "py") == tmp_path / "generated" / "Account.py"

    async def test_write_code(self, temp_storage, tmp_path):
        location = await temp_storage.write_code("", ["bank"], "Account", "java", "class Account {}\n")
        assert location.read_text(encoding="utf-8") == "class Account {}\n"

    @pytest.mark.parametrize(
        "path, segments, name",
        [
            ("../outside", [], "Account"),
            ("", [".."], "Account"),
            ("", [], "../Account"),
            ("/tmp", [], "Account"),
        ],
    )
    def test_escaping_paths_rejected(self, temp_storage, path, segments, name):
        with pytest.raises(InputValidationError):
            temp_storage.code_location(path, segments, name, "java")
