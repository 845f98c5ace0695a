"""Unit tests for TemplateEngine and placeholder resolution.

Covers path substitution, the optional modifier, iterate/optional blocks,
the injectable clock, and the missing-input contract.
"""

import re
from datetime import datetime, timedelta, timezone

import pytest

from umltools.exceptions import GenerationError, MissingFieldError
from umltools.layers.layer2_export import (
    NOT_FOUND,
    TemplateEngine,
    TemplateModifier,
    find_placeholders,
    resolve_path,
)
from umltools.models import ClassDefinition, ExportStep


@pytest.fixture
def engine(fixed_clock):
    return TemplateEngine(clock=fixed_clock)


def render(engine, definition, *lines):
    return engine.render(ExportStep(definition=definition, template="\n".join(lines)))


class TestPlaceholders:
    def test_plain_path(self, engine, sample_class):
        assert render(engine, sample_class, "Hello ${definition.name}!") == "Hello Account!\n"

    def test_missing_path_stays_literal(self, engine, sample_class):
        output = render(engine, sample_class, "x = ${definition.missing};")
        assert output == "x = ${definition.missing};\n"

    def test_optional_missing_path_is_empty(self, engine, sample_class):
        assert render(engine, sample_class, "[${@optional definition.missing}]") == "[]\n"

    def test_optional_with_colon_separator(self, engine, sample_class):
        assert render(engine, sample_class, "[${@optional:definition.missing}]") == "[]\n"

    def test_optional_present_path(self, engine, sample_class):
        assert render(engine, sample_class, "${@optional definition.name}") == "Account\n"

    def test_none_value_counts_as_missing(self, engine, sample_class):
        assert sample_class.super_class is None
        assert render(engine, sample_class, "${definition.superClass}") == "${definition.superClass}\n"

    def test_nested_path_and_list_index(self, engine, sample_class):
        output = render(
            engine, sample_class,
            "package ${definition.package.name};",
            "${definition.attributes.1.name}",
        )
        assert output == "package com.example.bank;\nname\n"

    def test_date_uses_clock(self, engine, sample_class):
        assert render(engine, sample_class, "// ${date}") == "// 2024-01-01T12:00:00.000Z\n"

    def test_unknown_modifier_is_ignored(self, engine, sample_class):
        assert render(engine, sample_class, "${@shout definition.name}") == "Account\n"

    def test_each_line_ends_with_newline(self, engine, sample_class):
        output = render(engine, sample_class, "a", "b", "")
        assert output == "a\nb\n\n"

    def test_same_input_same_output(self, engine, sample_class):
        template = "class ${definition.name} // ${date}"
        first = engine.render(ExportStep(definition=sample_class, template=template))
        second = engine.render(ExportStep(definition=sample_class, template=template))
        assert first == second


class TestBlocks:
    def test_iterate_attributes(self, engine, sample_class):
        output = render(
            engine, sample_class,
            "class ${definition.name} {",
            "${@iterate definition.attributes}",
            "  ${index}: ${item.type} ${item.name};",
            "${@endBlock}",
            "}",
        )
        assert output == "class Account {\n  0: int age;\n  1: String name;\n}\n"

    def test_iterate_block_alias(self, engine, sample_class):
        output = render(
            engine, sample_class,
            "${@iterateBlock definition.attributes}",
            "${item.name}",
            "${@endBlock}",
        )
        assert output == "age\nname\n"

    def test_nested_iteration(self, engine, sample_class):
        output = render(
            engine, sample_class,
            "${@iterate definition.methods}",
            "${item.name} -> ${item.type}",
            "${@iterate item.parameters}",
            "  ${item.name}:${item.type}",
            "${@endBlock}",
            "${@endBlock}",
        )
        assert output == "compute -> double\n  x:int\n  y:int\n"

    def test_iterate_over_missing_list(self, engine):
        output = render(
            engine, ClassDefinition(name="Empty"),
            "before",
            "${@iterate definition.methods}",
            "${item.name}",
            "${@endBlock}",
            "after",
        )
        assert output == "before\nafter\n"

    def test_optional_block_present(self, engine, sample_class):
        output = render(
            engine, sample_class,
            "${@OPTIONAL_BLOCK definition.package.name}",
            "package ${definition.package.name};",
            "${@END_OPTIONAL_BLOCK}",
            "class ${definition.name}",
        )
        assert output == "package com.example.bank;\nclass Account\n"

    def test_optional_block_absent(self, engine):
        output = render(
            engine, ClassDefinition(name="Loose"),
            "${@OPTIONAL_BLOCK definition.package.name}",
            "package ${definition.package.name};",
            "${@END_OPTIONAL_BLOCK}",
            "class ${definition.name}",
        )
        assert output == "class Loose\n"

    def test_unterminated_block_runs_to_end(self, engine, sample_class):
        output = render(
            engine, sample_class,
            "${@iterate definition.attributes}",
            "${item.name}",
        )
        assert output == "age\nname\n"

    def test_stray_block_end_is_dropped(self, engine, sample_class):
        assert render(engine, sample_class, "a", "${@endBlock}", "b") == "a\nb\n"

    def test_mismatched_closer_does_not_end_iteration(self, engine, sample_class, caplog):
        output = render(
            engine, sample_class,
            "${@iterate definition.attributes}",
            "${item.name}",
            "${@END_OPTIONAL_BLOCK}",
            "tail",
        )
        assert output == "age\ntail\nname\ntail\n"
        assert "짝이 맞지 않는 블록 종료" in caplog.text

    def test_optional_block_nested_in_iteration(self, engine, sample_class):
        output = render(
            engine, sample_class,
            "${@iterate definition.methods}",
            "${@OPTIONAL_BLOCK item.parameters}",
            "${item.name} has parameters",
            "${@END_OPTIONAL_BLOCK}",
            "${@endBlock}",
            "done",
        )
        assert output == "compute has parameters\ndone\n"


class TestMissingInput:
    def test_missing_template(self, engine, sample_class):
        with pytest.raises(MissingFieldError, match="missing definition or template"):
            engine.render(ExportStep(definition=sample_class))

    def test_missing_definition(self, engine):
        with pytest.raises(MissingFieldError, match="missing definition or template"):
            engine.render(ExportStep(template="x"))

    def test_empty_template_is_allowed(self, engine, sample_class):
        assert engine.render(ExportStep(definition=sample_class, template="")) == "\n"


class TestRenderFailure:
    def test_unexpected_error_becomes_generation_error(self, sample_class):
        def broken_clock():
            raise ValueError("clock unavailable")

        engine = TemplateEngine(clock=broken_clock)
        with pytest.raises(GenerationError) as exc_info:
            engine.render(ExportStep(name="Broken", definition=sample_class, template="x"))

        assert exc_info.value.error_code == "ERR_EXPORT_002"
        assert exc_info.value.details == {"step": "Broken", "error": "clock unavailable"}
        assert isinstance(exc_info.value.__cause__, ValueError)


class TestDate:
    def test_aware_clock_is_converted_to_utc(self, sample_class):
        seoul = timezone(timedelta(hours=9))
        engine = TemplateEngine(clock=lambda: datetime(2024, 1, 1, 21, 30, 15, 250000, tzinfo=seoul))
        assert render(engine, sample_class, "${date}") == "2024-01-01T12:30:15.250Z\n"

    def test_default_clock_format(self, sample_class):
        output = render(TemplateEngine(), sample_class, "${date}")
        assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z\n", output)


class TestRenderDefinition:
    def test_convenience_wrapper(self, engine, sample_class):
        assert engine.render_definition(sample_class, "${definition.name}") == "Account\n"


class TestResolvePath:
    def test_dict_and_list(self):
        context = {"a": {"b": [{"c": "deep"}]}}
        assert resolve_path(context, "a.b.0.c") == "deep"

    def test_missing_segment(self):
        assert resolve_path({"a": {}}, "a.b") is NOT_FOUND

    def test_index_out_of_range(self):
        assert resolve_path({"a": [1]}, "a.3") is NOT_FOUND

    def test_empty_path(self):
        assert resolve_path({"a": 1}, "") is NOT_FOUND

    def test_falsy_values_are_found(self):
        assert resolve_path({"a": 0, "b": ""}, "a") == 0
        assert resolve_path({"a": 0, "b": ""}, "b") == ""

    def test_object_attribute(self, sample_class):
        assert resolve_path({"d": sample_class}, "d.name") == "Account"

    def test_model_methods_are_not_fields(self, sample_class):
        assert resolve_path({"d": sample_class}, "d.to_json") is NOT_FOUND

    def test_no_lookup_past_string_leaf(self):
        assert resolve_path({"name": "Account"}, "name.upper") is NOT_FOUND

    def test_no_lookup_past_list_leaf(self):
        assert resolve_path({"items": [1, 2]}, "items.count") is NOT_FOUND


class TestPlainValueAttributes:
    def test_string_method_stays_literal(self, engine):
        output = engine.render_definition(ClassDefinition(name="Account"), "${definition.name.upper}")
        assert output == "${definition.name.upper}\n"

    def test_optional_list_method_is_empty(self, engine):
        output = engine.render_definition(
            ClassDefinition(name="Account"), "${@optional definition.attributes.count}"
        )
        assert output == "\n"

    def test_output_is_repeatable(self, engine, sample_class):
        template = "${definition.name.lower} ${definition.attributes.index}"
        first = engine.render_definition(sample_class, template)
        assert first == engine.render_definition(sample_class, template)
        assert "built-in" not in first


class TestFindPlaceholders:
    def test_modifiers(self):
        found = find_placeholders("${@iterate definition.methods} ${x} ${@endBlock}")
        assert [p.modifier for p in found] == [
            TemplateModifier.ITERATION_BLOCK,
            None,
            TemplateModifier.ITERATION_BLOCK_END,
        ]
        assert found[0].path == "definition.methods"
        assert found[0].opens_iteration
        assert found[2].closes_block
        assert found[2].path == ""
