"""Tests for the option schema table and generated documentation."""

from __future__ import annotations

from typing import List

import pytest
from pydantic import NonNegativeInt

from ChannelClient.Configuration import FIELD_NAMES, SCHEMA, Configuration, FieldKind, FieldSpec
from ChannelClient.Configuration.parsers import parse_uri
from ChannelClient.Configuration.schema import (
    field_spec,
    get_schema_summary,
    render_options_doc,
)


class TestSchemaTable:
    """Shape and defaults of the registry."""

    def test_field_order(self):
        assert [spec.name for spec in SCHEMA] == [
            "endpoint",
            "heartbeat_interval_ms",
            "headers",
            "json_codec",
            "reconnect_backoff_ms",
            "rejoin_backoff_ms",
            "transport_options",
        ]

    def test_schema_matches_configuration_fields(self):
        assert FIELD_NAMES == set(Configuration.model_fields)

    def test_only_endpoint_is_required(self):
        assert [spec.name for spec in SCHEMA if spec.required] == ["endpoint"]

    def test_every_optional_field_has_default(self):
        assert all(spec.has_default for spec in SCHEMA if not spec.required)

    def test_kinds(self):
        kinds = {spec.name: spec.kind for spec in SCHEMA}
        assert kinds["endpoint"] is FieldKind.CUSTOM
        assert kinds["heartbeat_interval_ms"] is FieldKind.PRIMITIVE
        assert kinds["headers"] is FieldKind.LIST
        assert kinds["transport_options"] is FieldKind.CUSTOM

    def test_field_spec_lookup(self):
        assert field_spec("headers").element_parser is not None
        with pytest.raises(KeyError):
            field_spec("uri")


class TestFieldSpecInvariants:
    """Inconsistent rows are refused at definition time."""

    def test_required_field_with_default(self):
        with pytest.raises(ValueError, match="either required or have a default"):
            FieldSpec(
                name="x",
                kind=FieldKind.PRIMITIVE,
                type_label="int",
                doc="",
                required=True,
                default=1,
                annotation=int,
            )

    def test_optional_field_without_default(self):
        with pytest.raises(ValueError):
            FieldSpec(name="x", kind=FieldKind.PRIMITIVE, type_label="int", doc="", annotation=int)

    def test_custom_field_needs_parser(self):
        with pytest.raises(ValueError, match="needs a parser"):
            FieldSpec(name="x", kind=FieldKind.CUSTOM, type_label="x", doc="", required=True)

    def test_primitive_field_needs_annotation(self):
        with pytest.raises(ValueError, match="needs an annotation"):
            FieldSpec(name="x", kind=FieldKind.PRIMITIVE, type_label="x", doc="", default=0)

    def test_element_parser_only_on_lists(self):
        with pytest.raises(ValueError, match="element parser"):
            FieldSpec(
                name="x",
                kind=FieldKind.PRIMITIVE,
                type_label="x",
                doc="",
                default=0,
                annotation=NonNegativeInt,
                element_parser=parse_uri,
            )

    def test_list_row_builds_adapter(self):
        spec = FieldSpec(name="x", kind=FieldKind.LIST, type_label="x", doc="", default=(), annotation=List[int])
        assert spec.adapter is not None
        assert spec.adapter.validate_python([1, 2], strict=True) == [1, 2]


class TestDocumentation:
    """Summary and Markdown reference."""

    def test_summary(self):
        summary = get_schema_summary()

        assert summary["endpoint"] == {
            "kind": "custom",
            "type": "websocket URI",
            "required": True,
            "default": None,
        }
        assert summary["heartbeat_interval_ms"]["default"] == "30000"
        assert summary["json_codec"]["default"] == "'json'"
        assert summary["transport_options"]["default"] == "{'protocols': ('http',)}"
        assert summary["rejoin_backoff_ms"]["default"] == "[100, 500, 1000, 2000, 5000, 10000]"

    def test_rendered_reference_lists_every_option(self):
        doc = render_options_doc()

        for name in FIELD_NAMES:
            assert f"* `{name}`" in doc
        assert "(websocket URI, required)" in doc
        assert "(non-negative integer, default 30000)" in doc
