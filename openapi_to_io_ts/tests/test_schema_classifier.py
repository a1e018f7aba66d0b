"""
Tests for the schema classifier (phase 1 of the pipeline).
"""

from __future__ import annotations

import pytest

from openapi_to_io_ts.pipeline.schema_ast import (
    ArrayNode,
    ObjectNode,
    PrimitiveNode,
    RefNode,
    SchemaClassifier,
    StringNode,
    UnclassifiedNode,
)


@pytest.fixture
def classifier():
    return SchemaClassifier()


class TestClassify:
    """Shape priority and per-shape classification."""

    def test_reference_takes_precedence(self, classifier):
        node = classifier.classify({"$ref": "#/components/schemas/Pet", "type": "string", "items": {}}, "#/x")
        assert isinstance(node, RefNode)
        assert node.target == "#/components/schemas/Pet"
        assert node.source_path == "#/x"

    def test_items_imply_array(self, classifier):
        node = classifier.classify({"items": {"type": "string"}}, "#/x")
        assert isinstance(node, ArrayNode)
        assert isinstance(node.items, StringNode)
        assert node.items.source_path == "#/x/items"

    def test_items_win_over_object_type(self, classifier):
        node = classifier.classify({"type": "object", "items": {"type": "integer"}}, "#/x")
        assert isinstance(node, ArrayNode)

    def test_object_with_properties(self, classifier):
        schema = {
            "type": "object",
            "properties": {"name": {"type": "string"}, "age": {"type": "integer"}},
            "required": ["name"],
        }
        node = classifier.classify(schema, "#/components/schemas/Person")
        assert isinstance(node, ObjectNode)
        assert list(node.properties) == ["name", "age"]
        assert node.required == {"name"}
        assert node.all_of is None
        assert node.one_of is None
        assert node.properties["age"].source_path == "#/components/schemas/Person/properties/age"

    def test_composition_without_type_is_object(self, classifier):
        node = classifier.classify({"allOf": [{"$ref": "#/components/schemas/A"}, {"type": "object"}]}, "#/x")
        assert isinstance(node, ObjectNode)
        assert isinstance(node.all_of[0], RefNode)
        assert isinstance(node.all_of[1], ObjectNode)
        assert node.all_of[1].source_path == "#/x/allOf/1"

    def test_one_of_members_are_classified(self, classifier):
        node = classifier.classify({"oneOf": [{"type": "string"}, {"type": "number"}]}, "#/x")
        assert isinstance(node, ObjectNode)
        assert [type(m) for m in node.one_of] == [StringNode, PrimitiveNode]

    def test_string_with_enum(self, classifier):
        node = classifier.classify({"type": "string", "enum": ["A", "B"]}, "#/x")
        assert isinstance(node, StringNode)
        assert node.enum_values == ["A", "B"]

    def test_string_without_enum(self, classifier):
        node = classifier.classify({"type": "string"}, "#/x")
        assert isinstance(node, StringNode)
        assert node.enum_values is None

    def test_string_enum_keeps_non_string_values(self, classifier):
        node = classifier.classify({"type": "string", "enum": ["A", 1]}, "#/x")
        assert node.enum_values == ["A", 1]

    @pytest.mark.parametrize("kind", ["boolean", "integer", "null", "number"])
    def test_primitive_kinds_are_kept_apart(self, classifier, kind):
        node = classifier.classify({"type": kind}, "#/x")
        assert isinstance(node, PrimitiveNode)
        assert node.kind == kind

    @pytest.mark.parametrize(
        "schema",
        [
            {},
            {"description": "nothing to see"},
            {"type": "array"},
            {"type": "file"},
            {"properties": {"a": {"type": "string"}}},
        ],
    )
    def test_unclassifiable_schemas(self, classifier, schema):
        node = classifier.classify(schema, "#/x")
        assert isinstance(node, UnclassifiedNode)
        assert node.reason
        assert node.source_path == "#/x"

    def test_non_mapping_is_unclassified(self, classifier):
        node = classifier.classify("string", "#/x")
        assert isinstance(node, UnclassifiedNode)
        assert "str" in node.reason

    def test_unclassifiable_property_is_kept_as_marker(self, classifier):
        node = classifier.classify({"type": "object", "properties": {"bad": {}}}, "#/x")
        assert isinstance(node.properties["bad"], UnclassifiedNode)


class TestParse:
    """Classification of a whole document."""

    def test_components_in_document_order(self, classifier):
        document = {
            "openapi": "3.0.0",
            "components": {"schemas": {"B": {"type": "string"}, "A": {"type": "integer"}}},
        }
        ast = classifier.parse(document)
        assert [c.name for c in ast.components] == ["B", "A"]
        assert ast.components[1].body.source_path == "#/components/schemas/A"

    @pytest.mark.parametrize(
        "document",
        [
            {"openapi": "3.0.0"},
            {"openapi": "3.0.0", "components": None},
            {"openapi": "3.0.0", "components": {}},
            {"openapi": "3.0.0", "components": {"schemas": None}},
        ],
    )
    def test_missing_schemas(self, classifier, document):
        assert classifier.parse(document).components == []
