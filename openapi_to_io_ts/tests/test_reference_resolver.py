import pytest

from openapi_to_io_ts.pipeline.analyzer import ReferenceResolver


@pytest.mark.parametrize(
    "ref,expected",
    [
        ("#/components/schemas/Foo", "Foo"),
        ("#/definitions/Foo", "Foo"),
        ("other.yaml#/components/schemas/Foo", "Foo"),
        ("Foo", "Foo"),
        ("#/components/schemas/a~1b", "a/b"),
        ("#/components/schemas/a~0b", "a~b"),
    ],
)
def test_resolve_final_segment(ref, expected):
    assert ReferenceResolver().resolve(ref) == expected


def test_resolve_does_not_check_existence():
    assert ReferenceResolver().resolve("#/components/schemas/DoesNotExist") == "DoesNotExist"
