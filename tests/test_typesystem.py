import pytest

from jsengine.semantic.typesystem import Type, TypeEnvironment, TypeKind

NUMBER = Type(TypeKind.NUMBER)
STRING = Type(TypeKind.STRING)
BOOLEAN = Type(TypeKind.BOOLEAN)
ANY = Type(TypeKind.ANY)
NEVER = Type(TypeKind.NEVER)

SIMPLE_KINDS = [
    TypeKind.UNDEFINED,
    TypeKind.NULL,
    TypeKind.BOOLEAN,
    TypeKind.NUMBER,
    TypeKind.STRING,
    TypeKind.SYMBOL,
    TypeKind.OBJECT,
    TypeKind.NEVER,
]


def test_default_type_is_any():
    assert Type() == ANY


@pytest.mark.parametrize("kind", SIMPLE_KINDS)
def test_any_is_compatible_both_ways(kind):
    other = Type(kind)
    assert ANY.is_compatible_with(other)
    assert other.is_compatible_with(ANY)


@pytest.mark.parametrize("kind", SIMPLE_KINDS)
def test_type_is_compatible_with_itself_except_never(kind):
    t = Type(kind)
    assert t.is_compatible_with(t) is (kind is not TypeKind.NEVER)


def test_never_is_incompatible():
    assert not NEVER.is_compatible_with(NUMBER)
    assert not NUMBER.is_compatible_with(NEVER)


def test_distinct_primitives_incompatible():
    assert not NUMBER.is_compatible_with(STRING)
    assert not STRING.is_compatible_with(BOOLEAN)


def test_union_compatibility_is_asymmetric():
    union = Type.union([NUMBER, STRING])
    assert union.is_compatible_with(STRING)
    assert not union.is_compatible_with(BOOLEAN)
    assert not STRING.is_compatible_with(union)


def test_array_compatibility_follows_elements():
    assert Type.array(NUMBER).is_compatible_with(Type.array(ANY))
    assert not Type.array(NUMBER).is_compatible_with(Type.array(STRING))
    assert not Type.array(NUMBER).is_compatible_with(NUMBER)


def test_function_compatibility():
    f = Type.function([NUMBER], STRING)
    assert f.is_compatible_with(Type.function([ANY], STRING))
    assert not f.is_compatible_with(Type.function([], STRING))
    assert not f.is_compatible_with(Type.function([NUMBER], NUMBER))


def test_common_type():
    assert NUMBER.common_type(NUMBER) == NUMBER
    assert NUMBER.common_type(ANY) == NUMBER
    assert ANY.common_type(NUMBER) == ANY
    assert NUMBER.common_type(STRING) == Type.union([NUMBER, STRING])


def test_common_type_of_union_with_member():
    union = Type.union([NUMBER, STRING])
    assert union.common_type(NUMBER) == union
    assert NUMBER.common_type(union) == union


def test_primitive_and_object_classification():
    assert NUMBER.is_primitive()
    assert not NUMBER.is_object()
    assert Type.array(NUMBER).is_object()
    assert Type.function([], ANY).is_object()
    assert Type(TypeKind.OBJECT).is_object()
    assert not ANY.is_primitive()
    assert not ANY.is_object()


def test_structured_types_need_parts():
    with pytest.raises(ValueError):
        Type(TypeKind.ARRAY)
    with pytest.raises(ValueError):
        Type(TypeKind.FUNCTION)


def test_types_are_hashable_values():
    assert Type.array(NUMBER) == Type.array(Type(TypeKind.NUMBER))
    assert len({Type.array(NUMBER), Type.array(NUMBER), NUMBER}) == 2


def test_text_form():
    assert str(Type.array(NUMBER)) == "Array(Number)"
    assert str(NUMBER) == TypeKind.NUMBER.value


def test_type_environment():
    env = TypeEnvironment()
    assert not env.is_declared("x")
    assert env.get_type("x") is None
    assert env.update_type("x", NUMBER) is False
    env.declare("x", NUMBER)
    assert env.is_declared("x")
    assert env.get_type("x") == NUMBER
    assert env.update_type("x", STRING) is True
    assert env.get_type("x") == STRING