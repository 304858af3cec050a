from __future__ import annotations

import pytest

from native_hints.errors import SerializationError
from native_hints.naming import encode_jvm_name, is_jvm_name


@pytest.mark.parametrize(
    "name",
    ["x.A", "A", "a.Outer$Inner", "a.Outer.Inner", "java.lang.String[][]", "$Proxy1", "ünï.Cödé"],
)
def test_valid_jvm_names(name: str) -> None:
    assert is_jvm_name(name)
    assert encode_jvm_name(name) == name


@pytest.mark.parametrize("name", ["", "x.A\n", "\nx.A", "x.A ", "x.", ".x", "x[]y", "x.A[", "a-b.C"])
def test_invalid_jvm_names(name: str) -> None:
    assert not is_jvm_name(name)


def test_encode_reports_declaration_context() -> None:
    with pytest.raises(SerializationError) as excinfo:
        encode_jvm_name("x.A\n", trigger="a.T", field="typeNames", source="hints.yaml#3")
    assert (excinfo.value.trigger, excinfo.value.field, excinfo.value.source) == ("a.T", "typeNames", "hints.yaml#3")
