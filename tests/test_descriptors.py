from __future__ import annotations

import json
from pathlib import Path

import pytest

from native_hints.access import AccessBits
from native_hints.collector import collect
from native_hints.descriptors import iter_descriptor_files, load_descriptor, load_descriptors
from native_hints.errors import ParsingError


def test_load_yaml_descriptor(data_dir: Path) -> None:
    declarations = load_descriptor(data_dir / "webflux_hints.yaml")

    assert [d.source for d in declarations] == [
        "webflux_hints.yaml#1",
        "webflux_hints.yaml#2",
        "webflux_hints.yaml#3",
    ]
    registry = collect(declarations)
    assert registry.entries[0].trigger.endswith(".WebFluxAutoConfiguration")
    assert len(registry.entries[0].type_refs) == 5
    assert len(registry.entries[0].type_names) == 8
    assert registry.entries[1].access == AccessBits.CLASS | AccessBits.PUBLIC_CONSTRUCTORS
    assert registry.entries[2].access == (
        AccessBits.CLASS | AccessBits.PUBLIC_CONSTRUCTORS | AccessBits.PUBLIC_METHODS
    )


def test_load_json_descriptor_with_bare_list(tmp_path: Path) -> None:
    path = tmp_path / "hints.json"
    path.write_text(json.dumps([{"trigger": "a.T", "types": ["x.A"], "access": 5}]), encoding="utf-8")

    (declaration,) = load_descriptor(path)
    assert declaration.trigger == "a.T"
    assert declaration.access == 5
    assert declaration.source == "hints.json#1"


def test_empty_yaml_descriptor_has_no_declarations(tmp_path: Path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_descriptor(path) == []


@pytest.mark.parametrize(
    ("name", "content"),
    [
        ("bad.json", "{"),
        ("bad.yaml", "hints: [unterminated"),
        ("scalar.yaml", "just text"),
        ("extra.yaml", "hints: []\nother: 1\n"),
        ("notalist.yaml", "hints: {trigger: a.T}\n"),
        ("hints.toml", "x = 1"),
    ],
)
def test_malformed_descriptors_raise_parsing_error(tmp_path: Path, name: str, content: str) -> None:
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ParsingError):
        load_descriptor(path)


def test_missing_descriptor_raises_parsing_error(tmp_path: Path) -> None:
    with pytest.raises(ParsingError):
        load_descriptor(tmp_path / "missing.yaml")


def test_directory_sources_expand_sorted(tmp_path: Path) -> None:
    (tmp_path / "b.yaml").write_text("- {trigger: b.T, types: [x.B]}\n", encoding="utf-8")
    (tmp_path / "a.json").write_text('[{"trigger": "a.T", "types": ["x.A"]}]', encoding="utf-8")
    (tmp_path / "notes.txt").write_text("ignored", encoding="utf-8")

    assert [p.name for p in iter_descriptor_files([tmp_path])] == ["a.json", "b.yaml"]
    assert [d.trigger for d in load_descriptors([tmp_path])] == ["a.T", "b.T"]


def test_directory_without_descriptors_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(ParsingError):
        iter_descriptor_files([tmp_path])
