from __future__ import annotations

import json
from pathlib import Path

import pytest

from native_hints.access import AccessBits
from native_hints.base import GenerationOptions
from native_hints.collector import collect
from native_hints.errors import ParsingError
from native_hints.targets import ManifestTarget, read_manifest


def test_manifest_lists_each_entry_with_named_flags(tmp_path: Path, webflux_declaration: dict) -> None:
    registry = collect([webflux_declaration])
    (artifact,) = ManifestTarget().generate(registry, GenerationOptions(version="1.2.3", output_dir=tmp_path))

    assert artifact.path.name == "hints-manifest.json"
    document = json.loads(artifact.path.read_text(encoding="utf-8"))
    assert document["version"] == "1.2.3"
    (hint,) = document["hints"]
    assert hint["trigger"] == "WebFluxAutoConfiguration"
    assert hint["types"] == ["ClientCodecConfigurer", "ServerCodecConfigurer"]
    assert hint["typeNames"] == ["com.fasterxml.jackson.databind.ObjectMapper"]
    assert hint["access"] == ["CLASS", "PUBLIC_CONSTRUCTORS"]
    assert [flag for flag, enabled in hint["flags"].items() if enabled] == ["allPublicConstructors"]


def test_manifest_decodes_back_to_same_registry(tmp_path: Path) -> None:
    registry = collect(
        [
            {"trigger": "a.T", "types": ["x.A"], "typeNames": ["y.B"], "access": "CLASS|DECLARED_FIELDS"},
            {"trigger": "a.T", "typeNames": ["y.C"], "access": "ALL"},
            {"trigger": "b.U", "types": ["x.D"], "access": "LOAD_AND_CONSTRUCT"},
        ]
    )
    (artifact,) = ManifestTarget().generate(registry, GenerationOptions(version="v", output_dir=tmp_path))

    assert read_manifest(artifact.path) == registry


def test_empty_manifest(tmp_path: Path) -> None:
    (artifact,) = ManifestTarget().generate(collect([]), GenerationOptions(version="v", output_dir=tmp_path))
    assert json.loads(artifact.path.read_text(encoding="utf-8")) == {"version": "v", "hints": []}
    assert len(read_manifest(artifact.path)) == 0


def test_read_manifest_rejects_inconsistent_access(tmp_path: Path) -> None:
    path = tmp_path / "hints-manifest.json"
    path.write_text(
        json.dumps(
            {
                "version": "v",
                "hints": [
                    {
                        "trigger": "a.T",
                        "types": ["x.A"],
                        "typeNames": [],
                        "access": ["CLASS"],
                        "flags": {"allPublicMethods": True},
                    }
                ],
            }
        ),
        encoding="utf-8",
    )
    with pytest.raises(ParsingError, match="disagrees"):
        read_manifest(path)


@pytest.mark.parametrize("payload", ["[]", "{\"hints\": {}}", "not json"])
def test_read_manifest_rejects_malformed_documents(tmp_path: Path, payload: str) -> None:
    path = tmp_path / "hints-manifest.json"
    path.write_text(payload, encoding="utf-8")
    with pytest.raises(ParsingError):
        read_manifest(path)


def test_every_access_combination_decodes_exactly(tmp_path: Path) -> None:
    declarations = [
        {"trigger": "a.T", "types": ["x.A"], "access": bits} for bits in range(int(AccessBits.ALL) + 1)
    ]
    registry = collect(declarations)
    (artifact,) = ManifestTarget().generate(registry, GenerationOptions(version="v", output_dir=tmp_path))

    decoded = read_manifest(artifact.path)
    assert [entry.access for entry in decoded] == [entry.access for entry in registry]
    assert len({entry.access for entry in decoded}) == 2 ** 7


def _write_hint(tmp_path: Path, **overrides: object) -> Path:
    hint = {
        "trigger": "a.T",
        "source": "hints.yaml#1",
        "types": ["x.A"],
        "typeNames": [],
        "access": ["CLASS"],
        "flags": {},
    }
    hint.update(overrides)
    path = tmp_path / "hints-manifest.json"
    path.write_text(json.dumps({"version": "v", "hints": [hint]}), encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "overrides",
    [
        {"types": None},
        {"types": "x.ABC"},
        {"typeNames": None},
        {"types": [3]},
        {"flags": ["allPublicMethods"]},
        {"flags": {"allPrivateMethods": True}},
        {"access": "CLASS"},
        {"access": ["PRIVATE"]},
        {"trigger": None},
        {"trigger": ""},
        {"source": 7},
        {"types": ["x.A\n"]},
        {"typeNames": ["not a type"]},
        {"types": [], "typeNames": []},
    ],
)
def test_read_manifest_rejects_malformed_fields(tmp_path: Path, overrides: dict) -> None:
    with pytest.raises(ParsingError, match="Manifest hint #1"):
        read_manifest(_write_hint(tmp_path, **overrides))


def test_read_manifest_keeps_mask_without_class(tmp_path: Path) -> None:
    path = _write_hint(tmp_path, access=["PUBLIC_METHODS"], flags={"allPublicMethods": True})
    (entry,) = read_manifest(path)
    assert entry.access == AccessBits.PUBLIC_METHODS
    assert entry.source == "hints.yaml#1"
