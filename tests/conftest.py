from __future__ import annotations

from pathlib import Path

import pytest

from native_hints.registry import TargetRegistry, build_default_registry


@pytest.fixture
def data_dir() -> Path:
    return Path(__file__).resolve().parent / "data"


@pytest.fixture
def target_registry() -> TargetRegistry:
    return build_default_registry()


@pytest.fixture
def webflux_declaration() -> dict:
    return {
        "trigger": "WebFluxAutoConfiguration",
        "types": ["ClientCodecConfigurer", "ServerCodecConfigurer"],
        "typeNames": ["com.fasterxml.jackson.databind.ObjectMapper"],
        "access": "CLASS|PUBLIC_CONSTRUCTORS",
    }
