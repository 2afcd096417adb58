"""Shared pytest fixtures for search service tests."""

from __future__ import annotations

import json
from typing import Any

import pytest
import structlog

from nixsearch.config import BackendSettings, NixSearchSettings

BACKEND_URL = "https://search.test"


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()


@pytest.fixture
def settings() -> NixSearchSettings:
    return NixSearchSettings(
        backend=BackendSettings(base_url=BACKEND_URL, retry_base_delay=0),
    )


def make_source(attr_name: str, **overrides: Any) -> dict[str, Any]:
    source: dict[str, Any] = {
        "type": "package",
        "package_pname": attr_name,
        "package_attr_name": attr_name,
        "package_attr_set": "No package set",
        "package_outputs": ["out"],
        "package_default_output": "out",
        "package_description": f"The {attr_name} package",
        "package_programs": [attr_name],
        "package_homepage": [f"https://{attr_name}.example.org"],
        "package_pversion": "1.0.0",
        "package_platforms": ["x86_64-linux", "aarch64-linux"],
        "package_position": f"pkgs/by-name/{attr_name}/package.nix:42",
        "package_license": [
            {"fullName": "MIT License", "url": "https://spdx.org/licenses/MIT.html"}
        ],
    }
    source.update(overrides)
    return source


def success_body(*sources: dict[str, Any]) -> str:
    hits = [
        {"_index": "latest-37-nixos-unstable", "_id": f"id-{idx}", "_score": 10.0 - idx, "_source": source}
        for idx, source in enumerate(sources)
    ]
    return json.dumps({"took": 3, "timed_out": False, "hits": {"total": {"value": len(hits)}, "hits": hits}})
