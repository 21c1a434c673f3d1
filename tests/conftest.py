from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

_CATALOG_ENV_VARS = (
    "HALOINFO_CATALOG_URL",
    "HALOINFO_CATALOG_TIMEOUT",
    "HALOINFO_CACHE_TTL",
    "HALOINFO_DATA_DIR",
    "OPENAIP_API_KEY",
)


@pytest.fixture(autouse=True)
def _isolated_environment(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> Iterator[None]:
    for name in _CATALOG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # The on-disk HTTP cache must never outlive a single test.
    monkeypatch.setenv("HALOINFO_DATA_DIR", str(tmp_path / "data"))
    yield


@pytest.fixture(scope="session")
def tile_features() -> dict[str, dict[str, object]]:
    path = Path(__file__).resolve().parent / "data" / "tile_features.json"
    with path.open(encoding="utf-8") as handle:
        return json.load(handle)


@pytest.fixture
def tile_feature(
    tile_features: dict[str, dict[str, object]],
) -> Callable[[str], dict[str, object]]:
    def get(name: str) -> dict[str, object]:
        return json.loads(json.dumps(tile_features[name]))

    return get
