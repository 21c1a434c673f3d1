from __future__ import annotations

from pathlib import Path  # noqa: TC003

import pytest  # noqa: TC002

from haloinfo.config import storage


def test_data_dir_prefers_explicit_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    custom = tmp_path / "custom-data"
    monkeypatch.setenv("HALOINFO_DATA_DIR", str(custom))

    config = storage.get_storage_config()

    assert config.resolve_data_dir() == custom.resolve()


def test_http_cache_path_creates_data_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("HALOINFO_DATA_DIR", str(tmp_path / "data-dir"))

    path = storage.get_http_cache_path()

    assert path == (tmp_path / "data-dir" / storage.HTTP_CACHE_FILENAME).resolve()
    assert path.parent.exists()


def test_default_data_dir_follows_xdg_cache(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.delenv("HALOINFO_DATA_DIR")
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path))

    config = storage.get_storage_config()

    assert config.http_cache_path(ensure=False) == (
        tmp_path / storage.APP_DIR_NAME / storage.HTTP_CACHE_FILENAME
    ).resolve()
