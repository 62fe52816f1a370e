"""Shared fixtures: isolated app directory and export-file writers."""

import os

import pytest


@pytest.fixture(autouse=True)
def app_dir(tmp_path_factory, monkeypatch):
    """Keep config.json / app.log out of the real user profile."""
    local = tmp_path_factory.mktemp("localappdata")
    monkeypatch.setenv("LOCALAPPDATA", str(local))
    return local / "PolyFieldTrack"


@pytest.fixture
def export_dir(tmp_path):
    d = tmp_path / "exports"
    d.mkdir()
    return d


@pytest.fixture
def write_export(export_dir):
    """Write an export file the way the timing PC would (raw bytes, chosen encoding)."""
    def _write(name, text, encoding="utf-8", mtime=None):
        path = export_dir / name
        path.write_bytes(text.encode(encoding))
        if mtime is not None:
            os.utime(path, (mtime, mtime))
        return path
    return _write


def utf8_detect(sample):
    return "utf-8"
