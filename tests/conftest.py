import pytest


@pytest.fixture(autouse=True)
def xdg_dirs(tmp_path, monkeypatch):
    """Point every XDG base directory into the test's temporary directory."""
    dirs = {
        "HOME": tmp_path / "home",
        "XDG_CACHE_HOME": tmp_path / "cache",
        "XDG_DATA_HOME": tmp_path / "data",
        "XDG_CONFIG_HOME": tmp_path / "config",
    }
    for name, path in dirs.items():
        monkeypatch.setenv(name, str(path))
    return dirs
