import pytest

from .fixtures import fake_repository
from .fixtures.git import git_repository, pushgate_home

__all__ = ["fake_repository", "git_repository", "pushgate_home"]


@pytest.fixture(autouse=True)
def no_system_configuration(monkeypatch, tmp_path):
    """Never pick up a configuration file from the host system"""
    monkeypatch.setenv("PUSHGATE_HOME", str(tmp_path / "home"))
