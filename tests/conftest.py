"""Shared fixtures: throwaway git repositories built with GitPython."""

from collections.abc import Callable
from pathlib import Path

import git
import pytest


def init_repo(path: Path) -> git.Repo:
    """Create a repository on ``main`` with one commit.

    Args:
        path: Directory for the repository

    Returns:
        The new repository
    """
    path.mkdir(parents=True, exist_ok=True)
    repo = git.Repo.init(path)
    with repo.config_writer() as writer:
        writer.set_value("user", "name", "gitc tests")
        writer.set_value("user", "email", "tests@example.com")

    readme = path / "README.md"
    readme.write_text("# test\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")
    repo.git.branch("-M", "main")
    return repo


@pytest.fixture
def git_repo(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> git.Repo:
    """Create a repository on ``main`` and make it the working directory.

    Args:
        tmp_path: Pytest temporary directory fixture
        monkeypatch: Pytest monkeypatch fixture

    Returns:
        The repository
    """
    repo = init_repo(tmp_path / "repo")
    monkeypatch.chdir(repo.working_dir)
    return repo


@pytest.fixture
def repo_with_origin(tmp_path: Path, git_repo: git.Repo) -> git.Repo:
    """Repository whose ``main`` is pushed to a bare ``origin`` with HEAD set.

    Args:
        tmp_path: Pytest temporary directory fixture
        git_repo: Repository fixture

    Returns:
        The local repository
    """
    origin_path = tmp_path / "origin.git"
    git.Repo.init(origin_path, bare=True)
    git_repo.create_remote("origin", str(origin_path))
    git_repo.git.push("-u", "origin", "main")
    git_repo.git.remote("set-head", "origin", "main")
    return git_repo


@pytest.fixture
def repo_factory(tmp_path: Path) -> Callable[[str], git.Repo]:
    """Create extra repositories under ``tmp_path`` without changing directory.

    Args:
        tmp_path: Pytest temporary directory fixture

    Returns:
        Function taking a directory name and returning a new repository
    """

    def make(name: str) -> git.Repo:
        return init_repo(tmp_path / name)

    return make
