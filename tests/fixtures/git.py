from __future__ import annotations

import os
import shutil
import subprocess
import sys
from typing import Dict, Mapping, Optional, Sequence

import pytest

from pushgate.gitaccess import SHA1

requires_git = pytest.mark.skipif(
    shutil.which("git") is None, reason="no git executable"
)

SOURCE_DIR = os.path.join(
    os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))),
    "src",
)

GIT_ENVIRON = {
    "GIT_AUTHOR_NAME": "Alice von Testing",
    "GIT_AUTHOR_EMAIL": "alice@example.org",
    "GIT_COMMITTER_NAME": "Alice von Testing",
    "GIT_COMMITTER_EMAIL": "alice@example.org",
    "GIT_CONFIG_NOSYSTEM": "1",
}


class GitRepository:
    """A bare repository ("origin") plus a work repository that pushes to it"""

    def __init__(self, path: str) -> None:
        self.path = path
        self.origin = os.path.join(path, "origin.git")
        self.work = os.path.join(path, "work")
        self.environ: Dict[str, str] = {
            **os.environ,
            **GIT_ENVIRON,
            "HOME": path,
        }
        self.environ.pop("GIT_DIR", None)
        self.counter = 0

        os.makedirs(self.work)
        self.git("init", "-q", "--bare", self.origin, cwd=path)
        self.git("init", "-q", cwd=self.work)
        self.git("symbolic-ref", "HEAD", "refs/heads/main")
        self.git("remote", "add", "origin", self.origin)

    def git(
        self, *argv: str, cwd: Optional[str] = None, check: bool = True
    ) -> subprocess.CompletedProcess:
        return subprocess.run(
            ["git", *argv],
            cwd=cwd or self.work,
            env=self.environ,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            check=check,
        )

    def output(self, *argv: str, cwd: Optional[str] = None) -> str:
        return self.git(*argv, cwd=cwd).stdout.decode().strip()

    def commit(self, message: Optional[str] = None) -> SHA1:
        self.counter += 1
        filename = os.path.join(self.work, "file.txt")
        with open(filename, "a", encoding="utf-8") as file:
            print(f"line {self.counter}", file=file)
        self.git("add", "file.txt")
        self.git("commit", "-q", "-m", message or f"commit {self.counter}")
        return SHA1(self.output("rev-parse", "HEAD"))

    def dangling_commit(self, parents: Sequence[str] = (), tree: str = "HEAD") -> SHA1:
        """Create a commit object that no ref points at"""
        argv = ["commit-tree", f"{tree}^{{tree}}", "-m", f"dangling {self.counter}"]
        self.counter += 1
        for parent in parents:
            argv.extend(["-p", parent])
        return SHA1(self.output(*argv))

    def push(self, *refspecs: str) -> subprocess.CompletedProcess:
        return self.git("push", "origin", *refspecs, check=False)

    def install_hook(self, environ: Mapping[str, str] = {}) -> None:
        exports = "".join(
            f"export {name}='{value}'\n" for name, value in environ.items()
        )
        filename = os.path.join(self.origin, "hooks", "pre-receive")
        with open(filename, "w", encoding="utf-8") as file:
            file.write(
                "#!/bin/sh\n"
                f"export PYTHONPATH='{SOURCE_DIR}'\n"
                f"{exports}"
                f"exec '{sys.executable}' -m pushgate.hooks.pre_receive\n"
            )
        os.chmod(filename, 0o755)


@pytest.fixture
def git_repository(tmp_path) -> GitRepository:
    if shutil.which("git") is None:
        pytest.skip("no git executable")
    return GitRepository(str(tmp_path / "repositories"))


@pytest.fixture
def pushgate_home(tmp_path, monkeypatch) -> str:
    """A PUSHGATE_HOME with an etc/ directory for configuration.yaml"""
    home = tmp_path / "pushgate"
    (home / "etc").mkdir(parents=True)
    monkeypatch.setenv("PUSHGATE_HOME", str(home))
    return str(home)
