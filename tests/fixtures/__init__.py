from __future__ import annotations

import asyncio
from typing import Callable, List, Mapping, Optional, Sequence, Set, Tuple

import pytest

from pushgate.gitaccess import NULL_SHA1, SHA1, GitError, GitProcessError
from pushgate.repository import Repository


def sha1(character: str) -> SHA1:
    """A fake, but well-formed, SHA-1 such as "ccc...c" """
    assert len(character) == 1
    return SHA1(character * 40)


def numbered_sha1(number: int, prefix: str = "a") -> SHA1:
    return SHA1(f"{prefix}{number:039x}")


def update_line(old: str, new: str, ref_name: str) -> str:
    return f"{old} {new} {ref_name}\n"


NULL = NULL_SHA1


class FakeGitRepository:
    """Stands in for gitaccess.GitRepository, answering from tables

       Records every query, and how many queries were running at most at
       the same time."""

    def __init__(
        self,
        *,
        merge_bases: Optional[Mapping[Tuple[str, str], str]] = None,
        new_commits: Optional[Mapping[str, Sequence[str]]] = None,
        failing: Optional[Set[str]] = None,
        delay: Callable[[Sequence[str]], float] = lambda _: 0.01,
    ) -> None:
        self.merge_bases = dict(merge_bases or {})
        self.new_commits = dict(new_commits or {})
        self.failing = set(failing or ())
        self.delay = delay
        self.calls: List[Tuple[str, ...]] = []
        self.running = 0
        self.max_running = 0

    async def __query(self, command: str, *args: str) -> None:
        self.calls.append((command, *args))
        self.running += 1
        self.max_running = max(self.max_running, self.running)
        try:
            await asyncio.sleep(self.delay(args))
        finally:
            self.running -= 1
        if self.failing.intersection(args):
            raise GitProcessError.make(
                [command, *args], "/fake", 128, b"", b"fatal: bad object\n"
            )

    async def mergebase(self, *commits: str) -> SHA1:
        await self.__query("merge-base", *commits)
        try:
            return SHA1(self.merge_bases[(commits[0], commits[1])])
        except KeyError:
            # What `git merge-base` does for unrelated commits.
            raise GitProcessError.make(
                ["merge-base", *commits], "/fake", 1, b"", b""
            ) from None

    async def newcommits(self, sha1: str) -> Sequence[SHA1]:
        await self.__query("log", sha1)
        commits = self.new_commits.get(sha1, [sha1])
        if any(len(commit) != 40 for commit in commits):
            raise GitError(f"Unexpected output from `git log`: {commits!r}")
        return [SHA1(commit) for commit in commits]

    def commands(self, command: str) -> List[Tuple[str, ...]]:
        return [call for call in self.calls if call[0] == command]


@pytest.fixture
def fake_repository() -> FakeGitRepository:
    return FakeGitRepository()


def make_repository(
    low_level: FakeGitRepository,
    *,
    vcs: str = "git",
    allow_dangerous_changes: bool = False,
) -> Repository:
    return Repository(
        "test",
        vcs=vcs,
        path="/fake",
        allow_dangerous_changes=allow_dangerous_changes,
        low_level=low_level,  # type: ignore[arg-type]
    )


__all__ = [
    "FakeGitRepository",
    "NULL",
    "fake_repository",
    "make_repository",
    "numbered_sha1",
    "sha1",
    "update_line",
]
