# -*- mode: python; encoding: utf-8 -*-
#
# Copyright 2026 the Pushgate contributors
#
# Licensed under the Apache License, Version 2.0 (the "License"); you may not
# use this file except in compliance with the License.  You may obtain a copy of
# the License at
#
#   http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS, WITHOUT
# WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.  See the
# License for the specific language governing permissions and limitations under
# the License.

from __future__ import annotations

import logging
from typing import Literal, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

from pushgate import base
from pushgate.gitaccess import NULL_SHA1, SHA1, short_sha1

RefKind = Literal["branch", "tag", "unknown"]
Operation = Literal["create", "update", "delete"]

REF_PREFIXES: Sequence[Tuple[str, RefKind]] = (
    ("refs/heads/", "branch"),
    ("refs/tags/", "tag"),
)

# Maximum number of concurrently running git queries per phase.
CONCURRENCY_LIMIT = base.DEFAULT_GIT_CONCURRENCY

INTERNAL_ERROR_MESSAGE = "Internal error while checking the push."


class Error(Exception):
    """Base class of errors that cause a push to be rejected

       |message| is suitable for display to the pushing client."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ParseError(Error):
    def __init__(self, line: str, reason: str = 'expected "old new ref"') -> None:
        super().__init__(f'Malformed ref update ({reason}), got "{line}".')
        self.line = line


class UnsupportedBackendError(Error):
    def __init__(self, vcs: str) -> None:
        super().__init__(f'Unsupported repository type "{vcs}"!')
        self.vcs = vcs


class SubprocessError(Error):
    def __init__(self, message: str = INTERNAL_ERROR_MESSAGE) -> None:
        super().__init__(message)


class DangerousChangeRejection(Error):
    def __init__(self, update: RefUpdate, message: str) -> None:
        super().__init__(message)
        self.update = update


def classify_ref(ref_name: str) -> Tuple[RefKind, str]:
    """Return (kind, short name) of |ref_name|"""
    for prefix, kind in REF_PREFIXES:
        if ref_name.startswith(prefix):
            return kind, ref_name[len(prefix) :]
    return "unknown", ref_name


def classify_operation(old_sha1: str, new_sha1: str) -> Operation:
    if old_sha1 == NULL_SHA1:
        return "create"
    if new_sha1 == NULL_SHA1:
        return "delete"
    return "update"


class RefUpdate:
    """One ref update of a push: old value, new value and ref name

       Everything but |merge_base| and |new_commits| is fixed at construction.
       Those two are filled in by later phases, each exactly once."""

    def __init__(self, old_sha1: SHA1, new_sha1: SHA1, ref_name: str) -> None:
        self.__old_sha1 = old_sha1
        self.__new_sha1 = new_sha1
        self.__ref_name = ref_name
        self.__ref_kind, self.__short_ref = classify_ref(ref_name)
        self.__operation = classify_operation(old_sha1, new_sha1)
        self.__merge_base: Optional[SHA1] = None
        self.__new_commits: Optional[Sequence[SHA1]] = None

    def __repr__(self) -> str:
        return (
            f"RefUpdate({self.old_short}..{self.new_short} {self.ref_name}, "
            f"operation={self.operation})"
        )

    @property
    def old_sha1(self) -> SHA1:
        return self.__old_sha1

    @property
    def new_sha1(self) -> SHA1:
        return self.__new_sha1

    @property
    def old_short(self) -> str:
        return short_sha1(self.__old_sha1)

    @property
    def new_short(self) -> str:
        return short_sha1(self.__new_sha1)

    @property
    def ref_name(self) -> str:
        return self.__ref_name

    @property
    def ref_kind(self) -> RefKind:
        return self.__ref_kind

    @property
    def short_ref(self) -> str:
        return self.__short_ref

    @property
    def operation(self) -> Operation:
        return self.__operation

    @property
    def merge_base(self) -> Optional[SHA1]:
        return self.__merge_base

    @merge_base.setter
    def merge_base(self, value: SHA1) -> None:
        if self.__operation != "update":
            raise base.ImplementationError(
                f"merge-base of a ref {self.__operation}: {self!r}"
            )
        if self.__merge_base is not None:
            raise base.ImplementationError(f"merge-base already set: {self!r}")
        self.__merge_base = value

    @property
    def new_commits(self) -> Optional[Sequence[SHA1]]:
        return self.__new_commits

    @new_commits.setter
    def new_commits(self, value: Sequence[SHA1]) -> None:
        if self.__operation == "delete":
            raise base.ImplementationError(f"new commits of a ref delete: {self!r}")
        if self.__new_commits is not None:
            raise base.ImplementationError(f"new commits already set: {self!r}")
        self.__new_commits = tuple(value)


from .parsegitupdates import parse_git_updates
from .findmergebases import find_merge_bases
from .findnewcommits import find_new_commits
from .rejectdangerouschanges import reject_dangerous_changes
from .engine import HookConfig, HookEngine, SubversionTransaction, Verdict, evaluate

__all__ = [
    "CONCURRENCY_LIMIT",
    "DangerousChangeRejection",
    "Error",
    "HookConfig",
    "HookEngine",
    "Operation",
    "ParseError",
    "RefKind",
    "RefUpdate",
    "SubprocessError",
    "SubversionTransaction",
    "UnsupportedBackendError",
    "Verdict",
    "classify_operation",
    "classify_ref",
    "evaluate",
    "find_merge_bases",
    "find_new_commits",
    "parse_git_updates",
    "reject_dangerous_changes",
]
