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
from dataclasses import dataclass
from typing import Mapping, Optional, Protocol, Sequence, Type

logger = logging.getLogger(__name__)

from pushgate import base
from pushgate.repository import Repository, VersionControlSystem

from . import CONCURRENCY_LIMIT, Error, RefUpdate, UnsupportedBackendError
from .findmergebases import find_merge_bases
from .findnewcommits import find_new_commits
from .parsegitupdates import parse_git_updates
from .rejectdangerouschanges import reject_dangerous_changes


@dataclass(frozen=True)
class SubversionTransaction:
    """What Subversion hands its pre-commit hook: REPOS-PATH and TXN-NAME"""

    repository_path: str
    transaction: str


@dataclass(frozen=True)
class HookConfig:
    viewer: Optional[str]
    repository: Repository
    stdin: str = ""
    subversion_transaction: Optional[SubversionTransaction] = None
    concurrency: int = CONCURRENCY_LIMIT


@dataclass(frozen=True)
class Verdict:
    error: Optional[Error] = None
    updates: Sequence[RefUpdate] = ()

    @property
    def accepted(self) -> bool:
        return self.error is None

    @property
    def message(self) -> Optional[str]:
        return self.error.message if self.error else None


class Pipeline(Protocol):
    async def execute(self, config: HookConfig) -> Sequence[RefUpdate]:
        ...


class GitPipeline:
    async def execute(self, config: HookConfig) -> Sequence[RefUpdate]:
        repository = config.repository
        low_level = base.asserted(repository.low_level)

        updates = parse_git_updates(config.stdin)

        # The merge-bases are needed to tell fast-forwards from history
        # rewrites.
        await find_merge_bases(low_level, updates, limit=config.concurrency)

        reject_dangerous_changes(
            updates, allow_dangerous_changes=repository.allow_dangerous_changes
        )

        await find_new_commits(low_level, updates, limit=config.concurrency)

        return updates


class SubversionPipeline:
    async def execute(self, config: HookConfig) -> Sequence[RefUpdate]:
        # TODO: Check the transaction in |config.subversion_transaction| once
        # there are Subversion-specific policies.
        logger.debug("subversion: accepting %r", config.subversion_transaction)
        return ()


class MercurialPipeline:
    async def execute(self, config: HookConfig) -> Sequence[RefUpdate]:
        # TODO: Parse the pushed changesets once there are Mercurial-specific
        # policies.
        logger.debug("mercurial: accepting push to %s", config.repository.name)
        return ()


PIPELINES: Mapping[VersionControlSystem, Type[Pipeline]] = {
    "git": GitPipeline,
    "subversion": SubversionPipeline,
    "mercurial": MercurialPipeline,
}


class HookEngine:
    """Decides whether to accept a push (or commit) to a repository

       The engine never modifies the repository. Its only result is either
       returning normally (accept) or raising an Error (reject)."""

    def __init__(self, config: HookConfig) -> None:
        self.config = config

    def pipeline(self) -> Pipeline:
        vcs = self.config.repository.vcs
        try:
            pipeline_type = PIPELINES[vcs]  # type: ignore[index]
        except KeyError:
            raise UnsupportedBackendError(vcs) from None
        return pipeline_type()

    async def execute(self) -> Sequence[RefUpdate]:
        pipeline = self.pipeline()
        logger.debug(
            "executing %s hook for %s in %s",
            self.config.repository.vcs,
            self.config.viewer or "<unknown user>",
            self.config.repository.name,
        )
        return await pipeline.execute(self.config)


async def evaluate(config: HookConfig) -> Verdict:
    try:
        updates = await HookEngine(config).execute()
    except Error as error:
        logger.debug("rejected: %s", error)
        return Verdict(error=error)
    return Verdict(updates=updates)
