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

import asyncio
import logging
from typing import Optional, Sequence

logger = logging.getLogger(__name__)

from . import SHA1, as_sha1, git
from .giterror import GitError, GitProcessError, GitTimeoutError

from pushgate import base


class GitRepository:
    """Low-level access to a Git repository via `git` sub-processes

       All operations are read-only queries, so a single instance can safely
       be shared by any number of concurrently running tasks."""

    def __init__(
        self,
        path: Optional[str],
        *,
        timeout: Optional[float] = base.DEFAULT_GIT_TIMEOUT,
    ) -> None:
        self.__path = path
        self.timeout = timeout

    @property
    def path(self) -> Optional[str]:
        return self.__path

    async def execute(self, *argv: str) -> asyncio.subprocess.Process:
        logger.debug("executing: `git %s` in %r", " ".join(argv), self.path)

        # The environment is inherited: in a pre-receive hook, Git points
        # GIT_OBJECT_DIRECTORY and GIT_QUARANTINE_PATH at the objects that
        # were just received.
        return await asyncio.create_subprocess_exec(
            git(),
            *argv,
            cwd=self.path,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )

    async def run(self, *argv: str) -> bytes:
        process = await self.execute(*argv)

        try:
            stdout, stderr = await asyncio.wait_for(
                process.communicate(), self.timeout
            )
        except asyncio.TimeoutError:
            logger.warning(
                "killing `git %s` after %s seconds", " ".join(argv), self.timeout
            )
            process.kill()
            await process.wait()
            raise GitTimeoutError.make(argv, self.path, self.timeout) from None
        except asyncio.CancelledError:
            if process.returncode is None:
                process.kill()
            raise

        assert process.returncode is not None

        logger.debug(
            "executed: `git %s` in %r [returncode=%d]",
            " ".join(argv),
            self.path,
            process.returncode,
        )

        if process.returncode != 0:
            raise GitProcessError.make(
                argv, self.path, process.returncode, stdout, stderr
            )

        return stdout

    async def mergebase(self, *commits: str) -> SHA1:
        """Return the best common ancestor of |commits|

           Fails with GitProcessError if there is none."""
        output = await self.run("merge-base", *commits)
        sha1 = output.decode().rstrip("\r\n")
        try:
            return as_sha1(sha1)
        except ValueError:
            raise GitError("Unexpected output from `git merge-base`: %r" % output)

    async def newcommits(self, sha1: str) -> Sequence[SHA1]:
        """Return the commits reachable from |sha1| but from no existing ref

           The commits are listed in the order `git log` lists them, most
           recent first."""
        output = await self.run("log", "--format=%H", sha1, "--not", "--all")
        try:
            return [as_sha1(line) for line in output.decode("ascii").splitlines()]
        except (UnicodeDecodeError, ValueError):
            raise GitError("Unexpected output from `git log`: %r" % output)
