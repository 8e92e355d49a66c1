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

from typing import Any, Optional, Sequence


class GitError(Exception):
    pass


class GitProcessError(GitError):
    argv: Sequence[str]
    cwd: Optional[str]
    returncode: Optional[int]
    stdout: Optional[bytes]
    stderr: Optional[bytes]

    def __init__(self, *args: Any) -> None:
        super().__init__(*args)
        _, self.argv, self.cwd, self.returncode, self.stdout, self.stderr = args

    @staticmethod
    def make(
        argv: Sequence[str],
        cwd: Optional[str],
        returncode: Optional[int],
        stdout: Optional[bytes],
        stderr: Optional[bytes],
    ) -> GitProcessError:
        return GitProcessError(
            f"`git {' '.join(argv)}` failed in {cwd}",
            argv,
            cwd,
            returncode,
            stdout,
            stderr,
        )


class GitTimeoutError(GitProcessError):
    timeout: float

    def __init__(self, *args: Any) -> None:
        super().__init__(*args[:-1])
        self.timeout = args[-1]

    @staticmethod
    def make(  # type: ignore[override]
        argv: Sequence[str], cwd: Optional[str], timeout: float
    ) -> GitTimeoutError:
        return GitTimeoutError(
            f"`git {' '.join(argv)}` timed out after {timeout} seconds in {cwd}",
            argv,
            cwd,
            None,
            None,
            None,
            timeout,
        )
