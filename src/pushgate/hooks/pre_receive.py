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

import argparse
import asyncio
import logging
import os
import sys
from typing import Optional, Sequence

logger = logging.getLogger("pushgate.hooks.pre_receive")

from pushgate import base
from pushgate import commithook
from pushgate import repository

from . import (
    UNEXPECTED_ERROR_MESSAGE,
    add_output_arguments,
    configure_logging,
    gitconfig,
    load_configuration,
    report,
    viewer,
)


def repository_name(path: str) -> str:
    name = gitconfig("pushgate.name")
    if name:
        return name
    name = os.path.basename(os.path.normpath(path))
    if name.endswith(".git"):
        name = name[: -len(".git")]
    return name


async def run(arguments: argparse.Namespace, stdin: str) -> int:
    configuration = load_configuration()

    path = os.getcwd()
    handle = repository.fetch(
        arguments.repository or repository_name(path),
        path=path,
        configuration=configuration,
    )

    verdict = await commithook.evaluate(
        commithook.HookConfig(
            viewer=viewer(),
            repository=handle,
            stdin=stdin,
            concurrency=configuration.get(
                "git.concurrency", base.DEFAULT_GIT_CONCURRENCY
            ),
        )
    )

    if verdict.accepted:
        for update in verdict.updates:
            if update.new_commits is not None:
                logger.info(
                    "%s: %d new commit(s)", update.ref_name, len(update.new_commits)
                )

    return report(verdict)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Git pre-receive hook: reject dangerous ref updates."
    )
    parser.add_argument(
        "--repository",
        metavar="NAME",
        help="Repository name (default: `git config pushgate.name`, or the "
        "repository directory's name).",
    )
    add_output_arguments(parser)

    arguments = parser.parse_args(argv)

    configure_logging(arguments)

    try:
        return asyncio.run(run(arguments, sys.stdin.read()))
    except base.InvalidConfiguration as error:
        logger.error("Invalid configuration: %s", error)
        print(UNEXPECTED_ERROR_MESSAGE)
        return 1
    except Exception:
        logger.exception("Hook failed!")
        print(UNEXPECTED_ERROR_MESSAGE)
        return 1


if __name__ == "__main__":
    sys.exit(main())
