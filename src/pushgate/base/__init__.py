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

from contextvars import ContextVar
import os
import sys
from typing import Any, Mapping, Optional, TypedDict, TypeVar, cast

import yaml


class Error(Exception):
    pass


class ImplementationError(Error):
    pass


class InvalidConfiguration(Error):
    pass


class MissingConfiguration(Error):
    pass


def in_virtualenv() -> bool:
    return sys.prefix != sys.base_prefix


def settings_dir() -> str:
    if "PUSHGATE_HOME" in os.environ:
        return os.path.join(os.environ["PUSHGATE_HOME"], "etc")
    # If installed in a virtual environment (default case) then return a sub-
    # directory inside the virtual environment.
    if in_virtualenv():
        return os.path.join(sys.prefix, "etc")
    # Otherwise, fall back to a reasonable system directory.
    return "/etc/pushgate"


RepositoryConfiguration = TypedDict(
    "RepositoryConfiguration",
    {"vcs": str, "path": str, "allow_dangerous_changes": bool},
    total=False,
)

Configuration = TypedDict(
    "Configuration",
    {
        "paths.repositories": str,
        "git.timeout": float,
        "git.concurrency": int,
        "repositories": Mapping[str, RepositoryConfiguration],
    },
    total=False,
)

DEFAULT_GIT_TIMEOUT = 60
DEFAULT_GIT_CONCURRENCY = 8

_CONFIGURATION: ContextVar[Configuration] = ContextVar("configuration")


def load_configuration(source: Any) -> Configuration:
    """Parse a YAML configuration document

       |source| is anything yaml.safe_load() accepts. An empty document
       yields an empty configuration, meaning all defaults."""

    try:
        configuration = yaml.safe_load(source)
    except yaml.YAMLError as error:
        raise InvalidConfiguration(str(error)) from None

    if configuration is None:
        return cast(Configuration, {})
    if not isinstance(configuration, dict):
        raise InvalidConfiguration("top-level value must be a mapping")

    repositories = configuration.get("repositories", {})
    if not isinstance(repositories, dict) or not all(
        isinstance(value, dict) for value in repositories.values()
    ):
        raise InvalidConfiguration("'repositories' must map names to mappings")

    repositories_dir = configuration.get("paths.repositories")
    if repositories_dir is not None and not isinstance(repositories_dir, str):
        raise InvalidConfiguration("'paths.repositories' must be a string")

    # YAML "yes" loads as True, and bool is a subclass of int.
    timeout = configuration.get("git.timeout", DEFAULT_GIT_TIMEOUT)
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
        raise InvalidConfiguration("'git.timeout' must be a number of seconds")
    if timeout <= 0:
        raise InvalidConfiguration("'git.timeout' must be positive")

    concurrency = configuration.get("git.concurrency", DEFAULT_GIT_CONCURRENCY)
    if isinstance(concurrency, bool) or not isinstance(concurrency, int):
        raise InvalidConfiguration("'git.concurrency' must be an integer")
    if concurrency < 1:
        raise InvalidConfiguration("'git.concurrency' must be at least 1")

    return cast(Configuration, configuration)


def configuration() -> Configuration:
    global _CONFIGURATION
    try:
        return _CONFIGURATION.get()
    except LookupError:
        pass

    configuration_path = os.path.join(settings_dir(), "configuration.yaml")
    try:
        with open(configuration_path, encoding="utf-8") as file:
            configuration = load_configuration(file)
    except OSError:
        raise MissingConfiguration(configuration_path)

    _CONFIGURATION.set(configuration)
    return configuration


T = TypeVar("T")


def asserted(value: Optional[T]) -> T:
    assert value is not None
    return value


from . import asyncutils

__all__ = ["asyncutils"]
