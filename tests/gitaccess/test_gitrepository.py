import pytest

from pushgate import gitaccess
from pushgate.gitaccess import (
    GitProcessError,
    GitRepository,
    GitTimeoutError,
    as_sha1,
    is_sha1,
    short_sha1,
)

from ..fixtures.git import GitRepository as TestRepository


def test_sha1_helpers() -> None:
    assert is_sha1("0123456789abcdef0123456789abcdef01234567")
    assert not is_sha1("0123456789abcdef0123456789ABCDEF01234567")
    assert not is_sha1("0123456")
    assert not is_sha1("g" * 40)
    assert is_sha1(gitaccess.NULL_SHA1)
    assert as_sha1("a" * 40) == "a" * 40
    with pytest.raises(ValueError):
        as_sha1("HEAD")
    assert short_sha1("0123456789abcdef0123456789abcdef01234567") == "01234567"


@pytest.mark.asyncio
async def test_mergebase(git_repository: TestRepository) -> None:
    base = git_repository.commit()
    first = git_repository.dangling_commit([base])
    second = git_repository.dangling_commit([base])

    repository = GitRepository(git_repository.work)

    assert await repository.mergebase(base, first) == base
    assert await repository.mergebase(first, second) == base
    assert await repository.mergebase(first, first) == first


@pytest.mark.asyncio
async def test_mergebase_unrelated(git_repository: TestRepository) -> None:
    git_repository.commit()
    first = git_repository.dangling_commit()
    second = git_repository.dangling_commit()

    repository = GitRepository(git_repository.work)

    with pytest.raises(GitProcessError) as raised:
        await repository.mergebase(first, second)

    assert raised.value.returncode == 1
    assert raised.value.argv == ("merge-base", first, second)


@pytest.mark.asyncio
async def test_newcommits(git_repository: TestRepository) -> None:
    tip = git_repository.commit()
    first = git_repository.dangling_commit([tip])
    second = git_repository.dangling_commit([first])

    repository = GitRepository(git_repository.work)

    assert await repository.newcommits(tip) == []
    assert await repository.newcommits(first) == [first]
    assert await repository.newcommits(second) == [second, first]


@pytest.mark.asyncio
async def test_bad_object(git_repository: TestRepository) -> None:
    git_repository.commit()

    repository = GitRepository(git_repository.work)

    with pytest.raises(GitProcessError) as raised:
        await repository.newcommits("f" * 40)

    assert raised.value.returncode != 0
    assert raised.value.stderr


@pytest.mark.asyncio
async def test_timeout(git_repository: TestRepository) -> None:
    repository = GitRepository(git_repository.work, timeout=0.2)

    with pytest.raises(GitTimeoutError) as raised:
        await repository.run("-c", "alias.pause=!sleep 3", "pause")

    assert raised.value.timeout == 0.2
    assert raised.value.returncode is None
    assert "timed out" in str(raised.value)


@pytest.mark.asyncio
async def test_environment_is_inherited(
    git_repository: TestRepository, monkeypatch
) -> None:
    # Git passes the quarantine directory to hooks via the environment.
    monkeypatch.setenv("GIT_CONFIG_COUNT", "1")
    monkeypatch.setenv("GIT_CONFIG_KEY_0", "alias.whereami")
    monkeypatch.setenv("GIT_CONFIG_VALUE_0", "!echo inherited")

    repository = GitRepository(git_repository.work)

    assert await repository.run("whereami") == b"inherited\n"
