"""Unit tests for entity snapshot decoding."""

from __future__ import annotations

import pytest

from ghgraph.entities import Branch, File, RawFile, Repository, User
from ghgraph.errors import GitHubInputError, GitHubSnapshotError
from ghgraph.paths import ResourcePath
from tests.factories import (
    make_branch_payload,
    make_content_payload,
    make_owner_payload,
    make_repo_payload,
    make_user_payload,
)

ENDPOINT = "https://api.github.com/test"


@pytest.mark.unit
def test_user_reads_exact_snapshot_values() -> None:
    payload = make_user_payload()

    user = User.from_snapshot(payload, endpoint=ENDPOINT)

    assert user.login == "octocat"
    assert user.id == 1
    assert user.display_name == "The Octocat"
    assert user.location == "San Francisco"
    assert user.avatar_url == payload["avatar_url"]
    assert user.bio is None
    assert user.repos_size == 8
    assert user.gists_size == 8
    assert user.web_url == "https://github.com/octocat"


@pytest.mark.unit
def test_user_from_owner_object_leaves_profile_fields_empty() -> None:
    user = User.from_snapshot(make_owner_payload(), endpoint=ENDPOINT)

    assert user.login == "octocat"
    assert user.display_name is None
    assert user.repos_size is None


@pytest.mark.unit
def test_user_missing_login_fails_fast() -> None:
    payload = make_user_payload()
    del payload["login"]

    with pytest.raises(GitHubSnapshotError) as exc_info:
        User.from_snapshot(payload, endpoint=ENDPOINT)

    assert exc_info.value.key == "login"
    assert exc_info.value.endpoint == ENDPOINT


@pytest.mark.unit
def test_user_rejects_boolean_as_integer() -> None:
    payload = make_user_payload()
    payload["id"] = True

    with pytest.raises(GitHubSnapshotError):
        User.from_snapshot(payload, endpoint=ENDPOINT)


@pytest.mark.unit
def test_user_rejects_wrong_type_for_nullable_field() -> None:
    payload = make_user_payload()
    payload["public_repos"] = "8"

    with pytest.raises(GitHubSnapshotError) as exc_info:
        User.from_snapshot(payload, endpoint=ENDPOINT)

    assert exc_info.value.key == "public_repos"


@pytest.mark.unit
def test_repository_decodes_owner_recursively() -> None:
    repository = Repository.from_snapshot(make_repo_payload(), endpoint=ENDPOINT)

    assert repository.owner_login == "octocat"
    assert repository.name == "Hello-World"
    assert repository.id == 1296269
    assert repository.full_name == "octocat/Hello-World"
    assert repository.description == "My first repository on GitHub!"
    assert repository.homepage is None
    assert repository.default_branch == "master"
    assert repository.archived is False
    assert repository.owner == User.from_snapshot(make_owner_payload(), endpoint=ENDPOINT)
    assert repository.web_url == "https://github.com/octocat/Hello-World"


@pytest.mark.unit
def test_repository_without_owner_object_fails_fast() -> None:
    payload = make_repo_payload()
    payload["owner"] = "octocat"

    with pytest.raises(GitHubSnapshotError) as exc_info:
        Repository.from_snapshot(payload, endpoint=ENDPOINT)

    assert exc_info.value.key == "owner"


@pytest.mark.unit
def test_repository_archived_must_be_boolean() -> None:
    payload = make_repo_payload()
    payload["archived"] = "false"

    with pytest.raises(GitHubSnapshotError):
        Repository.from_snapshot(payload, endpoint=ENDPOINT)


@pytest.mark.unit
def test_branch_keeps_identity_from_lookup() -> None:
    branch = Branch.from_snapshot(
        make_branch_payload("develop"),
        owner_login="o",
        repository_name="r",
        endpoint=ENDPOINT,
    )

    assert branch == Branch(owner_login="o", repository_name="r", name="develop")


@pytest.mark.unit
def test_file_reads_contents_entry() -> None:
    entry = File.from_snapshot(
        make_content_payload("docs/readme.md", size=42),
        owner_login="o",
        repository_name="r",
        branch="main",
        endpoint=ENDPOINT,
    )

    assert entry.name == "readme.md"
    assert entry.path == "docs/readme.md"
    assert entry.type == "file"
    assert entry.is_file
    assert not entry.is_dir
    assert entry.download_url == "https://raw.githubusercontent.com/o/r/main/docs/readme.md"
    assert entry.sha == "3d21ec53a331a6f037a91c368710b99387d012c1"
    assert entry.size == 42
    assert entry.branch == "main"


@pytest.mark.unit
def test_file_keeps_unknown_remote_kinds() -> None:
    entry = File.from_snapshot(
        make_content_payload("vendor/lib", content_type="submodule"),
        owner_login="o",
        repository_name="r",
        branch=None,
        endpoint=ENDPOINT,
    )

    assert entry.type == "submodule"
    assert not entry.is_dir
    assert not entry.is_file


@pytest.mark.unit
def test_directory_download_is_rejected_before_any_request() -> None:
    entry = File.from_snapshot(
        make_content_payload("docs", content_type="dir", size=0),
        owner_login="o",
        repository_name="r",
        branch="main",
        endpoint=ENDPOINT,
    )

    with pytest.raises(GitHubInputError):
        entry.download(client=None)  # type: ignore[arg-type]


@pytest.mark.unit
def test_raw_file_without_branch_is_rejected() -> None:
    entry = File.from_snapshot(
        make_content_payload("docs/readme.md"),
        owner_login="o",
        repository_name="r",
        branch=None,
        endpoint=ENDPOINT,
    )

    with pytest.raises(GitHubInputError):
        entry.raw_file(client=None)  # type: ignore[arg-type]


@pytest.mark.unit
def test_raw_file_derive_sub_file_composes_path() -> None:
    base = RawFile(path=ResourcePath.of("https://raw.githubusercontent.com/").derive("o/r/main/docs"))

    derived = base.derive_sub_file("guide/intro.md")

    assert derived.url == "https://raw.githubusercontent.com/o/r/main/docs/guide/intro.md"
    assert base.url == "https://raw.githubusercontent.com/o/r/main/docs"


@pytest.mark.unit
def test_entities_are_immutable() -> None:
    user = User.from_snapshot(make_user_payload(), endpoint=ENDPOINT)

    with pytest.raises(AttributeError):
        user.login = "someone-else"  # type: ignore[misc]
