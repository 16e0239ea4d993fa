"""Typer CLI for browsing the GitHub resource graph."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable
from dataclasses import asdict, dataclass
from typing import Annotated, TypeVar

import httpx
import typer

from ghgraph.client import GitHubGraphClient, build_graph_client
from ghgraph.config import ClientConfig
from ghgraph.entities import Branch, File, Repository, User
from ghgraph.errors import GitHubInputError, GitHubSnapshotError
from ghgraph.result import NotFound, Result

app = typer.Typer(help="Navigate GitHub users, repositories, branches and files.")

T = TypeVar("T")


@dataclass(slots=True)
class CliState:
    """Options shared by every command."""

    token: str | None
    output_json: bool
    trust_env: bool


def parse_repo_full_name(repo_full_name: str) -> tuple[str, str]:
    """Parse and validate repository input in owner/repo format."""
    owner, separator, repo = repo_full_name.strip().partition("/")
    if not separator or not owner or not repo or "/" in repo:
        raise GitHubInputError(
            f"Invalid repo '{repo_full_name}'. Expected format is owner/repo."
        )
    return owner, repo


@app.callback()
def main(
    ctx: typer.Context,
    token: Annotated[
        str | None,
        typer.Option(help="GitHub token; defaults to GITHUB_TOKEN or GH_TOKEN."),
    ] = None,
    output_json: Annotated[
        bool, typer.Option("--json", help="Print snapshots as JSON.")
    ] = False,
    trust_env: Annotated[
        bool,
        typer.Option(
            "--trust-env/--no-trust-env",
            help="Use proxy/SSL environment variables from the current shell.",
        ),
    ] = True,
    verbose: Annotated[bool, typer.Option(help="Log requests and responses.")] = False,
) -> None:
    """Navigate GitHub users, repositories, branches and files."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = CliState(token=token, output_json=output_json, trust_env=trust_env)


def _client(state: CliState) -> GitHubGraphClient:
    config = ClientConfig.from_env().model_copy(update={"trust_env": state.trust_env})
    return build_graph_client(config, token=state.token)


def _fail(message: str) -> typer.Exit:
    typer.echo(message, err=True)
    return typer.Exit(code=1)


def _require(result: Result[T]) -> T:
    if isinstance(result, NotFound):
        raise _fail(f"Not found: {result.url} (status={result.status_code})")
    return result.value


def _describe(entity: User | Repository | Branch | File) -> str:
    if isinstance(entity, User):
        return (
            f"{entity.login} (id={entity.id}) name={entity.display_name} "
            f"repos={entity.repos_size} gists={entity.gists_size}"
        )
    if isinstance(entity, Repository):
        archived = " [archived]" if entity.archived else ""
        return f"{entity.full_name} default={entity.default_branch}{archived}"
    if isinstance(entity, Branch):
        return entity.name
    kind = "d" if entity.is_dir else "-"
    return f"{kind} {entity.size:>10} {entity.path}"


def _emit(state: CliState, entity: User | Repository | Branch | File) -> None:
    if state.output_json:
        typer.echo(json.dumps(asdict(entity), indent=2))
        return
    typer.echo(_describe(entity))


def _emit_all(state: CliState, entities: Iterable[User | Repository | Branch | File]) -> None:
    rows = list(entities)
    if state.output_json:
        typer.echo(json.dumps([asdict(entity) for entity in rows], indent=2))
        return
    for entity in rows:
        typer.echo(_describe(entity))


def _run(ctx: typer.Context, action: Callable[[GitHubGraphClient], None]) -> None:
    state: CliState = ctx.obj
    try:
        with _client(state) as client:
            action(client)
    except GitHubInputError as error:
        raise _fail(f"Invalid input: {error}") from error
    except GitHubSnapshotError as error:
        raise _fail(f"Malformed response from {error.endpoint}: {error}") from error
    except httpx.HTTPError as error:
        raise _fail(f"Request failed: network error ({error}).") from error


@app.command("user")
def user_command(
    ctx: typer.Context,
    login: Annotated[str, typer.Argument(help="User login.")],
) -> None:
    """Show a user profile."""
    _run(ctx, lambda client: _emit(ctx.obj, _require(client.user(login))))


@app.command("repos")
def repos_command(
    ctx: typer.Context,
    owner: Annotated[str, typer.Argument(help="Owner login.")],
) -> None:
    """List a user's repositories (first page)."""
    _run(ctx, lambda client: _emit_all(ctx.obj, _require(client.repositories_of(owner))))


@app.command("repo")
def repo_command(
    ctx: typer.Context,
    repo: Annotated[str, typer.Argument(help="Repository in owner/repo format.")],
) -> None:
    """Show a repository."""

    def action(client: GitHubGraphClient) -> None:
        owner, name = parse_repo_full_name(repo)
        _emit(ctx.obj, _require(client.repository(owner, name)))

    _run(ctx, action)


@app.command("branches")
def branches_command(
    ctx: typer.Context,
    repo: Annotated[str, typer.Argument(help="Repository in owner/repo format.")],
) -> None:
    """List a repository's branches (first page)."""

    def action(client: GitHubGraphClient) -> None:
        owner, name = parse_repo_full_name(repo)
        _emit_all(ctx.obj, _require(client.branches_of(owner, name)))

    _run(ctx, action)


@app.command("branch")
def branch_command(
    ctx: typer.Context,
    repo: Annotated[str, typer.Argument(help="Repository in owner/repo format.")],
    name: Annotated[str, typer.Argument(help="Branch name.")],
) -> None:
    """Show a single branch."""

    def action(client: GitHubGraphClient) -> None:
        owner, repo_name = parse_repo_full_name(repo)
        _emit(ctx.obj, _require(client.branch(owner, repo_name, name)))

    _run(ctx, action)


@app.command("ls")
def ls_command(
    ctx: typer.Context,
    repo: Annotated[str, typer.Argument(help="Repository in owner/repo format.")],
    path: Annotated[str | None, typer.Argument(help="Directory path.")] = None,
    ref: Annotated[str | None, typer.Option(help="Branch; defaults to the remote default.")] = None,
) -> None:
    """List a directory."""

    def action(client: GitHubGraphClient) -> None:
        owner, name = parse_repo_full_name(repo)
        _emit_all(ctx.obj, _require(client.files_of(owner, name, ref, path)))

    _run(ctx, action)


@app.command("stat")
def stat_command(
    ctx: typer.Context,
    repo: Annotated[str, typer.Argument(help="Repository in owner/repo format.")],
    path: Annotated[str, typer.Argument(help="File path.")],
    ref: Annotated[str | None, typer.Option(help="Branch; defaults to the remote default.")] = None,
) -> None:
    """Show a single contents entry."""

    def action(client: GitHubGraphClient) -> None:
        owner, name = parse_repo_full_name(repo)
        _emit(ctx.obj, _require(client.file(owner, name, ref, path)))

    _run(ctx, action)


@app.command("cat")
def cat_command(
    ctx: typer.Context,
    repo: Annotated[str, typer.Argument(help="Repository in owner/repo format.")],
    branch: Annotated[str, typer.Argument(help="Branch name.")],
    path: Annotated[str, typer.Argument(help="File path.")],
) -> None:
    """Print a file from the raw-content host."""

    def action(client: GitHubGraphClient) -> None:
        owner, name = parse_repo_full_name(repo)
        content = _require(client.raw_file(owner, name, branch, path).fetch(client))
        typer.echo(content.decode("utf-8", errors="replace"), nl=False)

    _run(ctx, action)
