"""CLI for inspecting GitHub accounts, repositories and gists."""

import asyncio
import logging
from datetime import datetime

import click
from dotenv import load_dotenv

from lazyhub import Hub, HubConfig

logger = logging.getLogger(__name__)

DEFAULT_EVENT_AMOUNT = 20


def setup_logging(verbose: int) -> None:
    """Setup logging."""
    level = logging.DEBUG if verbose >= 2 else logging.INFO if verbose == 1 else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def build_hub(config: HubConfig) -> Hub:
    return Hub(config=config)


def run(ctx: click.Context, job) -> None:
    """Run a coroutine function taking the hub."""
    hub = build_hub(ctx.obj["config"])
    asyncio.run(job(hub))


# ============ CLI Group ============

@click.group()
@click.option("--token", envvar="GITHUB_TOKEN", help="GitHub token")
@click.option("--api-url", envvar="LAZYHUB_API_URL", help="API root or proxy URL")
@click.option("--cache-requests", is_flag=True, help="Reuse responses of repeated requests")
@click.option("--use-gh-cli", is_flag=True, help="Use gh cli credentials")
@click.option("-v", "--verbose", count=True, help="Verbosity (-v, -vv)")
@click.pass_context
def cli(
    ctx: click.Context,
    token: str | None,
    api_url: str | None,
    cache_requests: bool,
    use_gh_cli: bool,
    verbose: int,
) -> None:
    """Inspect GitHub entities."""
    load_dotenv()
    setup_logging(verbose)
    config = HubConfig.from_env(token=token, use_gh_cli=use_gh_cli)
    if api_url:
        config.api_url = api_url.rstrip("/")
    if cache_requests:
        config.cache_requests = True
    ctx.ensure_object(dict)
    ctx.obj["config"] = config


# ============ Commands ============

@cli.command()
@click.argument("login")
@click.option("-l", "--languages", is_flag=True, help="Show language totals")
@click.option("-r", "--repos", is_flag=True, help="List repositories")
@click.pass_context
def user(ctx, login, languages, repos):
    """Show a user or organization."""

    async def job(hub: Hub) -> None:
        account = await hub.get_user_by_name(login).await_ready()
        if not account.is_ready():
            raise click.ClickException(f"Could not load {login}")
        click.echo(f"{account.display_name} ({account.login})")
        click.echo(f"  Repos: {account.public_repos}  Gists: {account.public_gists}  Followers: {account.followers}")
        if repos:
            click.echo("\nRepositories:")
            for repo in await account.get_repositories():
                marker = " (fork)" if repo.fork else ""
                click.echo(f"  - {repo.full_name}{marker}")
        if languages:
            click.echo("\nLanguages:")
            totals = await account.get_languages()
            for language, count in sorted(totals.items(), key=lambda item: item[1], reverse=True):
                click.echo(f"  {language}: {count}")

    run(ctx, job)


@cli.command()
@click.argument("full_name")
@click.option("-f", "--file", "path", help="Print a file of the repository")
@click.pass_context
def repo(ctx, full_name, path):
    """Show a repository (OWNER/NAME)."""

    async def job(hub: Hub) -> None:
        repository = await hub.get_repository(full_name).await_ready()
        if not repository.is_ready():
            raise click.ClickException(f"Could not load {full_name}")
        click.echo(repository.full_name)
        if repository.description:
            click.echo(f"  {repository.description}")
        click.echo(f"  Stars: {repository.stargazers_count}  Language: {repository.language}")
        version = await repository.get_version()
        click.echo(f"  Version: {version or '-'}")
        if path:
            click.echo()
            click.echo(await repository.get_file_content(path))

    run(ctx, job)


@cli.command()
@click.argument("gist_id")
@click.pass_context
def gist(ctx, gist_id):
    """Show a gist and its files."""

    async def job(hub: Hub) -> None:
        item = await hub.get_gist(gist_id).await_ready()
        if not item.is_ready():
            raise click.ClickException(f"Could not load gist {gist_id}")
        click.echo(item.description or gist_id)
        for name in await item.get_file_names():
            click.echo(f"  - {name}")

    run(ctx, job)


@cli.command()
@click.argument("login")
@click.option("-s", "--since", type=click.DateTime(), help="Only events after this time (UTC)")
@click.option("-n", "--amount", type=int, default=DEFAULT_EVENT_AMOUNT, show_default=True)
@click.pass_context
def events(ctx, login, since: datetime | None, amount):
    """List recent public events of a user."""

    async def job(hub: Hub) -> None:
        account = await hub.get_user_by_name(login).await_ready()
        if not account.is_ready():
            raise click.ClickException(f"Could not load {login}")
        if since:
            items = await account.get_events_after(since)
        else:
            items = await account.get_events(amount)
        click.echo(f"Found {len(items)} events")
        for event in items:
            date = event.get_date()
            stamp = date.strftime("%Y-%m-%d %H:%M:%S") if date else "?"
            repo_name = event.repo.name if event.repo else "-"
            click.echo(f"  {stamp} {event.type} {repo_name}")

    run(ctx, job)


if __name__ == "__main__":
    cli()
