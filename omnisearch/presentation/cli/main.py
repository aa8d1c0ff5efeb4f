"""
Command-line entry point.

Each command runs a single search through the same orchestrator the UI
uses, then renders the final state.
"""

import asyncio
from typing import Optional

import click

from ...core.entities import InputType, SearchType
from ..containers.search_container import SearchContainer
from ..views.results_view import SortOption
from .commands.search_commands import SearchCommand
from .handlers.cli_handler import CommandResult


async def _run_search(
    ctx: click.Context,
    input_type: InputType,
    value: str,
    search_type: Optional[str],
    sort: str,
    page: int,
    as_json: bool
) -> CommandResult:
    async with SearchContainer(
        config_dir=ctx.obj["config_dir"],
        environment=ctx.obj["environment"]
    ) as session:
        command = SearchCommand(
            formatter=session.formatter,
            orchestrator=session.orchestrator,
            controller=session.controller
        )
        return await command.execute(
            input_type=input_type,
            value=value,
            search_type=search_type,
            sort=sort,
            page=page,
            as_json=as_json
        )


def _search_options(func):
    func = click.option(
        "--json", "as_json", is_flag=True,
        help="Print the final search state as JSON."
    )(func)
    func = click.option(
        "--page", type=click.IntRange(min=1), default=1, show_default=True,
        help="Result page to show."
    )(func)
    func = click.option(
        "--sort", type=click.Choice([option.value for option in SortOption]),
        default=SortOption.RELEVANCE.value, show_default=True,
        help="Result ordering."
    )(func)
    func = click.option(
        "--type", "search_type", type=click.Choice([t.value for t in SearchType]),
        default=None, help="Result category; defaults to the configured type."
    )(func)
    return func


def _invoke(ctx: click.Context, input_type: InputType, value: str, **options) -> None:
    try:
        result = asyncio.run(_run_search(ctx, input_type, value, **options))
    except (FileNotFoundError, ValueError) as e:
        raise click.ClickException(f"Invalid configuration: {e}")
    ctx.exit(result.exit_code)


@click.group()
@click.option(
    "--config-dir", type=click.Path(file_okay=False, exists=True), default=None,
    envvar="OMNISEARCH_CONFIG_DIR",
    help="Directory holding base.yaml and <env>.yaml; built-in defaults when omitted."
)
@click.option(
    "--env", "environment", default=None, envvar="APP_ENV",
    help="Configuration environment name."
)
@click.version_option(package_name="omnisearch")
@click.pass_context
def cli(ctx: click.Context, config_dir: Optional[str], environment: Optional[str]) -> None:
    """Multi-modal search client."""
    ctx.ensure_object(dict)
    ctx.obj["config_dir"] = config_dir
    ctx.obj["environment"] = environment


@cli.command()
@click.argument("query")
@_search_options
@click.pass_context
def text(ctx: click.Context, query: str, **options) -> None:
    """Search for typed text."""
    _invoke(ctx, InputType.TEXT, query, **options)


@cli.command()
@click.argument("transcript")
@_search_options
@click.pass_context
def voice(ctx: click.Context, transcript: str, **options) -> None:
    """Search for a voice transcript."""
    _invoke(ctx, InputType.VOICE, transcript, **options)


@cli.command()
@click.argument("path", type=click.Path(dir_okay=False))
@_search_options
@click.pass_context
def image(ctx: click.Context, path: str, **options) -> None:
    """Search for an image file."""
    _invoke(ctx, InputType.IMAGE, path, **options)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
