"""
CLI entry point for supygit — git commit, rollback and branch tools for coding agents.
"""

import json
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.table import Table

from supygit import __version__
from supygit.core.chat import ChatHistory
from supygit.core.commands import GitCommand
from supygit.core.errors import AutoCommitError, GitPluginError
from supygit.core.output import AgentOutput
from supygit.core.plugin import GitPlugin
from supygit.models.config import PluginConfig, config_path, load_config, save_config
from supygit.models.requests import BRANCH_ACTIONS
from supygit.models.result import CommandResult

console = Console()
console_err = Console(stderr=True)


def _get_plugin(ctx: click.Context) -> GitPlugin:
    """Build the plugin once per invocation from the global options."""
    obj = ctx.ensure_object(dict)
    if "plugin" not in obj:
        repo = Path(obj.get("repo") or ".")
        config_file = obj.get("config")
        config = load_config(Path(config_file) if config_file else None, root=repo)

        chat = None
        history = obj.get("history")
        if history:
            chat = ChatHistory.load(history)

        obj["plugin"] = GitPlugin(
            config,
            working_dir=repo,
            chat=chat,
            output=AgentOutput(console=console_err, quiet=obj.get("quiet", False)),
        )
    return obj["plugin"]


def _finish(result: CommandResult) -> None:
    """Print the final result line; exit 1 on failure."""
    if result.ok:
        console.print(escape(result.data or ""))
        return
    console_err.print(f"[red]Error:[/red] {escape(result.error or 'unknown error')}")
    sys.exit(1)


# =============================================================================
# Root CLI Group
# =============================================================================


@click.group()
@click.version_option(version=__version__, prog_name="supygit")
@click.option("--debug", is_flag=True, hidden=True, help="Enable debug logging")
@click.option(
    "--repo",
    "-C",
    type=click.Path(file_okay=False),
    default=None,
    help="Repository to operate on (default: current directory)",
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Config file (default: <repo>/.supygit/config.yaml)",
)
@click.option(
    "--history",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Session JSONL used as context when generating commit messages",
)
@click.option("--quiet", "-q", is_flag=True, help="Hide progress lines")
@click.pass_context
def cli(
    ctx: click.Context,
    debug: bool,
    repo: str | None,
    config_file: str | None,
    history: str | None,
    quiet: bool,
):
    """
    Supygit — git commit, rollback and branch tools for coding agents.

    \b
        supygit git branch create feature-x   # the /git chat command
        supygit commit "Fix parser"            # commit everything
        supygit rollback --steps 2             # hard-reset two commits back
        supygit tools                          # tool schemas for the LLM
        supygit test                           # run suites, auto-commit on success
    """
    ctx.ensure_object(dict)
    ctx.obj.update(
        {"debug": debug, "repo": repo, "config": config_file, "history": history, "quiet": quiet}
    )

    if debug:
        import logging

        logging.basicConfig(level=logging.DEBUG, format="[%(levelname)s] %(name)s: %(message)s")
        logging.getLogger("LiteLLM").setLevel(logging.WARNING)
        logging.getLogger("httpx").setLevel(logging.WARNING)


# =============================================================================
# Configuration
# =============================================================================


@cli.command()
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing config")
@click.pass_context
def init(ctx: click.Context, force: bool):
    """
    Write a default .supygit/config.yaml into the repository.
    """
    root = Path(ctx.obj.get("repo") or ".")
    path = config_path(root)

    if path.exists() and not force:
        console.print(f"[yellow]Config already exists:[/yellow] {escape(str(path))}")
        console.print("[dim]Use --force to overwrite[/dim]")
        return

    save_config(PluginConfig(), root)
    console.print(f"[green]Created[/green] {escape(str(path))}")


# =============================================================================
# Git Commands
# =============================================================================


@cli.command("git", context_settings={"ignore_unknown_options": True})
@click.argument("line", nargs=-1, type=click.UNPROCESSED)
@click.option("--guide", is_flag=True, help="Show the full /git command guide")
@click.pass_context
def git_command(ctx: click.Context, line: tuple[str, ...], guide: bool):
    """
    Run a /git command line.

    \b
    Examples:
        supygit git commit Fix authentication bug
        supygit git rollback 3
        supygit git branch switch main
    """
    if guide:
        console.print(Markdown(GitCommand.help))
        return

    plugin = _get_plugin(ctx)
    _finish(plugin.command.execute(" ".join(line)))


@cli.command()
@click.argument("message", nargs=-1)
@click.pass_context
def commit(ctx: click.Context, message: tuple[str, ...]):
    """
    Stage all changes and commit them.

    Without MESSAGE, a message is generated from the chat history
    (see --history) or the configured default is used.
    """
    plugin = _get_plugin(ctx)
    _finish(plugin.operations.commit(" ".join(message) or None))


@cli.command()
@click.option("--commit", "commit_hash", default=None, help="Commit hash to reset to")
@click.option("--steps", "-n", type=click.IntRange(min=1), default=None, help="Commits to roll back")
@click.pass_context
def rollback(ctx: click.Context, commit_hash: str | None, steps: int | None):
    """
    Hard-reset to a previous commit (default: one commit back).

    Refuses to run when there are uncommitted changes.
    """
    plugin = _get_plugin(ctx)
    _finish(plugin.operations.rollback(commit=commit_hash, steps=steps))


@cli.command()
@click.argument(
    "action", required=False, type=click.Choice(BRANCH_ACTIONS, case_sensitive=False)
)
@click.argument("name", required=False)
@click.pass_context
def branch(ctx: click.Context, action: str | None, name: str | None):
    """
    List, show, create, switch or delete branches.

    Without ACTION, shows the current branch and the local branches.
    """
    plugin = _get_plugin(ctx)
    _finish(plugin.operations.branch(action, name))


# =============================================================================
# Tool Commands
# =============================================================================


@cli.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def tools(as_json: bool):
    """List the git tools exposed to the LLM."""
    from supygit.core.tools import get_git_tools

    definitions = get_git_tools()

    if as_json:
        click.echo(json.dumps(definitions, indent=2))
        return

    table = Table(title="Git Tools")
    table.add_column("Tool", style="cyan")
    table.add_column("Description")
    table.add_column("Parameters", style="dim")

    for tool in definitions:
        func = tool["function"]
        params = func.get("parameters", {})
        required = set(params.get("required", []))
        names = [
            f"{p}{'' if p in required else '?'}" for p in params.get("properties", {})
        ]
        table.add_row(func["name"], func.get("description", ""), ", ".join(names))

    console.print(table)


@cli.command("run-tool")
@click.argument("tool_name")
@click.argument("arguments", required=False, default="{}")
@click.option("--json", "as_json", is_flag=True, help="Print the full result as JSON")
@click.pass_context
def run_tool(ctx: click.Context, tool_name: str, arguments: str, as_json: bool):
    """
    Execute a git tool call.

    \b
    Examples:
        supygit run-tool git__branch '{"action": "current"}'
        supygit run-tool git__rollback '{"steps": 2}'
    """
    plugin = _get_plugin(ctx)
    result = plugin.execute_tool(tool_name, arguments)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if not result.ok:
            sys.exit(1)
        return

    _finish(result)


# =============================================================================
# Testing
# =============================================================================


@cli.command()
@click.pass_context
def test(ctx: click.Context):
    """
    Run the configured test suites, then auto-commit if they all passed.

    Exits 1 when any suite failed, even if there was nothing to commit.
    """
    plugin = _get_plugin(ctx)

    results: dict[str, bool] = {}
    if plugin.suites:
        results = plugin.run_suites()
        table = Table(title="Test Suites")
        table.add_column("Suite", style="cyan")
        table.add_column("Result")
        for name, passed in results.items():
            table.add_row(name, "[green]passed[/green]" if passed else "[red]failed[/red]")
        console.print(table)
    else:
        console.print("[dim]No test suites configured[/dim]")

    try:
        if not plugin.refresh_dirty():
            console.print("[dim]Nothing to commit[/dim]")
            if not all(results.values()):
                sys.exit(1)
            return
        plugin.hooks()["after_testing"]()
    except GitPluginError as e:
        console_err.print(f"[red]Error:[/red] {escape(e.message)}")
        sys.exit(1)
    except AutoCommitError:
        sys.exit(1)

    if plugin.runner.dirty:
        # Suites failed; the hook already reported it
        sys.exit(1)
    console.print("Changes committed")


if __name__ == "__main__":
    cli()
