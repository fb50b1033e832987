"""
Rules Enforcer CLI Entry Point

Usage:
    mcp-rules-enforcer                      # serve over stdio (default)
    mcp-rules-enforcer serve --no-auto-inject
    mcp-rules-enforcer --rule-root ./docs show
    mcp-rules-enforcer show --raw
"""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console
from rich.markdown import Markdown

from rules_enforcer.config.logging import configure_logging
from rules_enforcer.config.settings import RulesSettings
from rules_enforcer.mcp_server.handlers import RulesHandlers
from rules_enforcer.mcp_server.stdio import run_stdio
from rules_enforcer.store import RulesStore

app = typer.Typer(
    name="mcp-rules-enforcer",
    help="Zero-tool MCP server that serves a markdown rules file to AI agents.",
    add_completion=False,
    invoke_without_command=True,
)

console = Console()


def _settings(ctx: typer.Context) -> RulesSettings:
    return ctx.obj["settings"]


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    rule_root: Optional[str] = typer.Option(
        None,
        "--rule-root",
        "-r",
        help="Rules file (*.md) or directory containing rules.md. Overrides RULE_ROOT.",
    ),
    name: Optional[str] = typer.Option(
        None,
        "--name",
        "-n",
        help="Server name reported to MCP clients. Overrides MCP_SERVER_NAME.",
    ),
    auto_inject: Optional[bool] = typer.Option(
        None,
        "--auto-inject/--no-auto-inject",
        help="Enable or disable the gated auto-inject prompt. Overrides AUTO_INJECT.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging on stderr.",
    ),
):
    """Resolve settings, configure logging, and serve when no command is given."""
    settings = RulesSettings.from_env().with_overrides(
        rule_root=rule_root, server_name=name, auto_inject=auto_inject
    )
    configure_logging(level=settings.log_level, verbose=verbose)
    ctx.obj = {"settings": settings}

    if ctx.invoked_subcommand is None:
        raise typer.Exit(code=run_stdio(settings))


@app.command("serve", help="Start the MCP server on stdio.")
def serve(ctx: typer.Context):
    raise typer.Exit(code=run_stdio(_settings(ctx)))


@app.command("show", help="Print the rules exactly as the rules://current resource serves them.")
def show(
    ctx: typer.Context,
    raw: bool = typer.Option(False, "--raw", help="Print the unformatted rules text."),
):
    settings = _settings(ctx)
    store = RulesStore(settings.rules_path)
    result = store.get()

    if raw:
        console.print(result.text, markup=False, highlight=False)
    else:
        console.print(Markdown(RulesHandlers(store, settings).read_rules()))

    if not result.ok:
        raise typer.Exit(code=1)


def entry_point() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    entry_point()
