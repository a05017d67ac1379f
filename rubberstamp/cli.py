"""
CLI for rubberstamp.

With no subcommand, runs as a Claude Code PreToolUse hook: reads the
hook input from stdin and prints the decision to stdout. The install
and uninstall subcommands manage the hook entry in settings.json.
"""

import sys
import logging

import click
from rich.console import Console
from rich.markup import escape

from rubberstamp import __version__
from rubberstamp.envelope import (
    EDIT_TOOL,
    EnvelopeError,
    evaluate,
    parse_hook_input,
    render_output,
    should_classify,
)
from rubberstamp.hooklog import log_message
from rubberstamp.settings import InstallError, install_hook, uninstall_hook


console = Console()
err_console = Console(stderr=True)
logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _fail(message: str):
    err_console.print(escape(message), highlight=False, soft_wrap=True)
    sys.exit(1)


@click.group(invoke_without_command=True)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.version_option(version=__version__, prog_name="rubberstamp")
@click.pass_context
def main(ctx: click.Context, verbose: bool):
    """rubberstamp - auto-approve safe TypeScript edits in Claude Code.

    Without a subcommand, reads a PreToolUse hook event from stdin.
    """
    setup_logging(verbose)
    if ctx.invoked_subcommand is None:
        run_hook_mode()


def run_hook_mode():
    """Classify one Edit event and print the decision.

    Non-Edit tools and non-TypeScript files exit 0 with no output.
    """
    try:
        raw = sys.stdin.read()
    except (OSError, UnicodeDecodeError) as e:
        _fail(f"Error reading from stdin: {e}")

    try:
        hook_input = parse_hook_input(raw)
    except EnvelopeError as e:
        _fail(str(e))

    tool_name = hook_input.tool_name
    file_path = hook_input.tool_input.file_path
    log_message(f"INPUT: Received {tool_name} tool call for file: {file_path}")

    if not should_classify(hook_input):
        if tool_name != EDIT_TOOL:
            log_message(f"SKIP: Not an Edit tool call ({tool_name})")
        else:
            log_message(f"SKIP: Not a TypeScript file ({file_path})")
        sys.exit(0)

    verdict = evaluate(hook_input)
    logger.debug("Verdict for %s: %s", file_path, verdict)

    decision = "approve" if verdict.approved else "undefined"
    reason = verdict.reason or "No reason provided"
    log_message(f"OUTPUT: Decision: {decision}, Reason: {reason}")

    try:
        output = render_output(verdict)
    except ValueError as e:
        _fail(f"Error serializing output: {e}")

    click.echo(output)


@main.command()
@click.argument("location")
def install(location: str):
    """Install the hook in Claude Code settings.

    LOCATION is 'user' for ~/.claude/settings.json or 'project' for
    .claude/settings.json.
    """
    try:
        result = install_hook(location)
    except InstallError as e:
        _fail(f"Error installing hook: {e}")

    if result.replaced:
        console.print("Hook already exists in settings. Updating...")
    console.print(
        f"[green][OK][/green] Installed rubberstamp hook to: {escape(str(result.settings_path))}"
    )
    console.print(f"Hook command: {escape(result.command)}", highlight=False)


@main.command()
@click.argument("location")
def uninstall(location: str):
    """Remove the hook from Claude Code settings."""
    try:
        removed = uninstall_hook(location)
    except InstallError as e:
        _fail(f"Error uninstalling hook: {e}")

    if removed:
        console.print("[green][OK][/green] Removed rubberstamp hook")
    else:
        console.print("[yellow][-][/yellow] No rubberstamp hook found")


if __name__ == "__main__":
    main()
