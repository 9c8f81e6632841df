"""Typer application and CLI entry point for peergen.

This module wires the root Typer application, registers the built-in
sub-commands (``init``, ``sync``, ``plan``, ``config``), and installs the
global output options.

:func:`main` is the console-script entry point declared in
``pyproject.toml``. It installs a SIGINT handler, invokes the app, and maps
:class:`~peergen.exceptions.PeergenError` to its exit code. Any other
exception is written to a crash log under the data directory.

See Also:
    :mod:`peergen.config`: Configuration and convention resolution.
    :mod:`peergen.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from peergen import __version__
from peergen.commands.build import init_command, sync_command
from peergen.commands.config import config_app
from peergen.commands.plan import plan_command
from peergen.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="peergen",
    help="Synthesize Kotlin peer targets for a Swift package and link their build output.",
    no_args_is_help=True,
    add_completion=True,
    rich_markup_mode="rich",
)

app.command("init")(init_command)
app.command("sync")(sync_command)
app.command("plan")(plan_command)
app.add_typer(config_app, name="config", help="Configuration management.")


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"peergen {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress informational remarks."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmations."),
    output_file: Optional[str] = typer.Option(
        None, "-o", "--output", help="Write data output (guide, tables) to a file."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Installs the global :class:`~peergen.output.OutputManager` from the
    CLI flags, falling back to the ``output.format`` setting of the global
    config, and stores ``--force`` in ``ctx.obj``.
    """
    from peergen.exceptions import ConfigError
    from peergen.output import OutputFormat, OutputManager, set_output, warning

    config_problem: Optional[str] = None
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN
    else:
        fmt = OutputFormat.AUTO
        try:
            from peergen.config import load_global_config

            fmt = OutputFormat(load_global_config().output.format)
        except ConfigError as exc:
            config_problem = str(exc)
        except ValueError:
            config_problem = "Unknown output.format in global config; using auto"

    set_output(
        OutputManager(
            format=fmt,
            no_color=no_color,
            quiet=quiet,
            verbose=verbose,
            output_file=output_file,
        )
    )
    if config_problem:
        warning(config_problem)

    ctx.ensure_object(dict)
    ctx.obj["force"] = force


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write the current traceback to the data directory and return its path."""
    from peergen.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(traceback.format_exc())
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``peergen`` console script.

    :class:`~peergen.exceptions.PeergenError` exits with the error's
    ``exit_code``; anything else writes a crash log and exits with
    :data:`~peergen.exit_codes.EXIT_GENERIC_FAILURE`.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from peergen.exceptions import PeergenError
        from peergen.output import error

        if isinstance(exc, PeergenError):
            error(str(exc))
            sys.exit(exc.exit_code)
        log_path = _write_crash_log(exc)
        error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
