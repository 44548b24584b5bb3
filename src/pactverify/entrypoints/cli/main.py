"""pactverify CLI entry point.

Defines the top-level ``pactverify`` command (via Click-Extra) and registers
its subcommands.

Currently available commands
- ``pactverify verify`` verifies a provider against a contract file.

Notes
- The CLI version is sourced from `pactverify.__version__` and displayed
  automatically by Click-Extra (``--version``).
- Logging is configured here once for every subcommand: a Rich console
  handler on stderr plus an optional flight recorder.

Examples
    $ pactverify --version
    $ pactverify -v verify pacts/order-ui-order-api.json \\
        --consumer order-ui --provider order-api \\
        --provider-base-url http://localhost:8000
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import click
import click_extra as clickx
from platformdirs import user_log_dir

from pactverify import __version__
from pactverify.logging import config_console_handler, config_flight_recorder, log_startup

from .helpers import parse_log_level
from .verify import verify as verify_command

if TYPE_CHECKING:
    from logging import Handler

logger = logging.getLogger(__name__)


HELP = """pactverify command-line interface.

    Replays the interactions a consumer recorded in a contract (pact) file
    against a running provider, and reports every response that does not
    honour the consumer's expectations.
    """


@clickx.extra_group(
    version=__version__,
    help=HELP,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.TimerOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
)
@click.option(
    "--verbose",
    "-v",
    "verbose_count",
    count=True,
    help="Increase the default WARNING verbosity by one level per repetition.",
    default=0,
)
@click.option(
    "--quiet",
    "-q",
    "quiet_count",
    count=True,
    help="Decrease the default WARNING verbosity by one level per repetition.",
    default=0,
)
@click.option(
    "--debug/--no-debug",
    is_flag=True,
    help="Enable debug mode (timestamps, logger names and source locations).",
    default=False,
)
@click.option(
    "--log-path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path of the flight recorder file.",
    default=Path(user_log_dir("pactverify", appauthor=False, ensure_exists=True))
    / "latest.log",
    envvar="PACTVERIFY_LOG_PATH",
    show_default=True,
    show_envvar=True,
)
@click.option(
    "--flight-recorder/--no-flight-recorder",
    "flight_recorder",
    is_flag=True,
    help=(
        "Keep the last DEBUG records in memory (including replayed requests and "
        "responses, with secrets redacted) and write them to --log-path when a "
        "WARNING/ERROR occurs. Console verbosity is unchanged."
    ),
    default=True,
    show_envvar=True,
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_log_level,
    help=(
        "Set MINIMUM LEVEL for specific LOGGERS (NAME=LEVEL). Applies to both "
        "console and flight recorder. Repeatable (e.g. -L httpx=INFO) or via "
        "PACTVERIFY_LOGGER_LEVELS (comma/space list)."
    ),
    default=("httpx=WARNING", "httpcore=WARNING"),
    show_default=True,
    show_envvar=True,
)
@click.option(
    "--redactor-mode",
    "redactor_mode",
    type=click.Choice(["lenient", "strict"], case_sensitive=False),
    help=(
        "Redaction applied to logged headers and URLs. 'lenient' (default) hides "
        "credentials, tokens and cookies; 'strict' also hides user identifiers."
    ),
    default="lenient",
    show_envvar=True,
    show_default=True,
)
@clickx.pass_context
def pactverify(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    verbose_count: int,
    quiet_count: int,
    debug: bool,
    log_path: Path,
    flight_recorder: bool,
    logger_levels: dict[str, int],
    redactor_mode: str,
) -> None:
    """pactverify command-line interface."""

    # 0) compute effective verbosity
    level = logging.WARNING - (10 * verbose_count) + (10 * quiet_count)
    level = max(logging.DEBUG, min(logging.CRITICAL, level))

    # 1) console handler, plus the flight recorder when enabled
    use_color = ctx.color is not False  # None or True => allow color
    handlers: list[Handler] = [
        config_console_handler(level=level, debug_mode=debug, color=use_color)
    ]
    if flight_recorder:
        handlers.append(config_flight_recorder(path=log_path))

    # 2) root logger captures everything; handlers filter
    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)
    for name, lvl in logger_levels.items():
        logging.getLogger(name).setLevel(lvl)

    log_startup(
        logger,
        app_version=__version__,
        level=level,
        handlers=handlers,
        log_path=log_path,
        flight_recorder=flight_recorder,
        logger_levels=logger_levels,
        redactor_mode=redactor_mode,
    )

    ctx.ensure_object(dict)
    ctx.obj["redactor_mode"] = redactor_mode.lower()

    # flush and close handlers after the subcommand returns
    ctx.call_on_close(logging.shutdown)


pactverify.add_command(verify_command)
