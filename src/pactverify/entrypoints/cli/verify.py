"""``pactverify verify``: verify a provider against one contract file.

Exit status
- 0 when every selected interaction passed (or none were selected).
- 1 when at least one interaction failed; the report lists each one.
- 1 with a message on stderr for configuration or contract-loading errors.
"""

from __future__ import annotations

import click

from pactverify import config
from pactverify.bootstrap import bootstrap
from pactverify.domain.errors import (
    AggregateVerificationFailure,
    ConfigurationError,
    PactVerifyError,
)
from pactverify.interfaces.redactor import RedactorMode

from .helpers import error, print_report, success, warn

MISSING_BASE_URL_MSG = (
    "The provider base URL is not set.\n\n"
    "Pass --provider-base-url, or set it before running this command, e.g.:\n"
    f"  export {config.PROVIDER_BASE_URL_ENV}='http://localhost:8000'"
)


@click.command()
@click.argument("location")
@click.option(
    "--consumer",
    "consumer_name",
    required=True,
    envvar="PACTVERIFY_CONSUMER",
    show_envvar=True,
    help="Name of the consumer whose contract is verified.",
)
@click.option(
    "--provider",
    "provider_name",
    required=True,
    envvar="PACTVERIFY_PROVIDER",
    show_envvar=True,
    help="Name of the provider under test.",
)
@click.option(
    "--provider-base-url",
    "base_url",
    envvar=config.PROVIDER_BASE_URL_ENV,
    show_envvar=True,
    help="Base URL the recorded request paths are resolved against.",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help=f"Per-request timeout in seconds (default {config.DEFAULT_TIMEOUT}).",
)
@click.option(
    "--description",
    default=None,
    help="Only verify interactions with exactly this description.",
)
@click.option(
    "--state",
    "provider_state",
    default=None,
    help="Only verify interactions with exactly this provider state.",
)
@click.pass_context
def verify(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    location: str,
    consumer_name: str,
    provider_name: str,
    base_url: str | None,
    timeout: float | None,
    description: str | None,
    provider_state: str | None,
) -> None:
    """Verify that a provider honours the contract at LOCATION (path or URL).

    Provider states named by interactions are not set up by this command;
    register callbacks programmatically when interactions depend on them.
    """
    redactor_mode = RedactorMode((ctx.obj or {}).get("redactor_mode", "lenient"))
    try:
        container = bootstrap(
            consumer_name=consumer_name,
            provider_name=provider_name,
            location=location,
            base_url=base_url,
            timeout=timeout,
            redactor_mode=redactor_mode,
        )
    except config.ProviderUrlNotSetError as e:
        raise click.ClickException(MISSING_BASE_URL_MSG) from e
    except (config.InvalidTimeoutError, ConfigurationError) as e:
        raise click.ClickException(str(e)) from e

    with container:
        click.echo(
            f"Verifying {container.redactor.sanitize_url(location)} against "
            f"{container.redactor.sanitize_url(str(container.http_client.base_url))}",
            err=True,
        )
        try:
            report = container.verifier.verify(description, provider_state)
        except AggregateVerificationFailure as e:
            print_report(e.report)
            error(f"{len(e.report.failed)} of {e.report.total} interaction(s) failed.")
            ctx.exit(1)
        except PactVerifyError as e:
            raise click.ClickException(str(e)) from e

    if not report.total:
        warn("No interactions matched the given filters.")
    else:
        print_report(report)
    success(f"{report.passed_count}/{report.total} interaction(s) passed.")
