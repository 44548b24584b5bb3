"""Domain-layer error definitions."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pactverify.domain.report import VerificationReport

# ============================================================================
#                           General errors
# ============================================================================


class PactVerifyError(Exception):
    """Base class for all pactverify errors."""


class ConfigurationError(PactVerifyError):
    """Raised when the verifier is configured with invalid or out-of-order calls."""


# ============================================================================
#                       Contract loading errors
# ============================================================================


class FileAccessError(PactVerifyError):
    """Raised when a contract file cannot be read from its location."""

    def __init__(self, location: str, reason: str | None = None) -> None:
        message = f"Contract file could not be retrieved using uri '{location}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.location = location
        self.reason = reason


class ContractFormatError(PactVerifyError):
    """Raised when a contract document cannot be decoded."""

    def __init__(self, reason: str, location: str | None = None) -> None:
        where = f" ({location})" if location else ""
        super().__init__(f"Invalid contract file{where}: {reason}")
        self.location = location
        self.reason = reason


class InvalidBodyError(PactVerifyError):
    """Raised when a body is built with neither a structured value nor raw text."""


# ============================================================================
#                   Per-interaction (hard) errors
# ============================================================================


class InteractionError(PactVerifyError):
    """Base class for errors recorded against a single interaction.

    These never abort a verification run; the orchestrator records them and
    moves on to the next interaction.
    """


class StateError(InteractionError):
    """Raised when a provider-state setup or teardown callback fails.

    Attributes:
        state: The provider state name, or None for consumer-wide callbacks.
        phase: Either "setup" or "teardown".
    """

    def __init__(self, state: str | None, phase: str, cause: BaseException) -> None:
        target = f"provider state '{state}'" if state else "consumer-wide state"
        super().__init__(f"{phase.capitalize()} of {target} failed: {cause!r}")
        self.state = state
        self.phase = phase
        self.cause = cause


class ProviderRequestError(InteractionError):
    """Raised when the provider cannot be reached, times out, or the client fails."""

    def __init__(self, method: str, path: str, reason: str) -> None:
        super().__init__(f"Request {method} {path} failed: {reason}")
        self.method = method
        self.path = path
        self.reason = reason


class MalformedBodyError(InteractionError):
    """Raised when a body claims a JSON content type but cannot be parsed."""

    def __init__(self, content_type: str, reason: str) -> None:
        super().__init__(f"Body declared as '{content_type}' is not valid JSON: {reason}")
        self.content_type = content_type
        self.reason = reason


# ============================================================================
#                       Verification outcome
# ============================================================================


class AggregateVerificationFailure(PactVerifyError):
    """Raised once at the end of a run when at least one interaction failed.

    Attributes:
        report: The finalized report enumerating every failing interaction.
    """

    def __init__(self, report: VerificationReport) -> None:
        super().__init__(report.render())
        self.report = report
