"""Verification report produced once per verification run."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pactverify.domain.mismatches import Mismatch


class OutcomeStatus(Enum):
    """Enumeration of per-interaction outcomes."""

    PASSED = "passed"
    FAILED = "failed"
    ERRORED = "errored"


@dataclass(frozen=True)
class InteractionOutcome:
    """Outcome of replaying one interaction.

    An outcome carrying an `error` is a hard error even when mismatches were
    also recorded (e.g. the comparison ran but the teardown failed).
    """

    description: str
    provider_state: str | None = None
    mismatches: tuple[Mismatch, ...] = ()
    error: Exception | None = None

    @property
    def status(self) -> OutcomeStatus:
        if self.error is not None:
            return OutcomeStatus.ERRORED
        if self.mismatches:
            return OutcomeStatus.FAILED
        return OutcomeStatus.PASSED

    @property
    def passed(self) -> bool:
        return self.status is OutcomeStatus.PASSED

    @property
    def title(self) -> str:
        if self.provider_state:
            return f"{self.description!r} given {self.provider_state!r}"
        return repr(self.description)

    def details(self) -> list[str]:
        """Human-readable lines describing why this interaction did not pass."""
        lines = [mismatch.describe() for mismatch in self.mismatches]
        if self.error is not None:
            lines.append(f"{type(self.error).__name__}: {self.error}")
        return lines


@dataclass(frozen=True)
class VerificationReport:
    """Aggregate of every interaction outcome in one run, in file order."""

    consumer_name: str
    provider_name: str
    outcomes: tuple[InteractionOutcome, ...] = ()

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def passed_count(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.passed)

    @property
    def failed(self) -> list[InteractionOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.passed]

    @property
    def succeeded(self) -> bool:
        return not self.failed

    def summary(self) -> str:
        return (
            f"Verifying a pact between {self.consumer_name} and {self.provider_name}: "
            f"{self.passed_count}/{self.total} interaction(s) passed"
        )

    def render(self) -> str:
        """Plain-text report listing every failing interaction and its details."""
        lines = [self.summary()]
        for number, outcome in enumerate(self.failed, start=1):
            lines.append(f"{number}) {outcome.title} {outcome.status.value}:")
            lines.extend(f"    - {detail}" for detail in outcome.details())
        return "\n".join(lines)
