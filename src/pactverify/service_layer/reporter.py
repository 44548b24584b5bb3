"""Accumulates per-interaction outcomes during a verification run."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from pactverify.domain.contract import Interaction
from pactverify.domain.mismatches import Mismatch
from pactverify.domain.report import InteractionOutcome, VerificationReport

logger = logging.getLogger(__name__)


@dataclass
class _Pending:
    interaction: Interaction
    mismatches: list[Mismatch] = field(default_factory=list)
    error: Exception | None = None


class Reporter:
    """Tracks outcomes as the verifier progresses, then builds one report.

    Interactions are reported in the order they were started. An interaction
    with nothing recorded against it has passed.
    """

    def __init__(self, consumer_name: str, provider_name: str) -> None:
        self._consumer_name = consumer_name
        self._provider_name = provider_name
        self._pending: list[_Pending] = []
        self._report: VerificationReport | None = None

    def start(self, interaction: Interaction) -> None:
        """Mark an interaction as started."""
        if self._report is not None:
            raise RuntimeError("Reporter has already been finalized")
        self._pending.append(_Pending(interaction))

    def record_mismatches(
        self, interaction: Interaction, mismatches: Iterable[Mismatch]
    ) -> None:
        """Attach comparison mismatches to a started interaction."""
        self._find(interaction).mismatches.extend(mismatches)

    def record_error(self, interaction: Interaction, error: Exception) -> None:
        """Attach a hard error to a started interaction.

        The first error recorded wins; later ones are logged and dropped.
        """
        pending = self._find(interaction)
        if pending.error is None:
            pending.error = error
        else:
            logger.debug(
                "Ignoring additional error for %s: %r", interaction, error
            )

    def finalize(self) -> VerificationReport:
        """Build the report. Subsequent calls return the same report."""
        if self._report is None:
            self._report = VerificationReport(
                consumer_name=self._consumer_name,
                provider_name=self._provider_name,
                outcomes=tuple(
                    InteractionOutcome(
                        description=p.interaction.description,
                        provider_state=p.interaction.provider_state,
                        mismatches=tuple(p.mismatches),
                        error=p.error,
                    )
                    for p in self._pending
                ),
            )
        return self._report

    def _find(self, interaction: Interaction) -> _Pending:
        for pending in reversed(self._pending):
            if pending.interaction is interaction:
                return pending
        raise LookupError(f"Interaction {interaction} was not started")
