"""Verifier orchestrator.

Configuration follows a fixed order, enforced as a small state machine:

    UNCONFIGURED -> CONSUMER_BOUND -> PROVIDER_BOUND -> URI_BOUND -> VERIFIED

Each step may be repeated once reached (e.g. pointing the verifier at another
contract file, or verifying again). Calling a step before its predecessor
raises `ConfigurationError`.

A run replays every selected interaction, in file order, one at a time:

    consumer setup -> state setup -> request -> compare -> state teardown -> consumer teardown

Failures are isolated per interaction; the run always completes before a
single `AggregateVerificationFailure` is raised.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import IntEnum

from pactverify.domain.contract import ContractFile, Interaction
from pactverify.domain.errors import (
    AggregateVerificationFailure,
    ConfigurationError,
    ContractFormatError,
    FileAccessError,
    InteractionError,
    StateError,
)
from pactverify.domain.provider_states import Action, ProviderState, ProviderStates
from pactverify.domain.report import VerificationReport
from pactverify.interfaces.contract_source import (
    ContractEncodingError,
    ContractSource,
    ContractSourceError,
)
from pactverify.interfaces.provider_client import ProviderClient
from pactverify.interfaces.redactor import Redactor

from . import replay
from .reporter import Reporter

logger = logging.getLogger(__name__)


class Phase(IntEnum):
    """Configuration phases of a verifier, in the order they must be reached."""

    UNCONFIGURED = 0
    CONSUMER_BOUND = 1
    PROVIDER_BOUND = 2
    URI_BOUND = 3
    VERIFIED = 4


class PactVerifier:
    """Verifies that a provider honours the contract recorded by one consumer.

    Args:
        contract_source: Reads the contract document given to
            `set_contract_location`.
        redactor: Sanitizes replayed headers before they are logged. When
            omitted, headers are not logged.

    Example:
        verifier = (
            PactVerifier(LocalContractSource())
            .bind_consumer("order-ui")
            .add_state("order 1 exists", setup=insert_order)
            .set_provider("order-api", HttpxProviderClient(httpx.Client(base_url=url)))
            .set_contract_location("pacts/order-ui-order-api.json")
        )
        verifier.verify()
    """

    def __init__(
        self, contract_source: ContractSource, redactor: Redactor | None = None
    ) -> None:
        self._contract_source = contract_source
        self._redactor = redactor
        self._states = ProviderStates()
        self._phase = Phase.UNCONFIGURED
        self._provider_name: str | None = None
        self._client: ProviderClient | None = None
        self._location: str | None = None

    # --- Configuration ---

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def consumer_name(self) -> str | None:
        return self._states.consumer_name

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    @property
    def contract_location(self) -> str | None:
        return self._location

    @property
    def provider_states(self) -> ProviderStates:
        return self._states

    def bind_consumer(
        self,
        consumer_name: str,
        setup: Action | None = None,
        teardown: Action | None = None,
    ) -> PactVerifier:
        """Lock this verifier to a consumer, optionally with consumer-wide callbacks.

        ``setup`` and ``teardown`` run around every interaction, outside any
        provider-state callbacks.

        Raises:
            ConfigurationError: If the name is empty or differs from an earlier binding.
        """
        self._states.bind_consumer(consumer_name, setup, teardown)
        self._advance(Phase.CONSUMER_BOUND)
        return self

    def honours_pact_with(self, consumer_name: str) -> PactVerifier:
        """Alias of `bind_consumer` without callbacks."""
        return self.bind_consumer(consumer_name)

    def add_state(
        self,
        state_name: str,
        setup: Action | None = None,
        teardown: Action | None = None,
    ) -> PactVerifier:
        """Register callbacks for a provider state. A repeated name replaces the earlier entry.

        Raises:
            ConfigurationError: If no consumer is bound or the name is empty.
        """
        self._states.add(state_name, setup, teardown)
        return self

    def set_provider(self, provider_name: str, client: ProviderClient) -> PactVerifier:
        """Name the provider under test and give the client used to reach it.

        Raises:
            ConfigurationError: If called before `bind_consumer`, or with an
                empty name or no client.
        """
        self._require(Phase.CONSUMER_BOUND, "set_provider", "bind_consumer")
        if not provider_name:
            raise ConfigurationError("Please supply a non null or empty provider name")
        if client is None:
            raise ConfigurationError("Please supply a non null provider client")
        self._provider_name = provider_name
        self._client = client
        self._advance(Phase.PROVIDER_BOUND)
        return self

    def set_contract_location(self, location: str) -> PactVerifier:
        """Set where the contract file is read from.

        Raises:
            ConfigurationError: If called before `set_provider`, or with an empty location.
        """
        self._require(Phase.PROVIDER_BOUND, "set_contract_location", "set_provider")
        if not location:
            raise ConfigurationError("Please supply a non null or empty contract location")
        self._location = location
        self._advance(Phase.URI_BOUND)
        return self

    # --- Verification ---

    def verify(
        self, description: str | None = None, provider_state: str | None = None
    ) -> VerificationReport:
        """Replay the selected interactions and compare every response.

        Args:
            description: Only verify interactions with exactly this description.
            provider_state: Only verify interactions with exactly this provider state.

        Returns:
            The report, when every selected interaction passed (including when
            the filters selected none).

        Raises:
            ConfigurationError: If no provider client or contract location is set.
            FileAccessError: If the contract cannot be read.
            ContractFormatError: If the contract cannot be decoded.
            AggregateVerificationFailure: If any interaction failed.
        """
        if self._client is None:
            raise ConfigurationError(
                "Provider client has not been set, please supply one using set_provider."
            )
        if not self._location:
            raise ConfigurationError(
                "Contract location has not been set, please supply one using "
                "set_contract_location."
            )

        contract = self._load_contract(self._location)
        if contract.consumer_name != self.consumer_name:
            logger.warning(
                "Contract consumer %r differs from bound consumer %r",
                contract.consumer_name,
                self.consumer_name,
            )
        selected = contract.filter_by(description, provider_state)
        logger.info(
            "Verifying %d of %d interaction(s) between %s and %s",
            len(selected.interactions),
            len(contract.interactions),
            contract.consumer_name,
            self._provider_name,
        )

        reporter = Reporter(contract.consumer_name, self._provider_name or "")
        for interaction in selected.interactions:
            self._verify_interaction(interaction, reporter)

        report = reporter.finalize()
        self._advance(Phase.VERIFIED)
        logger.info("%s", report.summary())
        if not report.succeeded:
            raise AggregateVerificationFailure(report)
        return report

    # --- Internal Helpers ---

    def _advance(self, phase: Phase) -> None:
        self._phase = max(self._phase, phase)

    def _require(self, phase: Phase, step: str, predecessor: str) -> None:
        if self._phase < phase:
            raise ConfigurationError(f"Please call {predecessor} before {step}")

    def _load_contract(self, location: str) -> ContractFile:
        try:
            text = self._contract_source.read_text(location)
        except ContractEncodingError as e:
            raise ContractFormatError(e.reason, location) from e
        except ContractSourceError as e:
            raise FileAccessError(location, e.reason) from e
        return ContractFile.from_json(text, location)

    def _verify_interaction(self, interaction: Interaction, reporter: Reporter) -> None:
        reporter.start(interaction)
        logger.info("Verifying interaction %s", interaction)

        states = [self._states.consumer_state]
        if interaction.provider_state is not None:
            if (state := self._states.find(interaction.provider_state)) is not None:
                states.append(state)
            else:
                logger.warning(
                    "No callbacks registered for provider state %r",
                    interaction.provider_state,
                )

        entered: list[ProviderState] = []
        try:
            for state in states:
                self._run_callback(state, "setup", state.setup)
                entered.append(state)
            assert self._client is not None
            request = replay.build_request(interaction.request)
            response = replay.send(self._client, request, self._redactor)
            result = replay.compare(interaction.response, response)
            reporter.record_mismatches(interaction, result)
            for mismatch in result:
                logger.info("  %s", mismatch.describe())
        except InteractionError as e:
            logger.error("Interaction %s errored: %s", interaction, e)
            reporter.record_error(interaction, e)
        finally:
            for state in reversed(entered):
                try:
                    self._run_callback(state, "teardown", state.teardown)
                except StateError as e:
                    logger.error("Interaction %s errored: %s", interaction, e)
                    reporter.record_error(interaction, e)

    @staticmethod
    def _run_callback(
        state: ProviderState, phase: str, action: Callable[[], None] | None
    ) -> None:
        if action is None:
            return
        logger.debug("Running %s for %s", phase, state.name or "consumer")
        try:
            action()
        except Exception as e:  # pylint: disable=broad-except
            raise StateError(state.name, phase, e) from e
