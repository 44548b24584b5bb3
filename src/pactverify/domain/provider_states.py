"""Provider state registry.

Holds the setup/teardown callbacks that put the provider into the named
preconditions an interaction relies on. A registry is bound to exactly one
consumer for its whole lifetime. The consumer binding may carry its own
setup/teardown pair, run around every interaction.

Registering the same state name twice replaces the earlier entry
(last write wins); its position in registration order is kept.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from pactverify.domain.errors import ConfigurationError

logger = logging.getLogger(__name__)

Action = Callable[[], None]


@dataclass(frozen=True)
class ProviderState:
    """A named precondition with its optional setup and teardown actions."""

    name: str | None
    setup: Action | None = None
    teardown: Action | None = None


class ProviderStates:
    """Registry of provider states for a single consumer."""

    def __init__(self) -> None:
        self._consumer_name: str | None = None
        self._consumer_state = ProviderState(name=None)
        self._states: dict[str, ProviderState] = {}

    @property
    def consumer_name(self) -> str | None:
        return self._consumer_name

    @property
    def consumer_state(self) -> ProviderState:
        """Consumer-wide setup/teardown, run around every interaction."""
        return self._consumer_state

    def bind_consumer(
        self,
        consumer_name: str,
        setup: Action | None = None,
        teardown: Action | None = None,
    ) -> None:
        """Bind the registry to a consumer.

        Re-binding the same consumer with callbacks replaces the consumer-wide
        ones. Registered states are kept: re-binding deliberately does not
        start a fresh registry, so states added earlier still apply.

        Raises:
            ConfigurationError: If the name is empty or a different consumer is bound.
        """
        if not consumer_name:
            raise ConfigurationError("Please supply a non null or empty consumer name")
        if self._consumer_name is not None and self._consumer_name != consumer_name:
            raise ConfigurationError(
                f"Verifier is already bound to consumer '{self._consumer_name}'; "
                f"cannot bind to '{consumer_name}'"
            )
        self._consumer_name = consumer_name
        if setup is not None or teardown is not None:
            self._consumer_state = ProviderState(None, setup, teardown)

    def add(
        self,
        state_name: str,
        setup: Action | None = None,
        teardown: Action | None = None,
    ) -> None:
        """Register callbacks for a provider state.

        Raises:
            ConfigurationError: If no consumer is bound or the name is empty.
        """
        if self._consumer_name is None:
            raise ConfigurationError(
                "Please bind a consumer before registering provider states"
            )
        if not state_name:
            raise ConfigurationError("Please supply a non null or empty provider state")
        if state_name in self._states:
            logger.debug("Replacing callbacks for provider state %r", state_name)
        self._states[state_name] = ProviderState(state_name, setup, teardown)

    def find(self, state_name: str | None) -> ProviderState | None:
        """Look up a state by exact name. ``None`` means no precondition."""
        if state_name is None:
            return None
        return self._states.get(state_name)

    def __contains__(self, state_name: object) -> bool:
        return state_name in self._states

    def __len__(self) -> int:
        return len(self._states)

    def names(self) -> list[str]:
        """Registered state names in registration order."""
        return list(self._states)
