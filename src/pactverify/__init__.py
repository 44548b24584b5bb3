"""PACTVERIFY

Provider-side verification for consumer-driven contracts. Replays the
interactions recorded in a pact file against a live provider and reports
every interaction whose response does not honour the consumer's expectations.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
