"""Command-line interface for PACTVERIFY."""
