"""Adapters (infrastructure) for PACTVERIFY.

Provide concrete implementations of the interfaces: contract sources (local
files, HTTP, in-memory), the httpx-backed provider client, and the regex
redactor.

Dependency rule: may import `pactverify.interfaces`; the domain must not
import this package.
"""
