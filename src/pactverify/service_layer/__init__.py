"""Service layer for PACTVERIFY.

Implements the verification use-case: replaying interactions against a
provider, running provider-state callbacks, comparing responses, and
collecting outcomes into a report.

Dependency rule: may import `pactverify.domain` and `pactverify.interfaces`,
but not `pactverify.adapters` or `pactverify.entrypoints`.
"""
