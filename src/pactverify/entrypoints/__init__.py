"""Entrypoints (inbound adapters) for PACTVERIFY.

Expose the verifier to the outside world (currently the CLI). Parse and
validate inputs, call `pactverify.bootstrap`, and present results.

Dependency rule: may import `pactverify.bootstrap` and the domain error and
report types; avoid importing `pactverify.adapters` directly.
"""
