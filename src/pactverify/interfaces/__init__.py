"""Interfaces (application boundary) for PACTVERIFY.

Defines framework-free application contracts: ABCs and small DTOs shared by
the service layer and adapters (contract sources, the provider HTTP client,
redaction). Business rules stay out of this package.

Dependency rule: this package is independent; do not import from any
`pactverify.*` modules. It may be imported by `pactverify.service_layer`,
`pactverify.adapters`, and `pactverify.bootstrap`.
"""
