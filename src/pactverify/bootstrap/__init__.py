"""Bootstrap (composition root) for PACTVERIFY.

Assembles a ready-to-run verifier: wires concrete adapters (contract sources,
the httpx provider client, the redactor) into the service-layer
`PactVerifier`, reading configuration where arguments are omitted.

Import rules:
- Entry points import *this* package (not adapters/service_layer/interfaces/domain).
- This package may import: `pactverify.adapters`, `pactverify.service_layer`,
  `pactverify.interfaces`, `pactverify.domain`, and `pactverify.config`.
- Inner layers must not import `pactverify.bootstrap`.
"""

from .bootstrap import AppContainer, bootstrap, build_contract_source, build_http_client

__all__ = ["AppContainer", "bootstrap", "build_contract_source", "build_http_client"]
