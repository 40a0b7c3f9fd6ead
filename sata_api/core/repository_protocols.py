"""Boundary Protocols: contracts between route handlers and injected collaborators.

Invariants:
    - Routes depend on these Protocols, never on a concrete collaborator class
    - Implementations are constructed at startup and injected via FastAPI dependencies

Design Decisions:
    - Protocol over ABC: structural subtyping, test stubs need no inheritance
"""

from typing import Any, Protocol

from sata_api.core.domain_types import ResourceId


class DirectoryManager(Protocol):
    """Contract for the resources directory manager that records utilization."""

    def track_utilization(
        self,
        resource_id: ResourceId,
        action: str,
        demographics: dict[str, Any] | None = None,
    ) -> None: ...
