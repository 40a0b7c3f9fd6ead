"""Route Dependencies: injected collaborators other than the DB session.

Invariants:
    - The directory manager is read from app.state, set once by the lifespan
    - Tests replace it through app.dependency_overrides
"""

from fastapi import Request

from sata_api.core.repository_protocols import DirectoryManager


def get_directory_manager(request: Request) -> DirectoryManager:
    """FastAPI dependency for the resources directory manager."""
    manager = getattr(request.app.state, "directory_manager", None)
    if manager is None:
        raise RuntimeError("Directory manager not initialized")
    return manager
