"""Route Modules: one file per endpoint group.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Unsupported methods get 405 with an Allow header from the router
"""
