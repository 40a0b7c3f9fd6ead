"""Services Layer: persistence workflows and the resources directory manager.

Invariants:
    - Services own transactions (commit/rollback); routes never commit
    - Services raise SataError subclasses, never HTTPException
"""
