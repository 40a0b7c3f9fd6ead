"""SATA Wellbeing API package: mood logging, message interactions, resource utilization.

Invariants:
    - Package root contains no executable code (no import side effects)
"""
