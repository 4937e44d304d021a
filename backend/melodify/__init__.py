"""Melodify Application Package: HTTP gateway over the managed music backend.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
