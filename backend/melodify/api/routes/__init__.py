"""Route Modules: one file per resource.

Invariants:
    - Each module defines its own APIRouter with tags
    - Routes validate, delegate to the backend or a service, and reshape
"""
