"""Services: multi-step workflows composed from MusicBackend calls.

Invariants:
    - Services depend on the MusicBackend protocol, never on the Supabase SDK
"""
