"""Core: pure domain types, errors and helpers. No IO, no framework imports."""
