"""Infrastructure: adapters for the managed backend and process-level logging."""
