"""Request schemas: Pydantic models parsed at the API boundary."""
