"""Request/response schemas — Pydantic models at the HTTP boundary."""
