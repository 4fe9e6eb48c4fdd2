"""API Layer — FastAPI routes, caller identification, and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints except GET / return JSON
"""
