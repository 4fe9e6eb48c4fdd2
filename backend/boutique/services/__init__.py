"""Services — orchestration between routes and the document gateway.

Invariants:
    - Services validate, check, persist, and shape results; routes stay thin
    - Services raise typed BoutiqueErrors; the API layer maps them to responses
"""
