"""Trendy Boutique — storefront API over a document database.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
