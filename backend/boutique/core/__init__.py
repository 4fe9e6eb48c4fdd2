"""Core — pure domain logic: types, errors, coercion, document builders.

Invariants:
    - No IO and no framework imports (bson is used for identifier types only)
    - Infrastructure depends on core, never the reverse
"""
