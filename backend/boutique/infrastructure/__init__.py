"""Infrastructure Layer — document store gateway and logging setup.

Invariants:
    - Driver exceptions never escape this layer unmapped (DatabaseError)
"""
