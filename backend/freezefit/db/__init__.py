"""Database layer - declarative base and the shared statement helpers.

Invariants:
    - One parameterized statement per helper call
    - Helpers never commit; routes own the unit of work
"""
