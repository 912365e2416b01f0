"""Request Schemas - Pydantic models validating bodies at the API boundary.

Invariants:
    - Create schemas declare every NOT NULL column without a server default
      as required; absent or empty -> 400
    - Update schemas make every field optional; updatable() drops unset and
      null fields so null never overwrites a stored value
    - Unknown keys are ignored, never written
"""
