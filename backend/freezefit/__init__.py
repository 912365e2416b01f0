"""FreezeFit API package - booking backend for ice-bath therapy institutes.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
