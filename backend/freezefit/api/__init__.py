"""API Layer - routers, response envelope, CORS and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Every response body is the success or failure envelope
"""
