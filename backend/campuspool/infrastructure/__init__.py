"""Infrastructure — IO adapters: database sessions, security, outbound HTTP, logging.

Invariants:
    - Adapters map third-party exceptions into core/errors.py types
    - Nothing here holds domain rules; validators stay in core/
"""
