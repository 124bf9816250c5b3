"""Services Layer — orchestration around the pure core.

Invariants:
    - Server-side services take an AsyncSession and raise core/errors.py types
    - Client-side services (message_stream, realtime_subscription) depend only on
      core protocols, never on FastAPI or SQLAlchemy

Design Decisions:
    - One module per concern; routes stay thin and call exactly one service
"""
