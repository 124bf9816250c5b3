"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Validators are total: malformed input yields False/None/sentinel, never raises
    - "Now" is read at call time (or injected), never cached at import

Design Decisions:
    - Functional core separated from imperative shell (ADR: validators are safe to
      call from every form keystroke and every route alike)
"""
