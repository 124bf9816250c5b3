"""API Layer — FastAPI routers, request dependencies and global error handlers.

Invariants:
    - Routes are thin: parse (pydantic), authorize (dependencies), call one service
    - Every error leaves through register_error_handlers
"""
