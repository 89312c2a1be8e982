"""Domain layer (pure game logic).

- Keep board state, move geometry and corner bookkeeping here.
- Avoid I/O: no websockets, no FastAPI, no logging of transport events.
- Prefer deterministic functions (dice are passed in, never rolled here).
"""
