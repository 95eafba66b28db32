"""
mvcbasic — Package Initializer
================================

Architecture Note:

    ┌─────────────────────────────────────┐
    │      Routes (example controllers)   │  ← mapping, request, response
    ├─────────────────────────────────────┤
    │         web (Starlette bridge)      │  ← Starlette ⇄ core
    ├─────────────────────────────────────┤
    │   core (binding and rendering)      │  ← no routing, no ASGI
    ├─────────────────────────────────────┤
    │     schemas · config · exceptions   │
    └─────────────────────────────────────┘

    The core can be exercised with a hand-built Request, so binding and
    rendering rules are tested without HTTP.
"""

__version__ = "1.0.0"
