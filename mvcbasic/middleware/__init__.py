"""
mvcbasic — Middleware Package
===============================

Middleware Chain (order matters):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Controller

    1. Request ID first: every later log line can carry the correlation ID
    2. Logging: measures status and duration of everything below it
"""
