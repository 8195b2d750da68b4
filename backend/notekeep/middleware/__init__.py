# Middleware package init
"""
NoteKeep Backend — Middleware Package
=======================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID first, so every later log line can carry it
    2. Logging wraps the rest and records status and duration

Authentication is NOT middleware: it is a route dependency, so the
Identity is passed to handlers as an argument instead of stored on the request.
"""
