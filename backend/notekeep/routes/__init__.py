# Routes package init
"""
NoteKeep Backend — API Routes Package
=======================================

Route Inventory:
    - notes.py:   POST   /api/notes            (create)
                  GET    /api/notes            (list / search, paginated)
                  GET    /api/notes/{id}       (get)
                  PUT    /api/notes/{id}       (update)
                  DELETE /api/notes/{id}       (delete)
    - auth.py:    POST   /api/auth/register
                  POST   /api/auth/login
                  GET    /api/auth/me
                  DELETE /api/auth/me
    - health.py:  GET    /health

Routes are thin: extract input, resolve the Identity, call a service,
set headers. Business rules belong in services.
"""
