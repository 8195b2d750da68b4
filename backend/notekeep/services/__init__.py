# Services package init
"""
NoteKeep Backend — Services Layer
===================================

What:  Business logic layer sitting between routes (HTTP) and database (persistence).
Why:   Separation of concerns: routes handle HTTP, services handle rules.

Service Inventory:
    - TokenAuthenticator (authenticator.py): bearer header → Identity
    - security.py: JWT signing/verification and password hashing
    - NoteValidator (validation.py): title/content field checks
    - NoteStore (note_store.py): owner-scoped note persistence
    - NoteService (note_service.py): access orchestration and outcome mapping
    - UserService (user_service.py): register, login, profile, delete account
"""
