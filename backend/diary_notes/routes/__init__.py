# Routes package init
"""
Diary Notes Backend — API Routes Package
=========================================

Route Inventory:
    - notes.py:   GET/POST /notes, GET/PUT/DELETE /notes/{id}
    - health.py:  GET /health (liveness), GET / (banner)

Routes handle HTTP details only (path values, bodies, status codes) and
delegate every rule to NoteService.
"""
