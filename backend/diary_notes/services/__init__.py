# Services package init
"""
Diary Notes Backend — Services Layer
=====================================

What:  Business rules sitting between routes (HTTP) and storage (persistence).
How:   Services receive an injected NoteStore, apply validation and timestamp
       rules, and return wire-ready response models.

Service Inventory:
    - NoteService: list / get / create / update / delete of notes
"""
