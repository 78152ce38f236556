# Services package init
"""
OurNotes — Services Layer
===========================

Service Inventory:
    - NoteService: validation + one statement per operation, one instance per
      note kind (see `note_services`)

Services raise ValidationError / NotFoundError / StoreError and never build
HTTP responses themselves.
"""
