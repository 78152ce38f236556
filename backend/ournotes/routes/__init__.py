# Routes package init
"""
OurNotes — API Routes Package
===============================

Route Inventory:
    - notes.py:   GET/POST    /api/{kind}             (list, create)
                  PUT/DELETE  /api/{kind}/{note_id}   (update, delete)
                  for kind in shopping-notes, map-notes, calendar-notes
    - health.py:  GET /        (liveness message)
                  GET /health  (database check)

Routes stay thin: they pull the path id and body out of the request and call
the kind's NoteService. Status codes for failures come from the exception
handlers in main.py.
"""
