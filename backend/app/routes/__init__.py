"""
ButtonUp Backend — API Routes Package
=======================================

Route Inventory:
    - files.py:     GET    /api/files/list
                    DELETE /api/files/delete?fileName=...
                    POST   /api/files/upload
                    POST   /api/files/upload-url
    - tags.py:      GET    /api/tags
    - indexnow.py:  GET    /api/indexnow/{key}
                    GET    /api/indexnow?action=status|key
                    POST   /api/indexnow
    - seo.py:       GET    /robots.txt
    - health.py:    GET    /health

Design Principle:
    Routes are THIN: pull parameters from the request, check presence, call
    one gateway or service, shape the response. Failures are raised as
    app.exceptions types and formatted by the handlers in main.py.
"""
