# Routes package init
"""
Bookshelf API — API Routes Package
====================================

Route Inventory:
    - books.py:   GET/POST     {prefix}          (list, create)
                  GET/PUT/PATCH/DELETE {prefix}/{id}
    - health.py:  GET /health                    (service health check)

Routes stay thin: extract input, call BookService, pick the status code.
"""
