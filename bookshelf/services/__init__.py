# Services package init
"""
Bookshelf API — Services Layer
================================

Service Inventory:
    - BookStore (abstract): storage collaborator (find/insert/save/delete)
    - SQLAlchemyBookStore: BookStore over an async SQLAlchemy session
    - BookService: validation, id checks and field merge for the routes
"""
