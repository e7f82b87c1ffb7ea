"""
repositories/ - Data Access Layer
==================================
A generic Repository[T] engine plus one concrete repository per domain entity.
Repositories receive raw rows from the database and return domain model objects.
"""
