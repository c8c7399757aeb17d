"""
repositories/ - Data Access Layer
==================================
Each repository encapsulates all SQL queries for a specific table.
Repositories receive raw rows from the database and return domain model objects.
"""
