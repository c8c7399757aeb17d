"""
db/ - Storage Layer
===================
`Database` (connection pool plus schema probe) and the DDL that creates
the calendar tables. Nothing here imports from the layers above.
"""
