"""
services/ - Business Logic Layer
=================================
Validation and normalization of request data before it reaches a repository.
Services raise the errors in utils.errors; they know nothing about HTTP.
"""
