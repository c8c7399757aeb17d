"""
handlers/ - Presentation Layer
================================
FastAPI routers. Each handler parses the HTTP request, delegates to the
appropriate Service, and returns the JSON payload.
No business logic lives here.
"""
