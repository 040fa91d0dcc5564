"""
Services Layer
Clients for the external auth backend and data API, and the session resolution
used by the request gate.

Services should:
- Not hold state between requests
- Raise the errors in services.errors and leave user-facing handling to routes
"""
