"""
HTTP server for the Teşvik Portal.

FastAPI application, API routers, dependencies and server-side services.
"""
