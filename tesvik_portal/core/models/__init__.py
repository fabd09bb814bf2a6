"""
Data models shared by the API layer.

- io: request and response schemas
"""
