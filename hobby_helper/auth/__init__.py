"""
Authentication.

Responsibilities:
- Hash and verify passwords with bcrypt.
- Issue and verify short-lived JWT bearer tokens.
- Resolve the calling user for FastAPI routes (optional or required).
"""
