"""
User accounts and profiles.

Responsibilities:
- Register users and issue login tokens.
- Read and partially update a profile (tags, preferences, credentials).
- Keep the embedded list of hobbies a user has started.
"""
