"""
Hobby suggestion engine.

Responsibilities:
- Turn query filters and the caller's profile preferences into a MongoDB match stage.
- Randomly sample matching hobbies from the catalogue.
- Drop hobbies the user already performed when asked to try something new.
- Rank the sample by overlap with the user's favourite tags.
"""
