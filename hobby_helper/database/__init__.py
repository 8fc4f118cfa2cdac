"""
MongoDB access layer.

Responsibilities:
- Own the process-wide ``MongoClient`` and hand out the configured database.
- Create the indexes the API relies on (unique user emails, lookups).
- Convert BSON documents into JSON-friendly dicts for the API layer.
"""
