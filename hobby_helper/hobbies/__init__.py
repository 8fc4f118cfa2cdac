"""
Hobby catalogue.

Responsibilities:
- Define the Hobby document schema and the custom-hobby creation payload.
- Look hobbies up by id or exact name and insert user-created hobbies.
- Infer coarse mood effects from a hobby's tags.
"""
