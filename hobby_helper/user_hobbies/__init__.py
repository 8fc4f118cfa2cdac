"""
Hobby history.

Responsibilities:
- Record that a user performed a hobby, with an optional rating and notes.
- List a user's records with the referenced hobby populated.
- Summarise the history shown on the profile screen.
"""
