"""
Database seeding and maintenance scripts.

Usage:
    python -m hobby_helper.seed.seed_hobbies [path/to/hobbies.json]
    python -m hobby_helper.seed.seed_user_hobbies [path/to/userHobbies.json]
    python -m hobby_helper.seed.backfill_moods [--dry-run]
"""
