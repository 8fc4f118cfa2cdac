"""Hobby Helper REST API: hobby catalogue, suggestions, profiles and hobby history."""
