"""
Reminder payloads for the mobile client.

The client schedules local notifications itself; the API decides what they
say and when they should fire.
"""
