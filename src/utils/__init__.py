"""
Generic utility functions shared across modules.

Includes monotonic clock abstractions and logging setup.
"""
