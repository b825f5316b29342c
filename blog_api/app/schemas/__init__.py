"""
Pydantic schema definitions for API payloads.

Each domain (users, posts, comments) defines its own request and
response models.  ``validation`` turns raw request bodies into typed
models or a list of issues.
"""
