"""
Application package initializer.

The API is organised into logical pieces: ``core`` holds settings,
security, logging and database plumbing; ``schemas`` the pydantic
payload models; ``services`` the persistence logic per domain; and
``api/v1/endpoints`` the HTTP handlers for users, posts and comments.
"""

from .main import create_app  # noqa: F401
