"""
Top‑level package for the Blog API.

All functionality lives in submodules under ``app``; the application
factory is ``blog_api.app.main.create_app``.
"""

__all__ = []
