"""
Top‑level router for version 1 of the API.

This router aggregates the domain routers (auth, posts, comments)
under a unified prefix.  When new domains are introduced, update this
file to include their routers.
"""

from fastapi import APIRouter

from .endpoints import auth, comments, health, posts

router = APIRouter()

# Registration and login live at the root: /register and /login.
router.include_router(auth.router, tags=["auth"])
router.include_router(posts.router, prefix="/posts", tags=["posts"])
router.include_router(comments.router, prefix="/comments", tags=["comments"])
router.include_router(health.router, tags=["health"])
