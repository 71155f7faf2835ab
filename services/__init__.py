"""Domain operations, each a transaction against an injected document store."""

from .admin import admin_stats
from .auth import login_user, register_user
from .posts import create_post, list_posts
from .blood_requests import create_request, list_requests

__all__ = [
    "admin_stats",
    "create_post",
    "create_request",
    "list_posts",
    "list_requests",
    "login_user",
    "register_user",
]
