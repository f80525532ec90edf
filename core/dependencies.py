# app/core/dependencies.py
from fastapi import Request


def get_request_meta(request: Request) -> dict:
    """Client ip / user agent for activity logs."""
    return {
        "ip_address": request.client.host if request.client else None,
        "user_agent": request.headers.get("user-agent"),
    }
