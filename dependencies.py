# dependencies.py
from fastapi import Request

from storage import TaskStore


def get_store(request: Request) -> TaskStore:
    """The store is attached to the app at creation time; see main.create_app."""
    return request.app.state.store
