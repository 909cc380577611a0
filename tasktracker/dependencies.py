from fastapi import Depends, Request

from .db import TaskStore
from .errors import ServiceUnavailable


def get_store(request: Request) -> TaskStore:
    return request.app.state.store


def require_store(store: TaskStore = Depends(get_store)) -> TaskStore:
    """Refuse the request until the store handshake has succeeded once."""
    if not store.connected:
        raise ServiceUnavailable()
    return store
