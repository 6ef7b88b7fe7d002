"""Request-scoped access to the application's stack manager."""

from fastapi import Request

from ..services.stack_manager import StackManager


def get_stack_manager(request: Request) -> StackManager:
    return request.app.state.stack_manager
