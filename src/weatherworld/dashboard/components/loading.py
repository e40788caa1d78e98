"""Loading and error display components for the dashboard."""

import logging
from functools import wraps
from typing import Callable, TypeVar

import streamlit as st

T = TypeVar("T")

logger = logging.getLogger(__name__)


def with_loading(message: str = "Loading..."):
    """Decorator to show spinner during function execution.

    Example:
        >>> @with_loading("Loading forecast...")
        ... def load(place):
        ...     controller.select(place)
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args, **kwargs) -> T:
            with st.spinner(message):
                return func(*args, **kwargs)
        return wrapper
    return decorator


def is_json_message(message: str) -> bool:
    """Whether an error message is a pretty-printed JSON payload."""
    return message.lstrip().startswith(("{", "["))


def render_error(message: str, container=None) -> None:
    """Render the current error; JSON payloads are shown verbatim as code."""
    target = container if container is not None else st
    if is_json_message(message):
        target.error("Request failed")
        target.code(message, language="json")
    else:
        target.error(message)


def render_empty_state(message: str, suggestion: str = None, container=None) -> None:
    """Render empty state placeholder."""
    target = container if container is not None else st
    target.info(message)
    if suggestion:
        target.caption(suggestion)
