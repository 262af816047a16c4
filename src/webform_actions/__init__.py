"""Webform actions element: button group resolution and HTML upload tools."""

__all__ = [
    "ActionGroup",
    "ButtonConfig",
    "ButtonDefaults",
    "ButtonKind",
    "FormModeFlags",
    "ResolvedButton",
    "resolve",
    "resolve_element",
]

from .element import resolve_element
from .resolver import resolve
from .schemas.actions import (
    ActionGroup,
    ButtonConfig,
    ButtonDefaults,
    ButtonKind,
    FormModeFlags,
    ResolvedButton,
)
