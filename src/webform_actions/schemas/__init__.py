"""
Schema package for the actions element data models.
"""

from .actions import (  # noqa: F401
    BUTTON_KINDS,
    ActionGroup,
    ButtonConfig,
    ButtonDefaults,
    ButtonKind,
    FormModeFlags,
    ResolvedButton,
    class_tokens,
)
