"""Controllers providing the garden variety REST actions."""

from .actions import ACTION_HANDLERS, REDIRECT_CODES
from .controller import Controller, garden_variety

__all__ = ['Controller', 'garden_variety', 'ACTION_HANDLERS', 'REDIRECT_CODES']
