"""GardenVariety: generic REST controller actions.

Provides the seven conventional REST actions (list, show, new_form,
create, edit_form, update, destroy) for WebOb applications, taking care of
authorization, attributes assignment, persistence, redirects and flash
messages for a configured model.
"""
from .authorization import AuthorizationDecision, Authorizer, Policy, PolicyAuthorizer
from .configuration import ConfigurationError
from .context import ActionContext
from .controllers import ACTION_HANDLERS, REDIRECT_CODES, Controller, garden_variety
from .exceptions import ActionNotFound, AuthorizationError, NotFoundError
from .flash import Flash, FlashCookie
from .gateway import MemoryGateway, ModelGateway, MutationOutcome
from .i18n import Translator
from .messages import FlashMessageResolver
from .model import ModelConcept, ModelRegistry
from .release import version as __version__
from .wsgiapp import Application

__all__ = [
    'ACTION_HANDLERS',
    'REDIRECT_CODES',
    'ActionContext',
    'ActionNotFound',
    'Application',
    'AuthorizationDecision',
    'AuthorizationError',
    'Authorizer',
    'ConfigurationError',
    'Controller',
    'Flash',
    'FlashCookie',
    'FlashMessageResolver',
    'MemoryGateway',
    'ModelConcept',
    'ModelGateway',
    'ModelRegistry',
    'MutationOutcome',
    'NotFoundError',
    'Policy',
    'PolicyAuthorizer',
    'Translator',
    'garden_variety',
]
