"""Per request state of an action."""
import logging

from formencode.variabledecode import variable_decode
from webob import Response

from .flash import Flash

log = logging.getLogger(__name__)


def decode_params(request, route_params=None):
    """Request parameters as nested dictionaries.

    Form fields like ``post.title`` and ``post.tags-0`` are decoded as
    ``{'post': {'title': ..., 'tags': [...]}}``, JSON bodies are merged
    as they are and ``route_params`` (like the ``id`` of the URL) take
    precedence over everything else.
    """
    params = variable_decode(request.params.mixed(), dict_char='.', list_char='-')

    if request.content_type == 'application/json' and request.body:
        try:
            body = request.json_body
        except ValueError:
            log.debug('Ignoring malformed JSON body')
        else:
            if isinstance(body, dict):
                params.update(body)

    params.update(route_params or {})
    return params


class ActionContext(object):
    """State of the action being performed for the current request.

    Besides the request and response it carries the collaborators
    bound to the request (identity, flash and translator) and the state
    slots where actions store the model instance and collection they
    worked on, named after the controller :class:`.ModelConcept`::

        ctx.model = post           # ctx.slots['post']
        ctx.collection = posts     # ctx.slots['posts']
    """

    def __init__(self, concept, controller_path, action_name, request=None, response=None,
                 params=None, identity=None, flash=None, translator=None):
        self.concept = concept
        self.controller_path = controller_path
        self.action_name = action_name
        self.request = request
        self.response = response if response is not None else Response()
        self.params = params if params is not None else {}
        self.identity = identity
        self.flash = flash if flash is not None else Flash()
        self.translator = translator
        self.slots = {}

    def __repr__(self):
        return '<ActionContext %s#%s>' % (self.controller_path, self.action_name)

    @property
    def model(self):
        return self.slots.get(self.concept.singular)

    @model.setter
    def model(self, value):
        self.slots[self.concept.singular] = value

    @property
    def collection(self):
        return self.slots.get(self.concept.plural)

    @collection.setter
    def collection(self, values):
        self.slots[self.concept.plural] = values

    @property
    def referrer(self):
        if self.request is None:
            return None
        return self.request.referer or None

    @property
    def environ(self):
        if self.request is None:
            return {'SCRIPT_NAME': ''}
        return self.request.environ

    @property
    def status(self):
        return self.response.status_int
