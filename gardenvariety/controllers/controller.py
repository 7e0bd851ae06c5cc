"""Controllers exposing garden variety actions."""
import logging
from collections import OrderedDict

from ..authorization import PolicyAuthorizer
from ..configuration import ConfigurationError
from ..exceptions import ActionNotFound, AuthorizationError
from ..i18n import Translator
from ..messages import FlashMessageResolver
from ..model import ModelConcept
from ..support import naming
from ..util.urls import build_url, join_path
from .actions import ACTION_HANDLERS, MUTATING_ACTIONS

log = logging.getLogger(__name__)


def garden_variety(*actions):
    """Selects the implementation of the given actions.

    If no actions are specified, all the typical REST actions (list, show,
    new_form, create, edit_form, update, destroy) are selected. Returns
    an ordered dictionary of action names and their implementation.
    """
    if not actions:
        return OrderedDict(ACTION_HANDLERS)

    unknown = [action for action in actions if action not in ACTION_HANDLERS]
    if unknown:
        raise ConfigurationError('Unknown actions %s, available actions are %s'
                                 % (', '.join(unknown), ', '.join(ACTION_HANDLERS)))

    return OrderedDict((name, handler) for name, handler in ACTION_HANDLERS.items()
                       if name in actions)


def default_controller_path(controller_class):
    """``BlogPostsController`` -> ``blog_posts``"""
    name = controller_class.__name__
    if name.endswith('Controller') and name != 'Controller':
        name = name[:-len('Controller')]
    return naming.underscore(name)


class Controller(object):
    """A controller providing the garden variety actions of a model.

    The model, the exposed actions and the collaborators are fixed when
    the controller is created, usually declared as class attributes::

        class PostsController(Controller):
            model = Post
            actions = ('list', 'show')

        controller = PostsController(gateway=MemoryGateway(Post))

    When no model is declared, it is looked up in ``registry`` by the
    name matching the controller path: ``messages/drafts`` manages
    ``messages.Draft``.

    Each action is exposed as a method which can be overridden, the
    generic behaviour stays available through :meth:`default_action`::

        class PostsController(Controller):
            model = Post

            def create(self, ctx, on_success=None):
                self.default_action('create', ctx, on_success=self.show_collection)

            def show_collection(self, ctx):
                self.redirect_to(ctx, self.collection_location(ctx))
    """
    model = None
    actions = ()
    gateway = None
    authorizer = None

    def __init__(self, path=None, model=None, actions=None, gateway=None, authorizer=None,
                 registry=None, inflector=None, redirect_status=302):
        if path is None:
            path = default_controller_path(type(self))
        self.path = path.strip('/')

        model = model if model is not None else type(self).model
        if isinstance(model, ModelConcept):
            concept = model
        elif model is None or isinstance(model, str):
            if registry is None:
                raise ConfigurationError('%s declares no model and no model registry is available'
                                         % type(self).__name__)
            if model is None:
                concept = ModelConcept.for_controller_path(self.path, registry, inflector)
            else:
                concept = ModelConcept.for_model(registry.lookup(model), name=model,
                                                 inflector=inflector)
        else:
            concept = ModelConcept.for_model(model, inflector=inflector)
        self.concept = concept

        self.gateway = gateway if gateway is not None else type(self).gateway
        if self.gateway is None:
            raise ConfigurationError('%s has no gateway for %s' % (type(self).__name__,
                                                                   concept.name))
        self.authorizer = authorizer or type(self).authorizer or PolicyAuthorizer()
        self.handlers = garden_variety(*(actions or type(self).actions))
        self.redirect_status = redirect_status

    def __repr__(self):
        return '<%s /%s (%s)>' % (type(self).__name__, self.path, ', '.join(self.handlers))

    def exposes(self, action):
        return action in self.handlers

    def invoke(self, action, ctx):
        """Performs ``action`` for the request of ``ctx``."""
        if action not in self.handlers:
            raise ActionNotFound(self, action)

        log.debug('Dispatching %r', ctx)
        getattr(self, action)(ctx)
        return ctx

    def default_action(self, action, ctx, on_success=None):
        """Runs the garden variety implementation of ``action``."""
        try:
            handler = self.handlers[action]
        except KeyError:
            raise ActionNotFound(self, action)

        if action in MUTATING_ACTIONS:
            handler(self, ctx, on_success)
        else:
            handler(self, ctx)

    def list(self, ctx):
        self.default_action('list', ctx)

    def show(self, ctx):
        self.default_action('show', ctx)

    def new_form(self, ctx):
        self.default_action('new_form', ctx)

    def create(self, ctx, on_success=None):
        self.default_action('create', ctx, on_success)

    def edit_form(self, ctx):
        self.default_action('edit_form', ctx)

    def update(self, ctx, on_success=None):
        self.default_action('update', ctx, on_success)

    def destroy(self, ctx, on_success=None):
        self.default_action('destroy', ctx, on_success)

    def find_collection(self, ctx):
        """All the model instances, the ``list`` action scopes them through the authorizer."""
        return self.gateway.all(ctx)

    def find_model(self, ctx):
        """The model instance identified by the ``id`` parameter of the request."""
        return self.gateway.find(ctx, ctx.params.get('id'))

    def new_model(self, ctx):
        return self.gateway.construct(ctx)

    def authorize(self, ctx, subject):
        """Authorizes the current action on ``subject`` and returns it.

        :raises AuthorizationError: when the action is not allowed.
        """
        self._decide(ctx, subject)
        return subject

    def _decide(self, ctx, subject, params=None):
        decision = self.authorizer.authorize(ctx.identity, subject, ctx.action_name, params)
        if not decision.allowed:
            raise AuthorizationError(subject, ctx.action_name, decision.reason)
        return decision

    def submitted_attributes(self, ctx):
        """The attributes submitted under the model param key, ``None`` when missing."""
        if self.concept.param_key not in ctx.params:
            return None

        params = ctx.params[self.concept.param_key]
        if not isinstance(params, dict):
            params = {}
        return params

    def assign_attributes(self, ctx, model, attributes):
        """Assigns ``attributes`` to ``model``, which is modified but not persisted."""
        for name, value in attributes.items():
            setattr(model, name, value)
        return model

    def vest(self, ctx, model):
        """Authorizes ``model`` for the current action and assigns the submitted attributes.

        A single authorization pass decides both whether the action is
        allowed and which of the submitted attributes can be assigned.
        """
        params = self.submitted_attributes(ctx)
        decision = self._decide(ctx, model, params)
        if params is not None:
            self.assign_attributes(ctx, model, decision.permitted or {})
        return model

    def controller_key(self, separator='.'):
        return naming.controller_key(self.path, separator)

    def flash_options(self, ctx):
        """Values interpolated in flash messages.

        Override this method to provide your own values. Be aware that
        ``default`` and ``scope`` are reserved by the translator, and
        can not be used for interpolation.
        """
        return {'resource_name': self.concept.human.lower(),
                'resource_capitalized': self.concept.human}

    def flash_message(self, ctx, status):
        """The flash message of the current action for ``status``.

        See :mod:`gardenvariety.messages` for the keys it is looked up by.
        """
        translator = ctx.translator or Translator()
        resolver = FlashMessageResolver(translator)
        return resolver.resolve(self.controller_key(translator.separator), ctx.action_name,
                                status, self.flash_options(ctx))

    def collection_location(self, ctx):
        return build_url(ctx.environ, join_path(self.path))

    def location_for(self, ctx, target):
        """URL of ``target``, which can be a model instance or an URL.

        Instances which were never saved have no location of their own
        and point to the collection.
        """
        if isinstance(target, str):
            return target

        identifier = self.gateway.identity_of(target)
        if identifier is None:
            return self.collection_location(ctx)
        return build_url(ctx.environ, join_path(self.path, identifier))

    def redirect_to(self, ctx, target, status=None):
        ctx.response.status_int = status or self.redirect_status
        ctx.response.location = self.location_for(ctx, target)

    def redirect_back(self, ctx, fallback, status=None):
        """Redirects to the referrer of the request, or to ``fallback`` without one."""
        self.redirect_to(ctx, ctx.referrer or fallback, status)
