"""WSGI application serving the garden variety controllers."""
import logging

from webob import Request
from webob.exc import HTTPForbidden, HTTPMethodNotAllowed, HTTPNotFound, HTTPUnauthorized

from .authorization import PolicyAuthorizer
from .configuration import coerce_config
from .context import ActionContext, decode_params
from .dispatch import MethodNotAllowed, request_method, resolve_route
from .exceptions import AuthorizationError, NotFoundError
from .flash import FlashCookie
from .i18n import Translator, sanitize_language_code
from .model import ModelRegistry
from .support.converters import asint, aslist
from .support.naming import Inflector

log = logging.getLogger(__name__)


class Application(object):
    """Dispatches requests to the mounted controllers.

    The application owns the collaborators shared by the controllers and
    is configured through a dictionary of options (see
    :mod:`gardenvariety.configuration`)::

        app = Application({'i18n.catalog_dir': 'i18n', 'flash.cookie_name': 'notices'},
                          registry=ModelRegistry(Post))
        app.mount('posts', PostsController, gateway=MemoryGateway(Post))

    Rendering responses is up to the ``renderer`` callable, which is
    called with the :class:`.ActionContext` of any action not ending in
    a redirect. Authorization failures are reported as ``401`` for
    anonymous users and ``403`` otherwise, missing models and actions as
    ``404``.
    """

    def __init__(self, config=None, registry=None, authorizer=None, renderer=None):
        self.config = dict(config or {})
        self.registry = registry if registry is not None else ModelRegistry()
        self.authorizer = authorizer if authorizer is not None else PolicyAuthorizer()
        self.renderer = renderer

        self.inflector = Inflector.from_config(self.config)
        self.translator = Translator.from_config(self.config)
        self.flash = FlashCookie.from_config(self.config)

        options = coerce_config(self.config, 'app.', {'identity_keys': aslist})
        self.identity_keys = options.get('identity_keys') or ['repoze.who.identity',
                                                              'gardenvariety.identity']
        redirect_options = coerce_config(self.config, 'redirect.', {'status': asint})
        self.redirect_status = redirect_options.get('status', 302)

        self.controllers = []

    def mount(self, path, controller, **options):
        """Mounts ``controller`` at ``path``.

        ``controller`` can be a controller instance or class, classes are
        created with the application collaborators and ``options``.
        """
        if isinstance(controller, type):
            options.setdefault('registry', self.registry)
            options.setdefault('inflector', self.inflector)
            options.setdefault('authorizer', self.authorizer)
            options.setdefault('redirect_status', self.redirect_status)
            controller = controller(path=path, **options)

        self.controllers.append(controller)
        self.controllers.sort(key=lambda c: -len(c.path.split('/')))
        log.debug('Mounted %r', controller)
        return controller

    def match(self, path_info):
        """Returns the controller serving ``path_info`` and the remaining path segments."""
        segments = [s for s in path_info.split('/') if s]
        for controller in self.controllers:
            controller_segments = [s for s in controller.path.split('/') if s]
            if segments[:len(controller_segments)] == controller_segments:
                return controller, segments[len(controller_segments):]
        return None

    def identity(self, request):
        for key in self.identity_keys:
            identity = request.environ.get(key)
            if identity:
                return identity
        return None

    def translator_for(self, request):
        """Translator localized for the language preferred by the request."""
        offers = [locale.replace('_', '-') for locale in self.translator.available_locales]
        if not offers:
            return self.translator

        best = request.accept_language.lookup(language_tags=offers,
                                              default=self.translator.lang)
        return self.translator.localized(sanitize_language_code(best))

    def make_context(self, request, controller, action, route_params=None):
        return ActionContext(controller.concept, controller.path, action,
                             request=request,
                             params=decode_params(request, route_params),
                             identity=self.identity(request),
                             flash=self.flash.load(request),
                             translator=self.translator_for(request))

    def handle(self, request):
        match = self.match(request.path_info)
        if match is None:
            return HTTPNotFound()
        controller, remainder = match

        method = request_method(request)
        try:
            route = resolve_route(method, remainder)
        except MethodNotAllowed as e:
            return HTTPMethodNotAllowed(headers=[('Allow', ', '.join(e.allowed))])

        if route is None or not controller.exposes(route[0]):
            return HTTPNotFound()
        action, route_params = route

        ctx = self.make_context(request, controller, action, route_params)
        try:
            controller.invoke(action, ctx)
        except AuthorizationError as e:
            log.info('Denied %s on /%s: %s', action, controller.path, e)
            if ctx.identity:
                return HTTPForbidden(detail=str(e))
            return HTTPUnauthorized(detail=str(e))
        except NotFoundError as e:
            return HTTPNotFound(detail=str(e))

        if self.renderer is not None and not ctx.response.location:
            self.renderer(ctx)

        self.flash.commit(request, ctx.response, ctx.flash)
        return ctx.response

    def __call__(self, environ, start_response):
        response = self.handle(Request(environ))
        return response(environ, start_response)
