"""RESTful mapping of requests to controller actions.

Here is a brief rundown of the actions called on dispatch along with an
example URL, relative to the path the controller is mounted at.

+-------------+----------------------------------------------------+
| Action      | Example Method(s) / URL(s)                         |
+=============+====================================================+
| list        | GET /posts                                         |
+-------------+----------------------------------------------------+
| new_form    | GET /posts/new                                     |
+-------------+----------------------------------------------------+
| create      | POST /posts                                        |
+-------------+----------------------------------------------------+
| show        | GET /posts/1                                       |
+-------------+----------------------------------------------------+
| edit_form   | GET /posts/1/edit                                  |
+-------------+----------------------------------------------------+
| update      | PUT /posts/1, PATCH /posts/1                       |
|             | POST /posts/1?_method=PUT                          |
+-------------+----------------------------------------------------+
| destroy     | DELETE /posts/1                                    |
|             | POST /posts/1?_method=DELETE, POST /posts/1/delete |
+-------------+----------------------------------------------------+

Browsers don't support the PUT and DELETE methods in forms, so a
``_method`` hidden field can be used to override the method of a POST.
"""

COLLECTION_ROUTES = {'GET': 'list', 'HEAD': 'list', 'POST': 'create'}
NEW_ROUTES = {'GET': 'new_form', 'HEAD': 'new_form'}
MEMBER_ROUTES = {'GET': 'show', 'HEAD': 'show', 'PUT': 'update', 'PATCH': 'update',
                 'DELETE': 'destroy'}
EDIT_ROUTES = {'GET': 'edit_form', 'HEAD': 'edit_form'}
DELETE_ROUTES = {'POST': 'destroy', 'DELETE': 'destroy'}

OVERRIDABLE_METHODS = frozenset(['PUT', 'PATCH', 'DELETE'])


class MethodNotAllowed(Exception):
    def __init__(self, method, allowed):
        self.method = method
        self.allowed = sorted(allowed)
        super(MethodNotAllowed, self).__init__('%s not allowed, use %s'
                                               % (method, ', '.join(self.allowed)))


def request_method(request):
    """HTTP method of ``request`` honouring the ``_method`` override of POST requests."""
    method = request.method.upper()
    if method == 'POST':
        override = request.POST.get('_method') or request.GET.get('_method')
        if override and override.upper() in OVERRIDABLE_METHODS:
            return override.upper()
    return method


def resolve_route(method, segments):
    """Returns the ``(action, route_params)`` for a request.

    ``segments`` are the path segments after the controller path.
    Returns ``None`` when the path doesn't match any action and raises
    :class:`MethodNotAllowed` if it matches but not for ``method``.
    """
    route_params = {}
    if not segments:
        routes = COLLECTION_ROUTES
    elif segments == ['new']:
        routes = NEW_ROUTES
    elif len(segments) == 1:
        routes = MEMBER_ROUTES
    elif len(segments) == 2 and segments[1] == 'edit':
        routes = EDIT_ROUTES
    elif len(segments) == 2 and segments[1] == 'delete':
        routes = DELETE_ROUTES
    else:
        return None

    if segments and segments != ['new']:
        route_params['id'] = segments[0]

    try:
        return routes[method], route_params
    except KeyError:
        raise MethodNotAllowed(method, routes)
