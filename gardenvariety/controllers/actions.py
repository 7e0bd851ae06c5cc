"""Garden variety implementations of the REST controller actions.

Every action is a function receiving the controller, the
:class:`.ActionContext` of the request and, for the actions that change
data, an optional ``on_success`` callable which replaces the default
redirect when the change succeeds.

+-------------+---------------------------------------------------------------+
| Action      | Behaviour                                                     |
+=============+===============================================================+
| list        | Authorize the model class, store the policy scoped collection |
+-------------+---------------------------------------------------------------+
| show        | Authorize and store the requested model                       |
+-------------+---------------------------------------------------------------+
| new_form    | Authorize a new model, prefill it with submitted attributes   |
+-------------+---------------------------------------------------------------+
| create      | Authorize, assign attributes and save a new model             |
+-------------+---------------------------------------------------------------+
| edit_form   | Authorize and store the requested model                       |
+-------------+---------------------------------------------------------------+
| update      | Authorize, assign attributes and save the requested model     |
+-------------+---------------------------------------------------------------+
| destroy     | Authorize and destroy the requested model                     |
+-------------+---------------------------------------------------------------+

Successful changes set the ``success`` flash message and redirect to the
model (to the collection for ``destroy``). When ``on_success`` is used and
does not end with a redirect the ``success`` message is discarded, so it
doesn't leak into a later response. Failed changes set the ``error``
flash message and redirect back to the referrer.
"""
import logging
from collections import OrderedDict

log = logging.getLogger(__name__)

REDIRECT_CODES = frozenset([301, 302, 303, 307, 308])


def list_action(controller, ctx):
    controller.authorize(ctx, controller.concept.model_class)
    ctx.collection = controller.authorizer.scope(ctx.identity, controller.concept.model_class,
                                                 controller.find_collection(ctx))


def show_action(controller, ctx):
    ctx.model = controller.authorize(ctx, controller.find_model(ctx))


def new_form_action(controller, ctx):
    ctx.model = controller.vest(ctx, controller.new_model(ctx))


def create_action(controller, ctx, on_success=None):
    ctx.model = model = controller.vest(ctx, controller.new_model(ctx))
    outcome = controller.gateway.save(ctx, model)
    _complete(controller, ctx, outcome, on_success, model)


def edit_form_action(controller, ctx):
    ctx.model = controller.authorize(ctx, controller.find_model(ctx))


def update_action(controller, ctx, on_success=None):
    ctx.model = model = controller.vest(ctx, controller.find_model(ctx))
    outcome = controller.gateway.save(ctx, model)
    _complete(controller, ctx, outcome, on_success, model)


def destroy_action(controller, ctx, on_success=None):
    ctx.model = model = controller.authorize(ctx, controller.find_model(ctx))
    outcome = controller.gateway.destroy(ctx, model)
    _complete(controller, ctx, outcome, on_success, controller.collection_location(ctx))


def _complete(controller, ctx, outcome, on_success, target):
    """Success/Failure branches shared by the actions changing data."""
    if outcome.success:
        ctx.flash['success'] = controller.flash_message(ctx, 'success')
        if on_success is not None:
            on_success(ctx)
        else:
            controller.redirect_to(ctx, target)

        if ctx.response.status_int not in REDIRECT_CODES:
            log.debug('Discarding success flash of %r, responding with %s',
                      ctx, ctx.response.status_int)
            ctx.flash.discard('success')
    else:
        log.debug('%r failed: %s', ctx, outcome.errors)
        ctx.flash['error'] = controller.flash_message(ctx, 'error')
        controller.redirect_back(ctx, fallback=target)


#: Action names and their implementation, in conventional order.
ACTION_HANDLERS = OrderedDict([
    ('list', list_action),
    ('show', show_action),
    ('new_form', new_form_action),
    ('create', create_action),
    ('edit_form', edit_form_action),
    ('update', update_action),
    ('destroy', destroy_action),
])

#: Actions which accept an ``on_success`` override.
MUTATING_ACTIONS = frozenset(['create', 'update', 'destroy'])
