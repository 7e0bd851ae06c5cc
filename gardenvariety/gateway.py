"""Model gateways.

A gateway is how the actions create, find and persist model instances.
Failing to save or destroy an instance is an expected outcome reported
through :class:`MutationOutcome`, while failing to find one raises
:class:`.NotFoundError`.

Models can provide a ``validate()`` method returning a dictionary of
``field -> [messages]`` errors, an empty dictionary means the instance
is valid. Errors not related to a specific field use ``None`` as key.
"""
import itertools
import logging
from collections import namedtuple

from .exceptions import NotFoundError

log = logging.getLogger(__name__)


class MutationOutcome(namedtuple('MutationOutcome', ['success', 'errors'])):
    __slots__ = ()

    @classmethod
    def succeeded(cls):
        return cls(True, {})

    @classmethod
    def failed(cls, errors):
        if not errors:
            errors = {None: ['is invalid']}
        return cls(False, errors)

    def __bool__(self):
        return bool(self.success)

    @property
    def messages(self):
        """Flat list of error messages, prefixed by the field name."""
        messages = []
        for field, errors in self.errors.items():
            for error in errors:
                messages.append('%s %s' % (field, error) if field else error)
        return messages


def validate(instance):
    """Runs the ``validate()`` hook of ``instance`` if available."""
    validator = getattr(instance, 'validate', None)
    if validator is None:
        return {}

    errors = validator() or {}
    return dict((field, [messages] if isinstance(messages, str) else list(messages))
                for field, messages in errors.items() if messages)


class ModelGateway(object):
    """Interface used by the actions to work with model instances.

    All methods receive the :class:`.ActionContext` of the current request.
    """

    def __init__(self, model_class):
        self.model_class = model_class

    def construct(self, ctx):
        return self.model_class()

    def find(self, ctx, identifier):
        raise NotImplementedError

    def all(self, ctx):
        raise NotImplementedError

    def save(self, ctx, instance):
        raise NotImplementedError

    def destroy(self, ctx, instance):
        raise NotImplementedError

    def identity_of(self, instance):
        """Identifier of ``instance`` used to build its location."""
        return getattr(instance, 'id', None)


class MemoryGateway(ModelGateway):
    """Keeps model instances in memory, identified by an ``id`` attribute.

    Mostly meant for tests and prototypes, instances get an auto
    incremented ``id`` the first time they are saved. Models can
    provide a ``before_destroy()`` hook returning errors which prevent
    the instance from being destroyed.
    """

    def __init__(self, model_class, instances=()):
        super(MemoryGateway, self).__init__(model_class)
        self._instances = {}
        self._ids = itertools.count(1)
        for instance in instances:
            self._store(instance)

    def _store(self, instance):
        if getattr(instance, 'id', None) is None:
            instance.id = next(self._ids)
        self._instances[instance.id] = instance

    def _coerce_id(self, identifier):
        try:
            return int(identifier)
        except (TypeError, ValueError):
            return identifier

    def find(self, ctx, identifier):
        try:
            return self._instances[self._coerce_id(identifier)]
        except KeyError:
            raise NotFoundError(self.model_class, identifier)

    def all(self, ctx):
        return list(self._instances.values())

    def save(self, ctx, instance):
        errors = validate(instance)
        if errors:
            log.debug('Not saving %r: %s', instance, errors)
            return MutationOutcome.failed(errors)

        self._store(instance)
        return MutationOutcome.succeeded()

    def destroy(self, ctx, instance):
        hook = getattr(instance, 'before_destroy', None)
        errors = hook() if hook is not None else None
        if errors:
            return MutationOutcome.failed(errors)

        self._instances.pop(getattr(instance, 'id', None), None)
        return MutationOutcome.succeeded()

    def __len__(self):
        return len(self._instances)
