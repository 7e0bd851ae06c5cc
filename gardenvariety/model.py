"""Model concepts.

A :class:`ModelConcept` describes the model a controller operates on and
all the names derived from it. It is resolved once, when the controller
is created, and never changes afterwards.
"""
import logging
from collections import namedtuple

from .configuration import ConfigurationError
from .support import naming

log = logging.getLogger(__name__)


class ModelConcept(namedtuple('ModelConcept', ['name', 'model_class', 'singular',
                                               'plural', 'param_key', 'human'])):
    """Naming artifacts of the model managed by a controller.

    - ``name``: canonical model name, like ``Post`` or ``messages.Draft``
    - ``model_class``: the model class itself
    - ``singular``: identifier of the single instance state slot (``messages_draft``)
    - ``plural``: identifier of the collection state slot (``messages_drafts``)
    - ``param_key``: key request parameters are nested under (``draft``)
    - ``human``: human readable model name (``Draft``)
    """
    __slots__ = ()

    @classmethod
    def for_model(cls, model_class, name=None, inflector=None):
        """Creates the concept of ``model_class``.

        ``name`` defaults to the ``__model_name__`` attribute of the
        class if present, otherwise to the class name.
        """
        if name is None:
            name = getattr(model_class, '__model_name__', None) or model_class.__name__

        return cls(name=name,
                   model_class=model_class,
                   singular=naming.singular_slot(name),
                   plural=naming.plural_slot(name, inflector),
                   param_key=naming.param_key(name),
                   human=getattr(model_class, '__human_name__', None) or naming.humanize(name))

    @classmethod
    def for_controller_path(cls, path, registry, inflector=None):
        """Creates the concept of the model matching a controller path.

        ``messages/drafts`` looks up ``messages.Draft`` in the registry.
        """
        name = naming.classify(path, inflector)
        model_class = registry.lookup(name)
        log.debug('Resolved model %s for controller %s', name, path)
        return cls.for_model(model_class, name=name, inflector=inflector)


class ModelRegistry(object):
    """Maps canonical model names to model classes.

    Used to find the model of controllers which do not declare one::

        registry = ModelRegistry()
        registry.register(Post)
        registry.register(Draft, name='messages.Draft')
    """

    def __init__(self, *models):
        self._models = {}
        for model in models:
            self.register(model)

    def register(self, model_class, name=None):
        name = name or getattr(model_class, '__model_name__', None) or model_class.__name__
        if name in self._models and self._models[name] is not model_class:
            raise ConfigurationError('Model name %s is already registered for %r'
                                     % (name, self._models[name]))
        self._models[name] = model_class
        return model_class

    def lookup(self, name):
        try:
            return self._models[name]
        except KeyError:
            raise ConfigurationError('No model registered as %s, declare the controller model '
                                     'explicitly or register one' % name)

    def __contains__(self, name):
        return name in self._models

    def __iter__(self):
        return iter(self._models.items())
