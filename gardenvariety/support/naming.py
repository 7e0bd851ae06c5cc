"""Naming conventions.

Derives the identifiers used by controllers from a model name or a
controller path::

    >>> singular_slot('messages.Draft')
    'messages_draft'
    >>> plural_slot('messages.Draft')
    'messages_drafts'
    >>> controller_key('messages/drafts')
    'messages.drafts'
    >>> classify('messages/drafts')
    'messages.Draft'

Model names use ``.`` to separate namespaces, controller paths use ``/``.
"""
import re

import inflect
from repoze.lru import lru_cache

from ..configuration import Configurable
from ..support.converters import aslist, asmapping

_NAMESPACE_SEP = re.compile(r'::|\.|/')
_ACRONYM_BOUNDARY = re.compile(r'([A-Z\d]+)([A-Z][a-z])')
_WORD_BOUNDARY = re.compile(r'([a-z\d])([A-Z])')

_engine = inflect.engine()


@lru_cache(1024)
def _plural_noun(word):
    return _engine.plural_noun(word)


@lru_cache(1024)
def _singular_noun(word):
    # inflect returns False for words that are already singular
    return _engine.singular_noun(word) or word


class Inflector(Configurable):
    """Pluralizes and singularizes words.

    Explicit ``irregular`` (``singular -> plural``) and ``uncountable``
    overrides take precedence over the rules of the ``inflect`` engine.
    Only the last ``_`` separated word is inflected, so ``blog_post``
    becomes ``blog_posts``.
    """
    CONFIG_NAMESPACE = 'naming.'
    CONFIG_OPTIONS = {'irregular': asmapping,
                      'uncountable': aslist}

    def __init__(self, irregular=None, uncountable=None):
        self.irregular = dict((k.lower(), v.lower()) for k, v in (irregular or {}).items())
        self.irregular_plurals = dict((v, k) for k, v in self.irregular.items())
        self.uncountable = frozenset(w.lower() for w in (uncountable or ()))

    def pluralize(self, word):
        return self._inflect(word, self.irregular, _plural_noun)

    def singularize(self, word):
        return self._inflect(word, self.irregular_plurals, _singular_noun)

    def _inflect(self, word, overrides, rule):
        head, sep, last = word.rpartition('_')
        if not last or last.lower() in self.uncountable:
            return word

        inflected = overrides.get(last.lower())
        if inflected is None:
            inflected = rule(last)
        elif last[0].isupper():
            inflected = inflected.capitalize()
        return head + sep + inflected


default_inflector = Inflector()


def underscore(name):
    """``messages::BlogPost`` or ``messages.BlogPost`` -> ``messages/blog_post``"""
    segments = []
    for segment in _NAMESPACE_SEP.split(name):
        segment = _ACRONYM_BOUNDARY.sub(r'\1_\2', segment)
        segment = _WORD_BOUNDARY.sub(r'\1_\2', segment)
        segments.append(segment.replace('-', '_').lower())
    return '/'.join(segments)


def camelize(word):
    return ''.join(part[:1].upper() + part[1:] for part in word.split('_'))


def humanize(name):
    """``messages.BlogPost`` -> ``Blog post``"""
    word = underscore(name).rpartition('/')[2]
    if word.endswith('_id'):
        word = word[:-3]
    word = word.replace('_', ' ').strip()
    return word[:1].upper() + word[1:]


def classify(path, inflector=None):
    """Model name for a controller path, ``admin/blog_posts`` -> ``admin.BlogPost``"""
    inflector = inflector or default_inflector
    namespace, _, name = path.strip('/').rpartition('/')
    model_name = camelize(inflector.singularize(name))
    if namespace:
        return '.'.join(namespace.split('/') + [model_name])
    return model_name


def param_key(name):
    """Key request parameters are nested under, ``messages.Draft`` -> ``draft``"""
    return underscore(name).rpartition('/')[2]


def singular_slot(name):
    return underscore(name).replace('/', '_')


def plural_slot(name, inflector=None):
    inflector = inflector or default_inflector
    namespace, sep, last = underscore(name).rpartition('/')
    return (namespace + sep + inflector.pluralize(last)).replace('/', '_')


def controller_key(path, separator='.'):
    return path.strip('/').replace('/', separator)
