"""Translation of dotted message keys.

Messages are looked up by dotted keys (``posts.create.success``) in
catalogs organized per locale. Catalogs are plain nested dictionaries,
usually loaded from ``<locale>.json`` files, and gettext translations can
be added as a further source where keys are used as message ids.

Messages can contain ``%{name}`` placeholders which are replaced by the
interpolation values given to :meth:`Translator.translate`. Messages whose
key ends with ``_html`` are trusted markup: they are returned as
:class:`markupsafe.Markup` and the interpolated values get escaped.
"""
import copy
import gettext as _gettext
import json
import logging
import os
import re

from markupsafe import Markup, escape

from .configuration import Configurable, ConfigurationError
from .support.converters import aslist

log = logging.getLogger(__name__)

INTERPOLATION_PATTERN = re.compile(r'%\{(\w+)\}')

#: Argument names of :meth:`Translator.translate` which can't be used
#: as interpolation variables.
RESERVED_KEYS = frozenset(['default', 'scope'])


class LanguageError(Exception):
    """Exception raised when a problem occurs with catalogs or languages"""


class Literal(str):
    """A default of :meth:`Translator.translate` used as text instead of a key."""


def sanitize_language_code(lang):
    """Sanitize the language code if the spelling is slightly wrong.

    For instance, 'pt-br' and 'pt_br' should be interpreted as 'pt_BR'
    while charset and modifiers like in 'it_IT.UTF-8@euro' are dropped.
    """
    identifier = lang.split('.', 1)[0].split('@', 1)[0]
    parts = identifier.replace('-', '_').split('_')
    language = parts.pop(0).lower()
    if not language.isalpha():
        return lang

    for part in parts:
        if len(part) == 2 and part.isalpha():
            return '%s_%s' % (language, part.upper())
        elif len(part) == 3 and part.isdigit():
            return '%s_%s' % (language, part)
    return language


def is_html_key(key):
    return key.endswith('_html') or key.endswith('.html')


class Translator(Configurable):
    """Looks up and formats messages for one locale and its fallbacks.

    A request usually works on a :meth:`localized` copy which shares
    the catalogs but uses the languages preferred by the user.
    """
    CONFIG_NAMESPACE = 'i18n.'
    CONFIG_OPTIONS = {'fallbacks': aslist}

    def __init__(self, lang='en', fallbacks=None, separator='.', catalog_dir=None,
                 domain=None, localedir=None, catalogs=None):
        self.lang = sanitize_language_code(lang)
        self.fallbacks = [sanitize_language_code(l) for l in (fallbacks or [])]
        self.separator = separator
        self._catalogs = {}
        self._translations = {}

        if catalog_dir:
            self.load_directory(catalog_dir)

        for locale, messages in (catalogs or {}).items():
            self.add_messages(locale, messages)

        if domain:
            for locale in self.locales:
                self.add_translations(locale, _gettext.translation(
                    domain, localedir=localedir, languages=[locale], fallback=True
                ))

    @property
    def locales(self):
        """Locales messages are searched in, by priority."""
        locales = []
        for locale in [self.lang] + self.fallbacks:
            if locale not in locales:
                locales.append(locale)
        return locales

    @property
    def available_locales(self):
        return sorted(set(self._catalogs) | set(self._translations))

    def localized(self, languages):
        """Copy of the translator preferring ``languages`` over the current ones."""
        if isinstance(languages, str):
            languages = [languages]
        languages = [sanitize_language_code(l) for l in languages if l]
        if not languages:
            return self

        translator = copy.copy(self)
        translator.lang = languages[0]
        translator.fallbacks = languages[1:] + self.locales
        return translator

    def add_messages(self, locale, messages):
        """Merges a dictionary of messages into the catalog of ``locale``.

        Keys can be nested dictionaries or dotted keys, so
        ``{'posts': {'create': {'success': 'Created'}}}`` and
        ``{'posts.create.success': 'Created'}`` are equivalent.
        """
        catalog = self._catalogs.setdefault(sanitize_language_code(locale), {})
        self._merge(catalog, messages)

    def add_translations(self, locale, translations):
        """Adds gettext ``translations`` as a source of messages for ``locale``."""
        self._translations.setdefault(sanitize_language_code(locale), []).append(translations)

    def load_directory(self, path):
        """Loads all the ``<locale>.json`` catalogs available in ``path``."""
        try:
            filenames = sorted(os.listdir(path))
        except OSError as e:
            raise LanguageError('Unable to read catalogs directory %s: %s' % (path, e))

        for filename in filenames:
            locale, ext = os.path.splitext(filename)
            if ext != '.json':
                continue

            with open(os.path.join(path, filename), 'rb') as fp:
                try:
                    messages = json.loads(fp.read().decode('utf-8'))
                except ValueError as e:
                    raise LanguageError('Invalid catalog %s: %s' % (filename, e))

            log.debug('Loaded catalog for %s from %s', locale, filename)
            self.add_messages(locale, messages)

    def _merge(self, catalog, messages):
        for key, value in messages.items():
            path = key.split(self.separator)
            node = catalog
            for segment in path[:-1]:
                child = node.get(segment)
                if not isinstance(child, dict):
                    child = node[segment] = {}
                node = child

            leaf = path[-1]
            if isinstance(value, dict):
                child = node.get(leaf)
                if not isinstance(child, dict):
                    child = node[leaf] = {}
                self._merge(child, value)
            else:
                node[leaf] = value

    def lookup(self, key, scope=None):
        """Returns the raw message for ``key`` or ``None`` when missing."""
        if scope:
            if not isinstance(scope, str):
                scope = self.separator.join(scope)
            key = self.separator.join((scope, key))

        path = key.split(self.separator)
        for locale in self.locales:
            node = self._catalogs.get(locale, {})
            for segment in path:
                if not isinstance(node, dict):
                    node = None
                    break
                node = node.get(segment)
                if node is None:
                    break

            if isinstance(node, str):
                return node

            for translations in self._translations.get(locale, ()):
                message = translations.gettext(key)
                if message != key:
                    return message

        return None

    def translate(self, key, default=(), scope=None, **interpolation):
        """Translates ``key`` trying the keys in ``default`` when it's missing.

        ``default`` is an ordered list of alternative keys, :class:`Literal`
        entries are used as the message itself. When nothing matches the
        key itself is returned, translating never fails.
        """
        if isinstance(default, str):
            default = [default]

        for candidate in [key] + list(default):
            if isinstance(candidate, Literal):
                return self.interpolate(str(candidate), interpolation)

            message = self.lookup(candidate, scope)
            if message is not None:
                if is_html_key(candidate):
                    return self.interpolate(Markup(message), interpolation)
                return self.interpolate(message, interpolation)

        log.debug('Translation missing: %s.%s', self.lang, key)
        return key

    __call__ = translate

    def interpolate(self, message, values):
        """Replaces ``%{name}`` placeholders in ``message``.

        Values interpolated in :class:`markupsafe.Markup` messages are
        escaped. Unknown placeholders are left untouched.
        """
        html = isinstance(message, Markup)

        def _replace(match):
            name = match.group(1)
            if name not in values:
                log.warning('Missing interpolation value %s for message %r', name, str(message))
                return match.group(0)

            value = values[name]
            if html:
                return escape(value)
            return str(value)

        result = INTERPOLATION_PATTERN.sub(_replace, str(message))
        if html:
            return Markup(result)
        return result


def check_interpolation_keys(values):
    """Raises :class:`.ConfigurationError` if ``values`` use reserved names."""
    reserved = RESERVED_KEYS.intersection(values)
    if reserved:
        raise ConfigurationError('%s are reserved by the translator and can not be used '
                                 'as interpolation values' % ', '.join(sorted(reserved)))


__all__ = [
    "Translator",
    "Literal",
    "LanguageError",
    "RESERVED_KEYS",
    "sanitize_language_code",
    "check_interpolation_keys",
]
