"""Configuration helpers.

GardenVariety objects are configured from a flat dictionary with dotted
keys, the same dictionary an application would load from its ini file::

    config = {
        'flash.cookie_name': 'notices',
        'i18n.lang': 'it',
        'naming.irregular': 'person:people',
    }

Every configurable object declares the namespace of its options and the
converters used to coerce them.
"""


class ConfigurationError(Exception):
    """Raised when GardenVariety is configured in an invalid way."""


def coerce_options(options, converters):
    """Convert some configuration options to expected types.

    To replace given options with the converted values
    in a dictionary you might do::

        conf.update(coerce_options(conf, {
            'allow_html': asbool,
            'status': asint
        }))
    """
    converted_options = {}
    for option, converter in converters.items():
        if option in options:
            try:
                converted_options[option] = converter(options[option])
            except ValueError as e:
                raise ConfigurationError('Invalid value for option %s: %s' % (option, e))
    return converted_options


def coerce_config(configuration, prefix, converters):
    """Extracts a set of options with a common prefix and converts them.

    To extract all options starting with ``flash.`` from
    the ``conf`` dictionary and convert them::

        flash_config = coerce_config(conf, 'flash.', {
            'allow_html': asbool,
            'template': astemplate
        })
    """
    options = dict((key[len(prefix):], configuration[key])
                   for key in configuration if key.startswith(prefix))
    options.update(coerce_options(options, converters))
    return options


class Configurable(object):
    """An object which can be created from the application configuration.

    Subclasses declare a ``CONFIG_NAMESPACE`` (like ``flash.``) and the
    ``CONFIG_OPTIONS`` converters, then :meth:`from_config` builds an
    instance passing the options found in that namespace as keyword
    arguments to the constructor.
    """
    CONFIG_NAMESPACE = None
    CONFIG_OPTIONS = {}

    @classmethod
    def from_config(cls, config, **overrides):
        if cls.CONFIG_NAMESPACE is None:
            raise ConfigurationError('Must specify a CONFIG_NAMESPACE attribute in class for the '
                                     'namespace used by all configuration options.')

        options = coerce_config(config or {}, cls.CONFIG_NAMESPACE, cls.CONFIG_OPTIONS)
        options.update(overrides)
        return cls(**options)
