import pytest

from gardenvariety import FlashCookie, Translator
from gardenvariety.configuration import (Configurable, ConfigurationError, coerce_config,
                                         coerce_options)
from gardenvariety.support.converters import asbool, asint
from gardenvariety.support.naming import Inflector


class TestCoerceConfig(object):
    def test_coerce_options(self):
        options = coerce_options({'allow_html': 'yes', 'other': 'x'}, {'allow_html': asbool,
                                                                      'status': asint})
        assert options == {'allow_html': True}

    def test_invalid_option(self):
        with pytest.raises(ConfigurationError) as excinfo:
            coerce_options({'status': 'moved'}, {'status': asint})
        assert 'status' in str(excinfo.value)

    def test_extracts_namespace(self):
        config = {'flash.allow_html': 'false',
                  'flash.cookie_name': 'notices',
                  'i18n.lang': 'it'}
        options = coerce_config(config, 'flash.', {'allow_html': asbool})
        assert options == {'allow_html': False, 'cookie_name': 'notices'}


class TestConfigurable(object):
    def test_requires_namespace(self):
        class Unnamed(Configurable):
            pass

        with pytest.raises(ConfigurationError):
            Unnamed.from_config({})

    def test_flash_from_config(self):
        flash = FlashCookie.from_config({'flash.cookie_name': 'notices',
                                         'flash.allow_html': 'on',
                                         'flash.message_template': '<p>$message</p>'})
        assert flash.cookie_name == 'notices'
        assert flash.allow_html is True
        assert flash.message_template.substitute(message='hi') == '<p>hi</p>'

    def test_translator_from_config(self):
        translator = Translator.from_config({'i18n.lang': 'pt-br',
                                             'i18n.fallbacks': 'it en'})
        assert translator.lang == 'pt_BR'
        assert translator.locales == ['pt_BR', 'it', 'en']

    def test_inflector_from_config(self):
        inflector = Inflector.from_config({'naming.irregular': 'person:people',
                                           'naming.uncountable': 'sheep news'})
        assert inflector.pluralize('person') == 'people'
        assert inflector.pluralize('sheep') == 'sheep'

    def test_overrides(self):
        translator = Translator.from_config({'i18n.lang': 'it'}, lang='de')
        assert translator.lang == 'de'

    def test_empty_config(self):
        flash = FlashCookie.from_config(None)
        assert flash.cookie_name == 'webflash'
        assert flash.allow_html is False
