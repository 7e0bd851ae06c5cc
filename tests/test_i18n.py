# -*- coding: utf-8 -*-
import gettext as _gettext
import json

import pytest
from markupsafe import Markup

from gardenvariety import ConfigurationError, Translator
from gardenvariety import i18n
from gardenvariety.i18n import Literal


class _FakeTranslations(_gettext.NullTranslations):
    def __init__(self, messages):
        super(_FakeTranslations, self).__init__()
        self.messages = messages

    def gettext(self, message):
        return self.messages.get(message, message)


class TestSanitizeLanguage():
    def test_sanitize_language_code(self):
        """Check that slightly malformed language codes can be corrected."""
        for lang in 'pt', 'PT':
            assert i18n.sanitize_language_code(lang) == 'pt'
        for lang in 'pt-br', 'pt_br', 'pt_BR':
            assert i18n.sanitize_language_code(lang) == 'pt_BR'

    def test_sanitize_language_code_charset(self):
        assert i18n.sanitize_language_code('en_US.UTF-8') == 'en_US'

    def test_sanitize_language_code_modifier(self):
        assert i18n.sanitize_language_code('it_IT@euro') == 'it_IT'

    def test_sanitize_language_code_charset_and_modifier(self):
        assert i18n.sanitize_language_code('de_DE.iso885915@euro') == 'de_DE'

    def test_sanitize_language_code_territory_script_variant(self):
        assert i18n.sanitize_language_code('zh_Hans_CN') == 'zh_CN'

    def test_sanitize_language_code_numeric(self):
        assert i18n.sanitize_language_code('es-419') == 'es_419'

    def test_sanitize_language_code_numeric_variant(self):
        assert i18n.sanitize_language_code('de-CH-1996') == 'de_CH'


class TestCatalogs(object):
    def test_nested_and_dotted_keys(self):
        translator = Translator()
        translator.add_messages('en', {'posts': {'create': {'success': 'Created'}}})
        translator.add_messages('en', {'posts.update.success': 'Updated'})

        assert translator.lookup('posts.create.success') == 'Created'
        assert translator.lookup('posts.update.success') == 'Updated'
        assert translator.lookup('posts.destroy.success') is None

    def test_partial_key_is_missing(self):
        translator = Translator(catalogs={'en': {'posts': {'create': {'success': 'Created'}}}})
        assert translator.lookup('posts.create') is None
        assert translator.lookup('posts.create.success.more') is None

    def test_scope(self):
        translator = Translator(catalogs={'en': {'posts': {'title': 'Posts'}}})
        assert translator.lookup('title', scope='posts') == 'Posts'
        assert translator.translate('title', scope=['posts']) == 'Posts'

    def test_custom_separator(self):
        translator = Translator(separator=':', catalogs={'en': {'posts:create': 'Created'}})
        assert translator.lookup('posts:create') == 'Created'

    def test_load_directory(self, tmp_path):
        (tmp_path / 'en.json').write_text(json.dumps({'success': 'Success!'}), encoding='utf-8')
        (tmp_path / 'it.json').write_text(json.dumps({'success': 'Fatto!'}), encoding='utf-8')
        (tmp_path / 'README.txt').write_text('not a catalog', encoding='utf-8')

        translator = Translator(catalog_dir=str(tmp_path))
        assert translator.available_locales == ['en', 'it']
        assert translator('success') == 'Success!'
        assert translator.localized('it')('success') == 'Fatto!'

    def test_load_missing_directory(self, tmp_path):
        with pytest.raises(i18n.LanguageError):
            Translator(catalog_dir=str(tmp_path / 'missing'))

    def test_load_invalid_catalog(self, tmp_path):
        (tmp_path / 'en.json').write_text('{"success": ', encoding='utf-8')
        with pytest.raises(i18n.LanguageError):
            Translator(catalog_dir=str(tmp_path))

    def test_gettext_translations(self):
        translator = Translator(lang='it')
        translator.add_translations('it', _FakeTranslations({'success': 'Fatto!'}))

        assert translator.lookup('success') == 'Fatto!'
        assert translator.lookup('error') is None

    def test_catalog_wins_over_gettext(self):
        translator = Translator(catalogs={'en': {'success': 'From catalog'}})
        translator.add_translations('en', _FakeTranslations({'success': 'From gettext'}))
        assert translator('success') == 'From catalog'


class TestTranslate(object):
    def setup_method(self):
        self.translator = Translator(lang='it', fallbacks=['en'], catalogs={
            'en': {'success': 'Success!',
                   'greeting': 'Hello %{name}',
                   'greeting_html': '<b>Hello</b> %{name}'},
            'it': {'success': 'Fatto!'},
        })

    def test_fallback_locale(self):
        assert self.translator('success') == 'Fatto!'
        assert self.translator('greeting', name='Alice') == 'Hello Alice'

    def test_localized(self):
        translator = self.translator.localized(['en', 'de'])
        assert translator.locales == ['en', 'de', 'it']
        assert translator('success') == 'Success!'

        translator = self.translator.localized('de-ch')
        assert translator.locales == ['de_CH', 'it', 'en']
        assert translator('success') == 'Fatto!'
        assert self.translator('success') == 'Fatto!'

    def test_localized_nothing(self):
        assert self.translator.localized([]) is self.translator

    def test_default_keys(self):
        message = self.translator.translate('posts.success', default=['create.success', 'success'])
        assert message == 'Fatto!'

    def test_literal_default(self):
        message = self.translator.translate('posts.success', default=[Literal('Done %{what}')],
                                            what='it')
        assert message == 'Done it'

    def test_single_default(self):
        assert self.translator.translate('posts.success', default='success') == 'Fatto!'

    def test_missing_returns_key(self):
        assert self.translator.translate('posts.success', default=['create.success']) == \
            'posts.success'

    def test_html_key(self):
        message = self.translator('greeting_html', name='<i>Alice</i>')
        assert isinstance(message, Markup)
        assert message == '<b>Hello</b> &lt;i&gt;Alice&lt;/i&gt;'

    def test_plain_key_is_not_markup(self):
        message = self.translator('greeting', name='<i>Alice</i>')
        assert not isinstance(message, Markup)
        assert message == 'Hello <i>Alice</i>'

    def test_missing_interpolation(self):
        assert self.translator('greeting') == 'Hello %{name}'


class TestInterpolationKeys(object):
    def test_reserved(self):
        with pytest.raises(ConfigurationError):
            i18n.check_interpolation_keys({'default': 'x', 'name': 'y'})
        with pytest.raises(ConfigurationError):
            i18n.check_interpolation_keys({'scope': 'x'})

    def test_allowed(self):
        i18n.check_interpolation_keys({'resource_name': 'post'})
