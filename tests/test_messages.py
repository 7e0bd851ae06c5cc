import pytest
from markupsafe import Markup

from gardenvariety import ConfigurationError, FlashMessageResolver, Translator

from .base import CATALOG, make_translator

OPTIONS = {'resource_name': 'post', 'resource_capitalized': 'Post'}


class TestLookupKeys(object):
    def test_keys_order(self):
        resolver = FlashMessageResolver(Translator())
        assert resolver.lookup_keys('posts', 'create', 'success') == [
            'posts.create.success',
            'posts.create.success_html',
            'create.success',
            'create.success_html',
            'success',
            'success_html',
        ]

    def test_namespaced_controller(self):
        resolver = FlashMessageResolver(Translator())
        keys = resolver.lookup_keys('messages.drafts', 'update', 'error')
        assert keys[0] == 'messages.drafts.update.error'
        assert keys[2] == 'update.error'

    def test_custom_separator(self):
        resolver = FlashMessageResolver(Translator(separator=':'))
        assert resolver.lookup_keys('posts', 'create', 'success')[:3] == [
            'posts:create:success', 'posts:create:success_html', 'create:success'
        ]


class TestResolve(object):
    def setup_method(self):
        self.resolver = FlashMessageResolver(make_translator())

    def test_controller_specific_message(self):
        message = self.resolver.resolve('posts', 'create', 'success', OPTIONS)
        assert message == 'Congratulations on your new post!'

    def test_action_message(self):
        message = self.resolver.resolve('comments', 'create', 'success',
                                        {'resource_name': 'comment',
                                         'resource_capitalized': 'Comment'})
        assert message == 'Comment created.'

    def test_status_message(self):
        assert self.resolver.resolve('posts', 'update', 'success', OPTIONS) == 'Success!'
        assert self.resolver.resolve('posts', 'update', 'error', OPTIONS) == \
            'Something went wrong.'

    def test_namespaced_message(self):
        message = self.resolver.resolve('messages.drafts', 'update', 'success', OPTIONS)
        assert message == 'Draft saved.'

    def test_untranslated_status(self):
        resolver = FlashMessageResolver(Translator())
        assert resolver.resolve('posts', 'create', 'success', OPTIONS) == 'success'

    def test_html_message(self):
        translator = Translator(catalogs={'en': {
            'create': {'success_html': '<b>%{resource_capitalized}</b> created.'}
        }})
        message = FlashMessageResolver(translator).resolve(
            'posts', 'create', 'success', {'resource_capitalized': '<Post>'}
        )
        assert isinstance(message, Markup)
        assert message == '<b>&lt;Post&gt;</b> created.'

    def test_plain_key_wins_over_html(self):
        translator = Translator(catalogs={'en': {
            'success': 'plain', 'success_html': '<b>html</b>'
        }})
        message = FlashMessageResolver(translator).resolve('posts', 'create', 'success')
        assert message == 'plain'
        assert not isinstance(message, Markup)

    @pytest.mark.parametrize('reserved', ['default', 'scope'])
    def test_reserved_interpolation_keys(self, reserved):
        with pytest.raises(ConfigurationError):
            self.resolver.resolve('posts', 'create', 'success', {reserved: 'x'})

    def test_catalog_untouched(self):
        self.resolver.resolve('posts', 'create', 'success', OPTIONS)
        assert CATALOG['posts']['create']['success'] == \
            'Congratulations on your new %{resource_name}!'
