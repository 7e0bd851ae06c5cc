"""Flash messages lookup.

Flash messages are looked up by a prioritized list of keys, given a
``posts`` controller performing ``create`` with ``success`` status:

* ``posts.create.success``
* ``posts.create.success_html``
* ``create.success``
* ``create.success_html``
* ``success``
* ``success_html``

Namespaced controllers prefix the controller part, ``messages/drafts``
is looked up as ``messages.drafts.create.success``. When none of the keys
is translated the status itself is used as the message.

Given a catalog like::

    {
        "success": "Success!",
        "create": {"success": "%{resource_capitalized} created."},
        "posts": {"create": {"success": "Congratulations on your new post!"}}
    }

``PostsController`` gets ``Congratulations on your new post!`` on create,
``Success!`` on update and ``Post created.`` is used by any other
controller on create.
"""
from .i18n import Literal, check_interpolation_keys


class FlashMessageResolver(object):
    def __init__(self, translator):
        self.translator = translator

    def lookup_keys(self, controller_key, action_name, status):
        sep = self.translator.separator
        keys = []
        for scope in (sep.join((controller_key, action_name)), action_name, None):
            key = sep.join((scope, status)) if scope else status
            keys.append(key)
            keys.append(key + '_html')
        return keys

    def resolve(self, controller_key, action_name, status, interpolation=None):
        interpolation = interpolation or {}
        check_interpolation_keys(interpolation)

        keys = self.lookup_keys(controller_key, action_name, status)
        primary = keys.pop(0)
        return self.translator.translate(primary, default=keys + [Literal(status)],
                                         **interpolation)
