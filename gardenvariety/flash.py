"""
Flash messaging system for sending info to the user in a non-obtrusive way
"""
import json
import logging
from string import Template
from urllib.parse import quote as url_quote
from urllib.parse import unquote as url_unquote

from markupsafe import Markup, escape

from .configuration import Configurable
from .support import converters

log = logging.getLogger(__name__)

DEFAULT_FLASH_TEMPLATE = Template('''\
<div id="${container_id}">
${messages}
</div>''')

DEFAULT_MESSAGE_TEMPLATE = Template('''\
    <div class="${status}">${message}</div>''')


class Flash(object):
    """Messages shown to the user on the next rendered response.

    Maps a status (``success``, ``error``...) to a message. Messages set
    during a request are retained for the next request unless discarded,
    messages received from the previous request are readable during the
    current one and then swept away::

        flash['success'] = 'Post created'
        flash.discard('success')   # only visible in the current response
        flash.sweep()               # -> {}
    """

    def __init__(self, incoming=None):
        self._messages = dict(incoming or {})
        # Incoming messages have already been delivered to this request
        self._discarded = set(self._messages)

    def __setitem__(self, status, message):
        self._messages[status] = message
        self._discarded.discard(status)

    def __getitem__(self, status):
        return self._messages[status]

    def __delitem__(self, status):
        del self._messages[status]
        self._discarded.discard(status)

    def __contains__(self, status):
        return status in self._messages

    def __iter__(self):
        return iter(self._messages)

    def __len__(self):
        return len(self._messages)

    def __repr__(self):
        return '<Flash %r discarded=%r>' % (self._messages, sorted(self._discarded))

    def get(self, status, default=None):
        return self._messages.get(status, default)

    def items(self):
        return self._messages.items()

    def discard(self, status=None):
        """Marks ``status`` (or every message) to be dropped at the end of the request."""
        if status is None:
            self._discarded.update(self._messages)
        elif status in self._messages:
            self._discarded.add(status)

    def keep(self, status=None):
        """Retains ``status`` (or every message) for the next request."""
        if status is None:
            self._discarded.clear()
        else:
            self._discarded.discard(status)

    def is_retained(self, status):
        return status in self._messages and status not in self._discarded

    def sweep(self):
        """Messages which survive into the next request."""
        return dict((status, message) for status, message in self._messages.items()
                    if status not in self._discarded)


class FlashCookie(Configurable):
    """Stores retained flash messages in a plain cookie between requests.

    Flash cookies can be configured using the following options:

    - ``flash.cookie_name`` -> Name of the cookie used to store flash messages
    - ``flash.allow_html`` -> Turns on/off escaping in flash messages,
      by default HTML is not allowed. Messages translated from ``_html``
      keys are always trusted.
    - ``flash.template`` -> :class:`string.Template` used to render the
      messages container, receives ``$container_id`` and ``$messages``.
    - ``flash.message_template`` -> :class:`string.Template` used to render
      each message, receives ``$status`` and ``$message``.
    """
    CONFIG_NAMESPACE = 'flash.'
    CONFIG_OPTIONS = {'template': converters.astemplate,
                      'message_template': converters.astemplate,
                      'allow_html': converters.asbool}

    def __init__(self, cookie_name='webflash', template=DEFAULT_FLASH_TEMPLATE,
                 message_template=DEFAULT_MESSAGE_TEMPLATE, allow_html=False):
        self.cookie_name = cookie_name
        self.template = template
        self.message_template = message_template
        self.allow_html = allow_html

    def load(self, request):
        """Creates the :class:`Flash` of ``request`` from the flash cookie."""
        payload = request.cookies.get(self.cookie_name)
        if not payload:
            return Flash()

        try:
            entries = json.loads(url_unquote(payload))
        except ValueError:
            log.warning('Ignoring malformed flash cookie %r', payload)
            return Flash()

        if not isinstance(entries, dict):
            log.warning('Ignoring malformed flash cookie %r', payload)
            return Flash()

        messages = {}
        for status, entry in entries.items():
            if not isinstance(entry, dict) or not isinstance(entry.get('message'), str):
                log.warning('Ignoring malformed flash entry %s: %r', status, entry)
                continue

            if entry.get('html'):
                messages[status] = Markup(entry['message'])
            else:
                messages[status] = entry['message']
        return Flash(messages)

    def commit(self, request, response, flash):
        """Saves the retained messages of ``flash`` in ``response``."""
        retained = flash.sweep()
        if retained:
            entries = dict((status, {'message': str(message),
                                     'html': isinstance(message, Markup)})
                           for status, message in retained.items())
            response.set_cookie(self.cookie_name, url_quote(json.dumps(entries)))
            if len(response.headers['Set-Cookie']) > 4096:
                raise ValueError('Flash value is too long (cookie would be >4k)')
        elif self.cookie_name in request.cookies:
            response.delete_cookie(self.cookie_name)

    def render(self, flash, container_id='flash'):
        """Renders all the messages in ``flash`` as HTML."""
        if not flash:
            return Markup('')

        messages = []
        for status, message in flash.items():
            if not isinstance(message, Markup) and not self.allow_html:
                message = escape(message)
            messages.append(self.message_template.substitute(status=escape(status),
                                                             message=message))

        return Markup(self.template.substitute(container_id=escape(container_id),
                                               messages='\n'.join(messages)))
