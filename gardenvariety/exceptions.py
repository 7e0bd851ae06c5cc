"""Exceptions raised by GardenVariety actions.

Only validation failures are handled by the actions themselves, they are
reported by the model gateway as a failed :class:`.MutationOutcome`.
Everything here propagates out of the action and is turned into a
response by the application.
"""


class AuthorizationError(Exception):
    """The current identity is not allowed to perform ``action`` on ``subject``."""

    def __init__(self, subject, action, message=None):
        self.subject = subject
        self.action = action
        if message is None:
            message = 'Not allowed to %s this %s' % (action, _describe(subject))
        super(AuthorizationError, self).__init__(message)


class NotFoundError(LookupError):
    """No model instance matches the requested identifier."""

    def __init__(self, model_class, identifier):
        self.model_class = model_class
        self.identifier = identifier
        super(NotFoundError, self).__init__(
            "Couldn't find %s with id=%r" % (_describe(model_class), identifier)
        )


class ActionNotFound(NotFoundError):
    """The controller does not expose the requested action."""

    def __init__(self, controller, action):
        self.controller = controller
        self.action = action
        LookupError.__init__(self, 'Action %s is not exposed by %s' % (action, controller))


def _describe(subject):
    if isinstance(subject, type):
        return subject.__name__
    return type(subject).__name__
