"""Authorization of controller actions.

The :class:`Authorizer` interface is all the actions need, it decides in a
single pass if the current identity can perform an action on a model
instance or class and which of the submitted attributes it can assign.
It also scopes the records the identity can list.

:class:`PolicyAuthorizer` implements it with policy classes, one per
model, whose rules are named after the actions::

    class PostPolicy(Policy):
        list = show = True
        create = not_anonymous()
        destroy = in_group('admins')
        permitted_attributes = ('title', 'body')

        def update(self):
            return self.record.author == self.userid

        class Scope(Policy.Scope):
            def resolve(self):
                return [p for p in self.scope if p.published]

    authorizer = PolicyAuthorizer()
    authorizer.register(Post, PostPolicy)
"""
import logging
from collections import namedtuple

from .configuration import ConfigurationError
from .predicates import Predicate, identity_userid

log = logging.getLogger(__name__)


class AuthorizationDecision(namedtuple('AuthorizationDecision', ['allowed', 'permitted', 'reason'])):
    """Outcome of an authorization check.

    ``permitted`` is the mapping of attributes the identity can assign,
    it is only computed when the submitted params are provided.
    """
    __slots__ = ()

    def __bool__(self):
        return bool(self.allowed)


class Authorizer(object):
    """Interface of the authorization engine used by the actions."""

    def authorize(self, identity, subject, action, params=None):
        """Returns an :class:`AuthorizationDecision` for ``action`` on ``subject``.

        When the submitted ``params`` are given and the action is allowed,
        the decision also carries the subset of them that can be assigned.
        """
        raise NotImplementedError

    def scope(self, identity, model_class, collection):
        """Filters ``collection`` to the records visible by ``identity``."""
        return collection


class Policy(object):
    """Authorization rules of a model.

    Every rule is named after the action it authorizes and can be a
    :class:`.Predicate` or a method returning a boolean or a predicate.
    Missing rules deny the action, ``new_form`` and ``edit_form`` fall back
    to the ``create`` and ``update`` rules.
    """
    ALIASES = {'new_form': 'create',
               'edit_form': 'update'}

    permitted_attributes = ()

    def __init__(self, identity, record):
        self.identity = identity
        self.record = record

    @property
    def userid(self):
        return identity_userid(self.identity)

    def rule_for(self, action):
        rule = getattr(self, action, None)
        if rule is None and action in self.ALIASES:
            rule = getattr(self, self.ALIASES[action], None)
        return rule

    def check(self, action):
        """Returns a ``(allowed, reason)`` tuple for ``action``."""
        rule = self.rule_for(action)
        if rule is None:
            return False, 'No %s rule in %s' % (action, type(self).__name__)

        if callable(rule) and not isinstance(rule, Predicate):
            rule = rule()

        if isinstance(rule, Predicate):
            reason = rule.reason(self.identity, self.record)
            return reason is None, reason

        return bool(rule), None

    def permitted_attributes_for(self, action):
        attributes = getattr(self, 'permitted_attributes_for_%s' % action, None)
        if attributes is None:
            attributes = self.permitted_attributes
        if callable(attributes):
            attributes = attributes()
        return tuple(attributes)

    class Scope(object):
        """Filters the collection listed by the ``list`` action, everything by default."""

        def __init__(self, identity, scope):
            self.identity = identity
            self.scope = scope

        def resolve(self):
            return self.scope


class PolicyAuthorizer(Authorizer):
    """Authorizes actions through :class:`Policy` classes.

    Policies are registered per model class, or declared by the model
    itself through a ``__policy__`` attribute. Subclasses of a model use
    the policy of the closest registered parent.
    """

    def __init__(self, policies=None):
        self._policies = {}
        for model_class, policy in (policies or {}).items():
            self.register(model_class, policy)

    def register(self, model_class, policy=None):
        """Registers the policy of ``model_class``, usable as a class decorator."""
        if policy is None:
            def _register(policy):
                self._policies[model_class] = policy
                return policy
            return _register

        self._policies[model_class] = policy
        return policy

    def policy_class(self, subject):
        model_class = subject if isinstance(subject, type) else type(subject)
        for klass in model_class.__mro__:
            policy = self._policies.get(klass)
            if policy is not None:
                return policy

        policy = getattr(model_class, '__policy__', None)
        if policy is None:
            raise ConfigurationError('No policy registered for %s' % model_class.__name__)
        return policy

    def authorize(self, identity, subject, action, params=None):
        policy = self.policy_class(subject)(identity, subject)
        allowed, reason = policy.check(action)
        log.debug('%s %s on %r: %s', type(policy).__name__, action, subject,
                  'allowed' if allowed else reason)

        permitted = None
        if allowed and params is not None:
            permitted = self._filter(policy, action, params)
        return AuthorizationDecision(allowed, permitted, reason)

    def _filter(self, policy, action, params):
        return dict((name, params[name]) for name in policy.permitted_attributes_for(action)
                    if name in params)

    def scope(self, identity, model_class, collection):
        policy = self.policy_class(model_class)
        return policy.Scope(identity, collection).resolve()
