# -*- coding: utf-8 -*-
"""
Built-in predicate checkers.

Predicates are the building blocks of policies rules, they are evaluated
against the identity of the current user and the record being
authorized. The identity is the ``repoze.who`` identity dictionary, which
provides the ``repoze.who.userid``, ``groups`` and ``permissions`` keys.

This is mostly took from repoze.what.predicates

"""

__all__ = ['Predicate', 'CompoundPredicate', 'All', 'Any', 'Not',
           'has_permission', 'in_group', 'in_any_group', 'is_user',
           'is_owner', 'is_anonymous', 'not_anonymous', 'PredicateNotMet']


class PredicateNotMet(Exception):
    pass


def identity_userid(identity):
    if not identity:
        return None
    return identity.get('repoze.who.userid')


class Predicate(object):
    message = 'The condition must be met'

    def __init__(self, msg=None):
        if msg:
            self.message = msg

    def evaluate(self, identity, record):
        raise NotImplementedError

    def unmet(self, msg=None, **placeholders):
        """
        Raise an exception because this predicate is not met.

        ``placeholders`` represent the placeholders for the predicate message.
        The predicate's attributes will also be taken into account while
        creating the message with its placeholders.
        """
        message = str(msg or self.message)

        all_placeholders = self.__dict__.copy()
        all_placeholders.update(placeholders)

        raise PredicateNotMet(message % all_placeholders)

    def is_met(self, identity, record=None):
        """
        Find whether the predicate is met or not.

        :param identity: The identity of the current user, ``None`` if anonymous.
        :param record: The model instance or class being authorized.
        :rtype: bool
        """
        try:
            self.evaluate(identity, record)
            return True
        except PredicateNotMet:
            return False

    def reason(self, identity, record=None):
        """Why the predicate is not met, ``None`` when it is."""
        try:
            self.evaluate(identity, record)
        except PredicateNotMet as e:
            return str(e)
        return None


class CompoundPredicate(Predicate):
    """A predicate composed of other predicates."""

    def __init__(self, *predicates, **kwargs):
        super(CompoundPredicate, self).__init__(**kwargs)
        self.predicates = predicates


class Not(Predicate):
    """
    Negate the specified predicate.

    Example::

        # The user *must* be anonymous:
        p = Not(not_anonymous())

    """
    message = "The condition must not be met"

    def __init__(self, predicate, **kwargs):
        super(Not, self).__init__(**kwargs)
        self.predicate = predicate

    def evaluate(self, identity, record):
        if self.predicate.is_met(identity, record):
            self.unmet()


class All(CompoundPredicate):
    """
    Check that all of the specified predicates are met.

    Example::

        p = All(not_anonymous(), is_owner())

    """

    def evaluate(self, identity, record):
        for p in self.predicates:
            p.evaluate(identity, record)


class Any(CompoundPredicate):
    """
    Check that at least one of the specified predicates is met.

    Example::

        p = Any(is_owner(), in_group('admins'))

    """
    message = "At least one of the following predicates must be met: %(failed_predicates)s"

    def evaluate(self, identity, record):
        errors = []
        for p in self.predicates:
            try:
                p.evaluate(identity, record)
                return
            except PredicateNotMet as exc:
                errors.append(str(exc))
        self.unmet(failed_predicates=', '.join(errors))


class is_user(Predicate):
    """
    Check that the authenticated user's username is the specified one.

    Example::

        p = is_user('linus')

    """
    message = 'The current user must be "%(user_name)s"'

    def __init__(self, user_name, **kwargs):
        super(is_user, self).__init__(**kwargs)
        self.user_name = user_name

    def evaluate(self, identity, record):
        if self.user_name != identity_userid(identity):
            self.unmet()


class is_owner(Predicate):
    """
    Check that the record belongs to the authenticated user.

    The record is owned when its ``attribute`` equals the userid of the
    identity. Classes are never owned.

    Example::

        p = is_owner('author')

    """
    message = 'The current user must own the %(record_name)s'

    def __init__(self, attribute='owner', **kwargs):
        super(is_owner, self).__init__(**kwargs)
        self.attribute = attribute

    def evaluate(self, identity, record):
        userid = identity_userid(identity)
        if userid is None or isinstance(record, type) or \
           getattr(record, self.attribute, None) != userid:
            self.unmet(record_name=type(record).__name__.lower())


class in_group(Predicate):
    """
    Check that the user belongs to the specified group.

    Example::

        p = in_group('customers')

    """
    message = 'The current user must belong to the group "%(group_name)s"'

    def __init__(self, group_name, **kwargs):
        super(in_group, self).__init__(**kwargs)
        self.group_name = group_name

    def evaluate(self, identity, record):
        if identity and self.group_name in identity.get('groups', ()):
            return
        self.unmet()


class in_any_group(Any):
    """
    Check that the user belongs to at least one of the specified groups.

    Example::

        p = in_any_group('directors', 'hr')

    """
    message = "The member must belong to at least one of the following groups: %(group_list)s"

    def __init__(self, *groups, **kwargs):
        self.group_list = ", ".join(groups)
        group_predicates = [in_group(g) for g in groups]
        super(in_any_group, self).__init__(*group_predicates, **kwargs)


class is_anonymous(Predicate):
    """
    Check that the current user is anonymous.
    """
    message = "The current user must be anonymous"

    def evaluate(self, identity, record):
        if identity:
            self.unmet()


class not_anonymous(Predicate):
    """
    Check that the current user has been authenticated.
    """
    message = "The current user must have been authenticated"

    def evaluate(self, identity, record):
        if not identity:
            self.unmet()


class has_permission(Predicate):
    """
    Check that the current user has the specified permission.

    Example::

        p = has_permission('hire')

    """
    message = 'The user must have the "%(permission_name)s" permission'

    def __init__(self, permission_name, **kwargs):
        super(has_permission, self).__init__(**kwargs)
        self.permission_name = permission_name

    def evaluate(self, identity, record):
        if identity and self.permission_name in identity.get('permissions', ()):
            return
        self.unmet()
