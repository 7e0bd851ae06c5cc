import pytest

from gardenvariety import (AuthorizationDecision, Authorizer, ConfigurationError, Policy,
                           PolicyAuthorizer)
from gardenvariety.predicates import in_group

from .base import ADMIN, ALICE, BOB, Post, PostPolicy, make_authorizer


class Comment(object):
    def __init__(self, author=None, approved=False):
        self.author = author
        self.approved = approved


class CommentPolicy(Policy):
    show = True
    destroy = in_group('admins')

    def update(self):
        return self.record.author == self.userid and not self.record.approved

    def permitted_attributes_for_create(self):
        return ['body', 'author']


class Reply(Comment):
    pass


class TestPolicy(object):
    def test_static_rules(self):
        assert PostPolicy(None, Post).check('list') == (True, None)
        assert PostPolicy(None, Post).check('create') == \
            (False, 'The current user must have been authenticated')

    def test_missing_rule_denies(self):
        allowed, reason = CommentPolicy(ADMIN, Comment()).check('list')
        assert not allowed
        assert reason == 'No list rule in CommentPolicy'

    def test_method_rule(self):
        assert CommentPolicy(ALICE, Comment('alice')).check('update')[0]
        assert not CommentPolicy(ALICE, Comment('alice', approved=True)).check('update')[0]
        assert not CommentPolicy(BOB, Comment('alice')).check('update')[0]

    def test_form_aliases(self):
        assert CommentPolicy(ALICE, Comment('alice')).check('edit_form')[0]
        assert not CommentPolicy(ALICE, Comment()).check('new_form')[0]
        assert PostPolicy(ALICE, Post()).check('new_form')[0]

    def test_permitted_attributes(self):
        policy = CommentPolicy(ALICE, Comment())
        assert policy.permitted_attributes_for('update') == ()
        assert policy.permitted_attributes_for('create') == ('body', 'author')


class TestPolicyAuthorizer(object):
    def test_authorize(self):
        authorizer = make_authorizer()
        decision = authorizer.authorize(ALICE, Post('Hello', author='alice'), 'update')
        assert isinstance(decision, AuthorizationDecision)
        assert decision
        assert decision.permitted is None

    def test_authorize_denied(self):
        decision = make_authorizer().authorize(BOB, Post('Hello', author='alice'), 'destroy')
        assert not decision
        assert decision.reason.startswith('At least one of the following predicates')

    def test_authorize_with_params(self):
        decision = make_authorizer().authorize(ADMIN, Post('Hello'), 'update',
                                               {'title': 'Hi', 'author': 'root'})
        assert decision.permitted == {'title': 'Hi'}

    def test_authorize_create_with_params(self):
        decision = make_authorizer().authorize(ALICE, Post(), 'create',
                                               {'title': 'Hi', 'published': False})
        assert decision.permitted == {'title': 'Hi'}

    def test_denied_decision_has_no_permitted_attributes(self):
        decision = make_authorizer().authorize(None, Post(), 'create', {'title': 'Hi'})
        assert not decision
        assert decision.permitted is None

    def test_scope(self):
        posts = [Post('Public'), Post('Hidden', author='bob', published=False)]
        authorizer = make_authorizer()
        assert [p.title for p in authorizer.scope(None, Post, posts)] == ['Public']
        assert len(authorizer.scope(BOB, Post, posts)) == 2

    def test_default_scope(self):
        authorizer = PolicyAuthorizer({Comment: CommentPolicy})
        comments = [Comment(), Comment()]
        assert authorizer.scope(None, Comment, comments) is comments

    def test_subclasses_use_parent_policy(self):
        authorizer = PolicyAuthorizer({Comment: CommentPolicy})
        assert authorizer.policy_class(Reply) is CommentPolicy
        assert authorizer.authorize(ADMIN, Reply(), 'destroy').allowed

    def test_register_decorator(self):
        authorizer = PolicyAuthorizer()

        @authorizer.register(Comment)
        class DecoratedPolicy(Policy):
            show = True

        assert authorizer.policy_class(Comment()) is DecoratedPolicy

    def test_model_declared_policy(self):
        class Note(object):
            __policy__ = CommentPolicy

        assert PolicyAuthorizer().policy_class(Note) is CommentPolicy

    def test_missing_policy(self):
        with pytest.raises(ConfigurationError):
            PolicyAuthorizer().authorize(ALICE, Comment(), 'show')


class TestAuthorizer(object):
    def test_interface(self):
        authorizer = Authorizer()
        with pytest.raises(NotImplementedError):
            authorizer.authorize(None, Post, 'list')
        assert authorizer.scope(None, Post, [1, 2]) == [1, 2]
