# -*- coding: utf-8 -*-
"""SQLAlchemy model gateway."""
import logging

import sqlalchemy
from sqlalchemy.exc import IntegrityError

from .exceptions import NotFoundError
from .gateway import ModelGateway, MutationOutcome, validate

log = logging.getLogger(__name__)


class SQLAlchemyGateway(ModelGateway):
    """Persists instances of a SQLAlchemy mapped class through ``session``.

    ``session`` can be a session or a ``scoped_session``. Every successful
    mutation is committed, integrity errors are rolled back and reported
    as a failed outcome.
    """

    def __init__(self, model_class, session):
        super(SQLAlchemyGateway, self).__init__(model_class)
        self.session = session

    def _coerce_id(self, identifier):
        primary_key = sqlalchemy.inspect(self.model_class).primary_key
        if len(primary_key) != 1:
            return identifier

        try:
            python_type = primary_key[0].type.python_type
        except NotImplementedError:
            return identifier
        return python_type(identifier)

    def find(self, ctx, identifier):
        try:
            instance = self.session.get(self.model_class, self._coerce_id(identifier))
        except (TypeError, ValueError):
            # Identifier can't be converted to the primary key type
            instance = None

        if instance is None:
            raise NotFoundError(self.model_class, identifier)
        return instance

    def all(self, ctx):
        return self.session.scalars(sqlalchemy.select(self.model_class)).all()

    def save(self, ctx, instance):
        errors = validate(instance)
        if errors:
            return MutationOutcome.failed(errors)

        self.session.add(instance)
        return self._commit(instance)

    def destroy(self, ctx, instance):
        self.session.delete(instance)
        return self._commit(instance)

    def _commit(self, instance):
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            log.debug('Integrity error on %r: %s', instance, e.orig)
            return MutationOutcome.failed({None: [str(e.orig)]})
        return MutationOutcome.succeeded()

    def identity_of(self, instance):
        identity = sqlalchemy.inspect(instance).identity
        if identity is None:
            return None
        if len(identity) == 1:
            return identity[0]
        return ','.join(str(v) for v in identity)
