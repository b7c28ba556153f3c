# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Transactional scope shared by the SQLAlchemy repositories."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import AbstractContextManager, contextmanager
from dataclasses import dataclass, field

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from taskapi.shared.errors.base import StorageError
from taskapi.shared.logging import logger


@dataclass(slots=True)
class SqlAlchemyUnitOfWork(AbstractContextManager):
    """Opens one session, commits on clean exit and rolls back otherwise."""

    session_factory: Callable[[], Session]
    _session: Session | None = field(default=None, init=False)

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        self._session = self.session_factory()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        assert self._session is not None
        try:
            if exc:
                logger.debug(f"uow: rollback due to {exc_type.__name__}")
                self._session.rollback()
            else:
                self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        finally:
            self._session.close()
            self._session = None

    @property
    def session(self) -> Session:
        if self._session is None:
            msg = "UnitOfWork session accessed before entering context"
            raise RuntimeError(msg)
        return self._session


@contextmanager
def unit_of_work_scope(
    factory: Callable[[], Session],
    *,
    on_integrity_error: Callable[[IntegrityError], Exception] | None = None,
) -> Iterator[Session]:
    """Yield a session; database failures surface as ``StorageError``.

    ``on_integrity_error`` lets a repository translate constraint violations
    into its own domain error instead.
    """
    try:
        with SqlAlchemyUnitOfWork(factory) as uow:
            yield uow.session
    except IntegrityError as exc:
        if on_integrity_error is not None:
            raise on_integrity_error(exc) from exc
        logger.error(f"uow: integrity error ({exc.orig})")
        raise StorageError(context={"reason": "integrity_error"}) from exc
    except SQLAlchemyError as exc:
        logger.error(f"uow: database error ({exc.__class__.__name__}: {exc})")
        raise StorageError() from exc
