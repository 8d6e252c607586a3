from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from hostfacts.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyFactUnitOfWork,
    StartupError,
    build_engine,
    configured_engine,
    is_started,
    shutdown,
    startup,
)
from hostfacts.domain.model import Host

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy.engine import Engine


@pytest.fixture(autouse=True)
def reset_unit_of_work_state() -> Iterator[None]:
    shutdown()
    yield
    shutdown()


def test_sqlalchemy_unit_of_work_requires_startup() -> None:
    with pytest.raises(StartupError):
        SqlAlchemyFactUnitOfWork()


def test_startup_requires_force_for_reconfiguration() -> None:
    engine_a = build_engine("sqlite+pysqlite:///:memory:")
    engine_b = build_engine("sqlite+pysqlite:///:memory:")

    startup(engine=engine_a, force=True)

    with pytest.raises(StartupError):
        startup(engine=engine_b)

    startup(engine=engine_b, force=True)
    assert configured_engine() is engine_b
    assert is_started()


def test_repositories_unavailable_outside_context(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)
    uow = SqlAlchemyFactUnitOfWork()

    with pytest.raises(StartupError):
        _ = uow.repositories


def test_unit_of_work_persists_hosts(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)

    with SqlAlchemyFactUnitOfWork() as uow:
        uow.repositories.hosts.add(Host(name="web01"))
        uow.commit()

    with SqlAlchemyFactUnitOfWork() as uow:
        host = uow.repositories.hosts.get_by_name("web01")
        assert host is not None
        assert not uow.repositories.hosts.is_new(host)


def test_unit_of_work_rolls_back_on_error(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)

    with pytest.raises(RuntimeError), SqlAlchemyFactUnitOfWork() as uow:
        uow.repositories.hosts.add(Host(name="web01"))
        uow.session.flush()
        raise RuntimeError("boom")

    with SqlAlchemyFactUnitOfWork() as uow:
        assert uow.repositories.hosts.get_by_name("web01") is None
