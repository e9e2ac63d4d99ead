from __future__ import annotations

import logging

import pytest

from core.cycle import Cycle, CycleIdGenerator
from scheduler.solver import configure_solver
from tests.fakes import RecordingContext, RecordingSession


@pytest.fixture
def ids() -> CycleIdGenerator:
    return CycleIdGenerator()


@pytest.fixture
def cycle(ids: CycleIdGenerator) -> Cycle:
    c = Cycle(ids, 200.0, 100.0, 0.0, 20.0)
    c.num_of_prts = 4
    c.num_of_slots = 4
    return c


@pytest.fixture
def fake_ctx() -> RecordingContext:
    return RecordingContext()


@pytest.fixture
def fake_session(fake_ctx: RecordingContext) -> RecordingSession:
    return RecordingSession(fake_ctx)


@pytest.fixture
def cp_solver():
    return configure_solver(timeout=10.0, num_workers=1)


@pytest.fixture
def clean_loggers():
    yield
    for name in ("core", "scheduler", "schemas"):
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.setLevel(logging.NOTSET)
