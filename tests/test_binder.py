from __future__ import annotations

import pytest

from core.cycle import Cycle, CycleIdGenerator
from exceptions.custom_errors import (
    DuplicateUnknownError,
    InvalidCycleBoundsError,
    ReloadOrderError,
    SlotIndexError,
)
from scheduler.binder import SymbolicVariableBinder
from scheduler.loader import ConstraintLoader
from tests.fakes import Lit, RecordingContext, RecordingSession, Sym


def _solved_model(ctx: RecordingContext, binder: SymbolicVariableBinder, **pins: float):
    session = RecordingSession(ctx)
    session.add(ctx.eq(binder.cycle_duration, ctx.real_val(pins["duration"])))
    session.add(ctx.eq(binder.first_cycle_start, ctx.real_val(pins["start"])))
    for name, value in pins.items():
        if name not in ("duration", "start"):
            session.add(ctx.eq(Sym(name), ctx.real_val(value)))
    assert session.check() == "sat"
    return session.model()


def test_bind_creates_named_unknowns(cycle: Cycle, fake_ctx: RecordingContext) -> None:
    binder = SymbolicVariableBinder(fake_ctx, cycle).bind()

    assert binder.is_bound
    assert binder.cycle_duration == Sym("cycle1_1_duration")
    assert binder.first_cycle_start == Sym("cycle1_1_start")
    assert binder.maximum_slot_duration == Lit(20.0)
    assert binder.slot_start_variable(2, 3) == Sym("cycle1_prt2_slot3_start")
    assert binder.slot_duration_variable(0, 1) == Sym("cycle1_prt0_slot1_duration")
    # 2 cycle unknowns + start/duration for every (priority, slot) pair
    assert len(fake_ctx.names) == 2 + 2 * 4 * 4
    assert len(set(fake_ctx.names)) == len(fake_ctx.names)


def test_cycles_from_one_generator_bind_into_one_context(fake_ctx: RecordingContext) -> None:
    ids = CycleIdGenerator()
    for _ in range(3):
        c = Cycle(ids, 10.0, 1.0, 0.0, 1.0)
        SymbolicVariableBinder(fake_ctx, c).bind()
    assert len(set(fake_ctx.names)) == len(fake_ctx.names) == 3 * (2 + 2 * 8)


def test_name_collision_is_fatal(fake_ctx: RecordingContext) -> None:
    first = Cycle(CycleIdGenerator(), 10.0, 1.0, 0.0, 1.0)
    clash = Cycle(CycleIdGenerator(), 10.0, 1.0, 0.0, 1.0)
    SymbolicVariableBinder(fake_ctx, first).bind()

    with pytest.raises(DuplicateUnknownError):
        SymbolicVariableBinder(fake_ctx, clash).bind()


def test_binding_twice_is_rejected(cycle: Cycle, fake_ctx: RecordingContext) -> None:
    binder = SymbolicVariableBinder(fake_ctx, cycle).bind()
    with pytest.raises(DuplicateUnknownError):
        binder.bind()


def test_bind_validates_cycle(cycle: Cycle, fake_ctx: RecordingContext) -> None:
    cycle.lower_bound_cycle_time = cycle.upper_bound_cycle_time + 1
    with pytest.raises(InvalidCycleBoundsError):
        SymbolicVariableBinder(fake_ctx, cycle).bind()
    assert fake_ctx.names == []


@pytest.mark.parametrize("prt, slot", [(4, 0), (0, 4), (-1, 0), (0, -1)])
def test_out_of_range_coordinates_are_fatal(
    cycle: Cycle, fake_ctx: RecordingContext, prt: int, slot: int
) -> None:
    binder = SymbolicVariableBinder(fake_ctx, cycle).bind()
    with pytest.raises(SlotIndexError):
        binder.slot_start_variable(prt, slot)
    with pytest.raises(SlotIndexError):
        binder.slot_duration_variable(prt, slot)


def test_slot_lookup_before_bind_is_fatal(cycle: Cycle, fake_ctx: RecordingContext) -> None:
    with pytest.raises(SlotIndexError, match="bind"):
        SymbolicVariableBinder(fake_ctx, cycle).slot_start_variable(0, 0)


def test_nth_cycle_start_anchors_at_first_start(cycle: Cycle, fake_ctx: RecordingContext) -> None:
    binder = SymbolicVariableBinder(fake_ctx, cycle).bind()

    assert binder.nth_cycle_start(0) == binder.first_cycle_start
    assert binder.nth_cycle_start(-1) == binder.first_cycle_start


def test_nth_cycle_start_with_integer_index(cycle: Cycle, fake_ctx: RecordingContext) -> None:
    binder = SymbolicVariableBinder(fake_ctx, cycle).bind()
    model = _solved_model(fake_ctx, binder, duration=125.0, start=7.0)

    assert model.value(binder.nth_cycle_start(3)) == 7.0 + 125.0 * 3
    assert model.value(binder.nth_cycle_start(1)) == 132.0


@pytest.mark.parametrize("index, expected", [(-2.0, 7.0), (0.0, 7.0), (1.0, 132.0), (4.0, 507.0)])
def test_nth_cycle_start_with_symbolic_index(
    cycle: Cycle, fake_ctx: RecordingContext, index: float, expected: float
) -> None:
    binder = SymbolicVariableBinder(fake_ctx, cycle).bind()
    symbolic = fake_ctx.real_var("repetition")
    model = _solved_model(fake_ctx, binder, duration=125.0, start=7.0, repetition=index)

    assert model.value(binder.nth_cycle_start(symbolic)) == expected


def test_failed_bind_leaves_binder_unbound(
    fake_ctx: RecordingContext, fake_session: RecordingSession
) -> None:
    ids = CycleIdGenerator()
    first = Cycle(ids, 10.0, 1.0, 0.0, 1.0)
    second = Cycle(ids, 10.0, 1.0, 0.0, 1.0)
    first.name = second.name = "port"
    SymbolicVariableBinder(fake_ctx, first).bind()

    # cycle-level names carry the instance id, slot names only the cycle name
    binder = SymbolicVariableBinder(fake_ctx, second)
    with pytest.raises(DuplicateUnknownError, match="port_prt0_slot0_start"):
        binder.bind()

    assert not binder.is_bound
    assert binder.cycle_duration is None
    with pytest.raises(SlotIndexError):
        binder.slot_start_variable(0, 0)
    second.cycle_duration = 10.0
    with pytest.raises(ReloadOrderError):
        ConstraintLoader().reload(second, binder, second.slots, fake_session)
    assert fake_session.constraints == []
