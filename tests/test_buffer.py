import pytest

from deadtime.buffer import READOUT_TICKS, Buffer


def test_new_buffer_is_empty_and_idle():
    buffer = Buffer(limit=3)
    assert buffer.queue == 0
    assert buffer.readout_remaining == 0
    assert not buffer.is_filled()
    assert buffer.free()
    assert not buffer.busy


def test_zero_capacity_is_never_free():
    assert not Buffer(limit=0).free()


def test_negative_limit_rejected():
    with pytest.raises(ValueError):
        Buffer(limit=-1)


def test_free_tracks_capacity():
    buffer = Buffer(limit=2)
    buffer.add()
    assert buffer.free()
    buffer.add()
    assert not buffer.free()


def test_read_on_empty_buffer_is_noop():
    buffer = Buffer(limit=1)
    buffer.read()
    assert buffer.readout_remaining == 0


def test_read_does_not_reset_running_readout():
    buffer = Buffer(limit=2)
    buffer.add()
    buffer.read()
    for _ in range(10):
        buffer.step()
    assert buffer.readout_remaining == READOUT_TICKS - 10
    buffer.add()
    buffer.read()
    buffer.read()
    assert buffer.readout_remaining == READOUT_TICKS - 10


def test_full_readout_cycle_removes_one_event():
    buffer = Buffer(limit=1)
    buffer.add()
    buffer.read()
    for _ in range(READOUT_TICKS - 1):
        buffer.step()
    assert buffer.queue == 1
    buffer.step()
    assert buffer.queue == 0
    assert buffer.readout_remaining == 0


def test_step_without_readout_keeps_events():
    buffer = Buffer(limit=2)
    buffer.add()
    buffer.add()
    buffer.step()
    assert buffer.queue == 2


def test_custom_readout_duration():
    buffer = Buffer(limit=4, readout_ticks=3)
    buffer.add()
    buffer.add()
    buffer.read()
    for _ in range(3):
        buffer.step()
    assert buffer.queue == 1
    assert buffer.readout_remaining == 0
    buffer.read()
    assert buffer.readout_remaining == 3
