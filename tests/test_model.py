import numpy as np
import pytest

from sortsonic import settings
from sortsonic.model import ArrayModel, Highlights, RunState, RunStateHandle


class TestArrayModel:
    def test_reset_fills_requested_size_within_bounds(self):
        model = ArrayModel(max_height=120, rng=np.random.default_rng(1))
        model.reset(500)
        values = model.snapshot()
        assert len(values) == 500
        assert min(values) >= settings.MIN_MAGNITUDE
        assert max(values) <= 120

    def test_reset_is_reproducible_with_a_seed(self):
        a = ArrayModel(rng=np.random.default_rng(42)); a.reset(20)
        b = ArrayModel(rng=np.random.default_rng(42)); b.reset(20)
        assert a.snapshot() == b.snapshot()

    def test_swap_get_set(self):
        model = ArrayModel.from_values([4, 5, 6])
        model.swap(0, 2)
        assert model.snapshot() == (6, 5, 4)
        model.set(1, 9)
        assert model.get(1) == 9

    @pytest.mark.parametrize("i, j", [(0, 3), (-1, 0), (1, 10)])
    def test_swap_out_of_range(self, i, j):
        model = ArrayModel.from_values([1, 2, 3])
        with pytest.raises(IndexError):
            model.swap(i, j)
        assert model.snapshot() == (1, 2, 3)

    def test_negative_index_does_not_wrap(self):
        model = ArrayModel.from_values([1, 2, 3])
        with pytest.raises(IndexError):
            model.get(-1)
        with pytest.raises(IndexError):
            model.set(-1, 0)

    def test_snapshot_is_a_copy(self):
        model = ArrayModel.from_values([3, 2, 1])
        snap = model.snapshot()
        model.swap(0, 2)
        assert snap == (3, 2, 1)

    def test_negative_magnitudes_are_rejected(self):
        with pytest.raises(ValueError):
            ArrayModel.from_values([3, -12, 5])
        model = ArrayModel.from_values([3, 12, 5])
        with pytest.raises(ValueError):
            model.set(1, -1)
        assert model.snapshot() == (3, 12, 5)

    def test_max_height_too_small(self):
        with pytest.raises(ValueError):
            ArrayModel(max_height=5)


def test_highlights_are_read_once():
    h = Highlights()
    h.mark(3, 4)
    assert h.consume() == (3, 4)
    assert h.consume() == (None, None)


class TestRunStateHandle:
    def test_lifecycle(self):
        state = RunStateHandle()
        assert state.state is RunState.IDLE
        assert state.try_start()
        assert state.state is RunState.RUNNING
        state.request_stop()
        assert state.stop_requested
        state.finish()
        assert state.state is RunState.IDLE

    def test_only_one_start(self):
        state = RunStateHandle()
        assert state.try_start()
        assert not state.try_start()
        state.request_stop()
        assert not state.try_start()

    def test_stop_when_idle_is_a_no_op(self):
        state = RunStateHandle()
        state.request_stop()
        state.request_stop()
        assert state.state is RunState.IDLE
        assert not state.is_active
