import pytest

from sortsonic import settings
from sortsonic.algorithms import Algorithm
from sortsonic.engine import Pacer, run_sort
from sortsonic.model import RunStateHandle, StepKind

from conftest import RecordingSink

VALUES = [41, 17, 88, 17, 63, 5, 72, 30, 54, 12]


def _started():
    state = RunStateHandle()
    state.try_start()
    return state


class TestStopRequest:
    @pytest.mark.parametrize("algorithm", list(Algorithm), ids=lambda a: a.key)
    @pytest.mark.parametrize("k", [1, 4, 11])
    def test_stop_after_step_k_keeps_exactly_k_steps(self, algorithm, k, make_model, pacer):
        # unstopped reference, capped a little past k
        ref_state = _started()
        reference = RecordingSink(ref_state, stop_after=k + 5)
        run_sort(algorithm, make_model(VALUES, seed=9), reference, ref_state, pacer)
        assert len(reference.steps) >= k

        state = _started()
        model = make_model(VALUES, seed=9)
        sink = RecordingSink(state, stop_after=k)
        finished = run_sort(algorithm, model, sink, state, pacer)

        assert not finished
        assert len(sink.steps) == k
        assert sink.events == reference.events[:k]
        assert model.snapshot() == reference.steps[k - 1][1]

    def test_stop_before_first_step(self, make_model, pacer):
        state = _started()
        state.request_stop()
        model = make_model(VALUES)
        sink = RecordingSink()
        assert not run_sort(Algorithm.MERGE, model, sink, state, pacer)
        assert sink.steps == []
        assert model.snapshot() == tuple(VALUES)

    def test_stop_during_finalize_skips_rest_of_sweep(self, make_model, pacer):
        values = [3, 1, 2]
        state = _started()
        trace = RecordingSink()
        run_sort(Algorithm.INSERTION, make_model(values), trace, _started(), pacer)
        first_final = next(i for i, e in enumerate(trace.events) if e.kind is StepKind.FINALIZE)

        sink = RecordingSink(state, stop_after=first_final + 1)
        assert not run_sort(Algorithm.INSERTION, make_model(values), sink, state, pacer)
        assert [e.kind for e in sink.events].count(StepKind.FINALIZE) == 1

    def test_repeated_stop_requests_match_a_single_one(self, make_model, pacer):
        class DoubleStop(RecordingSink):
            def on_step(self, event, snapshot):
                super().on_step(event, snapshot)
                if len(self.steps) == 3:
                    self.state.request_stop(); self.state.request_stop()

        once_state = _started()
        once = RecordingSink(once_state, stop_after=3)
        m1 = make_model(VALUES)
        run_sort(Algorithm.QUICK, m1, once, once_state, pacer)

        twice_state = _started()
        twice = DoubleStop(twice_state)
        m2 = make_model(VALUES)
        run_sort(Algorithm.QUICK, m2, twice, twice_state, pacer)

        assert once.events == twice.events
        assert m1.snapshot() == m2.snapshot()


class TestPacer:
    @pytest.mark.parametrize("speed, delay", [
        (settings.SPEED_MAX, 0.001),
        (settings.SPEED_MIN, 0.5),
        (100, 0.401),
    ])
    def test_delay(self, speed, delay):
        assert Pacer(speed).delay == pytest.approx(delay)

    @pytest.mark.parametrize("speed, clamped", [(0, 1), (-20, 1), (10_000, 500)])
    def test_speed_is_clamped(self, speed, clamped):
        assert Pacer(speed).speed == clamped

    def test_one_wait_per_event(self, make_model):
        slept = []
        pacer = Pacer(settings.SPEED_MAX, sleep=slept.append)
        sink = RecordingSink()
        run_sort(Algorithm.BUBBLE, make_model([2, 1, 3]), sink, _started(), pacer)
        assert len(slept) == len(sink.steps)
        assert all(s == pytest.approx(0.001) for s in slept)

    def test_speed_change_applies_to_next_delay(self, make_model):
        slept = []
        pacer = Pacer(settings.SPEED_MAX, sleep=slept.append)

        class SlowDown(RecordingSink):
            def on_step(self, event, snapshot):
                super().on_step(event, snapshot)
                if len(self.steps) == 2:
                    pacer.speed = settings.SPEED_MIN

        run_sort(Algorithm.SELECTION, make_model([3, 2, 1]), SlowDown(), _started(), pacer)
        assert slept[0] == pytest.approx(0.001)
        assert slept[1] == pytest.approx(0.5)
