import pytest

from conftest import FakeClock
from scheduler import Scheduler


class TestScheduler:

    def setup_method(self):
        self.clock = FakeClock(0.0)
        self.scheduler = Scheduler(self.clock)
        self.calls = []

    def test_call_later_fires_once_when_due(self):
        self.scheduler.call_later(1.0, lambda: self.calls.append("a"))

        assert self.scheduler.run_due(0.999) == 0
        assert self.scheduler.run_due(1.0) == 1
        assert self.scheduler.run_due(5.0) == 0
        assert self.calls == ["a"]

    def test_run_due_defaults_to_clock(self):
        self.scheduler.call_later(2.0, lambda: self.calls.append("a"))
        self.clock.advance(2.0)
        self.scheduler.run_due()
        assert self.calls == ["a"]

    def test_fires_in_due_order(self):
        self.scheduler.call_later(3.0, lambda: self.calls.append("late"))
        self.scheduler.call_later(1.0, lambda: self.calls.append("early"))
        self.scheduler.call_later(1.0, lambda: self.calls.append("early-2"))
        self.scheduler.run_due(10.0)
        assert self.calls == ["early", "early-2", "late"]

    def test_repeating_job_catches_up(self):
        self.scheduler.call_every(1.0, lambda: self.calls.append(self.clock()))
        assert self.scheduler.run_due(3.5) == 3
        assert self.scheduler.run_due(4.0) == 1
        assert len(self.calls) == 4

    def test_cancelled_job_never_fires(self):
        job = self.scheduler.call_later(1.0, lambda: self.calls.append("a"))
        job.cancel()
        assert self.scheduler.pending == 0
        self.scheduler.run_due(2.0)
        assert self.calls == []

    def test_repeating_job_can_cancel_itself(self):
        def once():
            self.calls.append("tick")
            job.cancel()

        job = self.scheduler.call_every(1.0, once)
        self.scheduler.run_due(10.0)
        assert self.calls == ["tick"]

    def test_cancel_all_from_inside_a_callback(self):
        self.scheduler.call_every(1.0, lambda: (self.calls.append("tick"), self.scheduler.cancel_all()))
        self.scheduler.call_later(5.0, lambda: self.calls.append("later"))
        self.scheduler.run_due(10.0)
        assert self.calls == ["tick"]
        assert self.scheduler.pending == 0

    def test_rejects_non_positive_interval(self):
        with pytest.raises(ValueError):
            self.scheduler.call_every(0, lambda: None)
