import pytest

from atomgrid.statemachine import State, StateMachine


class Recorder(State):
    def __init__(self, name, log):
        self.name = name
        self.log = log

    def start(self):
        self.log.append((self.name, "start"))

    def update(self):
        self.log.append((self.name, "update"))

    def end(self):
        self.log.append((self.name, "end"))


def test_start_enters_state():
    log = []
    machine = StateMachine()
    first = Recorder("a", log)
    machine.start(first)
    assert machine.current is first
    assert log == [("a", "start")]


def test_update_runs_current_state():
    log = []
    machine = StateMachine()
    machine.start(Recorder("a", log))
    machine.update()
    machine.update()
    assert log == [("a", "start"), ("a", "update"), ("a", "update")]


def test_change_happens_on_next_update_without_updating():
    log = []
    machine = StateMachine()
    first = Recorder("a", log)
    second = Recorder("b", log)
    machine.start(first)
    machine.change(second)
    assert machine.current is first
    assert machine.pending is second
    machine.update()
    assert machine.current is second
    assert machine.pending is None
    assert log == [("a", "start"), ("a", "end"), ("b", "start")]
    machine.update()
    assert log[-1] == ("b", "update")


def test_change_to_none_is_ignored():
    log = []
    machine = StateMachine()
    first = Recorder("a", log)
    machine.start(first)
    machine.change(None)
    machine.update()
    assert machine.current is first
    assert log[-1] == ("a", "update")


def test_start_with_none_is_ignored():
    machine = StateMachine()
    machine.start(None)
    assert machine.current is None


def test_update_before_start_raises():
    with pytest.raises(RuntimeError):
        StateMachine().update()


def test_change_requested_during_transition_start_is_dropped():
    log = []
    machine = StateMachine()
    third = Recorder("c", log)

    class Eager(Recorder):
        def start(self):
            super().start()
            machine.change(third)

    machine.start(Recorder("a", log))
    machine.change(Eager("b", log))
    machine.update()
    assert machine.pending is None
    assert machine.current.name == "b"