from __future__ import annotations

import logging

from snippad.copy_status import COPY_RESET_MS, CopyStatus, CopyStatusMachine


class FakeScheduler:
    def __init__(self) -> None:
        self.jobs: dict[str, tuple[int, object]] = {}
        self.cancelled: list[str] = []
        self._next = 0

    def after(self, ms, func):
        self._next += 1
        handle = f"after#{self._next}"
        self.jobs[handle] = (ms, func)
        return handle

    def after_cancel(self, handle) -> None:
        self.cancelled.append(handle)
        self.jobs.pop(handle, None)

    def fire_all(self) -> None:
        for handle, (_ms, func) in list(self.jobs.items()):
            del self.jobs[handle]
            func()


class FakeClipboard:
    def __init__(self, ok: bool = True, exc: Exception | None = None) -> None:
        self.ok = ok
        self.exc = exc
        self.writes: list[str] = []

    def write(self, text: str) -> bool:
        if self.exc is not None:
            raise self.exc
        self.writes.append(text)
        return self.ok


def test_copy_round_trip():
    scheduler = FakeScheduler()
    clipboard = FakeClipboard()
    changes: list[CopyStatus] = []
    machine = CopyStatusMachine(clipboard, scheduler, on_change=changes.append)

    assert machine.state is CopyStatus.READY
    assert machine.copy("a { }") is True
    assert machine.state is CopyStatus.COPIED
    assert clipboard.writes == ["a { }"]
    assert [ms for ms, _ in scheduler.jobs.values()] == [COPY_RESET_MS]

    scheduler.fire_all()

    assert machine.state is CopyStatus.READY
    assert changes == [CopyStatus.COPIED, CopyStatus.READY]


def test_copy_while_copied_is_a_no_op():
    scheduler = FakeScheduler()
    clipboard = FakeClipboard()
    machine = CopyStatusMachine(clipboard, scheduler)
    machine.copy("first")

    assert machine.copy("second") is False
    assert clipboard.writes == ["first"]
    assert len(scheduler.jobs) == 1
    assert machine.state is CopyStatus.COPIED


def test_failed_write_stays_ready_and_logs(caplog):
    scheduler = FakeScheduler()
    machine = CopyStatusMachine(FakeClipboard(ok=False), scheduler)

    with caplog.at_level(logging.WARNING, logger="snippad.copy_status"):
        assert machine.copy("text") is False

    assert machine.state is CopyStatus.READY
    assert scheduler.jobs == {}
    assert "Failed to copy" in caplog.text


def test_raising_adapter_is_reported_not_raised(caplog):
    machine = CopyStatusMachine(FakeClipboard(exc=RuntimeError("no display")), FakeScheduler())

    with caplog.at_level(logging.ERROR, logger="snippad.copy_status"):
        assert machine.copy("text") is False

    assert machine.state is CopyStatus.READY
    assert "no display" in caplog.text


def test_copy_available_again_after_reset():
    scheduler = FakeScheduler()
    clipboard = FakeClipboard()
    machine = CopyStatusMachine(clipboard, scheduler, reset_ms=250)
    machine.copy("one")
    scheduler.fire_all()

    assert machine.copy("two") is True
    assert clipboard.writes == ["one", "two"]
    assert [ms for ms, _ in scheduler.jobs.values()] == [250]


def test_close_cancels_pending_reset():
    scheduler = FakeScheduler()
    changes: list[CopyStatus] = []
    machine = CopyStatusMachine(FakeClipboard(), scheduler, on_change=changes.append)
    machine.copy("text")
    (handle,) = scheduler.jobs

    machine.close()

    assert scheduler.cancelled == [handle]
    assert scheduler.jobs == {}
    assert changes == [CopyStatus.COPIED]
    assert machine.copy("again") is False


def test_late_timer_after_close_does_not_notify():
    scheduler = FakeScheduler()
    changes: list[CopyStatus] = []
    machine = CopyStatusMachine(FakeClipboard(), scheduler, on_change=changes.append)
    machine.copy("text")
    [(_, callback)] = scheduler.jobs.values()

    machine.close()
    callback()

    assert changes == [CopyStatus.COPIED]
