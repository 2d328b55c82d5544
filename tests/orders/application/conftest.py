import pytest
from orders.order import listeners


class RecordingLogger:
    """Stands in for the observers' structlog logger and keeps what they emit."""

    def __init__(self, fail=False):
        self.fail = fail
        self.records = []
        self.failures = []

    def info(self, message, **fields):
        if self.fail:
            raise RuntimeError("notification service down")
        self.records.append((message, fields))

    def exception(self, message, **fields):
        self.failures.append((message, fields))

    @property
    def event_types(self):
        return [fields["event_type"] for _, fields in self.records]


@pytest.fixture()
def observed(monkeypatch):
    recorder = RecordingLogger()
    monkeypatch.setattr(listeners, "logger", recorder)
    return recorder


@pytest.fixture()
def broken_observers(monkeypatch):
    recorder = RecordingLogger(fail=True)
    monkeypatch.setattr(listeners, "logger", recorder)
    return recorder
