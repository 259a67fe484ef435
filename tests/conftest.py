# ==============================================
# Pytest Configuration and Fixtures
# ==============================================
#
# Shared fixtures for all tests.
#
# FIXTURES:
# ---------
# - clean_env        (autouse) → no BULK_* variables, fresh config singleton
# - base_time        → fixed UTC datetime
# - make_command     → factory: make_command("a", seconds=0) -> Command
# - recorder         → a RecordingStage that logs every signal it receives
# - output           → in-memory text stream for ConsoleOutput
# - app_config       → AppConfig writing reports into tmp_path
# ==============================================

import io
from datetime import datetime, timedelta, timezone

import pytest

from bulk.commands.command import Command
from bulk.commands.processor import CommandProcessor
from bulk.config import AppConfig, ReportConfig, reset_config


class RecordingStage(CommandProcessor):
    """Downstream stage that remembers everything it is sent."""

    def __init__(self):
        super().__init__()
        self.events = []
        self.commands = []

    def accept(self, command):
        self.commands.append(command)
        self.events.append(("accept", command.text))

    def notify_block_start(self):
        self.events.append(("block_start",))

    def notify_block_end(self):
        self.events.append(("block_end",))

    def close(self):
        self.events.append(("close",))

    @property
    def texts(self):
        return [c.text for c in self.commands]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Isolate tests from the developer's environment and .env file."""
    for name in (
        "BULK_BLOCK_AWARE",
        "BULK_FLUSH_OPEN_BLOCK",
        "BULK_REPORT_DIR",
        "BULK_TIMESTAMP_UNIT",
        "BULK_REPORT_TERMINAL",
        "BULK_ON_WRITE_ERROR",
        "BULK_VERBOSE",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("bulk.config.load_dotenv", lambda **kwargs: False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def base_time():
    return datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_command(base_time):
    def _make(text, seconds=0):
        return Command(text=text, timestamp=base_time + timedelta(seconds=seconds))
    return _make


@pytest.fixture
def recorder():
    return RecordingStage()


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def app_config(tmp_path):
    return AppConfig(report=ReportConfig(report_dir=str(tmp_path)))
