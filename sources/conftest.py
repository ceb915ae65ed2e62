import os
import tempfile
from typing import List

import pytest

# keep test runs from writing charge_stats.log into the working directory
os.environ.setdefault(
    "CHARGE_STATS_LOG_FILE", os.path.join(tempfile.gettempdir(), "charge_stats_test.log")
)

from app_logger import log_buffer  # noqa: E402
from models import SourceId, StatsAtom  # noqa: E402
from side_channel_store import SideChannelStore  # noqa: E402


class RecordingSink:
    """Keeps every reported atom; ``ok`` decides what ``report`` returns."""

    def __init__(self, ok: bool = True):
        self.ok = ok
        self.atoms: List[StatsAtom] = []

    def report(self, atom: StatsAtom) -> bool:
        self.atoms.append(atom)
        return self.ok

    def by_label(self, label: str) -> List[StatsAtom]:
        return [a for a in self.atoms if a.label == label]


class FakeClock:
    """Returns the queued boot times one by one, then repeats the last."""

    def __init__(self, *times: int):
        self.times = list(times)

    def __call__(self) -> int:
        if len(self.times) > 1:
            return self.times.pop(0)
        return self.times[0]


@pytest.fixture(autouse=True)
def clean_log_buffer():
    log_buffer.clear()
    yield


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def source_paths(tmp_path):
    return {sid: tmp_path / f"{sid.value}_stats" for sid in SourceId}


@pytest.fixture
def store(source_paths) -> SideChannelStore:
    return SideChannelStore.from_paths(source_paths)


def logged(fragment: str) -> bool:
    return any(fragment in line for line in log_buffer)
