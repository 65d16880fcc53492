import sys
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from emitter import Emitter  # noqa: E402


@pytest.fixture
def emitter() -> Emitter:
    return Emitter()


class CallLog:
    """Records (name, args) for every listener it hands out."""

    def __init__(self) -> None:
        self.entries = []

    def listener(self, name):
        def listener(*args):
            self.entries.append((name, args))

        listener.__name__ = name
        return listener

    @property
    def names(self):
        return [name for name, _ in self.entries]


@pytest.fixture
def calls() -> CallLog:
    return CallLog()
