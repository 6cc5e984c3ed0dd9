import pytest
import sys
from pathlib import Path

# Add src to sys.path so we can import gem_combiner
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from gem_combiner.combiner import Workbench  # noqa: E402
from gem_combiner.core.models.gems import Gem  # noqa: E402


# Common test fixtures
@pytest.fixture
def bench() -> Workbench:
    """Return a fresh workbench with its own ledger."""
    return Workbench()


@pytest.fixture
def yellow() -> Gem:
    return Gem.base("y")


@pytest.fixture
def yellow_2() -> Gem:
    """A grade 1 pure yellow ("2y")."""
    y = Gem.base("y")
    return Gem.combine(y, y)
