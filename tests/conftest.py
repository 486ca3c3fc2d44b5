import pytest

from ranker import EntropyRanker

SCENARIO_WORDS = ("crane", "trace", "slate", "plate", "grate")


@pytest.fixture
def words():
    return SCENARIO_WORDS


@pytest.fixture
def ranker():
    return EntropyRanker(workers=1)


@pytest.fixture
def scripted():
    """Build a fake ``input`` that replays lines, then raises EOFError."""

    def make(lines):
        it = iter(lines)

        def read(prompt=""):
            try:
                return next(it)
            except StopIteration:
                raise EOFError from None

        return read

    return make
