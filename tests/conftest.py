import random
import typing

import pytest

import cadenza.events
import cadenza.harmony


class FixedRandom (random.Random):

	"""Random source that always returns the same value from ``random()``."""

	def __init__ (self, value: float) -> None:

		super().__init__(0)
		self.value = value

	def random (self) -> float:

		"""Return the fixed value."""

		return self.value


class EMinorAnalysis (cadenza.harmony.TheoryAnalysis):

	"""Analysis that hears every chord as E minor."""

	def chord_tones (self, symbol: str) -> typing.List[str]:

		"""Ignore the symbol and return E-G-B."""

		return ["E", "G", "B"]


def assert_valid_events (events: typing.List[cadenza.events.NoteEvent], span_end: typing.Optional[int] = None) -> None:

	"""Check the universal event bounds, and the span end when given."""

	for event in events:
		assert event.start_tick >= 0
		assert event.duration_ticks >= 1
		assert 1 <= event.velocity <= 127

		if span_end is not None:
			assert event.end_tick <= span_end


@pytest.fixture
def rng () -> random.Random:

	"""A seeded random source for reproducible tests."""

	return random.Random(1234)


@pytest.fixture
def analysis () -> cadenza.harmony.TheoryAnalysis:

	"""The built-in harmonic analysis."""

	return cadenza.harmony.TheoryAnalysis()


@pytest.fixture
def fixed_random () -> typing.Callable[[float], FixedRandom]:

	"""Factory for random sources pinned to one value."""

	return FixedRandom


@pytest.fixture
def e_minor_analysis () -> EMinorAnalysis:

	"""An analysis that maps every chord to E minor."""

	return EMinorAnalysis()


@pytest.fixture
def check_events () -> typing.Callable[..., None]:

	"""The shared event bounds assertion."""

	return assert_valid_events
