import random

import pytest

import cadenza.sequence_utils


# ── pick_weighted() ───────────────────────────────────────────────────

def test_pick_weighted_low_draw_takes_first (fixed_random) -> None:

	"""A draw of zero lands on the first positive weight."""

	assert cadenza.sequence_utils.pick_weighted(["a", "b"], [1, 1], fixed_random(0.0)) == "a"


def test_pick_weighted_high_draw_takes_last (fixed_random) -> None:

	"""A draw near one lands on the last item."""

	assert cadenza.sequence_utils.pick_weighted(["a", "b"], [1, 1], fixed_random(0.999)) == "b"


def test_pick_weighted_skips_zero_weight (fixed_random) -> None:

	"""An item with zero weight is passed over for any positive draw."""

	assert cadenza.sequence_utils.pick_weighted(["never", "always"], [0, 1], fixed_random(0.5)) == "always"


def test_pick_weighted_follows_weights () -> None:

	"""Heavier items are chosen more often."""

	rng = random.Random(7)
	picks = [cadenza.sequence_utils.pick_weighted([480, 240], [9, 1], rng) for _ in range(1000)]

	assert picks.count(480) > picks.count(240) * 4


def test_pick_weighted_empty_raises (rng: random.Random) -> None:

	"""Empty items raise ValueError."""

	with pytest.raises(ValueError, match="cannot be empty"):
		cadenza.sequence_utils.pick_weighted([], [], rng)


def test_pick_weighted_length_mismatch_raises (rng: random.Random) -> None:

	"""Items and weights must line up."""

	with pytest.raises(ValueError, match="same length"):
		cadenza.sequence_utils.pick_weighted(["a", "b"], [1], rng)


# ── shuffled() ────────────────────────────────────────────────────────

def test_shuffled_is_a_permutation (rng: random.Random) -> None:

	"""All elements survive and the input is untouched."""

	items = [60, 64, 67, 72]
	result = cadenza.sequence_utils.shuffled(items, rng)

	assert sorted(result) == items
	assert items == [60, 64, 67, 72]


def test_shuffled_is_reproducible () -> None:

	"""The same seed gives the same order."""

	items = list(range(10))

	assert cadenza.sequence_utils.shuffled(items, random.Random(3)) == cadenza.sequence_utils.shuffled(items, random.Random(3))


def test_shuffled_single_item (rng: random.Random) -> None:

	"""One item shuffles to itself."""

	assert cadenza.sequence_utils.shuffled([5], rng) == [5]


# ── jitter() ──────────────────────────────────────────────────────────

def test_jitter_bounds (rng: random.Random) -> None:

	"""Offsets stay within half the spread either side."""

	for _ in range(200):
		offset = cadenza.sequence_utils.jitter(rng, 40)
		assert -20 <= offset < 20


def test_jitter_extremes (fixed_random) -> None:

	"""A zero draw gives the negative half-spread."""

	assert cadenza.sequence_utils.jitter(fixed_random(0.0), 40) == -20
	assert cadenza.sequence_utils.jitter(fixed_random(0.5), 40) == 0
