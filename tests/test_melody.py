import random

import pytest

import cadenza.events
import cadenza.melody


# ── Helpers ───────────────────────────────────────────────────────────

def test_octave_for_register () -> None:

	"""Registers map to octaves three to five."""

	assert cadenza.melody.octave_for_register("low") == 3
	assert cadenza.melody.octave_for_register("high") == 5
	assert cadenza.melody.octave_for_register(None) == 4
	assert cadenza.melody.octave_for_register("stratosphere") == 4


def test_stepwise_note_stays_close (rng: random.Random, analysis) -> None:

	"""Chosen pitches are within a major third of the last pitch."""

	for _ in range(50):
		pitch = cadenza.melody.choose_stepwise_note(64, ["C", "E", "G"], ["C", "D", "E", "F", "G", "A", "B"], 4, False, rng, analysis)
		assert abs(pitch - 64) <= 4


def test_stepwise_note_prefers_chord_tones (rng: random.Random, analysis) -> None:

	"""With the chord-tone preference only chord tones come back."""

	for _ in range(50):
		pitch = cadenza.melody.choose_stepwise_note(65, ["C", "E", "G"], ["F", "A"], 4, True, rng, analysis)
		assert pitch % 12 in (0, 4, 7)


def test_stepwise_note_falls_back_to_root (rng: random.Random, analysis) -> None:

	"""A last pitch far from every candidate gives the root."""

	assert cadenza.melody.choose_stepwise_note(5, ["D", "F", "A"], ["D"], 4, False, rng, analysis) == 62


# ── lyrical ───────────────────────────────────────────────────────────

def test_lyrical_bounds (rng: random.Random, check_events) -> None:

	"""Lyrical notes stay in the chord span and a 50-100 velocity band."""

	events = cadenza.melody.melody("Dm7", "C major", style="lyrical", beats=8, humanize=1.0, rng=rng)

	assert events
	check_events(events, span_end=3840)
	assert all(50 <= e.velocity <= 100 for e in events)


def test_lyrical_continues_from_previous_note (analysis) -> None:

	"""The first note steps from the previous chord's last pitch."""

	for seed in range(20):
		events = cadenza.melody.melody("C", "C major", style="lyrical", previous_note=64, rng=random.Random(seed))
		if events:
			assert abs(events[0].pitch - 64) <= 4


def test_unknown_style_is_lyrical () -> None:

	"""Unknown styles fall back to lyrical."""

	unknown = cadenza.melody.melody("Am7", "A minor", style="yodel", rng=random.Random(5))
	lyrical = cadenza.melody.melody("Am7", "A minor", style="lyrical", rng=random.Random(5))

	assert unknown == lyrical


def test_register_sets_octave (rng: random.Random) -> None:

	"""A high register melody sits around octave five."""

	events = cadenza.melody.melody("C", "C major", style="riff-based", register="high", humanize=0, rng=rng)

	assert events[0].pitch == 72


# ── riff-based ────────────────────────────────────────────────────────

def test_riff_shape (rng: random.Random) -> None:

	"""1-5-3-1 in eighth, eighth, quarter, quarter, repeating."""

	events = cadenza.melody.melody("C", style="riff-based", humanize=0, rng=rng)

	assert [e.start_tick for e in events] == [0, 240, 480, 960, 1440, 1680]
	assert [e.pitch for e in events] == [60, 67, 64, 60, 60, 67]
	assert [e.duration_ticks for e in events] == [230, 230, 470, 470, 230, 230]
	assert [e.velocity for e in events] == [85, 75, 75, 75, 85, 75]


# ── improvisatory ─────────────────────────────────────────────────────

def test_improvisatory_bounds (check_events) -> None:

	"""Busy lines stay in range, including the chromatic notes."""

	events = cadenza.melody.melody("G7", "G mixolydian", style="improvisatory", beats=8, energy=1.0, tension=1.0, humanize=1.0, rng=random.Random(8))

	assert events
	check_events(events, span_end=3840)
	assert all(0 <= e.pitch <= 127 for e in events)
	assert all(45 <= e.velocity <= 110 for e in events)


# ── call-response ─────────────────────────────────────────────────────

def test_call_response_halves (rng: random.Random) -> None:

	"""A chord-tone call, a softer answer and a root to finish."""

	events = cadenza.melody.melody("C", "C major", style="call-response", rng=rng)
	final = events[-1]
	call = [e for e in events[:-1] if e.start_tick < 960]
	response = [e for e in events[:-1] if e.start_tick >= 960]

	assert final.start_tick == 1440
	assert final.duration_ticks == 460
	assert final.pitch == 60
	assert final.velocity == 75

	assert call
	assert all(e.start_tick < 480 for e in call)
	assert all(e.pitch in (60, 64, 67) for e in call)
	assert all(e.velocity == 80 for e in call)
	assert all(960 <= e.start_tick < 1440 for e in response)
	assert all(e.velocity == 70 for e in response)


# ── melody_for_progression() ──────────────────────────────────────────

def test_progression_stays_in_span (rng: random.Random, check_events) -> None:

	"""A full progression melody ends by the last chord boundary."""

	events = cadenza.melody.melody_for_progression(["Dm7", "G7", "Cmaj7", "Am7"], "C major", 4, style="lyrical", rng=rng)

	assert events
	check_events(events, span_end=7680)


def test_progression_is_reproducible () -> None:

	"""The same seed gives the same line."""

	chords = ["Dm7", "G7", "Cmaj7"]

	first = cadenza.melody.melody_for_progression(chords, "C major", 4, style="improvisatory", rng=random.Random(21))
	second = cadenza.melody.melody_for_progression(chords, "C major", 4, style="improvisatory", rng=random.Random(21))

	assert first == second


def test_progression_carries_only_numeric_pitches (monkeypatch: pytest.MonkeyPatch) -> None:

	"""A chord ending on a named pitch hands no previous note to the next chord."""

	received = []
	endings = iter([64, "C4", 67])

	def fake_melody (chord: str, previous_note=None, start_tick: int = 0, **kwargs) -> list:
		received.append(previous_note)
		return [cadenza.events.NoteEvent(start_tick, 480, next(endings), 80)]

	monkeypatch.setattr(cadenza.melody, "melody", fake_melody)

	cadenza.melody.melody_for_progression(["C", "F", "G"], "C major", 4)

	assert received == [None, 64, None]
