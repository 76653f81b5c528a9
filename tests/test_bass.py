import random

import cadenza.bass


# ── chord_parts() ─────────────────────────────────────────────────────

def test_chord_parts_seventh_chord () -> None:

	"""A seventh chord fills every part."""

	assert cadenza.bass.chord_parts("Dm7") == cadenza.bass.ChordParts(root="D", third="F", fifth="A", seventh="C")


def test_chord_parts_triad_has_no_seventh () -> None:

	"""Triads leave the seventh empty."""

	parts = cadenza.bass.chord_parts("C")

	assert parts.seventh is None
	assert parts.tones() == ["C", "E", "G"]


def test_chord_parts_fifth_is_perfect () -> None:

	"""The fifth is always a perfect fifth above the root."""

	assert cadenza.bass.chord_parts("Bdim").fifth == "F#"


# ── root-fifth ────────────────────────────────────────────────────────

def test_root_fifth_pitches_and_rhythm (rng: random.Random) -> None:

	"""Root quarters on even beats, fifth eighths on odd beats."""

	events = cadenza.bass.bass_line("Cmaj7", pattern="root-fifth", humanize=0, energy=0.6, octave=2, rng=rng)

	assert [e.pitch for e in events] == [36, 43, 36, 43]
	assert [e.start_tick for e in events] == [0, 480, 960, 1440]
	assert [e.duration_ticks for e in events] == [480, 240, 480, 240]
	assert [e.velocity for e in events] == [97, 74, 97, 74]


def test_swing_delays_odd_beats (rng: random.Random) -> None:

	"""Swing pushes the fifths, not the roots."""

	events = cadenza.bass.bass_line("C", pattern="root-fifth", swing=0.5, humanize=0, rng=rng)

	assert [e.start_tick for e in events] == [0, 510, 960, 1470]


def test_unknown_pattern_plays_root_fifth () -> None:

	"""Unknown patterns fall back to root-fifth."""

	unknown = cadenza.bass.bass_line("F", pattern="polka", humanize=0, rng=random.Random(1))
	root_fifth = cadenza.bass.bass_line("F", pattern="root-fifth", humanize=0, rng=random.Random(1))

	assert unknown == root_fifth


def test_custom_analysis_drives_pitches (rng: random.Random, e_minor_analysis) -> None:

	"""Chord tones come from the injected analysis."""

	events = cadenza.bass.bass_line("Cmaj7", pattern="root-fifth", humanize=0, rng=rng, analysis=e_minor_analysis)

	assert {e.pitch for e in events} == {40, 47}


# ── walking ───────────────────────────────────────────────────────────

def test_walking_structure (rng: random.Random) -> None:

	"""Root on beat one, fifth on beat three, approach on beat four."""

	events = cadenza.bass.bass_line("Dm7", next_chord="G7", pattern="walking", humanize=0, rng=rng)

	assert len(events) == 4
	assert events[0].pitch == 38
	assert events[2].pitch == 45
	assert events[3].pitch in (42, 44)
	assert all(e.duration_ticks == 440 for e in events)


def test_walking_without_next_chord (rng: random.Random) -> None:

	"""Without a next chord the last beat is an ordinary walking note."""

	events = cadenza.bass.bass_line("Dm7", pattern="walking", humanize=0, rng=rng)

	assert len(events) == 4
	assert events[0].pitch == 38


# ── octave-pulse ──────────────────────────────────────────────────────

def test_octave_pulse_high_energy (rng: random.Random) -> None:

	"""Sixteenths alternating root and octave above 0.7 energy."""

	events = cadenza.bass.bass_line("C", pattern="octave-pulse", humanize=0, energy=0.8, rng=rng)

	assert len(events) == 16
	assert all(e.duration_ticks == 110 for e in events)
	assert [e.pitch for e in events[:4]] == [36, 48, 36, 48]


def test_octave_pulse_medium_energy (rng: random.Random) -> None:

	"""Eighths, still jumping the octave above 0.5 energy."""

	events = cadenza.bass.bass_line("C", pattern="octave-pulse", humanize=0, energy=0.6, rng=rng)

	assert len(events) == 8
	assert all(e.duration_ticks == 230 for e in events)
	assert [e.pitch for e in events[:2]] == [36, 48]


def test_octave_pulse_low_energy (rng: random.Random) -> None:

	"""At low energy every pulse is the root."""

	events = cadenza.bass.bass_line("C", pattern="octave-pulse", humanize=0, energy=0.4, rng=rng)

	assert {e.pitch for e in events} == {36}


# ── syncopated ────────────────────────────────────────────────────────

def test_syncopated_figure (rng: random.Random) -> None:

	"""Five hits on sixteenth steps 0, 5, 8, 12 and 14."""

	events = cadenza.bass.bass_line("C", pattern="syncopated", humanize=0, rng=rng)

	assert [e.start_tick for e in events] == [0, 600, 960, 1440, 1680]
	assert [e.pitch for e in events] == [36, 43, 36, 40, 36]


def test_syncopated_short_chord (rng: random.Random) -> None:

	"""Steps beyond a two-beat chord are dropped."""

	events = cadenza.bass.bass_line("C", pattern="syncopated", beats=2, humanize=0, rng=rng)

	assert [e.start_tick for e in events] == [0, 600]


# ── Bounds ────────────────────────────────────────────────────────────

def test_every_pattern_stays_in_span (check_events) -> None:

	"""Even fully swung and humanized lines end by the chord boundary."""

	for pattern in ("walking", "root-fifth", "octave-pulse", "syncopated"):
		events = cadenza.bass.bass_line("Am7", next_chord="D7", pattern=pattern, swing=1.0, humanize=1.0, energy=1.0, start_tick=1920, rng=random.Random(9))
		check_events(events, span_end=3840)
		assert all(e.velocity >= 40 for e in events)
		assert all(e.start_tick >= 1920 - 15 for e in events)


# ── bass_for_progression() ────────────────────────────────────────────

def test_progression_length (rng: random.Random, check_events) -> None:

	"""One line per chord, laid end to end."""

	events = cadenza.bass.bass_for_progression(["Dm7", "G7", "Cmaj7", "Am7"], 4, pattern="root-fifth", humanize=0.3, rng=rng)

	assert len(events) == 16
	check_events(events, span_end=7680)


def test_progression_walks_into_next_and_first_chord (rng: random.Random) -> None:

	"""Each chord approaches the next; the last approaches the first."""

	events = cadenza.bass.bass_for_progression(["C", "F"], 4, pattern="walking", humanize=0, rng=rng)

	assert events[3].pitch in (40, 42)
	assert events[4].pitch == 41
	assert events[7].pitch in (37, 47)
