import random

import cadenza.comping
import cadenza.producer


# ── sustained ─────────────────────────────────────────────────────────

def test_sustained_holds_the_chord (rng: random.Random) -> None:

	"""Cmaj7 sustained is three notes just shorter than the bar."""

	events = cadenza.comping.chord_events("Cmaj7", pattern="sustained", rng=rng)

	assert len(events) == 3
	assert all(e.duration_ticks == 1900 for e in events)
	assert sorted(e.pitch for e in events) == [60, 64, 79]


def test_unknown_pattern_is_sustained () -> None:

	"""Unknown patterns hold the chord."""

	unknown = cadenza.comping.chord_events("Am7", pattern="polka", rng=random.Random(4))
	sustained = cadenza.comping.chord_events("Am7", pattern="sustained", rng=random.Random(4))

	assert unknown == sustained


# ── rhythmic-stabs ────────────────────────────────────────────────────

def test_stabs_moderate_energy (rng: random.Random) -> None:

	"""Two accented hits at moderate energy."""

	events = cadenza.comping.chord_events("C", pattern="rhythmic-stabs", humanize=0, energy=0.5, rng=rng)

	assert sorted({e.start_tick for e in events}) == [0, 960]
	assert len(events) == 6
	assert all(e.velocity == 85 for e in events)
	assert all(e.duration_ticks == 240 for e in events)


def test_stabs_high_energy (rng: random.Random) -> None:

	"""Higher energy adds softer off-eighth stabs."""

	events = cadenza.comping.chord_events("C", pattern="rhythmic-stabs", humanize=0, energy=0.8, rng=rng)
	velocity_at = {e.start_tick: e.velocity for e in events}

	assert len(events) == 12
	assert velocity_at == {0: 85, 720: 60, 960: 85, 1680: 60}


def test_stabs_short_chord (rng: random.Random) -> None:

	"""Hits past a two-beat chord are dropped."""

	events = cadenza.comping.chord_events("C", pattern="rhythmic-stabs", beats=2, humanize=0, energy=0.8, rng=rng)

	assert sorted({e.start_tick for e in events}) == [0, 720]


# ── shell-voicings ────────────────────────────────────────────────────

def test_shell_comping_rhythm_and_voicing (rng: random.Random) -> None:

	"""Charleston hits on a root-third-seventh shell."""

	events = cadenza.comping.chord_events("Cmaj7", pattern="shell-voicings", humanize=0, energy=0.5, rng=rng)
	durations = {e.start_tick: e.duration_ticks for e in events}

	assert durations == {0: 720, 720: 240}
	assert sorted({e.pitch for e in events}) == [60, 64, 83]


def test_shell_comping_velocity_ceiling (rng: random.Random) -> None:

	"""Comping never plays louder than 100."""

	events = cadenza.comping.chord_events("Dm7", pattern="shell-voicings", velocity=120, humanize=1.0, energy=0.9, rng=rng)

	assert all(40 <= e.velocity <= 100 for e in events)


# ── chords_for_progression() ──────────────────────────────────────────

def test_progression_voice_leads (rng: random.Random) -> None:

	"""The second chord is voiced against the first."""

	events = cadenza.comping.chords_for_progression(["Cmaj7", "G7"], 4, pattern="sustained", humanize=0, rng=rng)

	assert [e.pitch for e in events[:3]] == [60, 64, 79]
	assert [e.pitch for e in events[3:]] == [79, 59, 62]
	assert [e.start_tick for e in events[3:]] == [1920, 1920, 1920]


def test_chord_spec_color_wins (rng: random.Random) -> None:

	"""A chord's own color overrides the color argument."""

	chords = [cadenza.producer.ChordSpec("Cmaj7", color="open")]
	events = cadenza.comping.chords_for_progression(chords, 4, humanize=0, color="jazzy", rng=rng)

	assert [e.pitch for e in events] == [60, 67, 76]


def test_color_argument_beats_pattern_default (rng: random.Random) -> None:

	"""The color argument overrides the pattern's shell default."""

	events = cadenza.comping.chords_for_progression(["Cmaj7"], 4, pattern="shell-voicings", color="simple", humanize=0, energy=0.5, rng=rng)

	assert sorted({e.pitch for e in events}) == [60, 64, 79]


def test_chord_never_spills_past_its_span (check_events) -> None:

	"""A fully humanized chord still ends by its own boundary."""

	for pattern in ("sustained", "rhythmic-stabs", "shell-voicings"):
		events = cadenza.comping.chord_events("G7", pattern=pattern, beats=2, start_tick=960, humanize=1.0, energy=1.0, rng=random.Random(6))
		check_events(events, span_end=1920)


def test_progression_stays_in_span (check_events) -> None:

	"""A whole progression ends by its last chord boundary."""

	events = cadenza.comping.chords_for_progression(["Dm7", "G7", "Cmaj7"], 2, pattern="rhythmic-stabs", humanize=1.0, energy=1.0, rng=random.Random(6))

	check_events(events, span_end=2880)


# ── texture_for_progression() ─────────────────────────────────────────

def test_texture_pads_span_two_chords (rng: random.Random) -> None:

	"""Four chords give two pads, each held across two chords."""

	events = cadenza.comping.texture_for_progression(["Cmaj7", "Am7", "Dm7", "G7"], 4, humanize=0, rng=rng)

	assert sorted({e.start_tick for e in events}) == [0, 3840]
	assert all(e.duration_ticks == 3820 for e in events)
	assert all(e.velocity == 45 for e in events)


def test_texture_final_odd_chord (rng: random.Random, check_events) -> None:

	"""A leftover chord gets a one-chord pad."""

	events = cadenza.comping.texture_for_progression(["C", "F", "G"], 4, humanize=0, rng=rng)
	last_pad = [e for e in events if e.start_tick == 3840]

	assert last_pad
	assert all(e.duration_ticks == 1900 for e in last_pad)
	check_events(events, span_end=5760)


def test_texture_sits_in_octave_five (rng: random.Random) -> None:

	"""Pads are voiced from octave five."""

	events = cadenza.comping.texture_for_progression(["C"], 4, humanize=0, rng=rng)

	assert sorted(e.pitch for e in events) == [72, 76, 91]
