import random

import cadenza.harmony
import cadenza.voicings


# ── Tone selection ────────────────────────────────────────────────────

def test_select_tones_by_color () -> None:

	"""Each color picks its own chord tones."""

	assert cadenza.voicings.select_tones("Cmaj7", "simple") == ["C", "E", "G"]
	assert cadenza.voicings.select_tones("Cmaj7", "jazzy") == ["C", "E", "B"]
	assert cadenza.voicings.select_tones("Cmaj7", "shell-voicings") == ["C", "E", "B"]
	assert cadenza.voicings.select_tones("Cmaj7", "open") == ["C", "G", "E"]
	assert cadenza.voicings.select_tones("Cmaj7", "bright") == ["C", "E", "G", "B"]
	assert cadenza.voicings.select_tones("Cmaj7", None) == ["C", "E", "G"]


def test_shell_of_a_triad_uses_the_fifth () -> None:

	"""Triads have no seventh, so the shell keeps the fifth."""

	assert cadenza.voicings.select_tones("C", "shell-voicings") == ["C", "E", "G"]


def test_voice_count_limits_other_colors () -> None:

	"""Unnamed colors keep the first voice_count tones."""

	assert cadenza.voicings.select_tones("G9", "dark", voice_count=3) == ["G", "B", "D"]


def test_short_chords_pass_through () -> None:

	"""Power chords are not reshaped."""

	assert cadenza.voicings.select_tones("C5", "open") == ["C", "G"]


# ── Octave placement ──────────────────────────────────────────────────

def test_add_octaves_spread () -> None:

	"""Two notes per octave, going up."""

	assert cadenza.voicings.add_octaves(["C", "E", "G", "B"], 4) == ["C4", "E4", "G5", "B5"]
	assert cadenza.voicings.add_octaves(["C", "E", "G"], 3, spread=False) == ["C3", "E3", "G3"]


def test_voice_without_previous () -> None:

	"""A first chord is spread from the base octave."""

	assert cadenza.voicings.voice("Cmaj7") == ["C4", "E4", "G5"]
	assert cadenza.voicings.voice("Dm7", "jazzy") == ["D4", "F4", "C5"]


def test_voice_leading_moves_to_nearest_octave () -> None:

	"""G7 after C4-E4-G5 keeps G5 and drops B and D into the gap."""

	assert cadenza.voicings.voice("G7", "simple", previous_voicing=["C4", "E4", "G5"]) == ["G5", "B3", "D4"]


def test_voice_leading_ties_take_lowest_octave () -> None:

	"""F# is six semitones from C4 either way; the lower one wins."""

	assert cadenza.voicings.voice_lead(["F#"], ["C4"], 4) == ["F#3"]


def test_voice_leading_is_minimal () -> None:

	"""No note could have been placed closer to the previous voicing."""

	analysis = cadenza.harmony.TheoryAnalysis()
	rng = random.Random(2)
	symbols = ["Cmaj7", "Am7", "Dm7", "G7", "Ebmaj7", "F#m7b5", "B7", "Bbm9"]

	previous = cadenza.voicings.voice(symbols[0], "open")

	for _ in range(40):

		symbol = rng.choice(symbols)
		result = cadenza.voicings.voice(symbol, "open", previous_voicing=previous)
		previous_pitches = [analysis.pitch_number(n) for n in previous]

		for placed in result:
			note = placed[:-1]
			placed_distance = min(abs(analysis.pitch_number(placed) - p) for p in previous_pitches)

			for candidate in (3, 4, 5):
				candidate_distance = min(abs(analysis.pitch_number(note, candidate) - p) for p in previous_pitches)
				assert placed_distance <= candidate_distance

		previous = result


# ── VoiceLeadingState ─────────────────────────────────────────────────

def test_voice_leading_state_remembers () -> None:

	"""The state voices the second chord against the first."""

	state = cadenza.voicings.VoiceLeadingState()

	first = state.next("Cmaj7")
	second = state.next("G7")

	assert first == ["C4", "E4", "G5"]
	assert second == ["G5", "B3", "D4"]
	assert state.previous_voicing == second


def test_voice_leading_state_uses_its_analysis (e_minor_analysis) -> None:

	"""The state passes its analysis through to tone selection."""

	state = cadenza.voicings.VoiceLeadingState(octave=3, analysis=e_minor_analysis)

	assert state.next("Cmaj7") == ["E3", "G3", "B4"]
