import pytest

import cadenza.producer
import cadenza.styling


def test_every_genre_covers_every_role () -> None:

	"""Each genre names an instrument for all six roles."""

	for genre, instruments in cadenza.styling.GENRE_INSTRUMENTS.items():
		assert set(instruments) == set(cadenza.producer.VOICE_ROLES), genre
		assert instruments["rhythm"] == "drums"


def test_instrument_for () -> None:

	"""Lookup by role and genre, piano when unknown."""

	assert cadenza.styling.instrument_for("harmony", "lofi") == "rhodes"
	assert cadenza.styling.instrument_for("bass", "jazz") == "bass-acoustic"
	assert cadenza.styling.instrument_for("bass", "polka") == "piano"
	assert cadenza.styling.instrument_for("vocals", "lofi") == "piano"


def test_lofi_effects () -> None:

	"""Lo-fi gets a warm low-pass."""

	effects = cadenza.styling.effects_for("lofi", "harmony")

	assert effects.filter_type == "lowpass"
	assert effects.filter_cutoff == 4000
	assert effects.reverb == pytest.approx(0.4)
	assert effects.volume == pytest.approx(0.8)


def test_house_delay_on_lead_only () -> None:

	"""House puts delay on the lead and nowhere else."""

	assert cadenza.styling.effects_for("house", "lead").delay == pytest.approx(0.3)
	assert cadenza.styling.effects_for("house", "bass").delay == 0


def test_default_effects () -> None:

	"""Genres without styling get the base settings."""

	effects = cadenza.styling.effects_for("techno", "bass")

	assert effects.reverb == pytest.approx(0.3)
	assert effects.delay is None


def test_effects_are_independent () -> None:

	"""Each call returns a fresh settings object."""

	assert cadenza.styling.effects_for("jazz", "lead") is not cadenza.styling.effects_for("jazz", "lead")


def test_program_for () -> None:

	"""General MIDI programs, none for drums."""

	assert cadenza.styling.program_for("piano") == 0
	assert cadenza.styling.program_for("bass-acoustic") == 32
	assert cadenza.styling.program_for("drums") is None
	assert cadenza.styling.program_for("theremin") is None


def test_presets_cover_every_genre () -> None:

	"""Every styled genre has a preset with valid chords."""

	assert set(cadenza.styling.GENRE_PRESETS) == set(cadenza.styling.GENRE_INSTRUMENTS)

	for preset in cadenza.styling.GENRE_PRESETS.values():
		assert len(preset.chords) == 4
		assert 0 <= preset.swing <= 1
