"""Genre styling: instruments, track effects, program numbers and presets.

Everything here is a read-only lookup table. The orchestrator asks which
instrument and effects a role gets in a genre; the MIDI writer asks which
General MIDI program an instrument maps to.
"""

import dataclasses
import typing

import cadenza.events


DEFAULT_GENRE = "lofi"
DEFAULT_INSTRUMENT = "piano"


GENRE_INSTRUMENTS: typing.Dict[str, typing.Dict[str, str]] = {
	"lofi": {
		"lead": "piano",
		"harmony": "rhodes",
		"bass": "bass-synth",
		"rhythm": "drums",
		"texture": "synth-pad",
		"arpeggio": "rhodes",
	},
	"jazz": {
		"lead": "piano",
		"harmony": "piano",
		"bass": "bass-acoustic",
		"rhythm": "drums",
		"texture": "strings",
		"arpeggio": "piano",
	},
	"house": {
		"lead": "synth-lead",
		"harmony": "synth-pad",
		"bass": "bass-synth",
		"rhythm": "drums",
		"texture": "synth-pad",
		"arpeggio": "synth-lead",
	},
	"techno": {
		"lead": "synth-lead",
		"harmony": "synth-pad",
		"bass": "bass-synth",
		"rhythm": "drums",
		"texture": "synth-pad",
		"arpeggio": "synth-lead",
	},
	"ambient": {
		"lead": "synth-pad",
		"harmony": "synth-pad",
		"bass": "bass-synth",
		"rhythm": "drums",
		"texture": "strings",
		"arpeggio": "synth-pad",
	},
}


# General MIDI programs (0-based). Drums play on the percussion channel and
# have no program.
INSTRUMENT_PROGRAMS: typing.Dict[str, typing.Optional[int]] = {
	"piano": 0,
	"bright-piano": 1,
	"electric-piano": 4,
	"rhodes": 4,
	"organ": 16,
	"synth-lead": 80,
	"synth-pad": 88,
	"bass-synth": 38,
	"bass-acoustic": 32,
	"bass-electric": 33,
	"strings": 48,
	"drums": None,
}


def instrument_for (role: str, genre: str) -> str:

	"""Instrument a role plays in a genre; piano when either is unknown."""

	return GENRE_INSTRUMENTS.get(genre, {}).get(role, DEFAULT_INSTRUMENT)


def effects_for (genre: str, role: str) -> cadenza.events.EffectSettings:

	"""Track effects for a role in a genre.

	Every track starts from reverb 0.3 and volume 0.8; lofi adds a 4 kHz
	low-pass and more reverb, jazz and ambient are wetter, house is drier
	with delay on the lead only.
	"""

	effects = cadenza.events.EffectSettings(reverb=0.3, volume=0.8)

	if genre == "lofi":
		return dataclasses.replace(effects, reverb=0.4, filter_cutoff=4000, filter_type="lowpass")

	if genre == "jazz":
		return dataclasses.replace(effects, reverb=0.5)

	if genre == "house":
		return dataclasses.replace(effects, reverb=0.2, delay=0.3 if role == "lead" else 0.0)

	if genre == "ambient":
		return dataclasses.replace(effects, reverb=0.7, delay=0.4)

	return effects


def program_for (instrument: str) -> typing.Optional[int]:

	"""General MIDI program for an instrument, or ``None`` for drums and unknown instruments."""

	return INSTRUMENT_PROGRAMS.get(instrument)


@dataclasses.dataclass(frozen=True)
class GenrePreset:

	"""
	A ready-made progression and feel for auditioning a genre.
	"""

	chords: typing.Tuple[str, ...]
	bpm: float
	key: str
	mode: str
	energy: float
	swing: float


GENRE_PRESETS: typing.Dict[str, GenrePreset] = {
	"lofi": GenrePreset(chords=("Dm7", "G7", "Cmaj7", "Am7"), bpm=85, key="C", mode="major", energy=0.5, swing=0.2),
	"jazz": GenrePreset(chords=("Fmaj7", "Em7", "Dm7", "Cmaj7"), bpm=100, key="C", mode="major", energy=0.6, swing=0.33),
	"house": GenrePreset(chords=("Am", "F", "C", "G"), bpm=124, key="A", mode="minor", energy=0.8, swing=0.0),
	"techno": GenrePreset(chords=("Em", "Em", "Em", "Em"), bpm=128, key="E", mode="minor", energy=0.9, swing=0.0),
	"ambient": GenrePreset(chords=("Am7", "Fmaj7", "Cmaj7", "Em7"), bpm=70, key="A", mode="minor", energy=0.3, swing=0.0),
}
