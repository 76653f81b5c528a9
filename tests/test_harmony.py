import cadenza.harmony


# ── chord_tones() ─────────────────────────────────────────────────────

def test_chord_tones_in_chord_order (analysis: cadenza.harmony.TheoryAnalysis) -> None:

	"""Root, third, fifth, seventh."""

	assert analysis.chord_tones("Cmaj7") == ["C", "E", "G", "B"]
	assert analysis.chord_tones("Am7") == ["A", "C", "E", "G"]


def test_unknown_chord_falls_back_to_c_major (analysis: cadenza.harmony.TheoryAnalysis) -> None:

	"""An unrecognised symbol never fails."""

	assert analysis.chord_tones("Xyz9") == ["C", "E", "G"]


def test_fallback_chord_is_a_copy (analysis: cadenza.harmony.TheoryAnalysis) -> None:

	"""Callers cannot corrupt the fallback list."""

	tones = analysis.chord_tones("Xyz9")
	tones.append("B")

	assert analysis.chord_tones("Xyz9") == ["C", "E", "G"]


# ── scale_tones() ─────────────────────────────────────────────────────

def test_dorian_scale (analysis: cadenza.harmony.TheoryAnalysis) -> None:

	"""D dorian is the white keys from D."""

	assert analysis.scale_tones("D dorian") == ["D", "E", "F", "G", "A", "B", "C"]


def test_minor_scale (analysis: cadenza.harmony.TheoryAnalysis) -> None:

	"""A minor is the white keys from A."""

	assert analysis.scale_tones("A minor") == ["A", "B", "C", "D", "E", "F", "G"]


def test_flat_key_scale (analysis: cadenza.harmony.TheoryAnalysis) -> None:

	"""F major spells its fourth as Bb."""

	assert analysis.scale_tones("F major") == ["F", "G", "A", "Bb", "C", "D", "E"]


def test_unknown_scale_falls_back_to_c_major (analysis: cadenza.harmony.TheoryAnalysis) -> None:

	"""Unknown modes, bad tonics and missing modes all give C major."""

	c_major = ["C", "D", "E", "F", "G", "A", "B"]

	assert analysis.scale_tones("C nonsense") == c_major
	assert analysis.scale_tones("Q lydian") == c_major
	assert analysis.scale_tones("C") == c_major


# ── pitch_number() ────────────────────────────────────────────────────

def test_pitch_number_with_separate_octave (analysis: cadenza.harmony.TheoryAnalysis) -> None:

	"""Octave may be passed alongside a bare note name."""

	assert analysis.pitch_number("C", 4) == 60
	assert analysis.pitch_number("Bb", 3) == 58


def test_pitch_number_with_embedded_octave (analysis: cadenza.harmony.TheoryAnalysis) -> None:

	"""An octave in the name wins over the argument."""

	assert analysis.pitch_number("C4") == 60
	assert analysis.pitch_number("A4", 2) == 69


def test_pitch_number_fallbacks (analysis: cadenza.harmony.TheoryAnalysis) -> None:

	"""Unresolvable notes give middle C."""

	assert analysis.pitch_number("garbage", 4) == 60
	assert analysis.pitch_number("C") == 60
	assert analysis.pitch_number("G", 10) == 60


# ── transpose() ───────────────────────────────────────────────────────

def test_transpose (analysis: cadenza.harmony.TheoryAnalysis) -> None:

	"""Spelled and semitone intervals both work."""

	assert analysis.transpose("C", "5P") == "G"
	assert analysis.transpose("D", "3m") == "F"
	assert analysis.transpose("C", -1) == "B"


def test_transpose_unparsable_returns_input (analysis: cadenza.harmony.TheoryAnalysis) -> None:

	"""A bad note comes back unchanged."""

	assert analysis.transpose("Xq", 3) == "Xq"


# ── Injection ─────────────────────────────────────────────────────────

def test_resolve_defaults () -> None:

	"""None resolves to the shared default analysis."""

	assert cadenza.harmony.resolve(None) is cadenza.harmony.DEFAULT_ANALYSIS


def test_resolve_keeps_custom (e_minor_analysis: cadenza.harmony.TheoryAnalysis) -> None:

	"""A supplied analysis is used as-is."""

	assert cadenza.harmony.resolve(e_minor_analysis) is e_minor_analysis


def test_module_functions_use_default () -> None:

	"""The module-level helpers delegate to the default analysis."""

	assert cadenza.harmony.chord_tones("G7") == ["G", "B", "D", "F"]
	assert cadenza.harmony.pitch_number("E", 2) == 40
	assert cadenza.harmony.transpose("E", 1) == "F"
	assert cadenza.harmony.scale_tones("G mixolydian")[-1] == "F"
