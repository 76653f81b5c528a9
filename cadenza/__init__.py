"""
Cadenza - a music generation engine that renders producer decisions to notes.

A producer (typically a language model, sometimes a person) decides *what*
should happen musically: a chord progression, which voices are playing and
how busy they are, and how energetic, tense, swung and loose the
performance should feel. Cadenza turns that decision into a fully
time-resolved ``MusicSegment`` of note events, ready for playback or for
writing to a MIDI file.

Voices:

- **Rhythm.** A 16-step drum pattern library (boom-bap, house, techno,
  breakbeat, jazz brushes, ambient) chosen from pattern hints, with energy
  scaling, ghost notes and swing.
- **Bass.** Walking lines with chromatic approaches, root-fifth, octave
  pulses and syncopated funk figures.
- **Harmony and texture.** Triads, shell and open voicings with
  octave-nearest voice leading, played sustained, as stabs or as Charleston
  comping; long pads for texture.
- **Lead.** Lyrical, riff-based, improvisatory and call-and-response
  melodies built from chord and scale tones.
- **Arpeggio.** Up, down, up-down, random and fixed-shape arpeggios at
  quarter to sixteenth rates.

Every voice is humanized (swing, timing and velocity jitter, phrase
dynamics, duration variation). All randomness comes from an injectable
``random.Random``, so a seed reproduces a segment exactly.

Time is measured in ticks at 480 per quarter-note beat throughout.

Minimal example:

	```python
	import cadenza

	command = cadenza.create_test_command(voices=["rhythm", "bass", "harmony", "lead"])
	segment = cadenza.Orchestrator(genre="lofi", seed=7).process(command)
	cadenza.write_segment(segment, "lofi.mid")
	```

From the command line:

	```
	python -m cadenza command.yaml --genre jazz --seed 42 --output jazz.mid
	```

Package-level exports: ``Orchestrator``, ``generate_segment``,
``create_test_command``, ``ProducerCommand``, ``MusicSegment``, ``Track``,
``NoteEvent``, ``write_segment``.
"""

import cadenza.events
import cadenza.midi_file
import cadenza.orchestrator
import cadenza.producer


MusicSegment = cadenza.events.MusicSegment
NoteEvent = cadenza.events.NoteEvent
Track = cadenza.events.Track
Orchestrator = cadenza.orchestrator.Orchestrator
generate_segment = cadenza.orchestrator.generate_segment
create_test_command = cadenza.orchestrator.create_test_command
ProducerCommand = cadenza.producer.ProducerCommand
write_segment = cadenza.midi_file.write_segment
