"""Standard MIDI file export for music segments.

``segment_to_midi()`` builds a type 1 ``mido.MidiFile`` at 480 ticks per
beat, which is also the engine's own resolution, so tick positions are
written unchanged. Each engine track becomes one MIDI track carrying its
track name and a program change for its instrument. Drum tracks play on
General MIDI channel 10 (index 9); melodic tracks take the remaining
channels in order. Tempo and time signature are written once, on the first
track.

Example:
	```python
	segment = cadenza.orchestrator.generate_segment(command, genre="house", seed=1)
	cadenza.midi_file.write_segment(segment, "house.mid")
	```
"""

import logging
import os
import typing

import mido

import cadenza.constants
import cadenza.constants.gm_drums
import cadenza.events
import cadenza.harmony
import cadenza.styling


logger = logging.getLogger(__name__)

MELODIC_CHANNELS = [channel for channel in range(16) if channel != cadenza.constants.gm_drums.DRUM_CHANNEL]


def _pitch_number (pitch: cadenza.events.Pitch) -> int:

	if isinstance(pitch, int):
		return max(0, min(127, pitch))

	return cadenza.harmony.pitch_number(pitch)


def _time_signature (segment: cadenza.events.MusicSegment) -> typing.Tuple[int, int]:

	beats = getattr(segment.time_signature, "beats", 4)
	subdivision = getattr(segment.time_signature, "subdivision", 4)

	return int(beats), int(subdivision)


def release_overlaps (events: typing.List[cadenza.events.NoteEvent]) -> typing.List[typing.Tuple[int, int, int, int]]:

	"""Notes as (start, end, note, velocity) with same-pitch overlaps removed.

	A channel holds one voice per pitch, so a note that is still sounding when
	its pitch is struck again ends at the new strike. A note struck at the
	same tick as another of its pitch is merged into the later one.
	"""

	by_pitch: typing.Dict[int, typing.List[cadenza.events.NoteEvent]] = {}

	for event in events:
		by_pitch.setdefault(_pitch_number(event.pitch), []).append(event)

	notes: typing.List[typing.Tuple[int, int, int, int]] = []

	for note, pitch_events in by_pitch.items():

		pitch_events = sorted(pitch_events, key=lambda e: e.start_tick)

		for index, event in enumerate(pitch_events):

			end = event.end_tick

			if index + 1 < len(pitch_events):
				end = min(end, pitch_events[index + 1].start_tick)

			if end > event.start_tick:
				notes.append((event.start_tick, end, note, event.velocity))

	return notes


def track_messages (track: cadenza.events.Track, channel: int) -> typing.List[mido.Message]:

	"""Note and program messages for one track, with delta times.

	Overlapping notes of one pitch are cut at the next strike (see
	``release_overlaps()``). At equal ticks note-offs are written before
	note-ons, so a repeated pitch releases before it sounds again.
	"""

	# (absolute tick, order, message); order 0 sorts note-offs first.
	timed: typing.List[typing.Tuple[int, int, mido.Message]] = []

	for start, end, note, velocity in release_overlaps(track.events):

		timed.append((start, 1, mido.Message("note_on", channel=channel, note=note, velocity=velocity)))
		timed.append((end, 0, mido.Message("note_off", channel=channel, note=note, velocity=0)))

	timed.sort(key=lambda item: (item[0], item[1]))

	messages: typing.List[mido.Message] = []
	program = cadenza.styling.program_for(track.instrument)

	if program is not None and channel != cadenza.constants.gm_drums.DRUM_CHANNEL:
		messages.append(mido.Message("program_change", channel=channel, program=program, time=0))

	last_tick = 0

	for tick, _, message in timed:
		messages.append(message.copy(time=max(0, tick - last_tick)))
		last_tick = tick

	return messages


def segment_to_midi (segment: cadenza.events.MusicSegment) -> mido.MidiFile:

	"""Convert a segment to a type 1 MIDI file, one MIDI track per engine track."""

	midi = mido.MidiFile(type=1, ticks_per_beat=cadenza.constants.TICKS_PER_BEAT)
	numerator, denominator = _time_signature(segment)
	melodic_index = 0

	for track in segment.tracks or [None]:

		midi_track = mido.MidiTrack()
		midi.tracks.append(midi_track)

		if len(midi.tracks) == 1:
			midi_track.append(mido.MetaMessage("set_tempo", tempo=mido.bpm2tempo(segment.tempo), time=0))
			midi_track.append(mido.MetaMessage("time_signature", numerator=numerator, denominator=denominator, time=0))

		if track is None:
			continue

		midi_track.append(mido.MetaMessage("track_name", name=track.id, time=0))

		if track.role == "rhythm" or track.instrument == "drums":
			channel = cadenza.constants.gm_drums.DRUM_CHANNEL
		else:
			channel = MELODIC_CHANNELS[melodic_index % len(MELODIC_CHANNELS)]
			melodic_index += 1

		midi_track.extend(track_messages(track, channel))
		midi_track.append(mido.MetaMessage("end_of_track", time=0))

	return midi


def write_segment (segment: cadenza.events.MusicSegment, path: str) -> str:

	"""Write a segment to ``path`` as a MIDI file, creating the directory if needed."""

	directory = os.path.dirname(path)

	if directory:
		os.makedirs(directory, exist_ok=True)

	midi = segment_to_midi(segment)
	midi.save(path)

	logger.info(f"Saved {path} ({len(segment.tracks)} tracks)")

	return path
