# -----------------------------------------------------------------------------
# Name:         music.py
# Purpose:      Objects for notes, vertical intervals, and simultaneities
#
# Author:       fuguescore contributors
# License:      BSD, see license.txt
# -----------------------------------------------------------------------------
"""
Music
=====

The Music module holds the small, immutable objects that the scoring engine
consumes: a :py:class:`Note` in one voice, the :py:class:`Interval` formed by
two simultaneous pitches, and the :py:class:`Simultaneity` that pairs a note
from each voice at one onset.

Interval class and quality are taken from music21, which spells a semitone
count as its most common interval (6 semitones is an augmented fourth).

Two helpers build simultaneities from a pair of voices:

   :py:func:`metricWeight(onset, meter)` - the strength of a beat
   position, from 1.0 on the downbeat to 0.2 on off-beat subdivisions.

   :py:func:`findSimultaneities(voice1, voice2, meter)` - aligns the notes of
   two voices and returns one simultaneity for every overlapping pair,
   ordered by onset.
"""

import functools
import logging

from music21 import interval, pitch

from fuguescore.utilities import EPSILON

# -----------------------------------------------------------------------------
# LOGGER
# -----------------------------------------------------------------------------

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)
# logger.setLevel(logging.DEBUG)
logger.addHandler(logging.NullHandler())

# -----------------------------------------------------------------------------
# MODULE VARIABLES
# -----------------------------------------------------------------------------

qualityNames = {'P': 'perfect',
                'M': 'major',
                'm': 'minor',
                'A': 'augmented',
                'd': 'diminished'}

consonantClasses = (1, 3, 5, 6, 8)
perfectClasses = (1, 5, 8)
imperfectClasses = (3, 6)

# -----------------------------------------------------------------------------
# MAIN CLASSES
# -----------------------------------------------------------------------------


class Note:
    """A single note in one voice: a MIDI pitch, an onset and a duration
    in beats. The optional index records the note's position in its voice.
    Notes cannot be changed once made."""
    __slots__ = ('pitch', 'onset', 'duration', 'index')

    def __init__(self, pitch, onset, duration, index=None):
        object.__setattr__(self, 'pitch', int(pitch))
        object.__setattr__(self, 'onset', float(onset))
        object.__setattr__(self, 'duration', float(duration))
        object.__setattr__(self, 'index', index)

    def __setattr__(self, name, value):
        raise AttributeError(f'Note objects are immutable: cannot set {name}')

    @property
    def end(self):
        return self.onset + self.duration

    def __repr__(self):
        return (f'<Note {pitchName(self.pitch)} onset={self.onset} '
                f'duration={self.duration}>')


@functools.lru_cache(maxsize=None)
def _intervalData(semitones):
    ivl = interval.Interval(semitones)
    return (ivl.generic.simpleUndirected,
            qualityNames[ivl.simpleName[0]],
            ivl.simpleName)


class Interval:
    """The vertical interval between two simultaneous pitches, reduced
    to within the octave. An octave and a unison share class 1."""

    def __init__(self, semitones):
        self.compoundSemitones = abs(int(semitones))
        self.semitones = self.compoundSemitones % 12
        self.intervalClass, self.quality, self.name = \
            _intervalData(self.semitones)

    def isConsonant(self):
        """Unisons, octaves, fifths, thirds and sixths that are neither
        augmented nor diminished. The perfect fourth is left out; whether it
        counts as consonant is a matter for the analysis context."""
        return (self.intervalClass in consonantClasses
                and self.quality not in ('augmented', 'diminished'))

    def isPerfect(self):
        return (self.intervalClass in perfectClasses
                and self.quality == 'perfect')

    def isImperfect(self):
        return (self.intervalClass in imperfectClasses
                and self.quality in ('major', 'minor'))

    def isPerfectFourth(self):
        return self.intervalClass == 4 and self.quality == 'perfect'

    def __eq__(self, other):
        if not isinstance(other, Interval):
            return NotImplemented
        return self.compoundSemitones == other.compoundSemitones

    def __hash__(self):
        return hash(self.compoundSemitones)

    def __repr__(self):
        return f'<Interval {self.name}>'

    def __str__(self):
        return self.name


class Simultaneity:
    """One analysis time step: the notes sounding in each voice at an onset,
    the interval between them, and the metric weight of the onset."""

    def __init__(self, onset, voice1Note, voice2Note, metricWeight):
        self.onset = float(onset)
        self.voice1Note = voice1Note
        self.voice2Note = voice2Note
        self.interval = Interval(voice1Note.pitch - voice2Note.pitch)
        self.metricWeight = metricWeight

    @property
    def duration(self):
        """Time during which both notes of this simultaneity sound."""
        return min(self.voice1Note.end, self.voice2Note.end) - self.onset

    def note(self, voice):
        """Return the note of voice 1 or voice 2."""
        if voice == 1:
            return self.voice1Note
        return self.voice2Note

    def __repr__(self):
        return (f'<Simultaneity {self.onset}: {self.interval} '
                f'({pitchName(self.voice1Note.pitch)}, '
                f'{pitchName(self.voice2Note.pitch)})>')

# -----------------------------------------------------------------------------
# FUNCTIONS
# -----------------------------------------------------------------------------


def pitchName(midi):
    """Name with octave for a MIDI pitch number, e.g. 60 -> 'C4'."""
    return pitch.Pitch(midi=midi).nameWithOctave


def isCompoundMeter(meter):
    """Compound meters group eighths in threes: 6/8, 9/8, 12/8."""
    numerator, denominator = meter
    return numerator % 3 == 0 and numerator > 3 and denominator == 8


def metricWeight(onset, meter=(4, 4)):
    """
    Return the weight of a beat position within the measure.

    Downbeats weigh 1.0 and secondary accents 0.75 (beat 3 of 4/4, beat 4 of
    6/4, the second dotted-quarter of 6/8). Ordinary beats weigh 0.5,
    half-beat subdivisions 0.35 and smaller subdivisions 0.25. In compound
    meter the eighths inside a beat group weigh 0.3.
    """
    numerator = meter[0]
    posInMeasure = onset % numerator

    if abs(posInMeasure) < EPSILON or abs(posInMeasure - numerator) < EPSILON:
        return 1.0

    if isCompoundMeter(meter) or (numerator == 3 and meter[1] == 8):
        mainBeats = numerator // 3
        mainBeatPos = int(posInMeasure // 3)
        subPos = posInMeasure % 3
        if abs(subPos) < EPSILON:
            if mainBeats == 2:
                return 0.75
            elif mainBeats == 4:
                if mainBeatPos == 2:
                    return 0.75
                return 0.6
            elif mainBeats == 3:
                return 0.65
            return 0.6
        if abs(subPos - 1) < EPSILON or abs(subPos - 2) < EPSILON:
            return 0.3
        return 0.2

    beatFraction = posInMeasure - int(posInMeasure)
    if beatFraction > EPSILON and beatFraction < 1 - EPSILON:
        if abs(beatFraction - 0.5) < 0.05:
            return 0.35
        return 0.25

    beat = round(posInMeasure)
    if numerator == 4:
        if beat == 2:
            return 0.75
        return 0.5
    elif numerator == 5:
        if beat == 3:
            return 0.7
        elif beat == 2:
            return 0.6
        return 0.5
    elif numerator == 6:
        if beat == 3:
            return 0.75
        return 0.5
    return 0.5


def findSimultaneities(voice1, voice2, meter=(4, 4)):
    """
    Pair every note of voice 1 with every overlapping note of voice 2.
    Each pair starts a simultaneity at the later of the two onsets.

    Each voice sounds one note at a time, so both voices are walked once
    in onset order, always advancing the voice whose note ends first.
    The list is ordered by onset.
    """
    notes1 = sorted(voice1, key=lambda n: n.onset)
    notes2 = sorted(voice2, key=lambda n: n.onset)
    sims = []
    i = j = 0
    while i < len(notes1) and j < len(notes2):
        n1 = notes1[i]
        n2 = notes2[j]
        if n1.onset < n2.end and n2.onset < n1.end:
            start = max(n1.onset, n2.onset)
            sims.append(Simultaneity(start, n1, n2,
                                     metricWeight(start, meter)))
        if n1.end < n2.end:
            i += 1
        else:
            j += 1
    logger.debug(f'Found {len(sims)} simultaneities.')
    return sims


def makeVoice(events):
    """Build an indexed voice from (pitch, onset, duration) triples."""
    return [Note(p, onset, duration, index=idx)
            for idx, (p, onset, duration) in enumerate(events)]

# -----------------------------------------------------------------------------


if __name__ == '__main__':
    # self_test code
    pass
# -----------------------------------------------------------------------------
# eof
