# -----------------------------------------------------------------------------
# Name:         consecutions.py
# Purpose:      Melodic consecutions within a voice and motion
#               between the two voices
#
# Author:       fuguescore contributors
# License:      BSD, see license.txt
# -----------------------------------------------------------------------------
"""
Consecutions
============

The Consecutions module classifies how notes follow one another.

Within a voice, :py:class:`Consecutions` stores how a note is approached
and left: the signed interval in semitones, its direction (-1, 0, 1) and its
magnitude class ('unison', 'step', 'skip', 'perfect_leap', 'octave',
'large_leap').

Between the voices, :py:func:`classifyMotion` compares two simultaneities
and returns a :py:class:`MotionInfo`.
"""

import unittest
import logging

from fuguescore.utilities import sign

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

leapMagnitudes = ('skip', 'perfect_leap', 'octave', 'large_leap')
largeMagnitudes = ('octave', 'large_leap')

# A rest counts as a reentry when it is longer than this many beats ...
reentryRestBeats = 1.0
# ... and longer than this multiple of the voice's last sounded note.
reentryRestRatio = 2.0

# -----------------------------------------------------------------------------
# MAIN CLASSES
# -----------------------------------------------------------------------------


class Consecutions:
    """An object holding the melodic consecutions of a note to the left
    and right (approach and departure) in its voice."""
    def __init__(self, targetNote, leftNote=None, rightNote=None):
        self.leftNote = leftNote
        self.rightNote = rightNote
        self.targetNote = targetNote

    def get_leftInterval(self):
        if self.leftNote is not None:
            return self.targetNote.pitch - self.leftNote.pitch
        return None

    def get_rightInterval(self):
        if self.rightNote is not None:
            return self.rightNote.pitch - self.targetNote.pitch
        return None

    def get_leftDirection(self):
        if self.leftInterval is not None:
            return sign(self.leftInterval)
        return None

    def get_rightDirection(self):
        if self.rightInterval is not None:
            return sign(self.rightInterval)
        return None

    def get_leftType(self):
        if self.leftInterval is not None:
            return classifyMelodicMagnitude(self.leftInterval)
        return None

    def get_rightType(self):
        if self.rightInterval is not None:
            return classifyMelodicMagnitude(self.rightInterval)
        return None

    leftInterval = property(get_leftInterval)
    rightInterval = property(get_rightInterval)
    leftDirection = property(get_leftDirection)
    rightDirection = property(get_rightDirection)
    leftType = property(get_leftType)
    rightType = property(get_rightType)


class MotionInfo:
    """The kind of motion between two simultaneities and what each
    voice did."""
    def __init__(self, type, v1Moved, v2Moved, v1Interval=0, v2Interval=0,
                 fromRest=False, isReentry=False, intervalType=None):
        self.type = type
        self.v1Moved = v1Moved
        self.v2Moved = v2Moved
        self.v1Interval = v1Interval
        self.v2Interval = v2Interval
        self.fromRest = fromRest
        self.isReentry = isReentry
        self.intervalType = intervalType

    def moved(self, voice):
        if voice == 1:
            return self.v1Moved
        return self.v2Moved

    def __repr__(self):
        return f'<MotionInfo {self.type}>'


class VoiceIndex:
    """The notes of both voices in order, with each note's position,
    collected once for a whole run.

    Given the two voices themselves, every note is indexed, including
    notes sung while the other voice rests. Otherwise the notes are
    collected from the simultaneities, which cannot see such notes."""

    def __init__(self, sims, voiceLists=None):
        self.notes = {}
        self.positions = {}
        self.fromVoices = voiceLists is not None
        for voice in (1, 2):
            if self.fromVoices:
                notes = sorted(voiceLists[voice - 1], key=lambda n: n.onset)
            else:
                notes = voiceNotes(sims, voice)
            self.notes[voice] = notes
            self.positions[voice] = {id(n): idx for idx, n in enumerate(notes)}

    def locate(self, voice, note):
        return self.positions[voice].get(id(note))

    def previousNote(self, voice, note):
        idx = self.locate(voice, note)
        if not idx:
            return None
        return self.notes[voice][idx - 1]

    def nextNote(self, voice, note):
        idx = self.locate(voice, note)
        if idx is None or idx + 1 >= len(self.notes[voice]):
            return None
        return self.notes[voice][idx + 1]

# -----------------------------------------------------------------------------
# FUNCTIONS
# -----------------------------------------------------------------------------


def classifyMelodicMagnitude(semitones):
    """Classify the size of a melodic interval given in semitones."""
    size = abs(semitones)
    if size == 0:
        return 'unison'
    elif size <= 2:
        return 'step'
    elif size <= 4:
        return 'skip'
    elif size in (5, 7):
        return 'perfect_leap'
    elif size == 12:
        return 'octave'
    return 'large_leap'


def isLeap(semitones):
    return classifyMelodicMagnitude(semitones) in leapMagnitudes


def voiceMoved(prevNote, currNote):
    """A voice moves when it takes up a new note at a new pitch."""
    return currNote is not prevNote and currNote.pitch != prevNote.pitch


def classifyMotion(prevSim, currSim, restContext=None):
    """
    Determine the motion from one simultaneity to the next.

    The tests run in order: no previous simultaneity (unknown), neither
    voice moved (static), a long rest before the entry (reentry), one voice
    held (oblique), opposite directions (contrary), equal melodic intervals
    (parallel), and finally the similar-motion variants.
    """
    if prevSim is None:
        return MotionInfo('unknown', True, True)

    v1Moved = voiceMoved(prevSim.voice1Note, currSim.voice1Note)
    v2Moved = voiceMoved(prevSim.voice2Note, currSim.voice2Note)
    v1Step = currSim.voice1Note.pitch - prevSim.voice1Note.pitch
    v2Step = currSim.voice2Note.pitch - prevSim.voice2Note.pitch
    v1Interval = abs(v1Step) if v1Moved else 0
    v2Interval = abs(v2Step) if v2Moved else 0

    fromRest = False
    isReentry = False
    if restContext is not None:
        fromRest = restContext.v1EntryFromRest or restContext.v2EntryFromRest
        for voice in (1, 2):
            rest = restContext.entryRestDuration(voice)
            rules = [rest > reentryRestBeats,
                     rest > reentryRestRatio
                     * restContext.previousDuration(voice)]
            if all(rules):
                isReentry = True

    def motion(type, intervalType=None):
        return MotionInfo(type, v1Moved, v2Moved, v1Interval, v2Interval,
                          fromRest, isReentry, intervalType)

    if not v1Moved and not v2Moved:
        return motion('static')
    if isReentry:
        return motion('reentry')
    if not v1Moved or not v2Moved:
        return motion('oblique')
    if sign(v1Step) == -sign(v2Step):
        return motion('contrary')
    if v1Interval == v2Interval:
        return motion('parallel')
    if v1Interval <= 2 or v2Interval <= 2:
        return motion('similar_step')
    v1Mag = classifyMelodicMagnitude(v1Interval)
    v2Mag = classifyMelodicMagnitude(v2Interval)
    if v1Mag == v2Mag:
        return motion('similar_same_type', v1Mag)
    return motion('similar')


def isParallelPerfect(prevSim, currSim):
    """
    Parallel fifths, octaves or unisons: both simultaneities are perfect
    fifths, or both are unisons/octaves, and both voices move in the same
    direction.
    """
    if prevSim is None or currSim is None:
        return False
    rules1 = [prevSim.interval.isPerfect(),
              currSim.interval.isPerfect(),
              prevSim.interval.intervalClass == currSim.interval.intervalClass]
    if not all(rules1):
        return False
    v1Step = currSim.voice1Note.pitch - prevSim.voice1Note.pitch
    v2Step = currSim.voice2Note.pitch - prevSim.voice2Note.pitch
    rules2 = [v1Step != 0, v2Step != 0, sign(v1Step) == sign(v2Step)]
    return all(rules2)


def voiceNotes(sims, voice):
    """Collect the distinct notes of one voice, in order of appearance."""
    notes = []
    seen = set()
    for sim in sims:
        n = sim.note(voice)
        if id(n) not in seen:
            seen.add(id(n))
            notes.append(n)
    return notes


def getConsecutions(idx, notes):
    """
    Given a note index in a list of notes, return the note's
    Consecutions object.
    """
    n = notes[idx]
    if idx == 0:
        nLeft = None
    else:
        nLeft = notes[idx-1]
    if idx == len(notes)-1:
        nRight = None
    else:
        nRight = notes[idx+1]
    return Consecutions(n, nLeft, nRight)

# -----------------------------------------------------------------------------


class Test(unittest.TestCase):

    def runTest(self):
        pass

    def test_classifyMelodicMagnitude(self):
        self.assertEqual(classifyMelodicMagnitude(0), 'unison')
        self.assertEqual(classifyMelodicMagnitude(-2), 'step')
        self.assertEqual(classifyMelodicMagnitude(4), 'skip')
        self.assertEqual(classifyMelodicMagnitude(-7), 'perfect_leap')
        self.assertEqual(classifyMelodicMagnitude(6), 'large_leap')
        self.assertEqual(classifyMelodicMagnitude(12), 'octave')

    def test_getConsecutions(self):
        from fuguescore.music import makeVoice
        notes = makeVoice([(60, 0, 1), (62, 1, 1), (55, 2, 1)])
        cons = getConsecutions(1, notes)
        self.assertEqual(cons.leftType, 'step')
        self.assertEqual(cons.leftDirection, 1)
        self.assertEqual(cons.rightType, 'perfect_leap')
        self.assertEqual(cons.rightDirection, -1)
        self.assertIsNone(getConsecutions(0, notes).leftInterval)


# -----------------------------------------------------------------------------


if __name__ == "__main__":
    unittest.main()


# -----------------------------------------------------------------------------
# eof
