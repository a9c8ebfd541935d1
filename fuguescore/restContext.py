# -----------------------------------------------------------------------------
# Name:         restContext.py
# Purpose:      Rests around a simultaneity
#
# Author:       fuguescore contributors
# License:      BSD, see license.txt
# -----------------------------------------------------------------------------
"""
Rest Context
============

For a simultaneity and its neighbors, the Rest Context module determines
whether either voice enters from a rest or leaves into one, how long those
rests are, and whether the dissonance is "resolved by abandonment": one voice
drops out while the other still sounds.
"""

import logging

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

# At the last simultaneity, the voices must end this far apart for one of
# them to count as abandoning the other.
finalAbandonmentGap = 0.1

# A gap longer than this in one voice is a true rest for interval history.
historyResetGap = 0.05

# -----------------------------------------------------------------------------
# MAIN CLASS
# -----------------------------------------------------------------------------


class RestContext:
    """Rests entering and leaving one simultaneity, per voice."""
    def __init__(self):
        self.v1EntryFromRest = False
        self.v2EntryFromRest = False
        self.v1EntryRestDuration = 0.0
        self.v2EntryRestDuration = 0.0
        self.v1PreviousDuration = 0.0
        self.v2PreviousDuration = 0.0
        self.v1ExitToRest = False
        self.v2ExitToRest = False
        self.v1ExitRestDuration = 0.0
        self.v2ExitRestDuration = 0.0
        self.resolvedByAbandonment = False
        self.abandoningVoice = None

    def entryRestDuration(self, voice):
        if voice == 1:
            return self.v1EntryRestDuration
        return self.v2EntryRestDuration

    def previousDuration(self, voice):
        """Duration of the note sounded before an entry rest."""
        if voice == 1:
            return self.v1PreviousDuration
        return self.v2PreviousDuration

    def exitRestDuration(self, voice):
        if voice == 1:
            return self.v1ExitRestDuration
        return self.v2ExitRestDuration

    def __repr__(self):
        return (f'<RestContext entry=({self.v1EntryRestDuration}, '
                f'{self.v2EntryRestDuration}) exit=({self.v1ExitRestDuration}, '
                f'{self.v2ExitRestDuration}) '
                f'abandonment={self.resolvedByAbandonment}>')

# -----------------------------------------------------------------------------
# FUNCTIONS
# -----------------------------------------------------------------------------


def getRestContext(sims, index, voices=None):
    """
    Build the RestContext for the simultaneity at index.

    An entry rest is the gap between a voice's previous note and its
    current note; an exit rest is the gap between the current note and the
    voice's following note. With a :py:class:`~consecutions.VoiceIndex`
    the neighboring notes are taken from the voice itself, so that a note
    sung while the other voice rests is not mistaken for a rest. Otherwise
    they are taken from the neighboring simultaneities. Gaps within 0.01
    beat are not rests.
    """
    rc = RestContext()
    if not sims or index is None or not 0 <= index < len(sims):
        return rc
    curr = sims[index]
    prevSim = sims[index - 1] if index > 0 else None
    nextSim = sims[index + 1] if index + 1 < len(sims) else None

    for voice in (1, 2):
        currNote = curr.note(voice)
        if prevSim is not None:
            prevNote = prevSim.note(voice)
            if prevNote is not currNote and voices is not None:
                prevNote = voices.previousNote(voice, currNote) or prevNote
            gap = currNote.onset - prevNote.end
            if prevNote is not currNote and gap > EPSILON:
                setattr(rc, f'v{voice}EntryFromRest', True)
                setattr(rc, f'v{voice}EntryRestDuration', gap)
                setattr(rc, f'v{voice}PreviousDuration', prevNote.duration)
        if nextSim is not None:
            nextNote = nextSim.note(voice)
            if nextNote is not currNote and voices is not None:
                nextNote = voices.nextNote(voice, currNote) or nextNote
            gap = nextNote.onset - currNote.end
            if nextNote is not currNote and gap > EPSILON:
                setattr(rc, f'v{voice}ExitToRest', True)
                setattr(rc, f'v{voice}ExitRestDuration', gap)

    v1End = curr.voice1Note.end
    v2End = curr.voice2Note.end
    if nextSim is not None:
        if v1End < v2End - EPSILON and v1End < nextSim.onset - EPSILON:
            rc.resolvedByAbandonment = True
            rc.abandoningVoice = 1
        elif v2End < v1End - EPSILON and v2End < nextSim.onset - EPSILON:
            rc.resolvedByAbandonment = True
            rc.abandoningVoice = 2
    elif abs(v1End - v2End) > finalAbandonmentGap:
        rc.resolvedByAbandonment = True
        rc.abandoningVoice = 1 if v1End < v2End else 2

    if rc.resolvedByAbandonment:
        logger.debug(f'Voice {rc.abandoningVoice} abandons the '
                     f'simultaneity at {curr.onset}.')
    return rc


def isRestReset(prevSim, currSim, voices):
    """
    True when one voice rests (a gap of more than 0.05 beat) and the other
    voice sings an entire note inside that gap. Repetition counts for
    consonances start over after such a rest. A rest taken by both voices
    together does not count.

    The notes of the other voice come from voices, a
    :py:class:`~consecutions.VoiceIndex`. A note sung inside the gap
    belongs to no simultaneity, so an index collected from the
    simultaneities alone never finds one.
    """
    if prevSim is None or currSim is None:
        return False
    for voice, other in ((1, 2), (2, 1)):
        currNote = currSim.note(voice)
        prevNote = prevSim.note(voice)
        if currNote is prevNote:
            continue
        prevNote = voices.previousNote(voice, currNote) or prevNote
        gapStart = prevNote.end
        gapEnd = currNote.onset
        if gapEnd - gapStart <= historyResetGap:
            continue
        notes = voices.notes[other]
        pos = voices.locate(other, currSim.note(other))
        if pos is None:
            continue
        j = pos - 1
        while j >= 0 and notes[j].onset >= gapStart - EPSILON:
            if notes[j].end <= gapEnd + EPSILON:
                return True
            j -= 1
    return False

# -----------------------------------------------------------------------------


if __name__ == '__main__':
    # self_test code
    pass
# -----------------------------------------------------------------------------
# eof
