# -----------------------------------------------------------------------------
# Name:         passingMotion.py
# Purpose:      Evaluating dissonant notes as fast passing motion
#
# Author:       fuguescore contributors
# License:      BSD, see license.txt
# -----------------------------------------------------------------------------
"""
Passing Motion
==============

Short dissonant notes off the beat are heard as passing motion and deserve
milder treatment than a long, exposed dissonance. This module gives each
dissonant note a continuous "passingness" score. Half of a positive score
is the mitigation that the chain tracker may use to soften penalties.

A note is eligible only if it is no longer than an eighth; on a strong or
medium beat it must be strictly shorter. A 32nd note (or shorter) that does
not repeat its predecessor's pitch is always fully passing.
"""

import logging

from fuguescore.consecutions import (VoiceIndex, classifyMelodicMagnitude,
                                     getConsecutions, isLeap)
from fuguescore.results import PassingMotion
from fuguescore.utilities import EPSILON, approxEqual, sign, formatScore

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

# Durations in beats.
EIGHTH = 0.5
SIXTEENTH = 0.25
THIRTY_SECOND = 0.125

# Metric weight from which a beat is strong or medium.
strongOrMediumWeight = 0.75

fullPassingness = 3.0

# -----------------------------------------------------------------------------
# FUNCTIONS
# -----------------------------------------------------------------------------


def evaluatePassingMotion(sims, index, voice, context,
                          entryMotion=None, voices=None):
    """
    Return a PassingMotion for the note of one voice at the simultaneity
    at index. Only a note that begins at this simultaneity is evaluated.
    """
    sim = sims[index]
    note = sim.note(voice)
    pm = PassingMotion(voice)

    if not approxEqual(note.onset, sim.onset):
        pm.details.append(f'V{voice} held from an earlier onset')
        return pm

    if voices is None or voices.locate(voice, note) is None:
        voices = VoiceIndex(sims)
    idx = voices.locate(voice, note)
    notes = voices.notes[voice]
    cons = getConsecutions(idx, notes)
    prevNote = cons.leftNote
    nextNote = cons.rightNote
    prevMove = getConsecutions(idx - 1, notes).leftInterval if idx > 0 else None

    strong = sim.metricWeight >= strongOrMediumWeight
    duration = note.duration
    rules = [duration <= EIGHTH + EPSILON,
             not strong or duration < EIGHTH - EPSILON]
    if not all(rules):
        pm.details.append(f'V{voice} too long for passing motion '
                          f'on this beat')
        return pm
    pm.eligible = True

    entry = cons.leftInterval
    repeated = entry == 0
    if duration <= THIRTY_SECOND + EPSILON and not repeated:
        pm.passingness = fullPassingness
        pm.details.append(f'V{voice} 32nd note or shorter: fully passing')
        return pm

    terms = []
    # duration class
    if duration >= EIGHTH - EPSILON:
        terms.append(('eighth note', -1.0))
    elif duration > SIXTEENTH + EPSILON:
        terms.append(('between eighth and sixteenth', -0.5))

    if prevNote is not None:
        if duration > prevNote.duration + EPSILON:
            terms.append(('longer than previous note', -0.5))
        elif duration < prevNote.duration - EPSILON:
            terms.append(('shorter than previous note', 0.25))
        if note.onset - prevNote.end >= EIGHTH - EPSILON:
            terms.append(('enters from a rest', -0.5))

    # metric position
    subdivision = 1 / 3 if context.isCompound else EIGHTH
    beatOffset = note.onset % 1.0
    if beatOffset < EPSILON or beatOffset > 1.0 - EPSILON:
        terms.append(('on the beat', -0.5))
    else:
        remainder = beatOffset % subdivision
        if EPSILON < remainder < subdivision - EPSILON:
            terms.append(('off the primary subdivision', 0.5))

    # approach
    if entry is not None:
        if repeated:
            terms.append(('repeated pitch', -0.5))
        elif isLeap(entry):
            terms.append(('approached by leap', -0.5))
        else:
            terms.append(('approached by step', 0.75))

    if entryMotion is not None and entryMotion.type == 'oblique':
        terms.append(('oblique motion', 0.5))

    if entry and prevMove and sign(entry) == sign(prevMove):
        terms.append(('continues previous direction', 0.5))

    if nextNote is not None and prevNote is not None:
        exit = cons.rightInterval
        toward = sign(prevNote.pitch - note.pitch)
        if exit != 0 and toward != 0 and sign(exit) == toward:
            terms.append(('returns toward pre-entry pitch', 0.5))

    if entry and prevMove and abs(prevMove) > 2 and \
            sign(entry) == -sign(prevMove):
        terms.append(('recovers from a prior leap', 0.25))

    if entry and prevMove and \
            classifyMelodicMagnitude(entry) == classifyMelodicMagnitude(prevMove):
        terms.append(('repeats previous interval type', 0.25))

    if context.isInSequence(note.onset, note.index):
        terms.append(('inside a sequence', 1.0))

    pm.passingness = sum(value for _, value in terms)
    pm.details.extend(f'V{voice} {label}: {formatScore(value)}'
                      for label, value in terms)
    logger.debug(f'Passingness of V{voice} at {sim.onset}: '
                 f'{pm.passingness}')
    return pm


def bestPassingMotion(*motions):
    """The PassingMotion with the largest mitigation, or None."""
    candidates = [pm for pm in motions if pm is not None]
    if not candidates:
        return None
    return max(candidates, key=lambda pm: pm.passingness)

# -----------------------------------------------------------------------------


if __name__ == '__main__':
    # self_test code
    pass
# -----------------------------------------------------------------------------
# eof
