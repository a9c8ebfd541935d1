# -----------------------------------------------------------------------------
# Name:         dissonanceScorer.py
# Purpose:      Scoring the entry into and exit from a dissonance
#
# Author:       fuguescore contributors
# License:      BSD, see license.txt
# -----------------------------------------------------------------------------
"""
Dissonance Scorer
=================

The Dissonance Scorer grades one dissonant simultaneity in three parts.

The **entry** score rewards oblique and contrary approach, penalizes
parallel and similar approach (less so when a voice comes in from a rest),
and charges a strong-beat dissonance 0.5. A reentry after a long rest is
neutral.

The **exit** score rewards resolution into a consonance, penalizes moving
on to another dissonance, leaving the dissonance unresolved, abandoning it
by dropping out of one voice, or resolving only after a rest. Each voice
that leaves the dissonance by skip or leap pays a resolution penalty keyed
to how it entered (:py:func:`calculateResolutionPenalty`).

The **pattern** bonus of a recognized figure is split between the entry and
the exit.

Every term is recorded in a :py:class:`~results.ScoreComponents` object so
that the chain tracker can later soften individual penalties.
"""

import logging

from fuguescore.consecutions import (VoiceIndex, classifyMelodicMagnitude,
                                     classifyMotion, isParallelPerfect,
                                     largeMagnitudes)
from fuguescore.context import makeContext
from fuguescore.music import pitchName
from fuguescore.passingMotion import bestPassingMotion, evaluatePassingMotion
from fuguescore.patternFinder import FigureEvent, findPattern
from fuguescore.restContext import getRestContext
from fuguescore.results import ScoreComponents, ScoreResult
from fuguescore.sonorityChecker import scoreConsonance
from fuguescore.utilities import EPSILON, formatScore, sign

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

# entry by motion type; negative values are scaled when entering from a rest
entryMotionScores = {'oblique': 0.5,
                     'contrary': 0.5,
                     'parallel': -1.5,
                     'similar_same_type': -1.0,
                     'similar': -0.5,
                     'similar_step': -0.5,
                     'static': 0.0}
fromRestScale = 0.5
strongBeatPenalty = -0.5

# exit
imperfectResolutionReward = 1.0
perfectResolutionReward = 0.5
otherResolutionReward = 0.5
dissonantResolutionPenalty = -0.75
shortDissonantResolutionPenalty = -0.375
unresolvedPenalty = -1.0
abandonmentPenalty = -0.5
invalidRestPenalty = -1.0
delayedRestPenalty = -0.3
restRatio = 0.5
recoveryPenalty = -0.25

sequenceScale = 0.25

# (entry magnitude, exit magnitude, exit direction) -> penalty
# exit direction: 'opposite', 'same', or None for either
resolutionPenalties = {
    'skip': [(('skip',), None, -0.5),
             (('perfect_leap',), None, -1.0),
             (('octave', 'large_leap'), None, -2.0)],
    'perfect_leap': [(('skip',), 'opposite', -1.0),
                     (('perfect_leap',), 'opposite', -1.5),
                     (('skip',), 'same', -1.5)],
    'large': [(('skip',), 'opposite', -1.5)],
}
otherResolutionPenalties = {'perfect_leap': -2.0, 'large': -2.5}
# penalty for a leaping exit when the note was not entered by leap
flatExitPenalties = {'skip': -0.5,
                     'perfect_leap': -0.5,
                     'octave': -1.5,
                     'large_leap': -1.5}

# -----------------------------------------------------------------------------
# MAIN CLASSES
# -----------------------------------------------------------------------------


class Resolution:
    """The melodic move of one voice out of a dissonance."""
    def __init__(self, semitones):
        self.semitones = semitones

    @property
    def direction(self):
        return sign(self.semitones)

    @property
    def magnitude(self):
        return classifyMelodicMagnitude(self.semitones)

    def __repr__(self):
        return f'<Resolution {self.semitones:+d} {self.magnitude}>'


class EntryInfo:
    """How the dissonance was approached, with its entry score terms."""
    def __init__(self, motion=None):
        self.motion = motion
        self.motionScore = 0.0
        self.meterScore = 0.0
        self.v1MelodicInterval = 0
        self.v2MelodicInterval = 0
        self.details = []

    @property
    def score(self):
        return self.motionScore + self.meterScore

    def melodicInterval(self, voice):
        if voice == 1:
            return self.v1MelodicInterval
        return self.v2MelodicInterval


class ExitInfo:
    """How the dissonance was left, with its exit score terms."""
    def __init__(self, motion=None):
        self.motion = motion
        self.resolutionScore = 0.0
        self.abandonmentScore = 0.0
        self.restScore = 0.0
        self.v1Penalty = 0.0
        self.v2Penalty = 0.0
        self.v1Recovery = 0.0
        self.v2Recovery = 0.0
        self.v1Resolution = None
        self.v2Resolution = None
        self.resolvesToDissonance = False
        self.unresolved = False
        self.details = []

    @property
    def score(self):
        return (self.resolutionScore + self.abandonmentScore + self.restScore
                + self.v1Penalty + self.v2Penalty
                + self.v1Recovery + self.v2Recovery)

    def resolution(self, voice):
        if voice == 1:
            return self.v1Resolution
        return self.v2Resolution

# -----------------------------------------------------------------------------
# FUNCTIONS
# -----------------------------------------------------------------------------


def scoreEntry(prevSim, currSim, restContext, context):
    """Score the approach to the dissonance at currSim."""
    if prevSim is None:
        info = EntryInfo()
        info.details.append('No previous simultaneity')
        return info

    motion = classifyMotion(prevSim, currSim, restContext)
    info = EntryInfo(motion)
    for voice in (1, 2):
        if motion.moved(voice):
            semitones = currSim.note(voice).pitch - prevSim.note(voice).pitch
            setattr(info, f'v{voice}MelodicInterval', semitones)

    if motion.type == 'reentry':
        info.details.append('Reentry after a long rest: 0')
        return info

    base = entryMotionScores[motion.type]
    if base < 0 and motion.fromRest:
        base *= fromRestScale
        info.details.append(f'{motion.type.replace("_", " ").capitalize()} '
                            f'motion from rest: {formatScore(base)}')
    else:
        info.details.append(f'{motion.type.replace("_", " ").capitalize()} '
                            f'motion: {formatScore(base)}')
    info.motionScore = base

    if context.isStrongBeat(currSim):
        info.meterScore = strongBeatPenalty
        info.details.append(f'Strong beat: {formatScore(strongBeatPenalty)}')
    return info


def calculateResolutionPenalty(entryInterval, exitInterval, inSequence=False):
    """
    Return the penalty for one voice leaving a dissonance by exitInterval
    after entering it by entryInterval (signed semitones, 0 if held).

    >>> calculateResolutionPenalty(4, -2)
    0.0
    >>> calculateResolutionPenalty(7, -3)
    -1.0
    >>> calculateResolutionPenalty(9, 4)
    -2.5
    >>> calculateResolutionPenalty(0, 5, inSequence=True)
    -0.125
    """
    exitMagnitude = classifyMelodicMagnitude(exitInterval)
    if exitMagnitude in ('unison', 'step'):
        return 0.0
    entryMagnitude = classifyMelodicMagnitude(entryInterval)
    if entryMagnitude in largeMagnitudes:
        entryMagnitude = 'large'

    if entryMagnitude in ('unison', 'step'):
        penalty = flatExitPenalties[exitMagnitude]
    else:
        direction = 'same' if sign(exitInterval) == sign(entryInterval) \
            else 'opposite'
        penalty = otherResolutionPenalties.get(entryMagnitude, 0.0)
        for magnitudes, wanted, value in resolutionPenalties[entryMagnitude]:
            if exitMagnitude in magnitudes and wanted in (None, direction):
                penalty = value
                break

    if inSequence:
        penalty *= sequenceScale
    return penalty


def isShortNote(sim, context):
    shortest = min(sim.voice1Note.duration, sim.voice2Note.duration)
    return shortest <= context.shortNoteThreshold + EPSILON


def scoreExit(currSim, nextSim, entryInfo, restContext, context):
    """Score the departure from the dissonance at currSim."""
    if nextSim is None:
        info = ExitInfo()
        info.unresolved = True
        info.resolutionScore = unresolvedPenalty
        info.details.append(f'No resolution, dissonance unresolved: '
                            f'{formatScore(unresolvedPenalty)}')
        if restContext.resolvedByAbandonment:
            info.abandonmentScore = abandonmentPenalty
            info.details.append(f'V{restContext.abandoningVoice} abandons '
                                f'the dissonance: '
                                f'{formatScore(abandonmentPenalty)}')
        return info

    motion = classifyMotion(currSim, nextSim)
    info = ExitInfo(motion)
    for voice in (1, 2):
        if motion.moved(voice):
            semitones = nextSim.note(voice).pitch - currSim.note(voice).pitch
            setattr(info, f'v{voice}Resolution', Resolution(semitones))

    # (1) What the dissonance moves to.
    nextInterval = nextSim.interval
    if context.isDissonant(nextInterval):
        info.resolvesToDissonance = True
        if isShortNote(currSim, context) and \
                not context.isStrongBeat(currSim):
            info.resolutionScore = shortDissonantResolutionPenalty
            info.details.append(f'Short note moves to dissonance '
                                f'{nextInterval.name}: '
                                f'{formatScore(info.resolutionScore)}')
        else:
            info.resolutionScore = dissonantResolutionPenalty
            info.details.append(f'Moves to dissonance {nextInterval.name}: '
                                f'{formatScore(info.resolutionScore)}')
    elif nextInterval.isImperfect():
        info.resolutionScore = imperfectResolutionReward
        info.details.append(f'Resolves to imperfect consonance '
                            f'{nextInterval.name}: '
                            f'{formatScore(info.resolutionScore)}')
    elif nextInterval.isPerfect():
        info.resolutionScore = perfectResolutionReward
        info.details.append(f'Resolves to perfect consonance '
                            f'{nextInterval.name}: '
                            f'{formatScore(info.resolutionScore)}')
    else:
        info.resolutionScore = otherResolutionReward
        info.details.append(f'Resolves to {nextInterval.name}: '
                            f'{formatScore(info.resolutionScore)}')

    # (2) Abandonment and rests before the resolution.
    if restContext.resolvedByAbandonment:
        info.abandonmentScore = abandonmentPenalty
        info.details.append(f'V{restContext.abandoningVoice} abandons the '
                            f'dissonance: {formatScore(abandonmentPenalty)}')

    rested = [voice for voice in (1, 2)
              if restContext.exitRestDuration(voice)
              > restRatio * currSim.note(voice).duration]
    if len(rested) == 2:
        info.restScore = invalidRestPenalty
        info.details.append(f'Invalid resolution, both voices rest: '
                            f'{formatScore(invalidRestPenalty)}')
    elif len(rested) == 1:
        info.restScore = delayedRestPenalty
        info.details.append(f'Delayed resolution, V{rested[0]} rests: '
                            f'{formatScore(delayedRestPenalty)}')

    # (3) How each voice leaves.
    for voice in (1, 2):
        resolution = info.resolution(voice)
        if resolution is None:
            continue
        entryInterval = entryInfo.melodicInterval(voice)
        note = currSim.note(voice)
        inSequence = context.isInSequence(currSim.onset, note.index)
        penalty = calculateResolutionPenalty(entryInterval,
                                             resolution.semitones,
                                             inSequence)
        if penalty:
            setattr(info, f'v{voice}Penalty', penalty)
            entryMagnitude = classifyMelodicMagnitude(entryInterval)
            text = (f'V{voice} {entryMagnitude.replace("_", " ")} in, '
                    f'{resolution.magnitude.replace("_", " ")} out')
            if inSequence:
                text += ' (in sequence)'
            info.details.append(f'{text}: {formatScore(penalty)}')
        rules = [classifyMelodicMagnitude(entryInterval)
                 in ('perfect_leap',) + largeMagnitudes,
                 sign(resolution.semitones) == sign(entryInterval)]
        if all(rules):
            setattr(info, f'v{voice}Recovery', recoveryPenalty)
            info.details.append(f'V{voice} leap not followed by opposite '
                                f'motion: {formatScore(recoveryPenalty)}')
    return info


def buildDetails(result):
    """Write the detail lines of a scored dissonance."""
    components = result.components
    entryDetails = result.entry.details if result.entry else []
    exitDetails = result.exit.details if result.exit else []
    lines = [f'Entry: {formatScore(components.entryScore)} '
             f'({", ".join(entryDetails)})',
             f'Exit: {formatScore(components.exitScore)} '
             f'({", ".join(exitDetails)})']
    if result.patterns:
        lines.append('Pattern: ' + ', '.join(
            f'{p.type} {formatScore(p.bonus)}' for p in result.patterns))
    else:
        lines.append('No pattern match')
    pm = result.passingMotion
    if pm is not None and pm.eligible:
        lines.append(f'Passing motion V{pm.voice}: passingness '
                     f'{pm.passingness:.2f}, mitigation {pm.mitigation:.2f}')
    lines.extend(result.mitigationDetails)
    lines.append(f'Total: {formatScore(result.score)}')
    result.details = lines


def locateSimultaneity(currSim, allSims, index=None):
    """Return the position of currSim in allSims, or None."""
    if index is not None and 0 <= index < len(allSims) and \
            allSims[index] is currSim:
        return index
    for idx, sim in enumerate(allSims):
        if sim is currSim:
            return idx
    return None


def scoreDissonance(currSim, allSims, index=None, intervalHistory=None,
                    options=None, voices=None):
    """
    Score the simultaneity currSim, found at index in allSims.

    A consonance is handed to the consonance scorer. A dissonance is scored
    for entry, exit, pattern and passing motion and returned as a
    :py:class:`~results.ScoreResult` whose score is the sum of its
    components.

    voices is a :py:class:`~consecutions.VoiceIndex` of the two voices.
    Without one, the notes of each voice are collected from allSims.
    """
    context = makeContext(options)
    index = locateSimultaneity(currSim, allSims or [], index)
    if index is None:
        allSims = [currSim]
        index = 0
        voices = None

    if not context.isDissonant(currSim.interval):
        return scoreConsonance(allSims, index, intervalHistory, context)

    prevSim = allSims[index - 1] if index > 0 else None
    nextSim = allSims[index + 1] if index + 1 < len(allSims) else None
    if voices is None:
        voices = VoiceIndex(allSims)
    restContext = getRestContext(allSims, index, voices)

    entryInfo = scoreEntry(prevSim, currSim, restContext, context)
    exitInfo = scoreExit(currSim, nextSim, entryInfo, restContext, context)
    match = findPattern(FigureEvent(currSim, entryInfo, exitInfo, context))

    components = ScoreComponents(
        entryMotion=entryInfo.motionScore,
        entryMeter=entryInfo.meterScore,
        exitResolution=exitInfo.resolutionScore,
        exitAbandonment=exitInfo.abandonmentScore,
        exitRest=exitInfo.restScore,
        v1Resolution=exitInfo.v1Penalty,
        v2Resolution=exitInfo.v2Penalty,
        v1Recovery=exitInfo.v1Recovery,
        v2Recovery=exitInfo.v2Recovery,
        resolvesToDissonance=exitInfo.resolvesToDissonance,
        unresolved=exitInfo.unresolved)

    result = ScoreResult(currSim, isConsonant=False)
    result.components = components
    result.entry = entryInfo
    result.exit = exitInfo
    result.isStrongBeat = context.isStrongBeat(currSim)
    result.isResolved = nextSim is not None
    result.motion = entryInfo.motion
    result.motionType = entryInfo.motion.type if entryInfo.motion else None
    result.isParallel = isParallelPerfect(prevSim, currSim)
    result.description = (f'{currSim.interval.name}: '
                          f'{pitchName(currSim.voice1Note.pitch)} vs '
                          f'{pitchName(currSim.voice2Note.pitch)}')

    if match is not None:
        components.entryPattern = match.entryBonus
        components.exitPattern = match.exitBonus
        result.type = match.type
        result.patterns = [match]
        result.description += f', {match.description}'

    result.v1PassingMotion = evaluatePassingMotion(
        allSims, index, 1, context, entryInfo.motion, voices)
    result.v2PassingMotion = evaluatePassingMotion(
        allSims, index, 2, context, entryInfo.motion, voices)
    result.passingMotion = bestPassingMotion(result.v1PassingMotion,
                                             result.v2PassingMotion)

    buildDetails(result)
    result.updateCategory()
    logger.debug(f'Dissonance {result.description} at {currSim.onset}: '
                 f'{result.type} {result.score:.2f}')
    return result

# -----------------------------------------------------------------------------


if __name__ == '__main__':
    # self_test code
    pass
# -----------------------------------------------------------------------------
# eof
