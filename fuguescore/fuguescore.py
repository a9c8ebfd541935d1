# -----------------------------------------------------------------------------
# Name:         fuguescore.py
# Purpose:      Scoring dissonance treatment in two-voice counterpoint
#
# Author:       fuguescore contributors
# License:      BSD, see license.txt
# -----------------------------------------------------------------------------
"""
FugueScore
==========

This is the main program module.

FugueScore grades the treatment of every harmonic clash in a passage of
two-voice counterpoint, such as a fugue subject against its countersubject.
Each simultaneity is classified as consonant or dissonant; dissonances are
scored for how they are entered and left and for the contrapuntal figure
they belong to; consonances are scored for monotonous repetition.

The main scripts are:

>>> analyzeAllDissonances(simultaneities)
>>> evaluateCounterpoint(voice1, voice2, meter=(3, 4))

Both return a dictionary with the keys 'all', 'consonances',
'dissonances' and 'summary'.
"""

import logging

from fuguescore import context
from fuguescore.chainTracker import annotateChains, applyChainMitigation
from fuguescore.consecutions import VoiceIndex
from fuguescore.dissonanceScorer import scoreDissonance
from fuguescore.music import Note, findSimultaneities, makeVoice
from fuguescore.restContext import isRestReset
from fuguescore.results import AnalysisSummary
from fuguescore.sonorityChecker import RESET
from fuguescore.utilities import finiteOrZero, pairwise

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

# Shortest duration an event counts for in the overall average.
minimumEventWeight = 0.25

# -----------------------------------------------------------------------------
# MAIN SCRIPTS
# -----------------------------------------------------------------------------


def analyzeAllDissonances(simultaneities, options=None, voices=None):
    """
    Score every simultaneity of a passage.

    voices, if given, is the pair of note lists the simultaneities were
    built from. Passing motion, rests and the interval-history resets then
    see every note, including notes sung while the other voice rests.

    #. Walk the simultaneities in onset order, marking a reset in the
       interval history wherever a rest interrupts the texture.

    #. Score each simultaneity as a consonance or a dissonance.

    #. Annotate chains of consecutive dissonances.

    #. Apply the passing-motion mitigations.

    #. Copy each resolved dissonance's exit score onto the consonance
       that resolves it.

    #. Summarize.
    """
    cxt = context.makeContext(options)
    sims = sorted(simultaneities or [], key=lambda s: s.onset)
    voiceIndex = VoiceIndex(sims, voices)

    results = []
    intervalHistory = []
    prevSim = None
    for idx, sim in enumerate(sims):
        if isRestReset(prevSim, sim, voiceIndex):
            intervalHistory.append(RESET)
        result = scoreDissonance(sim, sims, idx, intervalHistory, cxt,
                                 voiceIndex)
        results.append(result)
        intervalHistory.append(sim.interval.intervalClass)
        prevSim = sim

    chains = annotateChains(results)
    applyChainMitigation(results)
    copyResolutionScores(results)

    consonances = [r for r in results if r.isConsonant]
    dissonances = [r for r in results if not r.isConsonant]
    summary = buildSummary(results, chains, cxt)
    logger.debug(f'Analyzed {summary.totalIntervals} simultaneities: '
                 f'{summary.totalDissonances} dissonant.')
    return {'all': results,
            'consonances': consonances,
            'dissonances': dissonances,
            'summary': summary}


def evaluateCounterpoint(voice1, voice2, **kwargs):
    """
    Align two voices and score their dissonance treatment.

    Each voice is a list of :py:class:`~music.Note` objects or of
    (pitch, onset, duration) triples. Keyword arguments are the options
    of :py:class:`~context.AnalysisContext`.
    """
    try:
        cxt = context.AnalysisContext(**kwargs)
    except context.ContextError as ce:
        ce.logerror()
        raise context.EvaluationException(ce.desc)
    voice1 = prepareVoice(voice1)
    voice2 = prepareVoice(voice2)
    sims = findSimultaneities(voice1, voice2, cxt.meter)
    return analyzeAllDissonances(sims, cxt, voices=(voice1, voice2))

# -----------------------------------------------------------------------------
# AUXILIARY SCRIPTS
# -----------------------------------------------------------------------------


def prepareVoice(voice):
    """Return a list of indexed notes. Notes without an index are
    copied with their position in the voice."""
    voice = list(voice or [])
    if all(isinstance(n, Note) for n in voice):
        if any(n.index is None for n in voice):
            voice = sorted(voice, key=lambda n: n.onset)
            voice = [Note(n.pitch, n.onset, n.duration, index=idx)
                     for idx, n in enumerate(voice)]
        return voice
    try:
        return makeVoice(voice)
    except (TypeError, ValueError):
        raise context.EvaluationException(
            'A voice must be a list of notes or of '
            '(pitch, onset, duration) triples.')


def copyResolutionScores(results):
    """Give each resolving consonance the final exit score of the
    dissonance it resolves."""
    for prev, curr in pairwise(results):
        if curr.isConsonant and curr.resolvesDissonance and \
                not prev.isConsonant:
            curr.exitScore = prev.exitScore


def overallAverage(results, cxt):
    """Duration-weighted mean over all events. Consonances count with
    their base weight, dissonances with their score."""
    weightedSum = 0.0
    totalWeight = 0.0
    for r in results:
        weight = max(minimumEventWeight, finiteOrZero(r.duration))
        if r.isConsonant:
            value = cxt.consonanceBaseWeight(r)
        else:
            value = finiteOrZero(r.score)
        weightedSum += value * weight
        totalWeight += weight
    if not totalWeight:
        return 0.0
    return finiteOrZero(weightedSum / totalWeight)


def buildSummary(results, chains, cxt):
    summary = AnalysisSummary()
    consonances = [r for r in results if r.isConsonant]
    dissonances = [r for r in results if not r.isConsonant]
    summary.totalIntervals = len(results)
    summary.totalConsonances = len(consonances)
    summary.totalDissonances = len(dissonances)
    summary.repetitiveConsonances = sum(1 for r in consonances
                                        if r.isRepeated)
    for r in dissonances:
        if r.score >= 0:
            summary.goodCount += 1
        else:
            summary.badCount += 1
        summary.typeCounts[r.type] = summary.typeCounts.get(r.type, 0) + 1
        summary.allPatterns.extend(r.patterns)
    summary.consecutiveDissonanceGroups = [c for c in chains
                                           if c['length'] >= 2]
    if dissonances:
        summary.averageScore = finiteOrZero(
            sum(finiteOrZero(r.score) for r in dissonances) / len(dissonances))
    summary.overallAvgScore = overallAverage(results, cxt)
    return summary

# -----------------------------------------------------------------------------


if __name__ == '__main__':
    # self_test code
    pass
# -----------------------------------------------------------------------------
# eof
