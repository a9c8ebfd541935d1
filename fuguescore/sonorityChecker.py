# -----------------------------------------------------------------------------
# Name:         sonorityChecker.py
# Purpose:      Scoring consonances for repetition, resolution and
#               preparation
#
# Author:       fuguescore contributors
# License:      BSD, see license.txt
# -----------------------------------------------------------------------------
"""
Sonority Checker
================

Consonances are graded by context rather than by their own sound:

   * Too many identical interval classes in a row are monotonous.
     Three or more perfect unisons, fifths or octaves cost 0.5;
     four or more thirds or sixths cost 0.3.

   * A consonance that follows a dissonance is its resolution: good when
     every moving voice arrives by step, poor otherwise.

   * A consonance that precedes a dissonance prepares it.

Repetition is counted in an interval history, a list of interval classes in
which -1 marks a rest that starts the count afresh.
"""

import logging

from fuguescore.consecutions import classifyMotion, isParallelPerfect
from fuguescore.results import ScoreResult

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

# Interval history marker for a rest.
RESET = -1

# preferences for consecutive sonorities
perfectSeriesLimit = 3
imperfectSeriesLimit = 4
perfectRepetitionPenalty = -0.5
imperfectRepetitionPenalty = -0.3
imperfectNames = {3: 'thirds', 6: 'sixths'}

# -----------------------------------------------------------------------------
# FUNCTIONS
# -----------------------------------------------------------------------------


def countConsecutive(intervalHistory, intervalClass):
    """
    Count how many times intervalClass occurs in an unbroken run at the
    end of the history, plus one for the current occurrence.
    """
    count = 1
    for ic in reversed(intervalHistory):
        if ic != intervalClass:
            break
        count += 1
    return count


def scoreConsonance(sims, index, intervalHistory, context):
    """Score the consonant simultaneity at index."""
    sim = sims[index]
    prevSim = sims[index - 1] if index > 0 else None
    nextSim = sims[index + 1] if index + 1 < len(sims) else None
    ivl = sim.interval

    result = ScoreResult(sim, isConsonant=True)
    result.isStrongBeat = context.isStrongBeat(sim)
    result.motion = classifyMotion(prevSim, sim)
    result.motionType = result.motion.type
    result.isParallel = isParallelPerfect(prevSim, sim)
    result.category = 'consonant_normal'
    score = 0.0

    # (1) Repetition.
    count = countConsecutive(intervalHistory or [], ivl.intervalClass)
    result.repeatCount = count
    if ivl.isPerfect() and count >= perfectSeriesLimit:
        score += perfectRepetitionPenalty
        result.isRepeated = True
        result.category = 'consonant_repetitive'
        result.details.append(f'{count} consecutive perfect {ivl.name}: '
                              f'{perfectRepetitionPenalty}')
    elif ivl.isImperfect() and count >= imperfectSeriesLimit:
        score += imperfectRepetitionPenalty
        result.isRepeated = True
        result.category = 'consonant_repetitive'
        result.details.append(f'{count} consecutive '
                              f'{imperfectNames[ivl.intervalClass]}: '
                              f'{imperfectRepetitionPenalty}')

    # (2) Resolution of a preceding dissonance.
    if prevSim is not None and context.isDissonant(prevSim.interval):
        result.resolvesDissonance = True
        goodResolution = True
        for voice in (1, 2):
            if result.motion.moved(voice):
                leap = abs(sim.note(voice).pitch - prevSim.note(voice).pitch)
                if leap > 2:
                    goodResolution = False
                    result.details.append(f'V{voice} resolved by leap')
        if goodResolution:
            result.category = 'consonant_good_resolution'
            result.details.append('Stepwise resolution')
        else:
            result.category = 'consonant_bad_resolution'

    # (3) Preparation of a following dissonance.
    if nextSim is not None and context.isDissonant(nextSim.interval):
        result.isPreparation = True
        if result.category == 'consonant_normal':
            result.category = 'consonant_preparation'
        result.details.append('Prepares a dissonance')

    if result.isParallel:
        result.details.append(f'Parallel {ivl.name}')

    result.score = score
    logger.debug(f'Consonance {ivl.name} at {sim.onset}: {result.category}')
    return result

# -----------------------------------------------------------------------------


if __name__ == '__main__':
    # self_test code
    pass
# -----------------------------------------------------------------------------
# eof
