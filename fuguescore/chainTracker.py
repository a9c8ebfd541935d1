# -----------------------------------------------------------------------------
# Name:         chainTracker.py
# Purpose:      Chains of consecutive dissonances and passing-motion
#               mitigation
#
# Author:       fuguescore contributors
# License:      BSD, see license.txt
# -----------------------------------------------------------------------------
"""
Chain Tracker
=============

A chain is a maximal run of adjacent dissonances; a single dissonance is a
chain of length one. The first member is the chain entry, the others are
consecutive dissonances, and the consonance that follows is the chain
resolution.

After the chains are known, the mitigation pass softens penalties that fast
passing motion excuses:

   (a) each voice's resolution penalty, by that voice's own mitigation;

   (b) the entry motion term, by the better of the two voices' mitigations.
   A penalty is raised toward zero. A reward is reduced by at most 0.8,
   and never below zero;

   (c) the penalty for moving on to another dissonance. Consecutive members
   use their own mitigation; the chain entry uses the mitigation of the
   member that follows it.

Mitigations never change the sign of a term. Strong-beat penalties,
consonance rewards, abandonment and rest penalties are left alone.
"""

import logging

from fuguescore.dissonanceScorer import buildDetails
from fuguescore.utilities import formatScore

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

maxRewardReduction = 0.8
rewardReductionDivisor = 2.5

# -----------------------------------------------------------------------------
# FUNCTIONS
# -----------------------------------------------------------------------------


def annotateChains(results):
    """
    Mark the chain fields of every dissonance and of each chain's
    resolving consonance. Return a list of dicts describing the chains,
    in order.
    """
    chains = []
    idx = 0
    while idx < len(results):
        if results[idx].isConsonant:
            idx += 1
            continue
        last = idx
        while last + 1 < len(results) and not results[last + 1].isConsonant:
            last += 1
        members = results[idx:last + 1]
        startOnset = members[0].onset
        endOnset = members[-1].onset
        resolved = last + 1 < len(results)
        for position, result in enumerate(members):
            result.chainPosition = position
            result.chainLength = len(members)
            result.isChainEntry = position == 0
            result.isConsecutiveDissonance = position > 0
            result.chainStartOnset = startOnset
            result.chainEndOnset = endOnset
            result.chainUnresolved = not resolved
        if resolved:
            resolution = results[last + 1]
            resolution.isChainResolution = True
            resolution.chainStartOnset = startOnset
            resolution.chainEndOnset = endOnset
            resolution.chainLength = len(members)
        chains.append({'start': startOnset,
                       'end': endOnset,
                       'length': len(members),
                       'resolved': resolved})
        if len(members) > 1:
            logger.debug(f'Chain of {len(members)} dissonances from '
                         f'{startOnset} to {endOnset}.')
        idx = last + 1
    return chains


def mitigatePenalty(value, amount):
    """Raise a negative value toward zero by amount, never past zero."""
    if value >= 0 or amount <= 0:
        return value
    return min(0.0, value + amount)


def mitigateReward(value, mitigation):
    """Lower a positive value by min(0.8, mitigation/2.5), never below
    zero."""
    if value <= 0 or mitigation <= 0:
        return value
    reduction = min(maxRewardReduction, mitigation / rewardReductionDivisor)
    return max(0.0, value - reduction)


def bestMitigation(result):
    if result.passingMotion is None:
        return 0.0
    return result.passingMotion.mitigation


def voiceMitigation(result, voice):
    pm = getattr(result, f'v{voice}PassingMotion')
    if pm is None:
        return 0.0
    return pm.mitigation


def adjustComponent(result, name, newValue, label):
    """Set one component and record the adjustment on the result."""
    oldValue = getattr(result.components, name)
    if newValue == oldValue:
        return False
    setattr(result.components, name, newValue)
    result.consecutiveMitigationCount += 1
    result.consecutiveMitigation += abs(newValue - oldValue)
    result.mitigationDetails.append(f'{label}: {formatScore(oldValue)} -> '
                                    f'{formatScore(newValue)}')
    return True


def mitigateResult(result, followingMitigation=None):
    """Apply rules (a), (b) and (c) to one dissonance."""
    components = result.components
    for voice in (1, 2):
        name = f'v{voice}Resolution'
        adjustComponent(result, name,
                        mitigatePenalty(getattr(components, name),
                                        voiceMitigation(result, voice)),
                        f'V{voice} passing motion eases resolution penalty')

    best = bestMitigation(result)
    if components.entryMotion < 0:
        adjustComponent(result, 'entryMotion',
                        mitigatePenalty(components.entryMotion, best),
                        'Passing motion eases entry penalty')
    elif components.entryMotion > 0:
        adjustComponent(result, 'entryMotion',
                        mitigateReward(components.entryMotion, best),
                        'Passing motion reduces entry reward')

    if components.resolvesToDissonance:
        if result.isConsecutiveDissonance or followingMitigation is None:
            amount = best
        else:
            amount = followingMitigation
        adjustComponent(result, 'exitResolution',
                        mitigatePenalty(components.exitResolution, amount),
                        'Passing motion eases dissonant continuation')


def applyChainMitigation(results):
    """Run the mitigation pass over all dissonances, in order."""
    for idx, result in enumerate(results):
        if result.isConsonant:
            continue
        followingMitigation = None
        if result.isChainEntry and idx + 1 < len(results) and \
                not results[idx + 1].isConsonant:
            followingMitigation = bestMitigation(results[idx + 1])
        mitigateResult(result, followingMitigation)
        if result.consecutiveMitigationCount:
            buildDetails(result)
            result.updateCategory()
            logger.debug(f'Mitigated dissonance at {result.onset}: '
                         f'{result.consecutiveMitigation:.2f} in '
                         f'{result.consecutiveMitigationCount} step(s).')
    return results

# -----------------------------------------------------------------------------


if __name__ == '__main__':
    # self_test code
    pass
# -----------------------------------------------------------------------------
# eof
