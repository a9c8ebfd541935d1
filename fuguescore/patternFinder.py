# -----------------------------------------------------------------------------
# Name:         patternFinder.py
# Purpose:      Recognizing named figures of dissonance treatment
#
# Author:       fuguescore contributors
# License:      BSD, see license.txt
# -----------------------------------------------------------------------------
"""
Pattern Finder
==============

The Pattern Finder matches the entry, exit and motion of a dissonance
against the traditional figures of dissonance treatment. The figures are
tried in a fixed order and the first match wins:

   #. suspension (or retardation, when the held voice resolves upward)
   #. anticipation
   #. appoggiatura
   #. cambiata (proper, inverted, or on a strong beat)
   #. escape tone
   #. passing tone
   #. neighbor tone

Each match carries a bonus split between the entry and the exit of the
dissonance.
"""

import logging

from fuguescore.consecutions import classifyMelodicMagnitude, isLeap
from fuguescore.results import PatternMatch
from fuguescore.rule import PatternRule
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

suspensionEntryBonus = 0.75
suspensionExitBonus = 0.5
suspensionDownwardBonus = 0.25
anticipationEntryBonus = 0.5
appoggiaturaEntryBonus = 2.0
appoggiaturaExitBonus = 0.5
appoggiaturaOppositeScale = 0.5
# variant: (entry bonus, exit bonus)
cambiataBonuses = {'proper': (0.3, 1.2),
                   'inverted': (0.2, 0.8),
                   'strong_beat': (0.1, 0.4)}
escapeToneExitBonus = 0.5
strongBeatStepBonus = 0.25

# -----------------------------------------------------------------------------
# MAIN CLASS
# -----------------------------------------------------------------------------


class FigureEvent:
    """What the pattern rules need to know about one dissonance: the
    simultaneity, the entry and exit information, and the context."""

    def __init__(self, sim, entry, exit, context):
        self.sim = sim
        self.entry = entry
        self.exit = exit
        self.context = context

    @property
    def isStrong(self):
        return self.context.isStrongBeat(self.sim)

    def entryInterval(self, voice):
        """Signed melodic interval into the dissonance, 0 if held."""
        return self.entry.melodicInterval(voice)

    def exitInterval(self, voice):
        """Signed melodic interval out of the dissonance, None if the
        voice does not move."""
        resolution = self.exit.resolution(voice)
        if resolution is None:
            return None
        return resolution.semitones

# -----------------------------------------------------------------------------
# RULES
# -----------------------------------------------------------------------------


def _isStep(semitones):
    return semitones is not None and \
        classifyMelodicMagnitude(semitones) == 'step'


def matchSuspension(event, voice):
    """Oblique entry; the held voice resolves by step."""
    if event.entry.motion.type != 'oblique' or event.entry.motion.moved(voice):
        return None
    exitInterval = event.exitInterval(voice)
    if not _isStep(exitInterval):
        return None
    if exitInterval < 0:
        return PatternMatch('suspension', voice,
                            entryBonus=suspensionEntryBonus,
                            exitBonus=(suspensionExitBonus
                                       + suspensionDownwardBonus),
                            description=f'Suspension (V{voice} held, '
                                        f'resolves down by step)')
    return PatternMatch('retardation', voice,
                        entryBonus=suspensionEntryBonus,
                        exitBonus=suspensionExitBonus,
                        description=f'Retardation (V{voice} held, '
                                    f'resolves up by step)')


def matchAnticipation(event, voice):
    """Oblique entry on a weak beat, not left in parallel motion."""
    rules = [event.entry.motion.type == 'oblique',
             event.entry.motion.moved(voice),
             not event.isStrong,
             event.exit.motion is not None,
             event.exit.motion is not None
             and event.exit.motion.type != 'parallel']
    if not all(rules):
        return None
    return PatternMatch('anticipation', voice,
                        entryBonus=anticipationEntryBonus,
                        description=f'Anticipation (V{voice} moves in '
                                    f'obliquely on a weak beat)')


def matchAppoggiatura(event, voice):
    """Skip or leap onto a strong beat, left by step."""
    entryInterval = event.entryInterval(voice)
    exitInterval = event.exitInterval(voice)
    rules = [event.isStrong,
             isLeap(entryInterval),
             _isStep(exitInterval)]
    if not all(rules):
        return None
    scale = 1.0
    if sign(exitInterval) == -sign(entryInterval):
        scale = appoggiaturaOppositeScale
    return PatternMatch('appoggiatura', voice,
                        entryBonus=appoggiaturaEntryBonus * scale,
                        exitBonus=appoggiaturaExitBonus * scale,
                        description=f'Appoggiatura (V{voice} leaps in, '
                                    f'steps out)')


def matchCambiata(event, voice):
    """Step in, then a skip of a third in the same direction."""
    entryInterval = event.entryInterval(voice)
    exitInterval = event.exitInterval(voice)
    rules = [_isStep(entryInterval),
             exitInterval is not None,
             exitInterval is not None and abs(exitInterval) in (3, 4),
             exitInterval is not None
             and sign(exitInterval) == sign(entryInterval)]
    if not all(rules):
        return None
    if event.isStrong:
        variant = 'strong_beat'
    elif entryInterval < 0:
        variant = 'proper'
    else:
        variant = 'inverted'
    entryBonus, exitBonus = cambiataBonuses[variant]
    return PatternMatch('cambiata', voice,
                        entryBonus=entryBonus,
                        exitBonus=exitBonus,
                        description=f'Cambiata, {variant.replace("_", " ")} '
                                    f'(V{voice} steps in, skips a third on)',
                        variant=variant)


def matchEscapeTone(event, voice):
    """Step in, skip or perfect leap out the other way."""
    entryInterval = event.entryInterval(voice)
    exitInterval = event.exitInterval(voice)
    rules = [_isStep(entryInterval),
             exitInterval is not None
             and classifyMelodicMagnitude(exitInterval)
             in ('skip', 'perfect_leap'),
             exitInterval is not None
             and sign(exitInterval) == -sign(entryInterval)]
    if not all(rules):
        return None
    return PatternMatch('escape_tone', voice,
                        exitBonus=escapeToneExitBonus,
                        description=f'Escape tone (V{voice} steps in, '
                                    f'leaps out opposite)')


def matchPassingTone(event, voice):
    """Stepwise through in one direction."""
    entryInterval = event.entryInterval(voice)
    exitInterval = event.exitInterval(voice)
    rules = [_isStep(entryInterval),
             _isStep(exitInterval),
             exitInterval is not None
             and sign(exitInterval) == sign(entryInterval)]
    if not all(rules):
        return None
    bonus = strongBeatStepBonus if event.isStrong else 0.0
    return PatternMatch('passing', voice, entryBonus=bonus,
                        description=f'Passing tone (V{voice} stepwise '
                                    f'through)')


def matchNeighborTone(event, voice):
    """Step out and back."""
    entryInterval = event.entryInterval(voice)
    exitInterval = event.exitInterval(voice)
    rules = [_isStep(entryInterval),
             _isStep(exitInterval),
             exitInterval is not None
             and sign(exitInterval) == -sign(entryInterval)]
    if not all(rules):
        return None
    bonus = strongBeatStepBonus if event.isStrong else 0.0
    return PatternMatch('neighbor', voice, entryBonus=bonus,
                        description=f'Neighbor tone (V{voice} steps out '
                                    f'and back)')


patternRules = [
    PatternRule('suspension', matchSuspension,
                'Oblique entry, held voice resolves by step'),
    PatternRule('anticipation', matchAnticipation,
                'Oblique entry on a weak beat, exit not parallel'),
    PatternRule('appoggiatura', matchAppoggiatura,
                'Strong-beat leap or skip resolved by step'),
    PatternRule('cambiata', matchCambiata,
                'Step entry, same-direction skip of a third'),
    PatternRule('escape_tone', matchEscapeTone,
                'Step entry, opposite skip or leap exit'),
    PatternRule('passing', matchPassingTone,
                'Step entry and step exit in the same direction'),
    PatternRule('neighbor', matchNeighborTone,
                'Step entry and step exit in opposite directions'),
]

# -----------------------------------------------------------------------------
# FUNCTIONS
# -----------------------------------------------------------------------------


def findPattern(event, rules=None):
    """
    Return the first PatternMatch from the ordered rule list, or None.
    A figure needs both a previous and a following simultaneity.
    """
    if event.entry.motion is None or event.entry.motion.type == 'unknown':
        return None
    if event.exit.motion is None:
        return None
    if rules is None:
        rules = patternRules
    for rule in rules:
        match = rule.apply(event)
        if match is not None:
            logger.debug(f'{match.type} at {event.sim.onset}: '
                         f'{match.description}')
            return match
    return None

# -----------------------------------------------------------------------------


if __name__ == '__main__':
    # self_test code
    pass
# -----------------------------------------------------------------------------
# eof
