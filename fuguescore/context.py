# -----------------------------------------------------------------------------
# Name:         context.py
# Purpose:      Configuration object for a dissonance analysis
#
# Author:       fuguescore contributors
# License:      BSD, see license.txt
# -----------------------------------------------------------------------------
"""
Context
=======

The Context module holds the :py:class:`AnalysisContext`, the configuration
of a single analysis run. A context is made once per call and handed to
every scoring function; there are no module-level settings to toggle.

The options are:

   `treatP4AsDissonant` -- True by default. In two-voice writing the perfect
   fourth counts as a dissonance unless the user says otherwise.

   `meter` -- (numerator, denominator), (4, 4) by default.

   `sequenceNoteRanges` -- [{'start': i, 'end': j}, ...] note indices that
   belong to a melodic sequence.

   `sequenceBeatRanges` -- [{'startBeat': a, 'endBeat': b}, ...] onsets that
   belong to a melodic sequence.

   `consonanceWeights` -- base weights used for consonances in the
   duration-weighted overall average.
"""

import logging

from fuguescore.music import isCompoundMeter

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

# Base weights for consonances in the overall average. These are heuristic
# values on a different scale from the dissonance scores.
defaultConsonanceWeights = {'imperfect': 0.5,
                            'fifth': 0.3,
                            'fourth': 0.25,
                            'other': 0.2}

# Metric weight at or above which a beat counts as strong.
strongBeatWeight = 0.75

validOptions = ('treatP4AsDissonant',
                'meter',
                'sequenceNoteRanges',
                'sequenceBeatRanges',
                'consonanceWeights')

# -----------------------------------------------------------------------------
# EXCEPTION HANDLERS
# -----------------------------------------------------------------------------


class ContextError(Exception):
    """Raised when the analysis options cannot be used."""
    def __init__(self, desc):
        super().__init__(desc)
        self.desc = desc

    def logerror(self):
        logger.error(self.desc)


class EvaluationException(Exception):
    """Raised when an evaluation is abandoned because of a ContextError."""
    def __init__(self, desc=None):
        super().__init__(desc)
        self.desc = desc

    def report(self):
        return f'The analysis could not be carried out: {self.desc}'

# -----------------------------------------------------------------------------
# MAIN CLASS
# -----------------------------------------------------------------------------


class AnalysisContext():
    """An object holding the options for one analysis run.

    Unknown option names and malformed values raise a
    :py:class:`ContextError`."""

    def __init__(self, **kwargs):
        unknown = [k for k in kwargs if k not in validOptions]
        if unknown:
            raise ContextError(f'Unknown analysis option(s): '
                               f'{", ".join(sorted(unknown))}.')
        self.treatP4AsDissonant = bool(kwargs.get('treatP4AsDissonant', True))
        self.meter = validateMeter(kwargs.get('meter') or (4, 4))
        self.sequenceNoteRanges = validateRanges(
            kwargs.get('sequenceNoteRanges') or [], ('start', 'end'))
        self.sequenceBeatRanges = validateRanges(
            kwargs.get('sequenceBeatRanges') or [], ('startBeat', 'endBeat'))
        self.consonanceWeights = dict(defaultConsonanceWeights)
        self.consonanceWeights.update(kwargs.get('consonanceWeights') or {})

    def __repr__(self):
        return (f'<AnalysisContext meter={self.meter[0]}/{self.meter[1]} '
                f'treatP4AsDissonant={self.treatP4AsDissonant}>')

    @property
    def isCompound(self):
        return isCompoundMeter(self.meter)

    @property
    def shortNoteThreshold(self):
        """A triplet of the primary subdivision: 1/6 beat in simple meter,
        1/9 beat in compound meter."""
        subdivision = 1 / 3 if self.isCompound else 0.5
        return subdivision / 3

    def isDissonant(self, ivl):
        if ivl.isPerfectFourth():
            return self.treatP4AsDissonant
        return not ivl.isConsonant()

    def isStrongBeat(self, sim):
        return sim.metricWeight >= strongBeatWeight

    def isInSequence(self, onset, noteIndex=None):
        """True if the onset lies in a sequence beat range, or the note
        index lies in a sequence note range."""
        for r in self.sequenceBeatRanges:
            if r['startBeat'] <= onset <= r['endBeat']:
                return True
        if noteIndex is not None:
            for r in self.sequenceNoteRanges:
                if r['start'] <= noteIndex <= r['end']:
                    return True
        return False

    def consonanceBaseWeight(self, ivl):
        if ivl.intervalClass in (3, 6):
            return self.consonanceWeights['imperfect']
        elif ivl.intervalClass == 5:
            return self.consonanceWeights['fifth']
        elif ivl.intervalClass == 4:
            return self.consonanceWeights['fourth']
        return self.consonanceWeights['other']

# -----------------------------------------------------------------------------
# FUNCTIONS
# -----------------------------------------------------------------------------


def makeContext(options=None):
    """Accept an AnalysisContext, a mapping of options, or None."""
    if isinstance(options, AnalysisContext):
        return options
    return AnalysisContext(**(options or {}))


def validateMeter(meter):
    try:
        numerator, denominator = meter
    except (TypeError, ValueError):
        raise ContextError(f'Meter must be a (numerator, denominator) pair, '
                           f'not {meter!r}.')
    rules = [isinstance(numerator, int),
             isinstance(denominator, int),
             not isinstance(numerator, bool),
             not isinstance(denominator, bool)]
    if not all(rules) or numerator <= 0 or denominator <= 0:
        raise ContextError(f'Meter values must be positive integers, '
                           f'not {meter!r}.')
    return (numerator, denominator)


def validateRanges(ranges, keys):
    startKey, endKey = keys
    validated = []
    for r in ranges:
        try:
            start = float(r[startKey])
            end = float(r[endKey])
        except (KeyError, TypeError, ValueError):
            raise ContextError(f'Sequence ranges need numeric {startKey!r} '
                               f'and {endKey!r} values, not {r!r}.')
        if end < start:
            raise ContextError(f'Sequence range ends before it starts: '
                               f'{r!r}.')
        validated.append({startKey: start, endKey: end})
    return validated

# -----------------------------------------------------------------------------


if __name__ == '__main__':
    # self_test code
    pass
# -----------------------------------------------------------------------------
# eof
