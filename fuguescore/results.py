# -----------------------------------------------------------------------------
# Name:         results.py
# Purpose:      Objects for storing scores and analysis summaries
#
# Author:       fuguescore contributors
# License:      BSD, see license.txt
# -----------------------------------------------------------------------------
"""
Results
=======

The Results module holds the records produced by the scoring engine.

A :py:class:`ScoreComponents` object keeps every additive term of one
dissonance's score separately, so that mitigations can adjust a single
term. The entry score, exit score and total are always sums of the terms.

A :py:class:`ScoreResult` is produced for every simultaneity, and an
:py:class:`AnalysisSummary` for a whole run.
"""

# -----------------------------------------------------------------------------
# MODULE VARIABLES
# -----------------------------------------------------------------------------

entryFields = ('entryMotion', 'entryMeter', 'entryPattern')
exitFields = ('exitResolution', 'exitAbandonment', 'exitRest',
              'v1Resolution', 'v2Resolution',
              'v1Recovery', 'v2Recovery', 'exitPattern')

# Dissonance categories by total score.
goodDissonanceScore = 1.0
marginalDissonanceScore = -0.5

# -----------------------------------------------------------------------------
# MAIN CLASSES
# -----------------------------------------------------------------------------


class ScoreComponents:
    """The separate terms of a dissonance score."""

    def __init__(self, **kwargs):
        for name in entryFields + exitFields:
            setattr(self, name, float(kwargs.pop(name, 0.0)))
        self.resolvesToDissonance = kwargs.pop('resolvesToDissonance', False)
        self.unresolved = kwargs.pop('unresolved', False)
        if kwargs:
            raise TypeError(f'Unknown score components: {sorted(kwargs)}')

    @property
    def entryScore(self):
        return sum(getattr(self, name) for name in entryFields)

    @property
    def exitScore(self):
        return sum(getattr(self, name) for name in exitFields)

    @property
    def total(self):
        return self.entryScore + self.exitScore

    def resolution(self, voice):
        return getattr(self, f'v{voice}Resolution')

    def asDict(self):
        return {name: getattr(self, name) for name in entryFields + exitFields}

    def __repr__(self):
        return (f'<ScoreComponents entry={self.entryScore:.3f} '
                f'exit={self.exitScore:.3f}>')


class PatternMatch:
    """A named contrapuntal figure recognized at a dissonance. The bonus
    is split between the entry and the exit."""

    def __init__(self, type, voice=None, entryBonus=0.0, exitBonus=0.0,
                 description='', variant=None):
        self.type = type
        self.voice = voice
        self.entryBonus = entryBonus
        self.exitBonus = exitBonus
        self.description = description
        self.variant = variant

    @property
    def bonus(self):
        return self.entryBonus + self.exitBonus

    def __repr__(self):
        return f'<PatternMatch {self.type} voice={self.voice}>'


class PassingMotion:
    """How strongly a dissonant note behaves as fast, weak-beat passing
    motion. The mitigation softens penalties but never reverses them."""

    def __init__(self, voice=None, passingness=0.0, eligible=False,
                 details=None):
        self.voice = voice
        self.passingness = passingness
        self.eligible = eligible
        self.details = details or []

    @property
    def mitigation(self):
        return max(0.0, self.passingness / 2)

    @property
    def isPassing(self):
        return self.passingness >= 1

    def __repr__(self):
        return (f'<PassingMotion voice={self.voice} '
                f'passingness={self.passingness}>')


class ScoreResult:
    """The score of one simultaneity.

    For a dissonance the score is always the sum of its components. For a
    consonance the score is stored directly, and the exit score (if any) is
    copied from the dissonance the consonance resolves."""

    def __init__(self, sim, isConsonant):
        self.onset = sim.onset
        self.isConsonant = isConsonant
        self.interval = sim.interval.name
        self.intervalClass = sim.interval.intervalClass
        self.v1Pitch = sim.voice1Note.pitch
        self.v2Pitch = sim.voice2Note.pitch
        self.metricWeight = sim.metricWeight
        self.duration = sim.duration
        self.isStrongBeat = False
        self.motion = None
        self.motionType = None
        self.isParallel = False
        self.category = None
        self.description = ''
        self.details = []
        self.mitigationDetails = []
        self.components = None
        self._score = 0.0
        self._exitScore = None
        # dissonances
        self.type = 'consonant' if isConsonant else 'unprepared'
        self.patterns = []
        self.entry = None
        self.exit = None
        self.isResolved = True
        self.passingMotion = None
        self.v1PassingMotion = None
        self.v2PassingMotion = None
        self.consecutiveMitigationCount = 0
        self.consecutiveMitigation = 0.0
        # chains
        self.isChainEntry = False
        self.isConsecutiveDissonance = False
        self.chainLength = 0
        self.chainPosition = None
        self.chainStartOnset = None
        self.chainEndOnset = None
        self.chainUnresolved = False
        self.isChainResolution = False
        # consonances
        self.resolvesDissonance = False
        self.isPreparation = False
        self.isRepeated = False
        self.repeatCount = 0

    def get_score(self):
        if self.components is not None:
            return self.components.total
        return self._score

    def set_score(self, value):
        if self.components is not None:
            raise AttributeError('A dissonance score is the sum of its '
                                 'components; adjust a component instead.')
        self._score = value

    def get_entryScore(self):
        if self.components is not None:
            return self.components.entryScore
        return None

    def get_exitScore(self):
        if self.components is not None:
            return self.components.exitScore
        return self._exitScore

    def set_exitScore(self, value):
        if self.components is not None:
            raise AttributeError('A dissonance exit score is the sum of its '
                                 'exit components.')
        self._exitScore = value

    score = property(get_score, set_score)
    entryScore = property(get_entryScore)
    exitScore = property(get_exitScore, set_exitScore)

    def updateCategory(self):
        """Set the dissonance category from the current total."""
        if self.isConsonant:
            return
        if self.score >= goodDissonanceScore:
            self.category = 'dissonant_good'
        elif self.score >= marginalDissonanceScore:
            self.category = 'dissonant_marginal'
        else:
            self.category = 'dissonant_bad'

    def __repr__(self):
        return (f'<ScoreResult {self.onset} {self.interval} {self.type} '
                f'score={self.score:.3f}>')


class AnalysisSummary:
    """Counts and averages for a complete analysis run."""

    def __init__(self):
        self.totalIntervals = 0
        self.totalConsonances = 0
        self.totalDissonances = 0
        self.repetitiveConsonances = 0
        self.goodCount = 0
        self.badCount = 0
        self.typeCounts = {}
        self.allPatterns = []
        self.consecutiveDissonanceGroups = []
        self.averageScore = 0.0
        self.overallAvgScore = 0.0

    def asDict(self):
        return dict(vars(self))

    def __repr__(self):
        return (f'<AnalysisSummary {self.totalIntervals} intervals, '
                f'{self.totalDissonances} dissonances, '
                f'overall={self.overallAvgScore:.3f}>')
