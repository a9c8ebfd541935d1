# -*- coding: utf-8 -*-

__all__ = ['chainTracker',
           'consecutions',
           'context',
           'dissonanceScorer',
           'fuguescore',
           'music',
           'passingMotion',
           'patternFinder',
           'restContext',
           'results',
           'rule',
           'sonorityChecker',
           'utilities',
           'analyzeAllDissonances',
           'evaluateCounterpoint',
           'scoreDissonance',
           'AnalysisContext',
           'Note',
           'Simultaneity']

from fuguescore import chainTracker
from fuguescore import consecutions
from fuguescore import context
from fuguescore import dissonanceScorer
from fuguescore import music
from fuguescore import passingMotion
from fuguescore import patternFinder
from fuguescore import restContext
from fuguescore import results
from fuguescore import rule
from fuguescore import sonorityChecker
from fuguescore import utilities
from fuguescore import fuguescore

from fuguescore.fuguescore import analyzeAllDissonances, evaluateCounterpoint
from fuguescore.dissonanceScorer import scoreDissonance
from fuguescore.context import AnalysisContext
from fuguescore.music import Note, Simultaneity

# -----------------------------------------------------------------------------
# eof
