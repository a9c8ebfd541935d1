import unittest

from fuguescore.consecutions import VoiceIndex, classifyMotion
from fuguescore.context import AnalysisContext
from fuguescore.fuguescore import evaluateCounterpoint
from fuguescore.music import findSimultaneities, makeVoice
from fuguescore.passingMotion import bestPassingMotion, evaluatePassingMotion
from fuguescore.results import PassingMotion


def makeSims(v1, v2, meter=(4, 4)):
    return findSimultaneities(makeVoice(v1), makeVoice(v2), meter)


def evaluate(sims, index, voice, cxt=None):
    cxt = cxt or AnalysisContext()
    prevSim = sims[index - 1] if index > 0 else None
    motion = classifyMotion(prevSim, sims[index])
    return evaluatePassingMotion(sims, index, voice, cxt, motion,
                                 VoiceIndex(sims))


class TestPassingMotion(unittest.TestCase):

    def test_thirtySecondNoteIsAlwaysPassing(self):
        sims = makeSims([(64, 0, 1), (65, 1, 0.125), (64, 1.125, 0.875)],
                        [(60, 0, 2)])
        pm = evaluate(sims, 1, 1)
        self.assertTrue(pm.eligible)
        self.assertEqual(pm.passingness, 3.0)
        self.assertEqual(pm.mitigation, 1.5)
        self.assertTrue(pm.isPassing)

    def test_thirtySecondNoteOnStrongBeat(self):
        sims = makeSims([(64, 0, 2), (65, 2, 0.125), (64, 2.125, 1.875)],
                        [(60, 0, 4)])
        pm = evaluate(sims, 1, 1)
        self.assertTrue(pm.isPassing)

    def test_repeatedThirtySecondIsNotAutomatic(self):
        sims = makeSims([(65, 0, 1), (65, 1, 0.125), (64, 1.125, 0.875)],
                        [(60, 0, 2)])
        pm = evaluate(sims, 1, 1)
        self.assertTrue(pm.eligible)
        self.assertNotEqual(pm.passingness, 3.0)

    def test_sixteenthNoteTerms(self):
        sims = makeSims([(62, 0, 1), (64, 1, 0.25), (65, 1.25, 0.25),
                         (67, 1.5, 0.5)],
                        [(60, 0, 2)])
        pm = evaluate(sims, 2, 1)
        # off the eighth +0.5, step +0.75, oblique +0.5,
        # same direction +0.5, same interval type +0.25
        self.assertEqual(pm.passingness, 2.5)
        self.assertEqual(pm.mitigation, 1.25)
        self.assertTrue(pm.isPassing)

    def test_sequenceBonus(self):
        sims = makeSims([(62, 0, 1), (64, 1, 0.25), (65, 1.25, 0.25),
                         (67, 1.5, 0.5)],
                        [(60, 0, 2)])
        cxt = AnalysisContext(
            sequenceBeatRanges=[{'startBeat': 1, 'endBeat': 2}])
        self.assertEqual(evaluate(sims, 2, 1, cxt).passingness, 3.5)

    def test_eighthOnStrongBeatIsIneligible(self):
        sims = makeSims([(64, 0, 2), (65, 2, 0.5), (64, 2.5, 1.5)],
                        [(60, 0, 4)])
        pm = evaluate(sims, 1, 1)
        self.assertFalse(pm.eligible)
        self.assertEqual(pm.passingness, 0.0)
        self.assertEqual(pm.mitigation, 0.0)

    def test_eighthOnWeakBeat(self):
        sims = makeSims([(64, 0, 1), (65, 1, 0.5), (64, 1.5, 0.5)],
                        [(60, 0, 2)])
        pm = evaluate(sims, 1, 1)
        self.assertTrue(pm.eligible)
        # eighth -1, shorter than previous +0.25, on the beat -0.5,
        # step +0.75, oblique +0.5, back toward previous pitch +0.5
        self.assertEqual(pm.passingness, 0.5)
        self.assertFalse(pm.isPassing)

    def test_heldNoteIsNotEvaluated(self):
        sims = makeSims([(64, 0, 1), (65, 1, 0.125), (64, 1.125, 0.875)],
                        [(60, 0, 2)])
        pm = evaluate(sims, 1, 2)
        self.assertFalse(pm.eligible)
        self.assertEqual(pm.passingness, 0.0)

    def test_noteSungWhileOtherVoiceRests(self):
        # D4 at beat 1 sounds against a rest, so no simultaneity holds it
        voice1 = makeVoice([(64, 0, 1), (62, 1, 0.5), (65, 1.5, 0.25),
                            (64, 1.75, 0.75)])
        voice2 = makeVoice([(48, 0, 1), (48, 1.5, 1)])
        sims = findSimultaneities(voice1, voice2)
        self.assertEqual([s.onset for s in sims], [0.0, 1.5, 1.75])
        voices = VoiceIndex(sims, (voice1, voice2))
        motion = classifyMotion(sims[0], sims[1])
        pm = evaluatePassingMotion(sims, 1, 1, AnalysisContext(), motion,
                                   voices)
        # shorter than previous +0.25, leap -0.5, oblique +0.5,
        # back toward previous pitch +0.5
        self.assertEqual(pm.passingness, 0.75)
        self.assertFalse(pm.isPassing)
        self.assertFalse(any('rest' in d for d in pm.details))

    def test_evaluateCounterpointUsesWholeVoices(self):
        result = evaluateCounterpoint(
            [(64, 0, 1), (62, 1, 0.5), (65, 1.5, 0.25), (64, 1.75, 0.75)],
            [(48, 0, 1), (48, 1.5, 1)])
        event = result['dissonances'][0]
        self.assertEqual(event.onset, 1.5)
        self.assertEqual(event.v1PassingMotion.passingness, 0.75)
        self.assertFalse(event.passingMotion.isPassing)

    def test_negativePassingnessGivesNoMitigation(self):
        pm = PassingMotion(1, passingness=-1.5, eligible=True)
        self.assertEqual(pm.mitigation, 0.0)
        self.assertFalse(pm.isPassing)

    def test_bestPassingMotion(self):
        a = PassingMotion(1, passingness=0.5)
        b = PassingMotion(2, passingness=2.0)
        self.assertIs(bestPassingMotion(a, b), b)
        self.assertIs(bestPassingMotion(None, a), a)
        self.assertIsNone(bestPassingMotion(None, None))


if __name__ == '__main__':
    unittest.main()
