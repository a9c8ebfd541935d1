import unittest

from fuguescore.fuguescore import analyzeAllDissonances
from fuguescore.music import findSimultaneities, makeVoice
from fuguescore.sonorityChecker import countConsecutive


def analyze(v1, v2, **options):
    voice1, voice2 = makeVoice(v1), makeVoice(v2)
    sims = findSimultaneities(voice1, voice2)
    return analyzeAllDissonances(sims, options, voices=(voice1, voice2))


class TestRepetition(unittest.TestCase):

    def test_countConsecutive(self):
        self.assertEqual(countConsecutive([], 5), 1)
        self.assertEqual(countConsecutive([3, 5, 5], 5), 3)
        self.assertEqual(countConsecutive([5, -1, 5], 5), 2)
        self.assertEqual(countConsecutive([5, 5, 3], 5), 1)

    def test_thirdPerfectFifthIsRepetitive(self):
        result = analyze([(67, 0, 1), (69, 1, 1), (71, 2, 1)],
                         [(60, 0, 1), (62, 1, 1), (64, 2, 1)])
        events = result['all']
        self.assertFalse(events[1].isRepeated)
        self.assertEqual(events[1].score, 0.0)
        self.assertTrue(events[2].isRepeated)
        self.assertEqual(events[2].repeatCount, 3)
        self.assertEqual(events[2].category, 'consonant_repetitive')
        self.assertEqual(events[2].score, -0.5)
        self.assertEqual(result['summary'].repetitiveConsonances, 1)

    def test_restStartsTheCountAfresh(self):
        # the lower voice sings a whole note while the upper voice rests
        result = analyze([(67, 0, 1), (69, 1, 1), (71, 3, 1)],
                         [(60, 0, 1), (62, 1, 1), (65, 2, 1), (64, 3, 1)])
        events = result['all']
        self.assertEqual(len(events), 3)
        self.assertFalse(events[2].isRepeated)
        self.assertEqual(events[2].repeatCount, 1)

    def test_restInBothVoicesKeepsTheCount(self):
        result = analyze([(67, 0, 1), (69, 1, 1), (71, 3, 1)],
                         [(60, 0, 1), (62, 1, 1), (64, 3, 1)])
        events = result['all']
        self.assertTrue(events[2].isRepeated)
        self.assertEqual(events[2].repeatCount, 3)

    def test_fourthImperfectIsRepetitive(self):
        result = analyze([(64, 0, 1), (65, 1, 1), (67, 2, 1), (69, 3, 1)],
                         [(60, 0, 1), (62, 1, 1), (64, 2, 1), (65, 3, 1)])
        events = result['all']
        self.assertFalse(events[2].isRepeated)
        self.assertTrue(events[3].isRepeated)
        self.assertAlmostEqual(events[3].score, -0.3)


class TestResolutionAndPreparation(unittest.TestCase):

    def test_suspensionContext(self):
        result = analyze([(65, 1, 2), (64, 3, 1)], [(62, 1, 1), (60, 2, 2)])
        preparation, dissonance, resolution = result['all']
        self.assertTrue(preparation.isPreparation)
        self.assertEqual(preparation.category, 'consonant_preparation')
        self.assertTrue(resolution.resolvesDissonance)
        self.assertEqual(resolution.category, 'consonant_good_resolution')
        self.assertEqual(resolution.exitScore, dissonance.exitScore)
        self.assertEqual(resolution.score, 0.0)

    def test_resolutionByLeap(self):
        result = analyze([(69, 1, 1), (65, 2, 1), (69, 3, 1)], [(60, 1, 3)])
        resolution = result['all'][2]
        self.assertEqual(resolution.category, 'consonant_bad_resolution')
        self.assertEqual(resolution.exitScore, 0.5)

    def test_plainConsonance(self):
        result = analyze([(64, 0, 1)], [(60, 0, 1)])
        event = result['all'][0]
        self.assertEqual(event.category, 'consonant_normal')
        self.assertIsNone(event.exitScore)
        self.assertEqual(event.motionType, 'unknown')


if __name__ == '__main__':
    unittest.main()
