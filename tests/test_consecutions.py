import unittest

from fuguescore.consecutions import (classifyMelodicMagnitude, classifyMotion,
                                     isLeap, isParallelPerfect, voiceNotes)
from fuguescore.music import findSimultaneities, makeVoice
from fuguescore.restContext import getRestContext


def makeSims(v1, v2, meter=(4, 4)):
    return findSimultaneities(makeVoice(v1), makeVoice(v2), meter)


class TestMelodicMagnitude(unittest.TestCase):

    def test_magnitudes(self):
        expected = {0: 'unison', 1: 'step', -2: 'step', 3: 'skip',
                    -4: 'skip', 5: 'perfect_leap', -7: 'perfect_leap',
                    6: 'large_leap', 9: 'large_leap', 12: 'octave',
                    -14: 'large_leap'}
        for semitones, magnitude in expected.items():
            self.assertEqual(classifyMelodicMagnitude(semitones), magnitude)

    def test_isLeap(self):
        self.assertFalse(isLeap(2))
        self.assertTrue(isLeap(3))
        self.assertTrue(isLeap(-12))


class TestClassifyMotion(unittest.TestCase):

    def test_unknown(self):
        sims = makeSims([(67, 0, 1)], [(60, 0, 1)])
        self.assertEqual(classifyMotion(None, sims[0]).type, 'unknown')

    def test_static(self):
        sims = makeSims([(67, 0, 1)], [(60, 0, 1)])
        self.assertEqual(classifyMotion(sims[0], sims[0]).type, 'static')

    def test_oblique(self):
        sims = makeSims([(67, 0, 2)], [(60, 0, 1), (62, 1, 1)])
        motion = classifyMotion(sims[0], sims[1])
        self.assertEqual(motion.type, 'oblique')
        self.assertFalse(motion.v1Moved)
        self.assertTrue(motion.v2Moved)
        self.assertEqual(motion.v2Interval, 2)

    def test_repeatedPitchIsNotMotion(self):
        sims = makeSims([(67, 0, 1), (67, 1, 1)], [(60, 0, 1), (62, 1, 1)])
        motion = classifyMotion(sims[0], sims[1])
        self.assertEqual(motion.type, 'oblique')
        self.assertFalse(motion.moved(1))

    def test_contrary(self):
        sims = makeSims([(67, 0, 1), (69, 1, 1)], [(60, 0, 1), (59, 1, 1)])
        self.assertEqual(classifyMotion(sims[0], sims[1]).type, 'contrary')

    def test_parallel(self):
        sims = makeSims([(67, 0, 1), (69, 1, 1)], [(60, 0, 1), (62, 1, 1)])
        self.assertEqual(classifyMotion(sims[0], sims[1]).type, 'parallel')
        self.assertTrue(isParallelPerfect(sims[0], sims[1]))

    def test_similarStep(self):
        sims = makeSims([(67, 0, 1), (72, 1, 1)], [(60, 0, 1), (62, 1, 1)])
        self.assertEqual(classifyMotion(sims[0], sims[1]).type,
                         'similar_step')

    def test_similarSameType(self):
        sims = makeSims([(64, 0, 1), (67, 1, 1)], [(60, 0, 1), (64, 1, 1)])
        motion = classifyMotion(sims[0], sims[1])
        self.assertEqual(motion.type, 'similar_same_type')
        self.assertEqual(motion.intervalType, 'skip')

    def test_similar(self):
        sims = makeSims([(60, 0, 1), (67, 1, 1)], [(55, 0, 1), (59, 1, 1)])
        self.assertEqual(classifyMotion(sims[0], sims[1]).type, 'similar')

    def test_reentryAfterLongRest(self):
        sims = makeSims([(67, 0, 1), (69, 3.5, 0.5)], [(60, 0, 4)])
        rc = getRestContext(sims, 1)
        motion = classifyMotion(sims[0], sims[1], rc)
        self.assertEqual(motion.type, 'reentry')
        self.assertTrue(motion.isReentry)
        self.assertTrue(motion.fromRest)

    def test_shortRestIsNotReentry(self):
        sims = makeSims([(60, 0, 1), (64, 1.5, 1)], [(55, 0, 1), (57, 1.5, 1)])
        rc = getRestContext(sims, 1)
        motion = classifyMotion(sims[0], sims[1], rc)
        self.assertEqual(motion.type, 'similar_step')
        self.assertTrue(motion.fromRest)
        self.assertFalse(motion.isReentry)


class TestParallelPerfect(unittest.TestCase):

    def test_directionOfMotion(self):
        sims = makeSims([(67, 0, 1), (62, 1, 1)], [(60, 0, 1), (55, 1, 1)])
        self.assertTrue(isParallelPerfect(sims[0], sims[1]))
        sims = makeSims([(67, 0, 1), (74, 1, 1)], [(60, 0, 1), (55, 1, 1)])
        self.assertFalse(isParallelPerfect(sims[0], sims[1]))

    def test_octavesAndUnisons(self):
        sims = makeSims([(72, 0, 1), (74, 1, 1)], [(60, 0, 1), (62, 1, 1)])
        self.assertTrue(isParallelPerfect(sims[0], sims[1]))

    def test_fifthToOctaveIsNotParallel(self):
        sims = makeSims([(67, 0, 1), (74, 1, 1)], [(60, 0, 1), (62, 1, 1)])
        self.assertFalse(isParallelPerfect(sims[0], sims[1]))

    def test_voiceNotes(self):
        sims = makeSims([(67, 0, 2)], [(60, 0, 1), (62, 1, 1)])
        self.assertEqual([n.pitch for n in voiceNotes(sims, 1)], [67])
        self.assertEqual([n.pitch for n in voiceNotes(sims, 2)], [60, 62])


if __name__ == '__main__':
    unittest.main()
