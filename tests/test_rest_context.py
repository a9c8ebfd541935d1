import unittest

from fuguescore.consecutions import VoiceIndex
from fuguescore.music import findSimultaneities, makeVoice
from fuguescore.restContext import getRestContext, isRestReset


def makeSims(v1, v2, meter=(4, 4)):
    return findSimultaneities(makeVoice(v1), makeVoice(v2), meter)


class TestRestContext(unittest.TestCase):

    def test_entryFromRest(self):
        sims = makeSims([(67, 0, 1), (69, 3, 1)], [(60, 0, 4)])
        rc = getRestContext(sims, 1)
        self.assertTrue(rc.v1EntryFromRest)
        self.assertEqual(rc.v1EntryRestDuration, 2.0)
        self.assertFalse(rc.v2EntryFromRest)
        self.assertEqual(rc.entryRestDuration(2), 0.0)

    def test_exitToRestAndAbandonment(self):
        sims = makeSims([(67, 0, 1), (65, 2, 1)], [(60, 0, 3)])
        rc = getRestContext(sims, 0)
        self.assertTrue(rc.v1ExitToRest)
        self.assertEqual(rc.exitRestDuration(1), 1.0)
        self.assertTrue(rc.resolvedByAbandonment)
        self.assertEqual(rc.abandoningVoice, 1)

    def test_abandonmentAtFinalSimultaneity(self):
        sims = makeSims([(67, 0, 1)], [(60, 0, 2)])
        rc = getRestContext(sims, 0)
        self.assertTrue(rc.resolvedByAbandonment)
        self.assertEqual(rc.abandoningVoice, 1)

    def test_noAbandonmentWhenVoicesEndTogether(self):
        sims = makeSims([(67, 0, 1)], [(60, 0, 1)])
        self.assertFalse(getRestContext(sims, 0).resolvedByAbandonment)

    def test_tinyGapsAreNotRests(self):
        sims = makeSims([(67, 0, 1), (69, 1.005, 1)], [(60, 0, 3)])
        rc = getRestContext(sims, 1)
        self.assertFalse(rc.v1EntryFromRest)

    def test_outOfRange(self):
        rc = getRestContext([], 0)
        self.assertFalse(rc.resolvedByAbandonment)


class TestRestReset(unittest.TestCase):

    def resetAt(self, v1, v2, index):
        voice1, voice2 = makeVoice(v1), makeVoice(v2)
        sims = findSimultaneities(voice1, voice2)
        voices = VoiceIndex(sims, (voice1, voice2))
        return isRestReset(sims[index - 1], sims[index], voices)

    def test_otherVoiceSingsANoteInTheRest(self):
        self.assertTrue(self.resetAt([(67, 0, 1), (69, 3, 1)],
                                     [(60, 0, 1), (62, 1, 1), (64, 3, 1)],
                                     1))

    def test_bothVoicesRestTogether(self):
        self.assertFalse(self.resetAt([(67, 0, 1), (69, 2, 1)],
                                      [(60, 0, 1), (62, 2, 1)],
                                      1))

    def test_otherVoiceNoteOverlapsTheRest(self):
        self.assertFalse(self.resetAt([(67, 0, 1), (69, 2, 1)],
                                      [(60, 0, 1), (62, 1.5, 1.5)],
                                      1))

    def test_otherVoiceSustains(self):
        self.assertFalse(self.resetAt([(67, 0, 1), (69, 2, 1)],
                                      [(60, 0, 3)],
                                      1))

    def test_shortGapIsNotARest(self):
        self.assertFalse(self.resetAt([(67, 0, 1), (69, 1.04, 1)],
                                      [(60, 0, 1), (62, 1, 0.02),
                                       (64, 1.02, 1)],
                                      1))

    def test_indexFromSimultaneitiesSeesNoHiddenNote(self):
        sims = makeSims([(67, 0, 1), (69, 3, 1)],
                        [(60, 0, 1), (62, 1, 1), (64, 3, 1)])
        self.assertFalse(isRestReset(sims[0], sims[1], VoiceIndex(sims)))

    def test_noPreviousSimultaneity(self):
        sims = makeSims([(67, 0, 1)], [(60, 0, 1)])
        self.assertFalse(isRestReset(None, sims[0], VoiceIndex(sims)))


if __name__ == '__main__':
    unittest.main()
