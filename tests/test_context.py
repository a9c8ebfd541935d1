import unittest

from fuguescore.context import (AnalysisContext, ContextError,
                                EvaluationException, makeContext)
from fuguescore.music import Interval


class TestAnalysisContext(unittest.TestCase):

    def test_defaults(self):
        cxt = AnalysisContext()
        self.assertTrue(cxt.treatP4AsDissonant)
        self.assertEqual(cxt.meter, (4, 4))
        self.assertEqual(cxt.sequenceNoteRanges, [])
        self.assertEqual(cxt.sequenceBeatRanges, [])
        self.assertEqual(cxt.consonanceWeights['imperfect'], 0.5)
        self.assertFalse(cxt.isCompound)

    def test_unknownOption(self):
        with self.assertRaises(ContextError):
            AnalysisContext(treatP5AsDissonant=True)

    def test_invalidMeter(self):
        for meter in ((0, 4), (4, -4), 'x', (4.0, 4), (True, 4), (4,)):
            with self.assertRaises(ContextError):
                AnalysisContext(meter=meter)

    def test_invalidRanges(self):
        with self.assertRaises(ContextError):
            AnalysisContext(sequenceBeatRanges=[{'startBeat': 1}])
        with self.assertRaises(ContextError):
            AnalysisContext(sequenceNoteRanges=[{'start': 'a', 'end': 2}])
        with self.assertRaises(ContextError):
            AnalysisContext(sequenceNoteRanges=[{'start': 4, 'end': 2}])

    def test_perfectFourthTreatment(self):
        p4 = Interval(5)
        self.assertTrue(AnalysisContext().isDissonant(p4))
        self.assertFalse(
            AnalysisContext(treatP4AsDissonant=False).isDissonant(p4))
        # the tritone is dissonant either way
        tritone = Interval(6)
        self.assertTrue(
            AnalysisContext(treatP4AsDissonant=False).isDissonant(tritone))
        self.assertFalse(AnalysisContext().isDissonant(Interval(4)))

    def test_shortNoteThreshold(self):
        self.assertAlmostEqual(AnalysisContext().shortNoteThreshold, 1 / 6)
        self.assertAlmostEqual(
            AnalysisContext(meter=(6, 8)).shortNoteThreshold, 1 / 9)

    def test_isInSequence(self):
        cxt = AnalysisContext(
            sequenceBeatRanges=[{'startBeat': 4, 'endBeat': 8}],
            sequenceNoteRanges=[{'start': 10, 'end': 12}])
        self.assertTrue(cxt.isInSequence(5))
        self.assertTrue(cxt.isInSequence(8))
        self.assertFalse(cxt.isInSequence(9))
        self.assertTrue(cxt.isInSequence(20, noteIndex=11))
        self.assertFalse(cxt.isInSequence(20, noteIndex=13))

    def test_consonanceBaseWeight(self):
        cxt = AnalysisContext(consonanceWeights={'fifth': 0.4})
        self.assertEqual(cxt.consonanceBaseWeight(Interval(7)), 0.4)
        self.assertEqual(cxt.consonanceBaseWeight(Interval(9)), 0.5)
        self.assertEqual(cxt.consonanceBaseWeight(Interval(5)), 0.25)
        self.assertEqual(cxt.consonanceBaseWeight(Interval(12)), 0.2)

    def test_makeContext(self):
        cxt = AnalysisContext(meter=(3, 4))
        self.assertIs(makeContext(cxt), cxt)
        self.assertEqual(makeContext({'meter': (3, 4)}).meter, (3, 4))
        self.assertEqual(makeContext(None).meter, (4, 4))


class TestExceptions(unittest.TestCase):

    def test_logerror(self):
        error = ContextError('Bad meter.')
        with self.assertLogs('fuguescore.context', level='ERROR') as cm:
            error.logerror()
        self.assertIn('Bad meter.', cm.output[0])

    def test_evaluationExceptionReport(self):
        exc = EvaluationException('Bad meter.')
        self.assertIn('Bad meter.', exc.report())


if __name__ == '__main__':
    unittest.main()
