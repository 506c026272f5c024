import unittest

from codalign.constants import x, m, y
from codalign.dataset.utils import (
    alignment2states, revstate_f, states2alignment, states2edges,
    tmstate_f
)


class TestStateUtils(unittest.TestCase):

    def test_alignment2states(self):
        states = alignment2states('CTCTGG', 'C-CTGG')
        self.assertEqual(states, [m, x, m, m, m, m])
        states = alignment2states('AA--C', 'A-GGC')
        self.assertEqual(states, [m, x, y, y, m])

    def test_alignment2states_double_gaps(self):
        self.assertEqual(alignment2states('A-C', 'A-C'), [m, m])

    def test_alignment2states_lengths(self):
        with self.assertRaises(ValueError):
            alignment2states('ACG', 'AC')

    def test_states2alignment(self):
        res = states2alignment([m, x, m, m, m, m], 'CTCTGG', 'CCTGG')
        self.assertEqual(res, ['CTCTGG', 'C-CTGG'])

    def test_states2alignment_string(self):
        res = states2alignment(':1::22', 'ACGT', 'ACGTT')
        self.assertEqual(res, ['ACGT--', 'A-CGTT'])

    def test_states2alignment_profiles(self):
        res = states2alignment([m, y, m], ['AC', 'A-'], ['ATC', 'AGC'])
        self.assertEqual(res, ['A-C', 'A--', 'ATC', 'AGC'])

    def test_states2alignment_mismatch(self):
        with self.assertRaises(ValueError):
            states2alignment([m, m], 'ACG', 'AC')
        with self.assertRaises(ValueError):
            states2alignment([m, m, x], 'ACG', 'ACG')

    def test_states2alignment_empty(self):
        self.assertEqual(states2alignment([], '', ''), ['', ''])

    def test_states2edges(self):
        res = states2edges([m, x, y, m])
        self.assertEqual(res, [(0, 0), (1, 1), (2, 1), (2, 2), (3, 3)])

    def test_state_symbols(self):
        for s in (x, m, y):
            self.assertEqual(tmstate_f(revstate_f(s)), s)
        with self.assertRaises(ValueError):
            tmstate_f('3')


if __name__ == '__main__':
    unittest.main()
