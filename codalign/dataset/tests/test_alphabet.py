import unittest

import numpy.testing as npt

from codalign.dataset.alphabet import DNA, NT4


class TestAlphabet(unittest.TestCase):

    def test_encode(self):
        npt.assert_array_equal(DNA.encode('ACGTN'), [0, 1, 2, 3, 4])
        npt.assert_array_equal(DNA.encode('acgu'), [0, 1, 2, 3])

    def test_encode_invalid(self):
        with self.assertRaises(ValueError):
            DNA.encode('AC-T')

    def test_unpack(self):
        npt.assert_array_equal(NT4.unpack(27, 3), [1, 2, 3])
        self.assertEqual(len(NT4), 4)
        self.assertEqual(len(DNA), 5)


if __name__ == '__main__':
    unittest.main()
