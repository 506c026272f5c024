import os
import tempfile
import unittest

import numpy as np
import numpy.testing as npt

from codalign.constants import NUC_FREQS
from codalign.models import (
    CODON_NUCS, GENETIC_CODE, cod_int, cod_distance, codon_emissions,
    marginal_p, mg94_p, mg94_q, rate_matrix_p, read_rate_matrix
)


class TestCodons(unittest.TestCase):

    def test_cod_int(self):
        self.assertEqual(cod_int('AAA'), 0)
        self.assertEqual(cod_int('AAC'), 1)
        self.assertEqual(cod_int('CTG'), 30)
        self.assertEqual(cod_int('ttt'), 63)

    def test_cod_int_ambiguous(self):
        with self.assertRaises(ValueError):
            cod_int('ANA')
        with self.assertRaises(ValueError):
            cod_int('AC')

    def test_cod_distance(self):
        self.assertEqual(cod_distance(cod_int('AAA'), cod_int('AAA')), 0)
        self.assertEqual(cod_distance(cod_int('AAA'), cod_int('AAG')), 1)
        self.assertEqual(cod_distance(cod_int('ACG'), cod_int('TCA')), 2)
        self.assertEqual(cod_distance(cod_int('AAA'), cod_int('TTT')), 3)

    def test_codon_nucs(self):
        npt.assert_array_equal(CODON_NUCS[cod_int('GAT')], [2, 0, 3])

    def test_genetic_code(self):
        self.assertEqual(GENETIC_CODE[cod_int('ATG')], 'M')
        self.assertEqual(GENETIC_CODE[cod_int('TGG')], 'W')
        self.assertEqual(GENETIC_CODE[cod_int('TAA')], '*')
        self.assertEqual(GENETIC_CODE[cod_int('TGA')], '*')
        self.assertEqual(GENETIC_CODE[cod_int('GGC')], 'G')


class TestMG94(unittest.TestCase):

    def setUp(self):
        self.Q = mg94_q()
        self.P = mg94_p(0.0133)

    def test_q_rows(self):
        npt.assert_allclose(self.Q.sum(axis=1), np.zeros(64), atol=1e-12)

    def test_q_scaled(self):
        cod_freqs = np.prod(NUC_FREQS[:4][CODON_NUCS], axis=1)
        rate = -np.sum(cod_freqs * np.diag(self.Q))
        self.assertAlmostEqual(rate, 1.0)

    def test_q_single_changes_only(self):
        i, j = cod_int('AAA'), cod_int('ACC')
        self.assertEqual(self.Q[i, j], 0)

    def test_q_nonsynonymous(self):
        # AAA -> AAG is synonymous (Lys), AAA -> AAC is not (Asn)
        syn = self.Q[cod_int('AAA'), cod_int('AAG')]
        nonsyn = self.Q[cod_int('AAA'), cod_int('AAC')]
        self.assertAlmostEqual(syn / nonsyn, 0.586 / (0.132 * 0.2))

    def test_p_stochastic(self):
        npt.assert_allclose(self.P.sum(axis=1), np.ones(64))
        self.assertTrue(np.all(self.P >= 0))

    def test_p_zero_branch(self):
        npt.assert_allclose(mg94_p(0.0), np.eye(64), atol=1e-12)


class TestMarginal(unittest.TestCase):

    def setUp(self):
        self.p = marginal_p(mg94_p(0.0133))

    def test_shape(self):
        self.assertEqual(self.p.shape, (64, 3, 4))

    def test_distributions(self):
        npt.assert_allclose(self.p.sum(axis=2), np.ones((64, 3)))

    def test_codon_aaa(self):
        aaa = cod_int('AAA')
        npt.assert_allclose(self.p[aaa, 0],
                            [0.99831, 0.00027, 0.00121, 0.00021], atol=2e-5)
        npt.assert_allclose(self.p[aaa, 1],
                            [0.99832, 0.00027, 0.00121, 0.00021], atol=2e-5)
        npt.assert_allclose(self.p[aaa, 2],
                            [0.99352, 0.00027, 0.00599, 0.00021], atol=2e-5)

    def test_identity(self):
        p = marginal_p(np.eye(64))
        gat = cod_int('GAT')
        npt.assert_array_equal(p[gat], [[0, 0, 1, 0],
                                        [1, 0, 0, 0],
                                        [0, 0, 0, 1]])

    def test_unnormalized_rows(self):
        p = marginal_p(2 * np.eye(64))
        npt.assert_allclose(p.sum(axis=2), np.ones((64, 3)))

    def test_bad_shape(self):
        with self.assertRaises(ValueError):
            marginal_p(np.eye(4))

    def test_codon_emissions(self):
        codes = np.array([0, 0, 0])
        npt.assert_array_equal(codon_emissions(codes, self.p), self.p[0])

    def test_codon_emissions_ambiguous(self):
        # AAN averages AAA, AAC, AAG and AAT
        codes = np.array([0, 0, 4])
        exp = self.p[[0, 1, 2, 3]].mean(axis=0)
        npt.assert_allclose(codon_emissions(codes, self.p), exp)


class TestRateMatrix(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmpdir.name, 'rates.csv')

    def tearDown(self):
        self.tmpdir.cleanup()

    def write(self, Q, branch_length, rows=None):
        codons = [''.join('ACGT'[n] for n in CODON_NUCS[c])
                  for c in range(64)]
        with open(self.path, 'w') as fh:
            fh.write(f'{branch_length}\n')
            pairs = [(i, j) for i in range(64) for j in range(64)]
            for i, j in pairs[:rows]:
                fh.write(f'{codons[i]},{codons[j]},{float(Q[i, j])!r}\n')

    def test_read_rate_matrix(self):
        Q = mg94_q()
        self.write(Q, 0.0133)
        res, branch_length = read_rate_matrix(self.path)
        self.assertAlmostEqual(branch_length, 0.0133)
        npt.assert_allclose(res, Q)
        npt.assert_allclose(rate_matrix_p(res, branch_length),
                            mg94_p(0.0133))

    def test_read_rate_matrix_truncated(self):
        self.write(mg94_q(), 0.1, rows=100)
        with self.assertRaises(ValueError):
            read_rate_matrix(self.path)

    def test_rate_matrix_shape(self):
        with self.assertRaises(ValueError):
            rate_matrix_p(np.zeros((4, 4)), 0.1)


if __name__ == '__main__':
    unittest.main()
