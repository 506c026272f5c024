import itertools
import logging

import numpy as np
import pandas as pd
from scipy.linalg import expm

from codalign.constants import NUC_FREQS
from codalign.dataset.alphabet import DNA, NT4

logger = logging.getLogger(__name__)

# standard genetic code, codons ordered AAA, AAC, AAG, AAT, ACA, ..., TTT
GENETIC_CODE = ('KNKNTTTTRSRSIIMIQHQHPPPPRRRRLLLL'
                'EDEDAAAAGGGGVVVV*Y*YSSSS*CWCLFLF')

# Yang (1994) estimating the pattern of nucleotide substitution
YANG94_Q = np.array([[-0.818, 0.132, 0.586, 0.1],
                     [0.221, -1.349, 0.231, 0.897],
                     [0.909, 0.215, -1.322, 0.198],
                     [0.1, 0.537, 0.128, -0.765]])

# nucleotide at each codon position, shape 64 x 3
CODON_NUCS = np.array([NT4.unpack(c, 3) for c in range(64)], dtype=np.int64)


def cod_int(codon):
    """ Cast codon to its position in the codon list (AAA -> 0 ... TTT -> 63)

    Parameters
    ----------
    codon : str
        Three unambiguous nucleotides.

    Returns
    -------
    int
    """
    if len(codon) != 3:
        raise ValueError(f'`{codon}` is not a codon.')
    a, b, c = DNA.encode(codon)
    if max(a, b, c) > 3:
        raise ValueError(f'Codon `{codon}` is ambiguous.')
    return (int(a) << 4) + (int(b) << 2) + int(c)


def cod_distance(cod1, cod2):
    """ Hamming distance between two codon indices. """
    return int(np.sum(CODON_NUCS[cod1] != CODON_NUCS[cod2]))


def mg94_q(omega=0.2, nuc_q=YANG94_Q, nuc_freqs=NUC_FREQS[:4]):
    """ Muse & Gaut (1994) codon rate matrix.

    Parameters
    ----------
    omega : float
        Non-synonymous / synonymous rate ratio.
    nuc_q : np.array
        4 x 4 nucleotide rate matrix.
    nuc_freqs : np.array
        Equilibrium nucleotide frequencies (A, C, G, T).

    Returns
    -------
    Q : np.array
        64 x 64 rate matrix, scaled to one expected substitution per unit
        time under codon frequencies built from `nuc_freqs`.
    """
    Q = np.zeros((64, 64))
    cod_freqs = np.prod(np.asarray(nuc_freqs)[CODON_NUCS], axis=1)
    d = 0.0
    for i in range(64):
        row_sum = 0.0
        for j in range(64):
            if i == j or cod_distance(i, j) != 1:
                continue
            pos = int(np.flatnonzero(CODON_NUCS[i] != CODON_NUCS[j])[0])
            a, b = CODON_NUCS[i, pos], CODON_NUCS[j, pos]
            rate = nuc_q[a, b]
            if GENETIC_CODE[i] != GENETIC_CODE[j]:
                rate *= omega
            Q[i, j] = rate
            row_sum += rate
        Q[i, i] = -row_sum
        d += cod_freqs[i] * row_sum
    return Q / d


def mg94_p(branch_length=0.0133, omega=0.2):
    """ Codon transition probabilities for the Muse & Gaut model.

    Parameters
    ----------
    branch_length : float
        Evolutionary distance between the two sequences.
    omega : float
        Non-synonymous / synonymous rate ratio.

    Returns
    -------
    P : np.array
        64 x 64 transition matrix.
    """
    return expm(mg94_q(omega) * branch_length)


def read_rate_matrix(path):
    """ Reads a codon substitution rate matrix from a CSV file.

    The first line holds the branch length, every other line is
    `codon,codon,rate`.

    Parameters
    ----------
    path : str
        Path to the CSV file.

    Returns
    -------
    Q : np.array
        64 x 64 rate matrix.
    branch_length : float
    """
    with open(path) as fh:
        branch_length = float(fh.readline().strip())
    df = pd.read_csv(path, skiprows=1, header=None,
                     names=['source', 'target', 'rate'])
    if len(df) != 64 * 64:
        raise ValueError(
            f'Error reading substitution rate CSV file {path}: expected '
            f'{64 * 64} rows, found {len(df)}.')
    Q = np.zeros((64, 64))
    rows = df['source'].map(cod_int).values
    cols = df['target'].map(cod_int).values
    Q[rows, cols] = df['rate'].values
    return Q, branch_length


def rate_matrix_p(Q, branch_length):
    """ Transition matrix of a rate matrix over a branch length. """
    Q = np.asarray(Q, dtype=np.float64)
    if Q.shape != (64, 64):
        raise ValueError(f'Rate matrix must be 64 x 64, got {Q.shape}.')
    return expm(Q * branch_length)


def marginal_p(P):
    """ Marginalizes a codon transition matrix per codon position.

    Parameters
    ----------
    P : np.array
        64 x 64 codon transition matrix, P[c1, c2] is the probability
        of codon c1 becoming c2.

    Returns
    -------
    p : np.array
        64 x 3 x 4 tensor; p[c, pos, n] is the probability that
        position `pos` of codon `c` ends up as nucleotide `n`.

    Notes
    -----
    Each (codon, position) slice is rescaled to sum to one, which leaves
    a stochastic P untouched.
    """
    P = np.asarray(P, dtype=np.float64)
    if P.shape != (64, 64):
        raise ValueError(
            f'Codon transition matrix must be 64 x 64, got {P.shape}.')
    p = np.zeros((64, 3, 4))
    for pos in range(3):
        for nuc in range(4):
            p[:, pos, nuc] = P[:, CODON_NUCS[:, pos] == nuc].sum(axis=1)
    totals = p.sum(axis=2, keepdims=True)
    np.divide(p, totals, out=p, where=totals > 0)
    return p


def codon_emissions(codes, p):
    """ Marginal emission rows of one reference codon.

    Parameters
    ----------
    codes : np.array
        Three nucleotide codes (0-3, or 4 for N).
    p : np.array
        Marginal tensor from `marginal_p`.

    Returns
    -------
    np.array
        3 x 4 emission probabilities, averaged over every concrete codon
        an ambiguous codon may stand for.
    """
    if max(codes) < 4:
        return p[(codes[0] << 4) + (codes[1] << 2) + codes[2]]
    choices = [range(4) if c == 4 else [c] for c in codes]
    idx = [(a << 4) + (b << 2) + c for a, b, c in itertools.product(*choices)]
    return p[idx].mean(axis=0)
