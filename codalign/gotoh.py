import logging

import numba
import numpy as np

from codalign.alignment import Alignment
from codalign.constants import (
    UNSET, MATCH, INSERT_OPEN, INSERT_EXTEND, DELETE_OPEN, DELETE_EXTEND,
    MM, IM, DM, MI, II, MD, ID, DD,
    GAP_OPEN, GAP_EXTEND, NUC_FREQS
)
from codalign.dataset.alphabet import DNA
from codalign.dataset.utils import states2alignment
from codalign.errors import FrameLengthError
from codalign.models import codon_emissions, marginal_p
from codalign.traceback import traceback

logger = logging.getLogger(__name__)

use_numba = True


class GapModel:
    """ Affine indel process with geometric gap lengths.

    Parameters
    ----------
    gap_open : float
        Probability of opening an insertion (or a deletion).
    gap_extend : float
        Probability of continuing an open gap (mean length 1 / (1 - e)).
    nuc_freqs : np.array
        Background frequencies of A, C, G, T and N; every inserted symbol
        pays its frequency.
    """

    def __init__(self, gap_open=GAP_OPEN, gap_extend=GAP_EXTEND,
                 nuc_freqs=NUC_FREQS):
        if not 0 < gap_open < 1:
            raise ValueError(f'Gap opening probability {gap_open} '
                             'must lie in (0, 1).')
        if not 0 < gap_extend < 1:
            raise ValueError(f'Gap extension probability {gap_extend} '
                             'must lie in (0, 1).')
        nuc_freqs = np.asarray(nuc_freqs, dtype=np.float64)
        if nuc_freqs.shape != (5,):
            raise ValueError('Expected frequencies for A, C, G, T and N.')
        self.gap_open = gap_open
        self.gap_extend = gap_extend
        self.nuc_freqs = nuc_freqs

    def costs(self, step=1):
        """ Negative log cost of every state-to-state move.

        Parameters
        ----------
        step : int
            Symbols consumed by one gap move. Codon-length moves pay one
            opening plus `step - 1` extensions, or `step` extensions.

        Returns
        -------
        np.array
            Costs indexed by `codalign.constants.MM ... DD`.
        """
        no_gap = -np.log(1.0 - self.gap_open)
        gap = -np.log(self.gap_open)
        ext = -np.log(self.gap_extend)
        no_ext = -np.log(1.0 - self.gap_extend)
        c = np.zeros(8)
        c[MM] = 2 * no_gap
        c[IM] = no_gap
        c[DM] = 0.0
        c[MI] = gap + no_ext + (step - 1) * ext
        c[II] = step * ext
        c[MD] = no_gap + gap + no_ext + (step - 1) * ext
        c[ID] = no_ext + gap + (step - 1) * ext
        c[DD] = step * ext
        return c

    def symbol_costs(self, codes):
        """ Background cost of inserting each encoded symbol. """
        return -np.log(self.nuc_freqs[codes])


def _gotoh_fill(S, ins, step, costs):
    """ Fills the three state DP matrices.

    Parameters
    ----------
    S : np.array
        Substitution costs of dimension M x N.
    ins : np.array
        Insertion cost of each query column, length N.
    step : int
        Symbols consumed by one gap move.
    costs : np.array
        Move costs from `GapModel.costs`.

    Returns
    -------
    D, P, Q : np.array
        Best, insertion and deletion costs, (M + 1) x (N + 1).
    Bd, Bp, Bq : np.array
        Predecessor codes for D, P and Q.
    """
    M, N = S.shape
    D = np.empty((M + 1, N + 1))
    P = np.empty((M + 1, N + 1))
    Q = np.empty((M + 1, N + 1))
    D[:, :] = np.inf
    P[:, :] = np.inf
    Q[:, :] = np.inf
    Bd = np.empty((M + 1, N + 1), dtype=np.int8)
    Bp = np.empty((M + 1, N + 1), dtype=np.int8)
    Bq = np.empty((M + 1, N + 1), dtype=np.int8)
    Bd[:, :] = UNSET
    Bp[:, :] = UNSET
    Bq[:, :] = UNSET

    D[0, 0] = 0.0
    Bd[0, 0] = MATCH

    # first row: one run of insertions
    for j in range(step, N + 1, step):
        seg = 0.0
        for k in range(j - step, j):
            seg += ins[k]
        if j == step:
            P[0, j] = costs[MI] + seg
            Bp[0, j] = INSERT_OPEN
        else:
            P[0, j] = P[0, j - step] + costs[II] + seg
            Bp[0, j] = INSERT_EXTEND
        D[0, j] = P[0, j]
        Bd[0, j] = Bp[0, j]

    # first column: one run of deletions
    for i in range(step, M + 1, step):
        if i == step:
            Q[i, 0] = costs[MD]
            Bq[i, 0] = DELETE_OPEN
        else:
            Q[i, 0] = Q[i - step, 0] + costs[DD]
            Bq[i, 0] = DELETE_EXTEND
        D[i, 0] = Q[i, 0]
        Bd[i, 0] = Bq[i, 0]

    for i in range(1, M + 1):
        for j in range(1, N + 1):
            # whole-codon gaps only reach the band i = j (mod step)
            if (i - j) % step != 0:
                continue

            # insertion
            p1 = np.inf
            p2 = np.inf
            if j >= step:
                seg = 0.0
                for k in range(j - step, j):
                    seg += ins[k]
                p1 = P[i, j - step] + costs[II] + seg
                prev = Bd[i, j - step]
                if prev == MATCH:
                    p2 = D[i, j - step] + costs[MI] + seg
                elif prev == INSERT_OPEN or prev == INSERT_EXTEND:
                    p2 = D[i, j - step] + costs[II] + seg
            if p1 < p2:
                P[i, j] = p1
                Bp[i, j] = INSERT_EXTEND
            else:
                P[i, j] = p2
                Bp[i, j] = INSERT_OPEN

            # deletion
            q1 = np.inf
            q2 = np.inf
            if i >= step:
                q1 = Q[i - step, j] + costs[DD]
                prev = Bd[i - step, j]
                if prev == MATCH:
                    q2 = D[i - step, j] + costs[MD]
                elif prev == INSERT_OPEN or prev == INSERT_EXTEND:
                    q2 = D[i - step, j] + costs[ID]
                elif prev == DELETE_OPEN or prev == DELETE_EXTEND:
                    q2 = D[i - step, j] + costs[DD]
            if q1 < q2:
                Q[i, j] = q1
                Bq[i, j] = DELETE_EXTEND
            else:
                Q[i, j] = q2
                Bq[i, j] = DELETE_OPEN

            # match / mismatch
            d = np.inf
            prev = Bd[i - 1, j - 1]
            if prev == MATCH:
                d = D[i - 1, j - 1] + costs[MM] + S[i - 1, j - 1]
            elif prev == INSERT_OPEN or prev == INSERT_EXTEND:
                d = D[i - 1, j - 1] + costs[IM] + S[i - 1, j - 1]
            elif prev == DELETE_OPEN or prev == DELETE_EXTEND:
                d = D[i - 1, j - 1] + costs[DM] + S[i - 1, j - 1]

            # ties prefer match, then insertion, then deletion
            if d <= P[i, j] and d <= Q[i, j]:
                D[i, j] = d
                Bd[i, j] = MATCH
            elif P[i, j] <= Q[i, j]:
                D[i, j] = P[i, j]
                Bd[i, j] = Bp[i, j]
            else:
                D[i, j] = Q[i, j]
                Bd[i, j] = Bq[i, j]

    return D, P, Q, Bd, Bp, Bq


_gotoh_fill_numba = numba.njit(_gotoh_fill)


def _forward_pass(S, ins, step, costs):
    S = np.ascontiguousarray(S, dtype=np.float64)
    ins = np.ascontiguousarray(ins, dtype=np.float64)
    costs = np.ascontiguousarray(costs, dtype=np.float64)
    if use_numba:
        return _gotoh_fill_numba(S, ins, int(step), costs)
    return _gotoh_fill(S, ins, int(step), costs)


def reference_emissions(codes, p):
    """ Emission probabilities for every reference position.

    Parameters
    ----------
    codes : np.array
        Encoded reference, length divisible by 3.
    p : np.array
        Marginal tensor from `marginal_p`.

    Returns
    -------
    E : np.array
        M x 5 matrix; E[i, n] is the probability of observing nucleotide
        n against reference position i, and E[i, 4] (an `N`) is the mean
        of the four.
    """
    E = np.zeros((len(codes), 5))
    for k in range(0, len(codes), 3):
        rows = codon_emissions(codes[k:k + 3], p)
        E[k:k + 3, :4] = rows
        E[k:k + 3, 4] = rows.sum(axis=1) / 4.0
    return E


def sequence_costs(ref, seq, p, gap_model):
    """ Substitution and insertion costs for two raw sequences.

    Returns
    -------
    S : np.array
        M x N substitution costs, -log E[i, seq[j]].
    ins : np.array
        Insertion cost of each query symbol.
    """
    a, b = DNA.encode(ref), DNA.encode(seq)
    E = reference_emissions(a, p)
    with np.errstate(divide='ignore'):
        S = -np.log(E[:, b])
    return S, gap_model.symbol_costs(b)


def forward_pass(S, ins, step=1, gap_model=None):
    """ Runs the shared three state recurrence.

    Parameters
    ----------
    S : np.array
        M x N substitution costs.
    ins : np.array
        Insertion cost of each of the N query columns.
    step : int
        1 for nucleotide gaps, 3 for whole-codon gaps.
    gap_model : GapModel
        Indel parameters (defaults to `GapModel()`).

    Returns
    -------
    D, P, Q, Bd, Bp, Bq : np.array
        DP matrices and their predecessor codes.
    """
    gap_model = GapModel() if gap_model is None else gap_model
    return _forward_pass(S, ins, step, gap_model.costs(step))


def _check_frame(length, operand='reference'):
    if length % 3 != 0:
        raise FrameLengthError(length, operand)


def _align(ref, seq, P, step, gap_model):
    gap_model = GapModel() if gap_model is None else gap_model
    p = marginal_p(P)
    S, ins = sequence_costs(ref, seq, p, gap_model)
    logger.debug('Aligning %d x %d (gap step %d)', len(ref), len(seq), step)
    D, _, _, Bd, Bp, Bq = forward_pass(S, ins, step, gap_model)
    states = traceback(Bd, Bp, Bq, step)
    weight = float(D[len(ref), len(seq)])
    logger.debug('Alignment weight %.5f', weight)
    return Alignment(states2alignment(states, ref, seq), weight,
                     states=states)


def align_marginal(ref, seq, P, gap_model=None):
    """ Aligns a query to a reference coding sequence.

    Gotoh three state dynamic programming with the marginal codon
    substitution model; gaps may have any length.

    Parameters
    ----------
    ref : str
        Reference coding sequence, length divisible by 3.
    seq : str
        Query sequence.
    P : np.array
        64 x 64 codon transition matrix.
    gap_model : GapModel
        Indel parameters.

    Returns
    -------
    Alignment
        Reference row first; `weight` is the cost of the best path.

    Raises
    ------
    FrameLengthError
        If the reference does not hold whole codons.
    """
    _check_frame(len(ref))
    return _align(ref, seq, P, 1, gap_model)


def align_frame_preserving(ref, seq, P, gap_model=None):
    """ Aligns two coding sequences using whole-codon gaps only.

    Same model as `align_marginal`, but every gap run spans a multiple of
    three nucleotides, so neither sequence's reading frame is disrupted.
    Cells (1, 1) and (2, 2) can only be reached by substitutions; beyond
    them the fill stays on the band of cells where both sequences sit at
    the same codon offset.

    Raises
    ------
    FrameLengthError
        If either sequence does not hold whole codons.
    """
    _check_frame(len(ref))
    _check_frame(len(seq), 'query')
    return _align(ref, seq, P, 3, gap_model)
