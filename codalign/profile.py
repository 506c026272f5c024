import logging

import numpy as np

from codalign.alignment import Alignment
from codalign.constants import NUCLEOTIDES
from codalign.dataset.utils import states2alignment
from codalign.errors import FrameLengthError, ProfileShapeError
from codalign.gotoh import GapModel, forward_pass
from codalign.models import marginal_p
from codalign.traceback import traceback

logger = logging.getLogger(__name__)


def create_profile(aln):
    """ Column-wise nucleotide frequencies of an alignment.

    Parameters
    ----------
    aln : str or list of str
        One sequence or the equal-length rows of an alignment.

    Returns
    -------
    profile : np.array
        4 x L matrix; each row contributes 1 / rows to its nucleotide,
        `N` spreads that weight over all four and gaps contribute nothing.

    Raises
    ------
    ProfileShapeError
        If the rows differ in length.
    """
    aln = [aln] if isinstance(aln, str) else list(aln)
    lengths = list(map(len, aln))
    if len(set(lengths)) > 1:
        raise ProfileShapeError(lengths)
    rows = len(aln)
    profile = np.zeros((4, lengths[0] if aln else 0))
    for seq in aln:
        for j, c in enumerate(seq.upper()):
            if c in NUCLEOTIDES:
                profile[NUCLEOTIDES.index(c), j] += 1.0 / rows
            elif c == 'U':
                profile[3, j] += 1.0 / rows
            elif c == 'N':
                profile[:, j] += 0.25 / rows
            elif c != '-':
                raise ValueError(f'Symbol `{c}` is not a nucleotide.')
    return profile


def nuc_pi(n, pis):
    """ Weighted average of nucleotide frequencies for a profile column.

    Parameters
    ----------
    n : np.array
        Nucleotide distribution of one column (A, C, G, T).
    pis : np.array
        Per-nucleotide values to average, e.g. background frequencies
        or their logs (the first four entries are used).
    """
    val = 0.0
    for i in range(4):
        if n[i] != 0:
            val += n[i] * pis[i]
    return val


def _top_two(col):
    order = np.argsort(-col, kind='stable')
    return order[0], order[1]


def profile_codon_emissions(cod, p):
    """ Approximate emission rows of a profile codon.

    Only the most frequent nucleotide at each position and, one position
    at a time, the second most frequent one are mixed:
    `top-top-top`, `2nd-top-top`, `top-2nd-top` and `top-top-2nd`,
    each weighted by the product of its column frequencies.

    Parameters
    ----------
    cod : np.array
        4 x 3 profile block of one codon.
    p : np.array
        Marginal tensor from `marginal_p`.

    Returns
    -------
    np.array
        3 x 4 emission rows (codon position x nucleotide).
    """
    (t0, s0), (t1, s1), (t2, s2) = [_top_two(cod[:, k]) for k in range(3)]
    w0, w1, w2 = cod[t0, 0], cod[t1, 1], cod[t2, 2]
    v0, v1, v2 = cod[s0, 0], cod[s1, 1], cod[s2, 2]
    terms = [
        (w0 * w1 * w2, (t0, t1, t2)),
        (v0 * w1 * w2, (s0, t1, t2)),
        (w0 * v1 * w2, (t0, s1, t2)),
        (w0 * w1 * v2, (t0, t1, s2)),
    ]
    rows = np.zeros((3, 4))
    for weight, (a, b, c) in terms:
        rows += weight * p[(a << 4) + (b << 2) + c]
    return rows


def profile_costs(pro1, pro2, p, gap_model):
    """ Substitution and insertion costs for two profiles.

    Returns
    -------
    S : np.array
        M x N substitution costs.
    ins : np.array
        Insertion cost of each column of `pro2`, the column-weighted
        negative log background frequency.
    """
    M = pro1.shape[1]
    E = np.zeros((M, 4))
    for k in range(0, M, 3):
        E[k:k + 3] = profile_codon_emissions(pro1[:, k:k + 3], p)
    with np.errstate(divide='ignore'):
        S = -np.log(E @ pro2)
    # expected background log-frequency; an all-gap column costs nothing
    log_pis = np.log(gap_model.nuc_freqs)
    ins = -np.array([nuc_pi(pro2[:, j], log_pis)
                     for j in range(pro2.shape[1])])
    return S, ins


def align_profiles(seqs1, seqs2, P, names1=None, names2=None,
                   gap_model=None):
    """ Aligns two sub-alignments through their profiles.

    Parameters
    ----------
    seqs1 : str or list of str
        Reference operand: a sequence or the rows of an alignment whose
        length is divisible by 3.
    seqs2 : str or list of str
        Query operand.
    P : np.array
        64 x 64 codon transition matrix.
    names1, names2 : list of str
        Optional names of the rows of each operand.
    gap_model : GapModel
        Indel parameters.

    Returns
    -------
    Alignment
        One row per original sequence, rows of `seqs1` first.

    Raises
    ------
    ProfileShapeError
        If the rows of either operand differ in length.
    FrameLengthError
        If the reference operand does not hold whole codons.
    """
    seqs1 = [seqs1] if isinstance(seqs1, str) else list(seqs1)
    seqs2 = [seqs2] if isinstance(seqs2, str) else list(seqs2)
    pro1 = create_profile(seqs1)
    pro2 = create_profile(seqs2)
    if pro1.shape[1] % 3 != 0:
        raise FrameLengthError(pro1.shape[1])

    names = None
    if names1 is not None or names2 is not None:
        names1 = names1 if names1 is not None else [''] * len(seqs1)
        names2 = names2 if names2 is not None else [''] * len(seqs2)
        names = list(names1) + list(names2)

    gap_model = GapModel() if gap_model is None else gap_model
    p = marginal_p(P)
    S, ins = profile_costs(pro1, pro2, p, gap_model)
    logger.debug('Aligning profiles of %d and %d rows (%d x %d)',
                 len(seqs1), len(seqs2), pro1.shape[1], pro2.shape[1])
    D, _, _, Bd, Bp, Bq = forward_pass(S, ins, 1, gap_model)
    states = traceback(Bd, Bp, Bq)
    weight = float(D[pro1.shape[1], pro2.shape[1]])
    return Alignment(states2alignment(states, seqs1, seqs2), weight,
                     names=names, states=states)
