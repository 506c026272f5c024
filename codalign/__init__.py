"""Codon-aware alignment of coding DNA under a marginal codon model."""

from codalign.alignment import Alignment
from codalign.errors import (
    CodalignError, FrameLengthError, ProfileShapeError, TracebackError
)
from codalign.gotoh import (
    GapModel, align_marginal, align_frame_preserving, forward_pass
)
from codalign.models import marginal_p, mg94_p, mg94_q
from codalign.profile import align_profiles, create_profile
from codalign.score import alignment_score

__version__ = '0.1.0'

__all__ = [
    'align',
    'Alignment',
    'GapModel',
    'align_marginal',
    'align_frame_preserving',
    'align_profiles',
    'alignment_score',
    'create_profile',
    'forward_pass',
    'marginal_p',
    'mg94_p',
    'mg94_q',
    'CodalignError',
    'FrameLengthError',
    'ProfileShapeError',
    'TracebackError',
]


def align(seqs, P=None, mode='marginal', gap_model=None):
    """ Aligns a reference coding sequence and a query.

    Parameters
    ----------
    seqs : list of str
        Reference first, then the query.
    P : np.array
        64 x 64 codon transition matrix (defaults to `mg94_p()`).
    mode : str
        `marginal` (gaps of any length) or `frame-preserving`
        (whole-codon gaps only).
    gap_model : GapModel
        Indel parameters.

    Returns
    -------
    Alignment
    """
    if len(seqs) != 2:
        raise ValueError(f'Pairwise alignment needs 2 sequences, '
                         f'got {len(seqs)}.')
    P = mg94_p() if P is None else P
    if mode == 'marginal':
        return align_marginal(seqs[0], seqs[1], P, gap_model)
    elif mode == 'frame-preserving':
        return align_frame_preserving(seqs[0], seqs[1], P, gap_model)
    else:
        raise NotImplementedError(f'Alignment mode {mode} not implemented.')
