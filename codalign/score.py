import numpy as np
import matplotlib.pyplot as plt

from codalign.constants import (
    x, m, y, MM, IM, DM, MI, II, MD, ID, DD, GAP
)
from codalign.dataset.alphabet import DNA
from codalign.dataset.utils import alignment2states, states2edges
from codalign.errors import FrameLengthError
from codalign.gotoh import GapModel, reference_emissions
from codalign.models import marginal_p

# cost of entering each state from each previous state
_MOVES = {
    (m, m): MM, (y, m): IM, (x, m): DM,
    (m, y): MI, (y, y): II,
    (m, x): MD, (y, x): ID, (x, x): DD,
}


def alignment_score(alignment, P, gap_model=None):
    """ Weight of a finished pairwise alignment under the marginal model.

    Every column is classified as a match / mismatch, insertion or
    deletion and charged the same costs the aligners use, so the result
    agrees with the weight reported by `align_marginal`,
    `align_frame_preserving` or a single-row `align_profiles`.

    Parameters
    ----------
    alignment : list of str
        Reference row and query row, '-' for gaps.
    P : np.array
        64 x 64 codon transition matrix.
    gap_model : GapModel
        Indel parameters.

    Returns
    -------
    float
        Total negative log-likelihood; infinite when the alignment moves
        straight from a deletion into an insertion.
    """
    if len(alignment) != 2:
        raise ValueError(
            f'Expected a pairwise alignment, got {len(alignment)} rows.')
    X, Y = alignment
    states = alignment2states(X, Y)
    ref = X.replace(GAP, '')
    if len(ref) % 3 != 0:
        raise FrameLengthError(len(ref))
    gap_model = GapModel() if gap_model is None else gap_model
    costs = gap_model.costs()
    a = DNA.encode(ref)
    b = DNA.encode(Y.replace(GAP, ''))
    E = reference_emissions(a, marginal_p(P))
    ins = gap_model.symbol_costs(b)

    with np.errstate(divide='ignore'):
        S = -np.log(E)
    weight = 0.0
    prev = m
    i, j = 0, 0
    for s in states:
        if (prev, s) not in _MOVES:
            return np.inf
        weight += costs[_MOVES[(prev, s)]]
        if s == m:
            weight += S[i, b[j]]
            i, j = i + 1, j + 1
        elif s == y:
            weight += ins[j]
            j += 1
        else:
            i += 1
        prev = s
    return float(weight)


def alignment_visualization(D, states):
    """ Visualize the DP cost matrix with the traceback path

    Parameters
    ----------
    D : np.array
        Best cost matrix from `forward_pass`.
    states : list of int
        Path states of the alignment.

    Returns
    -------
    fig: matplotlib.pyplot.Figure
       Matplotlib figure
    ax : matplotlib.pyplot.Axes
       Matplotlib axes object
    """
    fig, ax = plt.subplots(figsize=(5, 4))
    finite = np.where(np.isfinite(D), D, np.nan)
    im = ax.imshow(finite, aspect='auto', cmap='viridis')
    fig.colorbar(im, ax=ax)
    rows, cols = zip(*states2edges(states))
    ax.plot(cols, rows, color='white', linewidth=1)
    ax.set_xlabel('Query positions')
    ax.set_ylabel('Reference positions')
    ax.set_title('Alignment cost matrix')
    plt.tight_layout()
    return fig, ax
