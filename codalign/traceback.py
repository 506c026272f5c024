from codalign.constants import (
    x, m, y, Trace
)
from codalign.errors import TracebackError

_INSERT = (Trace.INSERT_OPEN, Trace.INSERT_EXTEND)
_DELETE = (Trace.DELETE_OPEN, Trace.DELETE_EXTEND)


def traceback(Bd, Bp, Bq, step=1):
    """ Recovers the optimal path from the predecessor matrices.

    Parameters
    ----------
    Bd : np.array
        Best state per cell, (M + 1) x (N + 1) `Trace` codes.
    Bp : np.array
        Insertion open / extend codes.
    Bq : np.array
        Deletion open / extend codes.
    step : int
        Symbols consumed by one gap move (1, or 3 for whole codons).

    Returns
    -------
    states : list of int
        Path states from the origin to cell (M, N); `x` consumes the
        reference, `y` the query and `m` both.

    Raises
    ------
    TracebackError
        If the walk reads an unset cell or cannot end at the origin.
    """
    i, j = Bd.shape[0] - 1, Bd.shape[1] - 1
    states = []
    while i != 0 or j != 0:
        t = Bd[i, j]
        if t == Trace.MATCH:
            if i < 1 or j < 1:
                raise TracebackError(i, j, 'match move leaves the grid')
            states.append(m)
            i, j = i - 1, j - 1
        elif t in _INSERT:
            # follow the chain of extensions, then the opening move
            while True:
                if j < step:
                    raise TracebackError(i, j, 'insertion leaves the grid')
                extend = Bp[i, j] == Trace.INSERT_EXTEND
                states.extend([y] * step)
                j -= step
                if not extend:
                    break
        elif t in _DELETE:
            while True:
                if i < step:
                    raise TracebackError(i, j, 'deletion leaves the grid')
                extend = Bq[i, j] == Trace.DELETE_EXTEND
                states.extend([x] * step)
                i -= step
                if not extend:
                    break
        else:
            raise TracebackError(i, j, 'cell has no recorded predecessor')
    return states[::-1]
