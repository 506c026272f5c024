import numpy as np
from codalign.constants import x, m, y, steps_mxy, GAP


def state_f(z):
    """ Path state of one pairwise alignment column. """
    if z[0] == GAP:
        return y
    if z[1] == GAP:
        return x
    else:
        return m


def tmstate_f(z):
    """ Parsing the textual state string. """
    if z == '1':
        return x
    if z == '2':
        return y
    if z == ':':
        return m
    raise ValueError(f'`{z}` is not a valid state symbol.')


def revstate_f(z):
    if z == x:
        return '1'
    if z == y:
        return '2'
    if z == m:
        return ':'
    raise ValueError(f'{z} is not a valid state.')


def alignment2states(X: str, Y: str):
    """ Converts a gapped pairwise alignment to path states.

    Columns that are gaps in both rows carry no state and are dropped.
    """
    if len(X) != len(Y):
        raise ValueError(
            f'Aligned sequences differ in length ({len(X)} != {len(Y)}).')
    cols = [(a, b) for a, b in zip(X, Y) if not (a == GAP and b == GAP)]
    return list(map(state_f, cols))


def states2edges(states):
    """ Converts a state path to DP grid coordinates, origin included. """
    coords = [(0, 0)]
    i, j = 0, 0
    for s in states:
        di, dj = steps_mxy[s]
        i, j = i + di, j + dj
        coords.append((i, j))
    return coords


def states2alignment(states, X, Y):
    """ Converts state string to gapped alignments

    Parameters
    ----------
    states : list of int or str
        Path states; a string is parsed with `tmstate_f`.
    X : str or list of str
        Reference operand (one sequence, or the rows of a profile).
    Y : str or list of str
        Query operand (one sequence, or the rows of a profile).

    Returns
    -------
    list of str
        Gapped rows of X followed by gapped rows of Y.
    """
    if isinstance(states, str):
        states = list(map(tmstate_f, list(states)))
    states = np.asarray(states)
    X = [X] if isinstance(X, str) else list(X)
    Y = [Y] if isinstance(Y, str) else list(Y)

    sx = np.sum(states == x) + np.sum(states == m)
    sy = np.sum(states == y) + np.sum(states == m)
    if sx != len(X[0]):
        raise ValueError(
            f'The state string length {sx} does not match '
            f'the length of sequence {len(X[0])}.\n'
            f'SequenceX: {X[0]}\nSequenceY: {Y[0]}\nStates: {states}\n'
        )
    if sy != len(Y[0]):
        raise ValueError(
            f'The state string length {sy} does not match '
            f'the length of sequence {len(Y[0])}.\n'
            f'SequenceX: {X[0]}\nSequenceY: {Y[0]}\nStates: {states}\n'
        )

    i, j = 0, 0
    res = []
    for k in range(len(states)):
        if states[k] == x:
            cx = [s[i] for s in X]
            cy = [GAP] * len(Y)
            i += 1
        elif states[k] == y:
            cx = [GAP] * len(X)
            cy = [s[j] for s in Y]
            j += 1
        elif states[k] == m:
            cx = [s[i] for s in X]
            cy = [s[j] for s in Y]
            i += 1
            j += 1
        else:
            raise ValueError(f'{states[k]} is not recognized')
        res.append(cx + cy)

    if not res:
        return [''] * (len(X) + len(Y))
    return [''.join(row) for row in zip(*res)]
