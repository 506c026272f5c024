from enum import IntEnum
import numpy as np

# path state numberings
# x: reference symbol aligned to a gap (deletion)
# y: query symbol aligned to a gap (insertion)
# m: match / mismatch
x, m, y = 0, 1, 2

# grid offsets (di, dj) consumed by each path state
steps_mxy = {x: (1, 0), m: (1, 1), y: (0, 1)}


class Trace(IntEnum):
    """ Predecessor tag stored per DP cell. """
    UNSET = -1
    MATCH = 0
    INSERT_OPEN = 1
    INSERT_EXTEND = 2
    DELETE_OPEN = 3
    DELETE_EXTEND = 4


# plain ints for the compiled DP fill
UNSET = int(Trace.UNSET)
MATCH = int(Trace.MATCH)
INSERT_OPEN = int(Trace.INSERT_OPEN)
INSERT_EXTEND = int(Trace.INSERT_EXTEND)
DELETE_OPEN = int(Trace.DELETE_OPEN)
DELETE_EXTEND = int(Trace.DELETE_EXTEND)

# indices into the move cost vector built by GapModel.costs
# (predecessor state -> current state)
MM, IM, DM, MI, II, MD, ID, DD = range(8)

# indel process
GAP_OPEN = 0.001
GAP_EXTEND = 1.0 - (1.0 / 6.0)

# background nucleotide frequencies A, C, G, T, N
NUC_FREQS = np.array([0.308, 0.185, 0.199, 0.308, 0.25])

NUCLEOTIDES = 'ACGT'
GAP = '-'
