from codalign.constants import GAP


class Alignment:
    """ Result of aligning two operands.

    Parameters
    ----------
    seqs : list of str
        Equal-length aligned rows, using '-' for gaps. Pairwise alignments
        hold the reference first; profile merges hold every row of the
        first operand followed by every row of the second.
    weight : float
        Total negative log-likelihood of the alignment path.
    names : list of str
        Optional sequence names, one per row.
    states : list of int
        Path states (see `codalign.constants`) from the origin to the end.
    """

    def __init__(self, seqs, weight, names=None, states=None):
        seqs = list(seqs)
        if len(set(map(len, seqs))) > 1:
            raise ValueError('Aligned sequences must all have the same '
                             f'length, got {list(map(len, seqs))}.')
        if names is not None and len(names) != len(seqs):
            raise ValueError(f'{len(names)} names for {len(seqs)} sequences.')
        self.seqs = seqs
        self.weight = weight
        self.names = None if names is None else list(names)
        self.states = states

    def __len__(self):
        return len(self.seqs[0]) if self.seqs else 0

    def __iter__(self):
        return iter(self.seqs)

    def __getitem__(self, i):
        return self.seqs[i]

    def __repr__(self):
        rows = '\n'.join(f'    {s}' for s in self.seqs)
        return f'Alignment(weight={self.weight:.5f})\n{rows}'

    def ungapped(self):
        """ Input sequences recovered by stripping gaps. """
        return [s.replace(GAP, '') for s in self.seqs]
