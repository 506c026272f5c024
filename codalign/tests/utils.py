import numpy as np


def random_cds(rng, n_codons):
    """ Random reference coding sequence. """
    return ''.join(rng.choice(list('ACGT'), size=3 * n_codons))


def mutate(rng, seq, n_subs=2, n_indels=1, indel_len=None):
    """ Copy of `seq` with point substitutions and short indels. """
    s = list(seq)
    for _ in range(n_subs):
        k = rng.randint(len(s))
        s[k] = rng.choice([c for c in 'ACGT' if c != s[k]])
    for _ in range(n_indels):
        length = indel_len or rng.randint(1, 4)
        k = rng.randint(len(s) - length)
        if rng.rand() < 0.5:
            del s[k:k + length]
        else:
            s[k:k] = list(rng.choice(list('ACGT'), size=length))
    return ''.join(s)


def gap_runs(row):
    """ Lengths of the runs of '-' in an aligned row. """
    runs, n = [], 0
    for c in row:
        if c == '-':
            n += 1
        elif n:
            runs.append(n)
            n = 0
    if n:
        runs.append(n)
    return runs
