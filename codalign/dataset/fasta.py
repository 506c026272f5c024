from Bio import SeqIO
from Bio.Seq import Seq
from Bio.SeqRecord import SeqRecord


PRINT_SIZE = 100


def read_fasta(path):
    """ Reads sequences from a FASTA file.

    Parameters
    ----------
    path : str
        Path to the FASTA file.

    Returns
    -------
    names : list of str
        Sequence identifiers (the full header line without '>').
    seqs : list of str
        Sequences.
    """
    names, seqs = [], []
    with open(path) as handle:
        for record in SeqIO.parse(handle, 'fasta'):
            names.append(record.description)
            seqs.append(str(record.seq))
    return names, seqs


def write_fasta(alignment, path, names):
    """ Writes aligned sequences in FASTA format. """
    records = [SeqRecord(Seq(seq), id=name, description='')
               for name, seq in zip(names, alignment)]
    SeqIO.write(records, path, 'fasta')


def write_phylip(alignment, path, names):
    """ Writes aligned sequences in (interleaved) PHYLIP format.

    The first block shares its line with the sequence names, so it is
    shortened by the longest name; later blocks hold `PRINT_SIZE`
    columns each.
    """
    alignment = list(alignment)
    length = len(alignment[0])
    first = PRINT_SIZE - 4 - max(map(len, names))
    with open(path, 'w') as fh:
        fh.write(f'{len(names)} {length}\n')
        for name, seq in zip(names, alignment):
            fh.write(f'{name}\t{seq[:first]}\n')
        fh.write('\n')
        for i in range(first, length, PRINT_SIZE):
            for seq in alignment:
                fh.write(f'{seq[i:i + PRINT_SIZE]}\n')
            fh.write('\n')
