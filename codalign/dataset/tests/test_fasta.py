import os
import tempfile
import unittest

from codalign.dataset.fasta import (
    PRINT_SIZE, read_fasta, write_fasta, write_phylip
)


class TestFasta(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmpdir.name, 'seqs.fasta')

    def tearDown(self):
        self.tmpdir.cleanup()

    def test_read_fasta(self):
        with open(self.path, 'w') as fh:
            fh.write('>human BRCA1\nATGGAT\nTTA\n'
                     '>mouse\nATGGAT\nTTG\n')
        names, seqs = read_fasta(self.path)
        self.assertEqual(names, ['human BRCA1', 'mouse'])
        self.assertEqual(seqs, ['ATGGATTTA', 'ATGGATTTG'])

    def test_read_empty(self):
        open(self.path, 'w').close()
        self.assertEqual(read_fasta(self.path), ([], []))

    def test_write_fasta(self):
        write_fasta(['ATG-CC', 'ATGACC'], self.path, ['a', 'b'])
        self.assertEqual(read_fasta(self.path),
                         (['a', 'b'], ['ATG-CC', 'ATGACC']))

    def test_write_fasta_long(self):
        seq = 'ATG' * 50
        write_fasta([seq], self.path, ['long'])
        self.assertEqual(read_fasta(self.path), (['long'], [seq]))

    def test_write_phylip(self):
        path = os.path.join(self.tmpdir.name, 'aln.phy')
        write_phylip(['ACGTACGTAC', 'ACGT--GTAC'], path, ['a', 'bb'])
        with open(path) as fh:
            content = fh.read()
        self.assertEqual(content,
                         '2 10\na\tACGTACGTAC\nbb\tACGT--GTAC\n\n')

    def test_write_phylip_blocks(self):
        path = os.path.join(self.tmpdir.name, 'aln.phy')
        seqs = ['A' * 250, 'C' * 250]
        write_phylip(seqs, path, ['s1', 's2'])
        with open(path) as fh:
            lines = fh.read().splitlines()
        first = PRINT_SIZE - 4 - 2
        self.assertEqual(lines[0], '2 250')
        self.assertEqual(lines[1], 's1\t' + 'A' * first)
        self.assertEqual(lines[4], 'A' * PRINT_SIZE)
        self.assertEqual(lines[5], 'C' * PRINT_SIZE)
        self.assertEqual(lines[7], 'A' * (250 - first - PRINT_SIZE))
        self.assertEqual(lines[-1], '')


if __name__ == '__main__':
    unittest.main()
