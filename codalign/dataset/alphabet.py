import numpy as np


class Alphabet:
    def __init__(self, chars, encoding=None, missing=255):
        self.chars = np.frombuffer(chars, dtype=np.uint8)
        self.missing = missing
        self.encoding = np.zeros(256, dtype=np.uint8) + missing
        if encoding is None:
            self.encoding[self.chars] = np.arange(len(self.chars))
            self.size = len(self.chars)
        else:
            self.encoding[self.chars] = encoding
            self.size = encoding.max() + 1

    def __len__(self):
        return self.size

    def encode(self, x):
        """ encode a string into alphabet indices """
        if isinstance(x, str):
            x = x.encode('ascii')
        x = np.frombuffer(x, dtype=np.uint8)
        z = self.encoding[x]
        if np.any(z == self.missing):
            bad = sorted(set(chr(c) for c in x[z == self.missing]))
            raise ValueError(f'Symbols {bad} are not part of the alphabet.')
        return z.astype(np.int64)

    def unpack(self, h, k):
        """ unpack integer h into array of this alphabet with length k """
        n = self.size
        kmer = np.zeros(k, dtype=np.uint8)
        for i in reversed(range(k)):
            c = h % n
            kmer[i] = c
            h = h // n
        return kmer


# A=0, C=1, G=2, T=3 (U read as T), N=4
DNA = Alphabet(b'ACGTNUacgtnu',
               encoding=np.array([0, 1, 2, 3, 4, 3, 0, 1, 2, 3, 4, 3]))

# the four unambiguous nucleotides; codons are base-4 numbers over these
NT4 = Alphabet(b'ACGT')
