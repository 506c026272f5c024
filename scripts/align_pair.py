#!/usr/bin/env python3
import argparse
import logging
import sys

from codalign.align_pair import add_arguments, main


if __name__ == '__main__':
    parser = argparse.ArgumentParser(
        description='Pairwise alignment of coding sequences')
    parser = add_arguments(parser)
    hparams = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if hparams.verbose else logging.INFO)
    sys.exit(main(hparams))
