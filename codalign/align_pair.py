import logging
import os
import sys

from codalign import align
from codalign.constants import GAP_OPEN, GAP_EXTEND
from codalign.dataset.fasta import read_fasta, write_fasta, write_phylip
from codalign.errors import CodalignError
from codalign.gotoh import GapModel
from codalign.models import mg94_p, read_rate_matrix, rate_matrix_p
from codalign.score import alignment_score

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ('.phy', '.fasta')


def add_arguments(parser):
    parser.add_argument('fasta', type=str, help='FASTA file path')
    parser.add_argument('-m', '--model', type=str, default='mg94',
                        help='Substitution model: mg94 (default)')
    parser.add_argument('-r', '--rate', type=str, default=None,
                        help='Substitution rate matrix (CSV), overrides '
                        'the model')
    parser.add_argument('-o', '--output', type=str, default=None,
                        help='Alignment output file (.phy or .fasta)')
    parser.add_argument('-w', '--weight', type=str, default=None,
                        help='Append alignment weight to file')
    parser.add_argument('-s', '--score', action='store_true',
                        help='Score an aligned input instead of aligning')
    parser.add_argument('--frame-preserving', action='store_true',
                        help='Only allow gaps of whole codons')
    parser.add_argument('--branch-length', type=float, default=0.0133)
    parser.add_argument('--omega', type=float, default=0.2)
    parser.add_argument('--gap-open', type=float, default=GAP_OPEN)
    parser.add_argument('--gap-extend', type=float, default=GAP_EXTEND)
    parser.add_argument('-v', '--verbose', action='store_true')
    return parser


def transition_matrix(args):
    if args.rate is not None:
        Q, branch_length = read_rate_matrix(args.rate)
        return rate_matrix_p(Q, branch_length)
    if args.model == 'mg94':
        return mg94_p(args.branch_length, args.omega)
    raise ValueError(f'Mutation model {args.model} unknown.')


def main(args):
    output = args.output
    if output is None:
        # default: PHYLIP file in the working directory
        stem = os.path.splitext(os.path.basename(args.fasta))[0]
        output = stem + '.phy'
    elif os.path.splitext(output)[1] not in OUTPUT_FORMATS:
        print(f'Format for output file {output} is not valid.',
              file=sys.stderr)
        return 1

    names, seqs = read_fasta(args.fasta)
    if len(seqs) < 2:
        print('At least two sequences required.', file=sys.stderr)
        return 1

    try:
        P = transition_matrix(args)
        gap_model = GapModel(args.gap_open, args.gap_extend)
        if args.score:
            print(alignment_score(seqs[:2], P, gap_model))
            return 0
        mode = 'frame-preserving' if args.frame_preserving else 'marginal'
        aln = align(seqs[:2], P, mode=mode, gap_model=gap_model)
    except (CodalignError, ValueError) as e:
        print(f'{e}', file=sys.stderr)
        return 1

    logger.info('%s: weight %.5f', args.fasta, aln.weight)
    if args.weight is not None:
        with open(args.weight, 'a') as fh:
            fh.write(f'{args.fasta},{args.model},{aln.weight}\n')

    if output.endswith('.fasta'):
        write_fasta(aln.seqs, output, names[:2])
    else:
        write_phylip(aln.seqs, output, names[:2])
    return 0

