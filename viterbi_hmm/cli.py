#!/usr/bin/env python3
"""Decode a sequence file from the command line with one of the preset models."""

import argparse
import sys
import typing

from . import model, utils
from .chain import Chain


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        "viterbi-hmm", description="Find the most likely hidden states of a two-state HMM."
    )
    parser.add_argument("model", choices=sorted(model.MODELS), help="Preset model to decode with")
    parser.add_argument("sequence_file", help="Observations, separated by whitespace or newlines")
    parser.add_argument("state_file", nargs="?", default=None, help="Known states, one per line (optional)")
    parser.add_argument("-n", type=int, default=None, help="Number of observations [default = all]")
    parser.add_argument("--width", type=int, default=60, help="Characters per output line [default = (%(default)s)]")
    parser.add_argument(
        "--lag",
        type=int,
        choices=(0, 1),
        default=0,
        help="Pair score column i with observation i - lag [default = (%(default)s)]",
    )
    parser.add_argument("--table", action="store_true", help="Tabulate the output against the known states")
    parser.add_argument("--verbose", action="store_true", help="Show decoding progress")
    return parser


def run(arguments: argparse.Namespace) -> str:
    """Decode the requested file and render the output.

    Args:
        arguments: Parsed command line arguments.

    Returns:
        The text to print. Nothing is rendered unless every step succeeds.
    """
    hmm = model.MODELS[arguments.model]()
    chain = Chain.from_files(arguments.sequence_file, arguments.state_file, labels=hmm.labels, n=arguments.n)
    trellis = chain.decode(hmm, emission_lag=arguments.lag, verbose=arguments.verbose)

    if arguments.table:
        if chain.reference_sequence is None:
            raise ValueError("--table needs a state file")
        return utils.compare_paths(trellis.path, chain.reference_sequence, hmm.labels)

    sections = []
    if chain.reference_sequence is not None:
        sections.append("State solution:\n" + utils.format_path(chain.reference_sequence, hmm.labels, arguments.width))
    sections.append("Viterbi output:\n" + utils.format_path(trellis.path, hmm.labels, arguments.width))
    if chain.reference_sequence is not None:
        sections.append("Agreement: {:.1%}".format(chain.accuracy(trellis.path)))
    return "\n\n".join(sections)


def main(argv: typing.Optional[typing.Sequence[str]] = None) -> int:
    arguments = build_parser().parse_args(argv)
    try:
        output = run(arguments)
    except (OSError, ValueError, IndexError) as e:
        print("error: {}".format(e), file=sys.stderr)
        return 1
    print(output)
    return 0
