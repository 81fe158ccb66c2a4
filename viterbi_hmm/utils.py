#!/usr/bin/env python3
"""
Helper functions for rendering latent state paths. Used by the command line interface,
but safe to call directly.
"""

import typing

import numpy
import terminaltables


def format_path(path: typing.Sequence[int], labels: typing.Sequence[str], width: typing.Optional[int] = None) -> str:
    """Render a state path as a string of state labels.

    Args:
        path: A sequence of states 0 and 1.
        labels: The label printed for each state. Labels should be a single character
            so that lines wrap at the right position.
        width: If given, insert a newline after every `width` labels.

    Returns:
        The rendered path.

    Raises:
        ValueError: if width is not positive.

    """
    text = "".join(labels[int(state)] for state in path)
    if width is None:
        return text
    if width < 1:
        raise ValueError("Line width must be positive, not {}".format(width))
    return "\n".join(text[i : i + width] for i in range(0, len(text), width))


def compare_paths(
    predicted: typing.Sequence[int],
    reference: typing.Sequence[int],
    labels: typing.Sequence[str],
    title: str = "Viterbi output",
) -> str:
    """Tabulate a decoded path against a reference path.

    Args:
        predicted: The decoded states.
        reference: The known states.
        labels: The label printed for each state.
        title: Title of the table.

    Returns:
        An ascii table with the reference, the decoded path, and a row marking
            disagreements, followed by the agreement rate.

    Raises:
        ValueError: if the paths have different lengths.

    """
    predicted = numpy.asarray(predicted, dtype=int)
    reference = numpy.asarray(reference, dtype=int)
    if predicted.shape != reference.shape:
        raise ValueError("Cannot compare paths of length {} and {}".format(len(predicted), len(reference)))

    marks = "".join(" " if p == r else "^" for p, r in zip(predicted, reference))
    rows = [
        ["reference", format_path(reference, labels)],
        ["viterbi", format_path(predicted, labels)],
        ["", marks],
    ]
    table = terminaltables.AsciiTable(rows, title)
    table.inner_heading_row_border = False
    table.justify_columns[0] = "right"

    agreement = float(numpy.mean(predicted == reference)) if len(reference) else 1.0
    return "{}\nagreement: {:.1%}".format(table.table, agreement)
