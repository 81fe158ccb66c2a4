#!/usr/bin/env python3
"""Transition probabilities between the two latent states, stored in log space."""

import typing
import warnings

import numpy

# rows further than this from summing to one are reported
ROW_SUM_TOLERANCE = 1e-6


class TransitionMatrix(object):
    def __init__(self, log_probabilities: typing.Sequence[typing.Sequence[float]]) -> None:
        """A 2x2 table of transition log probabilities.

        Entry `[i][j]` is the log probability that state i is followed by state j. Each
        row should be a probability distribution in linear space; this is checked, but a
        row that fails the check only produces a warning.

        Args:
            log_probabilities: The 2x2 table of log probabilities.

        Raises:
            ValueError: if the table is not 2x2.

        """
        table = numpy.array(log_probabilities, dtype=float)
        if table.shape != (2, 2):
            raise ValueError("Transition matrix must have shape (2, 2), not {}".format(table.shape))

        # rows are not renormalised, only reported
        row_sums = numpy.exp(table).sum(axis=1)
        for i, row_sum in enumerate(row_sums):
            if abs(row_sum - 1) > ROW_SUM_TOLERANCE:
                warnings.warn("Transition probabilities from state {} sum to {:.6f}, not 1".format(i, row_sum))

        table.flags.writeable = False
        self.log_probabilities = table

    @classmethod
    def from_probabilities(cls, probabilities: typing.Sequence[typing.Sequence[float]]) -> "TransitionMatrix":
        """Create a transition matrix from probabilities in linear space.

        Zero probabilities become negative infinity.

        Args:
            probabilities: The 2x2 table of probabilities.

        Returns:
            The transition matrix.

        """
        with numpy.errstate(divide="ignore"):
            return cls(numpy.log(numpy.asarray(probabilities, dtype=float)))

    @property
    def probabilities(self) -> numpy.ndarray:
        """The transition table in linear space."""
        return numpy.exp(self.log_probabilities)

    def __getitem__(self, index: typing.Tuple[int, int]) -> float:
        return self.log_probabilities[index]

    def __repr__(self) -> str:
        return "<TransitionMatrix, {}>".format(numpy.round(self.probabilities, 4).tolist())
