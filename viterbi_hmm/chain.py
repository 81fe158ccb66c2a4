#!/usr/bin/env python3
"""
The Chain object stores a single observation sequence, and optionally the known latent
sequence that generated it. It has methods to read both from text files, to decode the
sequence with a model, and to score a decoded path against the known one.
"""

import os
import typing

import numpy

from . import decoder
from .model import HiddenMarkovModel

PathLike = typing.Union[str, "os.PathLike[str]"]


class Chain(object):
    """Store an observed emission sequence and, optionally, its reference latent sequence."""

    def __init__(
        self,
        emission_sequence: typing.Sequence[int],
        reference_sequence: typing.Optional[typing.Sequence[int]] = None,
    ) -> None:
        """Create a chain for an observed emission sequence.

        Args:
            emission_sequence: The observed counts or symbols.
            reference_sequence: The true latent state (0 or 1) at every position, if known.
                Reference states are only used for comparison, never for decoding.

        Raises:
            ValueError: if an emission is not an integer, or the reference sequence has a
                different length.

        """
        emissions = numpy.asarray(emission_sequence)
        if emissions.size and numpy.any(emissions != numpy.floor(emissions)):
            raise ValueError("Emission sequence must hold integer counts or symbols")
        self.emission_sequence = emissions.astype(int)
        self.reference_sequence: typing.Optional[numpy.ndarray] = None
        if reference_sequence is not None:
            reference = numpy.array(reference_sequence, dtype=int)
            if reference.shape != self.emission_sequence.shape:
                raise ValueError(
                    "Reference sequence has length {} but emission sequence has length {}".format(
                        len(reference), len(self.emission_sequence)
                    )
                )
            self.reference_sequence = reference

        self.T = len(self.emission_sequence)

    @classmethod
    def from_files(
        cls,
        sequence_file: PathLike,
        state_file: typing.Optional[PathLike] = None,
        labels: typing.Sequence[str] = ("1", "2"),
        n: typing.Optional[int] = None,
    ) -> "Chain":
        """Read a chain from a sequence file and an optional state file.

        Args:
            sequence_file: Path to the observations; see `read_sequence`.
            state_file: Path to the reference states; see `read_states`.
            labels: Labels for states 0 and 1 as they appear in the state file.
            n: Number of observations to use. Detected from the sequence file if None.

        Returns:
            The Chain.
        """
        emissions = read_sequence(sequence_file, n=n)
        reference = None
        if state_file is not None:
            reference = read_states(state_file, labels, n=len(emissions))
        return cls(emissions, reference)

    def __len__(self) -> int:
        return self.T

    def __repr__(self) -> str:
        return "<Chain, size {0}>".format(self.T)

    def __str__(self, print_len: int = 15) -> str:
        print_len = min(print_len, self.T)
        if self.reference_sequence is None:
            items = [str(e) for e in self.emission_sequence[:print_len]]
        else:
            items = ["{s}:{e}".format(s=s, e=e) for s, e in zip(self.reference_sequence, self.emission_sequence)]
            items = items[:print_len]
        if print_len < self.T:
            items.append("...")
        return "viterbi_hmm.Chain, size={T}, seq={s}".format(T=self.T, s=items)

    def tabulate(self) -> numpy.ndarray:
        """Convert the reference and emission sequences into a single numpy array.

        Returns:
            A numpy array with shape (T, 2), where T is the length of the Chain.

        Raises:
            ValueError: if the chain has no reference sequence.
        """
        if self.reference_sequence is None:
            raise ValueError("Chain has no reference sequence to tabulate")
        return numpy.column_stack((self.reference_sequence, self.emission_sequence))

    def decode(self, model: HiddenMarkovModel, **kwargs) -> decoder.Trellis:
        """Decode the emission sequence; reference states are not used."""
        return model.decode(self.emission_sequence, **kwargs)

    def accuracy(self, path: typing.Sequence[int]) -> float:
        """Fraction of positions where a path agrees with the reference sequence.

        Args:
            path: A latent state for every observation.

        Returns:
            A float between 0 and 1.

        Raises:
            ValueError: if there is no reference sequence, or the lengths differ.

        """
        if self.reference_sequence is None:
            raise ValueError("Chain has no reference sequence to compare against")
        path = numpy.asarray(path, dtype=int)
        if path.shape != self.reference_sequence.shape:
            raise ValueError("Path has length {} but chain has length {}".format(len(path), self.T))
        if self.T == 0:
            return 1.0
        return float(numpy.mean(path == self.reference_sequence))


def _read_fields(path: PathLike) -> typing.List[typing.List[str]]:
    # missing files raise FileNotFoundError here
    with open(path) as f:
        return [line.split() for line in f if line.strip()]


def read_sequence(path: PathLike, n: typing.Optional[int] = None) -> numpy.ndarray:
    """Read an observation sequence of whitespace or newline separated integers.

    Args:
        path: Path to the sequence file.
        n: Number of observations to read. If None, every value in the file is used;
            otherwise the first n values are used.

    Returns:
        A one-dimensional integer numpy array.

    Raises:
        ValueError: if the file is empty, holds a non-integer value, or holds fewer
            than n values.

    """
    values = [value for fields in _read_fields(path) for value in fields]
    if n is not None:
        if n < 1:
            raise ValueError("Sequence length must be positive, not {}".format(n))
        if len(values) < n:
            raise ValueError("{} holds {} values, expected at least {}".format(path, len(values), n))
        values = values[:n]
    if len(values) == 0:
        raise ValueError("{} holds no observations".format(path))

    try:
        return numpy.array([int(value) for value in values], dtype=int)
    except ValueError as e:
        raise ValueError("{} holds a non-integer observation: {}".format(path, e)) from e


def read_states(path: PathLike, labels: typing.Sequence[str], n: typing.Optional[int] = None) -> numpy.ndarray:
    """Read a reference state sequence, one state per line.

    The state is the last whitespace separated field on each line, so files with either
    `index state` records or bare state labels can be read.

    Args:
        path: Path to the state file.
        labels: Labels for states 0 and 1, as they appear in the file.
        n: Expected number of states. If given, a file of a different length is an error.

    Returns:
        A one-dimensional integer numpy array of states 0 and 1.

    Raises:
        ValueError: if a label is not recognised, or the length does not match n.

    """
    lookup = {str(label): state for state, label in enumerate(labels)}
    fields = [record[-1] for record in _read_fields(path)]
    if n is not None and len(fields) != n:
        raise ValueError("{} holds {} states, expected {}".format(path, len(fields), n))

    unknown = sorted(set(fields) - set(lookup))
    if unknown:
        raise ValueError("{} holds unknown state labels {}, expected {}".format(path, unknown, tuple(labels)))
    return numpy.array([lookup[field] for field in fields], dtype=int)
