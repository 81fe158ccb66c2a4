#!/usr/bin/env python3
"""
Emission models give the log likelihood of an observation conditional on the latent
state at the same time point. Two families are available: a Poisson distribution over
non-negative counts, and a fixed lookup table over a small discrete alphabet.
"""

import typing

import numpy
import scipy.special

# Shorthand for numeric types.
Numeric = typing.Union[int, float]

# the models here are two-state models only
STATES = (0, 1)


class EmissionModel(object):
    """Base class for emission models of a two-state hidden Markov model."""

    def log_probability(self, observation: Numeric, state: int) -> float:
        """Log likelihood of a single observation given a latent state.

        Args:
            observation: The observed count or symbol.
            state: The latent state, either 0 or 1.

        Returns:
            The log probability of the observation.

        """
        check_state(state)
        return float(self.log_probability_table(numpy.array([observation]))[state, 0])

    def log_probability_table(self, observations: typing.Sequence[Numeric]) -> numpy.ndarray:
        """Log likelihood of every observation under every state.

        Args:
            observations: An observation sequence of length n.

        Returns:
            A numpy array with shape (2, n).

        """
        raise NotImplementedError("Emission models must implement log_probability_table")


def check_state(state: int) -> None:
    if state not in STATES:
        raise IndexError("State {} is not one of {}".format(state, STATES))


class PoissonEmission(EmissionModel):
    def __init__(self, rates: typing.Sequence[Numeric]) -> None:
        """Poisson distributed counts, with one rate parameter per latent state.

        Args:
            rates: The two Poisson rates; `rates[s]` is the mean count emitted by state s.

        Raises:
            ValueError: if there are not exactly two rates, or a rate is not positive.

        """
        rates = numpy.asarray(rates, dtype=float)
        if rates.shape != (len(STATES),):
            raise ValueError("Poisson emissions need exactly {} rates".format(len(STATES)))
        if not numpy.all(rates > 0):
            raise ValueError("Poisson rates must be positive")
        self.rates = rates

    def __repr__(self) -> str:
        return "<PoissonEmission, rates {}>".format(tuple(self.rates))

    def log_probability_table(self, observations: typing.Sequence[Numeric]) -> numpy.ndarray:
        counts = numpy.asarray(observations)
        if counts.size and (numpy.any(counts < 0) or numpy.any(counts != numpy.floor(counts))):
            raise ValueError("Poisson observations must be non-negative integer counts")

        # log(lambda^x e^-lambda / x!) without forming x! or lambda^x
        counts = counts.astype(float)[numpy.newaxis, :]
        rates = self.rates[:, numpy.newaxis]
        return scipy.special.xlogy(counts, rates) - rates - scipy.special.gammaln(counts + 1)


class DiscreteEmission(EmissionModel):
    def __init__(self, log_probabilities: typing.Sequence[typing.Sequence[float]], offset: int = 0) -> None:
        """Emissions drawn from a finite alphabet, looked up in a fixed table.

        Args:
            log_probabilities: A table with one row per symbol and one column per state,
                so that `log_probabilities[x][s]` is the log probability that state s emits
                symbol x.
            offset: The value of the first symbol. Observed symbol x is looked up in row
                `x - offset`, so die faces 1 to 6 use an offset of 1.

        Raises:
            ValueError: if the table does not have one column per state.

        """
        table = numpy.asarray(log_probabilities, dtype=float)
        if table.ndim != 2 or table.shape[1] != len(STATES):
            raise ValueError("Emission table must have shape (symbols, {})".format(len(STATES)))
        self.table = table
        self.offset = offset

    @classmethod
    def from_probabilities(
        cls, probabilities: typing.Sequence[typing.Sequence[float]], offset: int = 0
    ) -> "DiscreteEmission":
        """Create a discrete emission model from probabilities in linear space.

        Args:
            probabilities: A table with one row per symbol and one column per state.
            offset: The value of the first symbol.

        Returns:
            The emission model, with the table stored in log space.

        """
        with numpy.errstate(divide="ignore"):
            return cls(numpy.log(numpy.asarray(probabilities, dtype=float)), offset=offset)

    @property
    def symbols(self) -> range:
        """The symbols this model can emit."""
        return range(self.offset, self.offset + self.table.shape[0])

    def __repr__(self) -> str:
        return "<DiscreteEmission, symbols {}..{}>".format(self.symbols.start, self.symbols.stop - 1)

    def log_probability_table(self, observations: typing.Sequence[Numeric]) -> numpy.ndarray:
        rows = numpy.asarray(observations) - self.offset
        if rows.size and numpy.any(rows != numpy.floor(rows)):
            bad = sorted(set((rows[rows != numpy.floor(rows)] + self.offset).tolist()))
            raise IndexError("Symbols {} are not whole numbers".format(bad))
        if rows.size and (numpy.any(rows < 0) or numpy.any(rows >= self.table.shape[0])):
            bad = sorted(set((rows[(rows < 0) | (rows >= self.table.shape[0])] + self.offset).tolist()))
            raise IndexError("Symbols {} are outside the alphabet {}".format(bad, self.symbols))
        return self.table[rows.astype(int)].T
