#!/usr/bin/env python3
"""
The HiddenMarkovModel object bundles the fixed parameters of a two-state hidden Markov
model:

  + A starting state, which is known with certainty.
  + A transition probability, which dictates the probability that any given state in
      the latent sequence is followed by another given state.
  + An emission probability, which dictates the probability that any given emission
      is observed conditional on the latent state at the same time point.

Parameters are never estimated here; they are supplied by the caller. Two presets are
provided: a Poisson count model and the 'occasionally dishonest casino' die model.
"""

import typing

import numpy
import terminaltables

from . import decoder
from .emission import DiscreteEmission, EmissionModel, PoissonEmission
from .transition import TransitionMatrix


class HiddenMarkovModel(object):
    def __init__(
        self,
        transitions: TransitionMatrix,
        emissions: EmissionModel,
        labels: typing.Sequence[str] = ("1", "2"),
        start_state: int = 0,
        emission_lag: int = 0,
        name: typing.Optional[str] = None,
    ) -> None:
        """A two-state hidden Markov model with fixed parameters.

        Args:
            transitions: Transition log probabilities between the two states.
            emissions: The emission model.
            labels: Display labels for states 0 and 1.
            start_state: The known state at the first position of every sequence.
            emission_lag: Default pairing of observations with score columns; see
                `decoder.decode`.
            name: Optional name used when printing.

        Raises:
            ValueError: if there are not exactly two distinct labels.

        """
        labels = tuple(str(label) for label in labels)
        if len(labels) != 2 or len(set(labels)) != 2:
            raise ValueError("A two-state model needs two distinct labels")

        self.transitions = transitions
        self.emissions = emissions
        self.labels = labels
        self.start_state = start_state
        self.emission_lag = emission_lag
        self.name = name

    def __repr__(self) -> str:
        return "<viterbi_hmm.HiddenMarkovModel, {}>".format(self.name or "unnamed")

    def __str__(self) -> str:
        fs = "viterbi_hmm.HiddenMarkovModel {name} (states {labels}, start {start}, emissions {emissions})"
        return fs.format(
            name=self.name or "unnamed",
            labels="/".join(self.labels),
            start=self.labels[self.start_state],
            emissions=repr(self.emissions),
        )

    def decode(self, observations: typing.Sequence[typing.Union[int, float]], **kwargs) -> decoder.Trellis:
        """Decode an observation sequence with this model's parameters.

        Args:
            observations: The observed counts or symbols.
            **kwargs: Overrides for `decoder.decode` options (`prefer_state_on_tie`,
                `emission_lag`, `verbose`).

        Returns:
            The completed Trellis.
        """
        kwargs.setdefault("start_state", self.start_state)
        kwargs.setdefault("emission_lag", self.emission_lag)
        return decoder.decode(observations, self.transitions, self.emissions, **kwargs)

    def log_likelihood(
        self, observations: typing.Sequence[typing.Union[int, float]], path: typing.Sequence[int]
    ) -> float:
        """Log likelihood of a latent path, comparable to `Trellis.score`.

        Args:
            observations: The observed counts or symbols.
            path: A latent state for every observation.

        Returns:
            A float for the log likelihood of the path.
        """
        return decoder.path_log_likelihood(
            observations,
            path,
            self.transitions,
            self.emissions,
            start_state=self.start_state,
            emission_lag=self.emission_lag,
        )

    def print_probabilities(self, digits: int = 4) -> typing.Tuple[str, str]:
        """Render the emission and transition parameters as ascii tables.

        Args:
            digits: decimal places to print

        Returns:
            emission table, transition table: both as printable strings, with
                probabilities in linear space.
        """
        # one header row, then one row per state
        transitions = [
            [label] + [str(round(p, digits)) for p in row]
            for label, row in zip(self.labels, self.transitions.probabilities)
        ]
        transitions.insert(0, ["S_i \\ S_j"] + list(self.labels))

        if isinstance(self.emissions, DiscreteEmission):
            emissions = [
                [label] + [str(round(p, digits)) for p in numpy.exp(self.emissions.table[:, s])]
                for s, label in enumerate(self.labels)
            ]
            emissions.insert(0, ["S_i \\ E_i"] + [str(symbol) for symbol in self.emissions.symbols])
        elif isinstance(self.emissions, PoissonEmission):
            emissions = [[label, str(round(rate, digits))] for label, rate in zip(self.labels, self.emissions.rates)]
            emissions.insert(0, ["S_i", "Poisson rate (lambda)"])
        else:
            emissions = [["S_i", "Emission model"]] + [[label, repr(self.emissions)] for label in self.labels]

        # format tables
        te = terminaltables.DoubleTable(emissions, "Emission probabilities")
        tt = terminaltables.DoubleTable(transitions, "Transition probabilities")
        for table in (te, tt):
            table.padding_left = 1
            table.padding_right = 1
            table.justify_columns[0] = "right"

        return te.table, tt.table


def poisson_model(emission_lag: int = 0) -> HiddenMarkovModel:
    """Two states emitting Poisson counts, with low (state 1) and high (state 2) rates.

    Args:
        emission_lag: 1 to pair score column i with observation i - 1.

    Returns:
        The model, starting in the low-rate state.
    """
    transitions = TransitionMatrix.from_probabilities([[0.9551, 0.0449], [0.0880, 0.9120]])
    emissions = PoissonEmission([1.8234, 5.7812])
    return HiddenMarkovModel(transitions, emissions, labels=("1", "2"), emission_lag=emission_lag, name="poisson")


def casino_model() -> HiddenMarkovModel:
    """The occasionally dishonest casino (Durbin et al., Biological Sequence Analysis, p. 54).

    A casino switches between a fair die (F) and a loaded die (L) that rolls a six half
    of the time. Observations are die faces 1 to 6.

    Returns:
        The model, starting with the fair die.
    """
    transitions = TransitionMatrix.from_probabilities([[0.95, 0.05], [0.1, 0.9]])
    emissions = DiscreteEmission.from_probabilities([[1 / 6, 0.1]] * 5 + [[1 / 6, 0.5]], offset=1)
    return HiddenMarkovModel(transitions, emissions, labels=("F", "L"), name="casino")


MODELS: typing.Dict[str, typing.Callable[..., HiddenMarkovModel]] = {
    "poisson": poisson_model,
    "casino": casino_model,
}
