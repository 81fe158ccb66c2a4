#!/usr/bin/env python3
"""
Viterbi decoding for two-state hidden Markov models.

The decoder finds the most likely latent state path for a fixed-length observation
sequence. It works in log space throughout:

  + The score table V[j, i] holds the log probability of the best path that ends in
      state j at position i. The first column encodes a known starting state, which
      has log probability 0; the other state is impossible and starts at -inf.
  + The backpointer table ptr[j, i] holds the state at position i - 1 on that best
      path.
  + Traceback starts from the best final state and follows the backpointers to
      position 1. Position 0 is always the starting state.

Exact ties between two candidate scores are resolved in favour of
`PREFER_STATE_ON_TIE`, so that decoding is deterministic.
"""

import typing

import numpy
import tqdm

from .emission import STATES, EmissionModel
from .transition import TransitionMatrix

# state chosen when both candidates have exactly the same score
PREFER_STATE_ON_TIE = 1


class Trellis(object):
    """The completed score and backpointer tables of a single decode, plus the decoded path."""

    def __init__(
        self,
        scores: numpy.ndarray,
        pointers: numpy.ndarray,
        path: numpy.ndarray,
        start_state: int,
        emission_lag: int,
    ) -> None:
        self.scores = scores
        self.pointers = pointers
        self.path = path
        self.start_state = start_state
        self.emission_lag = emission_lag
        for table in (self.scores, self.pointers, self.path):
            table.flags.writeable = False

    def __len__(self) -> int:
        return len(self.path)

    def __repr__(self) -> str:
        return "<Trellis, size {0}>".format(len(self))

    @property
    def score(self) -> float:
        """Log probability of the decoded path, as recorded in the score table.

        Returns:
            The largest entry of the final column of the score table.
        """
        return float(numpy.max(self.scores[:, -1]))


def tie_break_argmax(score_0: float, score_1: float, prefer_state_on_tie: int = PREFER_STATE_ON_TIE) -> int:
    """Choose the state with the larger score.

    Args:
        score_0: Score of state 0.
        score_1: Score of state 1.
        prefer_state_on_tie: The state returned when both scores are equal.

    Returns:
        0 or 1.
    """
    if score_0 > score_1:
        return 0
    elif score_0 < score_1:
        return 1
    return prefer_state_on_tie


def _check_options(start_state: int, prefer_state_on_tie: int, emission_lag: int) -> None:
    if start_state not in STATES:
        raise ValueError("start_state must be one of {}".format(STATES))
    if prefer_state_on_tie not in STATES:
        raise ValueError("prefer_state_on_tie must be one of {}".format(STATES))
    if emission_lag not in (0, 1):
        raise ValueError("emission_lag must be 0 or 1")


def _as_observations(observations: typing.Sequence[typing.Union[int, float]]) -> numpy.ndarray:
    sequence = numpy.asarray(observations)
    if sequence.ndim != 1:
        raise ValueError("Observations must be a one-dimensional sequence")
    if len(sequence) == 0:
        raise ValueError("Cannot decode an empty observation sequence")
    if not numpy.issubdtype(sequence.dtype, numpy.number):
        raise ValueError("Observations must be numeric, not {}".format(sequence.dtype))
    return sequence


def _emission_columns(sequence: numpy.ndarray, emissions: EmissionModel, emission_lag: int) -> numpy.ndarray:
    # every observation is checked, including those no score column uses
    table = emissions.log_probability_table(sequence)

    # column i of the score table uses observation i - emission_lag, for i >= 1
    used = table[:, 1 - emission_lag : len(sequence) - emission_lag]
    return numpy.concatenate((numpy.zeros((len(STATES), 1)), used), axis=1)


def decode(
    observations: typing.Sequence[typing.Union[int, float]],
    transitions: TransitionMatrix,
    emissions: EmissionModel,
    start_state: int = 0,
    prefer_state_on_tie: int = PREFER_STATE_ON_TIE,
    emission_lag: int = 0,
    verbose: bool = False,
) -> Trellis:
    """Find the most likely latent state path for an observation sequence.

    Args:
        observations: The observed counts or symbols, of length n >= 1.
        transitions: Transition log probabilities between the two states.
        emissions: The emission model, queried once for the whole sequence.
        start_state: The known state at position 0.
        prefer_state_on_tie: The state chosen whenever two candidate scores are equal.
        emission_lag: 0 if score column i uses observation i, or 1 if it uses observation
            i - 1. The first observation then contributes nothing, and the last
            observation is ignored.
        verbose: Flag to indicate whether a progress bar and summary should be printed.

    Returns:
        A Trellis containing the score table, the backpointer table, and the decoded path.

    Raises:
        ValueError: for an empty or malformed observation sequence, or invalid options.

    """
    _check_options(start_state, prefer_state_on_tie, emission_lag)
    sequence = _as_observations(observations)
    n = len(sequence)

    # emissions are computed up front so that bad observations fail before any work
    emission_scores = _emission_columns(sequence, emissions, emission_lag)

    # initialise tables with the known starting state
    scores = numpy.full((len(STATES), n), -numpy.inf)
    pointers = numpy.zeros((len(STATES), n), dtype=int)
    scores[start_state, 0] = 0.0

    # forward pass
    for i in tqdm.tqdm(range(1, n), disable=not verbose):
        for j in STATES:
            score_0 = scores[0, i - 1] + transitions[0, j]
            score_1 = scores[1, i - 1] + transitions[1, j]
            k = tie_break_argmax(score_0, score_1, prefer_state_on_tie)
            scores[j, i] = emission_scores[j, i] + (score_0, score_1)[k]
            pointers[j, i] = k

    # traceback
    path = numpy.empty(n, dtype=int)
    path[n - 1] = tie_break_argmax(scores[0, n - 1], scores[1, n - 1], prefer_state_on_tie)
    for i in range(n - 2, 0, -1):
        path[i] = pointers[path[i + 1], i + 1]
    path[0] = start_state

    trellis = Trellis(scores, pointers, path, start_state=start_state, emission_lag=emission_lag)
    if verbose:
        switches = int(numpy.count_nonzero(numpy.diff(path)))
        tqdm.tqdm.write(
            "Decoded {} observations, log probability: {:.4f}, state changes: {}".format(n, trellis.score, switches)
        )
    return trellis


def path_log_likelihood(
    observations: typing.Sequence[typing.Union[int, float]],
    path: typing.Sequence[int],
    transitions: TransitionMatrix,
    emissions: EmissionModel,
    start_state: int = 0,
    emission_lag: int = 0,
) -> float:
    """Log probability of a given latent path, scored the same way as the decoder scores paths.

    This lets any path (for example a known reference path) be compared to a decoded
    path. For a decoded path, the result equals `Trellis.score`.

    Args:
        observations: The observed counts or symbols.
        path: A latent state for every observation.
        transitions: Transition log probabilities between the two states.
        emissions: The emission model.
        start_state: The known state at position 0.
        emission_lag: 0 if position i is paired with observation i, or 1 if it is paired
            with observation i - 1.

    Returns:
        A float for the log likelihood of the path; -inf if the path does not begin in
            the starting state.

    Raises:
        ValueError: if the path and observations have different lengths.

    """
    _check_options(start_state, PREFER_STATE_ON_TIE, emission_lag)
    sequence = _as_observations(observations)
    states = numpy.asarray(path, dtype=int)
    if states.shape != sequence.shape:
        raise ValueError("Path has length {} but there are {} observations".format(len(states), len(sequence)))
    if numpy.any((states < 0) | (states >= len(STATES))):
        raise ValueError("Path states must be one of {}".format(STATES))

    emission_scores = _emission_columns(sequence, emissions, emission_lag)
    if states[0] != start_state:
        return -numpy.inf

    positions = numpy.arange(1, len(states))
    log_likelihoods = (
        sum(transitions[states[i - 1], states[i]] for i in positions),
        sum(emission_scores[states[i], i] for i in positions),
    )
    return float(sum(log_likelihoods))
