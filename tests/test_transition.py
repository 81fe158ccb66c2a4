import math
import warnings

import numpy
import pytest

import viterbi_hmm


def test_from_probabilities() -> None:
    transitions = viterbi_hmm.TransitionMatrix.from_probabilities([[0.95, 0.05], [0.1, 0.9]])
    assert transitions[0, 0] == pytest.approx(math.log(0.95))
    assert transitions[1, 0] == pytest.approx(math.log(0.1))
    numpy.testing.assert_allclose(transitions.probabilities, [[0.95, 0.05], [0.1, 0.9]])
    repr(transitions)


def test_zero_probability() -> None:
    # zero entries become -inf without numpy warnings
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        transitions = viterbi_hmm.TransitionMatrix.from_probabilities([[1.0, 0.0], [0.5, 0.5]])
    assert transitions[0, 1] == -numpy.inf


def test_bad_shape() -> None:
    with pytest.raises(ValueError, match="shape"):
        viterbi_hmm.TransitionMatrix([[0.0, 0.0, 0.0], [0.0, 0.0, 0.0]])


def test_rows_not_distributions() -> None:
    with pytest.warns(UserWarning, match="from state 1 sum to"):
        viterbi_hmm.TransitionMatrix.from_probabilities([[0.5, 0.5], [0.5, 0.6]])


def test_read_only() -> None:
    transitions = viterbi_hmm.TransitionMatrix.from_probabilities([[0.5, 0.5], [0.5, 0.5]])
    with pytest.raises(ValueError):
        transitions.log_probabilities[0, 0] = 0.0
