#!/usr/bin/env python3
"""
Viterbi decoding for two-state hidden Markov models. Given fixed transition and emission
parameters, the decoder recovers the most likely sequence of latent states behind an
observed emission sequence, working in log space to avoid underflow.
"""

from . import utils
from .chain import Chain, read_sequence, read_states
from .decoder import PREFER_STATE_ON_TIE, Trellis, decode, path_log_likelihood, tie_break_argmax
from .emission import DiscreteEmission, EmissionModel, PoissonEmission
from .model import HiddenMarkovModel, casino_model, poisson_model
from .transition import TransitionMatrix
