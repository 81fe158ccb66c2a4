import numpy
import pytest

import viterbi_hmm


def test_chain() -> None:
    chain = viterbi_hmm.Chain([1, 6, 6, 2], [0, 1, 1, 0])
    assert len(chain) == 4
    assert chain.T == len(chain)
    assert chain.tabulate().tolist() == [[0, 1], [1, 6], [1, 6], [0, 2]]
    assert chain.accuracy([0, 1, 1, 0]) == 1.0
    assert chain.accuracy([0, 0, 0, 0]) == 0.5

    with pytest.raises(ValueError, match="Reference sequence has length 2"):
        viterbi_hmm.Chain([1, 2, 3], [0, 1])
    with pytest.raises(ValueError, match="Path has length"):
        chain.accuracy([0, 1])


def test_chain_without_reference() -> None:
    chain = viterbi_hmm.Chain([1, 6, 6, 6, 6, 6])
    assert chain.reference_sequence is None
    with pytest.raises(ValueError, match="no reference"):
        chain.accuracy([0] * 6)
    with pytest.raises(ValueError, match="no reference"):
        chain.tabulate()

    trellis = chain.decode(viterbi_hmm.casino_model())
    assert trellis.path.tolist() == [0, 1, 1, 1, 1, 1]


def test_print() -> None:
    # checks that printing does not cause an error
    chain = viterbi_hmm.Chain(list(range(100)), [x % 2 for x in range(100)])
    assert "size=100" in str(chain)
    assert "..." in str(chain)
    assert repr(chain) == "<Chain, size 100>"
    assert "..." not in str(viterbi_hmm.Chain([1, 2, 3]))


def test_read_sequence(tmp_path) -> None:
    path = tmp_path / "sequence.txt"
    path.write_text("1\n6\n6 2\n\n3\n")
    assert viterbi_hmm.read_sequence(path).tolist() == [1, 6, 6, 2, 3]
    assert viterbi_hmm.read_sequence(path, n=3).tolist() == [1, 6, 6]

    with pytest.raises(ValueError, match="expected at least 6"):
        viterbi_hmm.read_sequence(path, n=6)
    with pytest.raises(ValueError, match="must be positive"):
        viterbi_hmm.read_sequence(path, n=0)


def test_read_sequence_errors(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        viterbi_hmm.read_sequence(tmp_path / "missing.txt")

    path = tmp_path / "empty.txt"
    path.write_text("\n\n")
    with pytest.raises(ValueError, match="no observations"):
        viterbi_hmm.read_sequence(path)

    path = tmp_path / "bad.txt"
    path.write_text("1\n2\nthree\n")
    with pytest.raises(ValueError, match="non-integer"):
        viterbi_hmm.read_sequence(path)


def test_read_states(tmp_path) -> None:
    # index and state on every line
    path = tmp_path / "states.txt"
    path.write_text("1 1\n2 1\n3 2\n4 2\n")
    assert viterbi_hmm.read_states(path, ("1", "2")).tolist() == [0, 0, 1, 1]

    # bare labels on every line
    path = tmp_path / "casino.txt"
    path.write_text("F\nF\nL\r\nL\nF\n")
    assert viterbi_hmm.read_states(path, ("F", "L"), n=5).tolist() == [0, 0, 1, 1, 0]

    with pytest.raises(ValueError, match="holds 5 states, expected 4"):
        viterbi_hmm.read_states(path, ("F", "L"), n=4)
    with pytest.raises(ValueError, match="unknown state labels"):
        viterbi_hmm.read_states(path, ("1", "2"))


def test_from_files(tmp_path) -> None:
    sequence_file = tmp_path / "sequence.txt"
    sequence_file.write_text("\n".join(map(str, [1, 1, 1, 6, 6, 6, 6, 6, 6])))
    state_file = tmp_path / "states.txt"
    state_file.write_text("\n".join("FFFLLLLLL"))

    chain = viterbi_hmm.Chain.from_files(sequence_file, state_file, labels=("F", "L"))
    assert len(chain) == 9
    assert isinstance(chain.emission_sequence, numpy.ndarray)
    trellis = chain.decode(viterbi_hmm.casino_model())
    assert chain.accuracy(trellis.path) == 1.0

    # reference file must match the sequence length
    with pytest.raises(ValueError, match="holds 9 states, expected 5"):
        viterbi_hmm.Chain.from_files(sequence_file, state_file, labels=("F", "L"), n=5)


def test_chain_fractional_emissions() -> None:
    with pytest.raises(ValueError, match="integer counts or symbols"):
        viterbi_hmm.Chain([1.7, 6.2])

    # whole numbers stored as floats are accepted
    chain = viterbi_hmm.Chain([1.0, 6.0])
    assert chain.emission_sequence.tolist() == [1, 6]
