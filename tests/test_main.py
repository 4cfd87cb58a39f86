"""
Smoke tests for the command-line interface.
"""

import pytest

from dfa_discovery.main import main
from dfa_discovery.samples import EVEN_ODD_DFA


def test_no_command(capsys):
    with pytest.raises(SystemExit) as exc:
        main([])
    assert exc.value.code == 1


def test_samples(capsys):
    main(["samples"])
    out = capsys.readouterr().out

    assert "even-odd" in out
    assert "bit-counting" in out
    assert EVEN_ODD_DFA.to_string() in out


def test_evaluate_sample(capsys):
    main(["evaluate", "even-odd", "even-odd", "-l", "4"])
    out = capsys.readouterr().out

    assert "Accuracy: 1.0000 (31/31)" in out
    assert "Mismatches" not in out


def test_evaluate_encoded_dfa(capsys):
    main(["evaluate", ">q0- 0:q0 1:q0", "double-zero", "-l", "3", "--show", "2"])
    out = capsys.readouterr().out

    assert "Accuracy: 0.8000 (12/15)" in out
    assert "Mismatches (3): '00', '000' ..." in out


def test_evaluate_bad_dfa(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["evaluate", ">q0- 0:q9 1:q0", "even-odd"])
    assert exc.value.code == 1
    assert "Error parsing DFA" in capsys.readouterr().out


def test_search(capsys):
    main(["search", "even-odd", "-l", "3", "-g", "200", "--seed", "1"])
    out = capsys.readouterr().out

    assert "Starting DFA search..." in out
    assert "Gen     0: Best=" in out
    assert "Best DFA found after" in out


def test_search_bad_weights(capsys):
    args = ["search", "even-odd", "-g", "10"]
    for action in ["change-transition", "change-accepting", "change-initial", "add-state", "remove-state"]:
        args += [f"--{action}", "0"]

    with pytest.raises(SystemExit) as exc:
        main(args)
    assert exc.value.code == 1
    assert "Error in mutation weights" in capsys.readouterr().out


@pytest.mark.parametrize("option", [["-p", "0"], ["-l", "-1"]])
def test_search_bad_settings(option, capsys):
    with pytest.raises(SystemExit) as exc:
        main(["search", "even-odd", "-g", "10"] + option)
    assert exc.value.code == 1
    assert "Error in search settings" in capsys.readouterr().out


def test_evaluate_bad_length(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["evaluate", "even-odd", "even-odd", "-l", "-1"])
    assert exc.value.code == 1
    assert "Error in evaluation settings" in capsys.readouterr().out
