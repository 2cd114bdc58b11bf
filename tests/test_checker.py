import numpy as np
import pandas as pd
import pytest

from pedkit import InvalidColumnSpecError, check_pedigree

from .fixtures import canonical, incomplete, pedigree, scrambled


def test_canonical_pedigree_passes_everything():
    check = check_pedigree(canonical)
    assert check.fully_correct
    assert check.failed() == []


def test_incomplete_but_otherwise_correct():
    check = check_pedigree(incomplete, ["self", "dad", "mum"])
    assert not check.complete
    assert check.consecutive and check.ancestors_precede and check.sorted


def test_scrambled_pedigree_fails_all_checks():
    ped = scrambled(incomplete).astype({"mum": float})
    ped.loc[1, "mum"] = np.nan
    check = check_pedigree(ped)
    assert check.as_dict() == {
        "consecutive": False,
        "complete": False,
        "ancestors_precede": False,
        "sorted": False,
    }


def test_zero_and_null_are_both_unknown():
    ped = pd.DataFrame({"self": [1, 2, 3], "a": [0, None, 1], "b": [np.nan, 0, 2]})
    assert check_pedigree(ped).fully_correct


def test_symbolic_ids():
    check = check_pedigree(pedigree, ["id", "mother_id", "father_id"])
    assert not check.consecutive  # имеет смысл только после перекодирования
    assert check.complete
    assert check.ancestors_precede
    assert not check.sorted  # "A" идёт после "P2"


def test_own_parent_does_not_precede():
    ped = pd.DataFrame({"self": [1, 2], "a": [0, 2], "b": [0, 1]})
    check = check_pedigree(ped)
    assert not check.ancestors_precede
    assert check.complete and check.sorted and check.consecutive


def test_mixed_identifiers_reported_not_raised():
    ped = pd.DataFrame({"self": [1, "x", 3], "a": [0, 1, "x"], "b": [0, 0, 0]})
    check = check_pedigree(ped)
    assert not check.sorted
    assert not check.consecutive
    assert check.complete


def test_input_is_not_mutated():
    ped = scrambled(incomplete)
    before = ped.copy()
    check_pedigree(ped)
    pd.testing.assert_frame_equal(ped, before)


@pytest.mark.parametrize("columns", [(0, 1), (0, 1, 5), ("self", "dad", "nope"), (0, "dad", "mum"), (0, 0, 1)])
def test_unresolvable_selector(columns):
    with pytest.raises(InvalidColumnSpecError):
        check_pedigree(canonical, columns)
