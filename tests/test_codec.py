import numpy as np
import pytest

from pedkit import (
    DuplicateDefinitionError,
    IdentityCodec,
    MixedIdentifierError,
    PedigreeError,
    UnknownCodeError,
    UnknownIdentifierError,
)


def test_sorted_policy_assigns_ascending_codes():
    codec = IdentityCodec.sorted([93, 8, 40, None, 8])
    assert codec.old_to_new == {8: 1, 40: 2, 93: 3}
    assert codec.new_to_old == {1: 8, 2: 40, 3: 93}
    assert len(codec) == 3


def test_round_trip_for_symbolic_ids():
    ids = ["P2", "G1", "B", "A", "P1"]
    codec = IdentityCodec.sorted(ids)
    for x in ids:
        assert codec.decode(codec.encode(x)) == x
    assert codec.encode("A") == 1


def test_identity_on_dense_integers():
    assert IdentityCodec.sorted([3, 1, 2]).is_identity()
    assert not IdentityCodec.sorted([5, 6, 7]).is_identity()


def test_encode_unknown_fails():
    codec = IdentityCodec.sorted([5, 6])
    with pytest.raises(UnknownIdentifierError):
        codec.encode(7)
    assert codec.encode_parent(None) == 0


@pytest.mark.parametrize("code", [0, 3, -1, 1.5, "1"])
def test_decode_outside_range_fails(code):
    codec = IdentityCodec.sorted([5, 6])
    with pytest.raises(UnknownCodeError):
        codec.decode(code)


def test_duplicate_self_definition():
    with pytest.raises(DuplicateDefinitionError) as err:
        IdentityCodec.check_unique([1, 2, 2, 3, 3])
    assert sorted(err.value.duplicates) == [2, 3]
    with pytest.raises(DuplicateDefinitionError):
        IdentityCodec(["a", "b", "a"])


def test_mixed_identifiers_rejected():
    with pytest.raises(MixedIdentifierError):
        IdentityCodec.sorted([1, "x"])


def test_decode_rejects_bool_codes():
    codec = IdentityCodec.sorted(["a", "b"])
    with pytest.raises(UnknownCodeError):
        codec.decode(True)
    with pytest.raises(UnknownCodeError):
        codec.decode(np.bool_(True))


def test_unknown_marker_cannot_be_coded():
    with pytest.raises(PedigreeError):
        IdentityCodec(["a", None])
