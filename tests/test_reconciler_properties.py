"""
Property-based tests for transaction field matching.
"""
from hypothesis import given, settings
from hypothesis import strategies as st

from intentstatus.models import UNCHECKED, Checked, ExpectedTransaction
from intentstatus.reconciler import find_mismatch

from tests.test_helpers import make_mined_transaction

address_strategy = st.binary(min_size=20, max_size=20).map(lambda b: "0x" + b.hex())
hash_strategy = st.binary(min_size=32, max_size=32).map(lambda b: "0x" + b.hex())
data_strategy = st.binary(max_size=100).map(lambda b: "0x" + b.hex())
value_strategy = st.integers(min_value=0, max_value=10**24)


@st.composite
def transactions(draw):
    return dict(
        hash=draw(hash_strategy),
        from_address=draw(address_strategy),
        to_address=draw(address_strategy),
        data=draw(data_strategy),
        value=draw(value_strategy),
    )


def _expected_for(tx) -> ExpectedTransaction:
    return ExpectedTransaction(
        tx_hash=tx["hash"].upper().replace("0X", "0x"),
        to=tx["to_address"].upper().replace("0X", "0x"),
        sender=Checked(tx["from_address"]),
        data=Checked(tx["data"]),
        value=Checked(tx["value"]),
    )


@settings(max_examples=50, deadline=None)
@given(tx=transactions())
def test_matching_transaction_has_no_mismatch(tx):
    assert find_mismatch(_expected_for(tx), make_mined_transaction(**tx)) is None


@settings(max_examples=50, deadline=None)
@given(tx=transactions(), field=st.sampled_from(["to", "from", "data", "value"]), data=st.data())
def test_single_tampered_field_is_reported(tx, field, data):
    tampered = dict(tx)
    if field == "to":
        tampered["to_address"] = data.draw(address_strategy.filter(lambda a: a != tx["to_address"]))
    elif field == "from":
        tampered["from_address"] = data.draw(address_strategy.filter(lambda a: a != tx["from_address"]))
    elif field == "data":
        tampered["data"] = data.draw(data_strategy.filter(lambda d: d != tx["data"]))
    else:
        tampered["value"] = data.draw(value_strategy.filter(lambda v: v != tx["value"]))

    assert find_mismatch(_expected_for(tx), make_mined_transaction(**tampered)) == field


@settings(max_examples=50, deadline=None)
@given(tx=transactions(), other=transactions())
def test_unchecked_fields_never_mismatch(tx, other):
    expected = ExpectedTransaction(
        tx_hash=tx["hash"], to=tx["to_address"], sender=UNCHECKED, data=UNCHECKED, value=UNCHECKED
    )
    mined = make_mined_transaction(
        hash=tx["hash"],
        to_address=tx["to_address"],
        from_address=other["from_address"],
        data=other["data"],
        value=other["value"],
    )

    assert find_mismatch(expected, mined) is None
