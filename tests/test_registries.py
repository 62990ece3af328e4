import pytest

from punkwatch.abi_events import (
    cryptopunks_abi_path,
    get_event_topic0,
    get_events_from_abi,
    make_event_registry_from_abi,
)
from punkwatch.decoding.registries import (
    CRYPTOPUNKS_EVENTS,
    make_bid_entered_registry,
    make_cryptopunks_registry,
)
from punkwatch.decoding.registry import restrict_registry
from punkwatch.decoding.registry_builder import event_spec_from_signature
from punkwatch.decoding.specs import EventSpec, iter_registry_specs

TRANSFER_T0 = "0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef"


def test_make_cryptopunks_registry():
    registry = make_cryptopunks_registry()
    names = [spec.name for spec in iter_registry_specs(registry)]

    assert names == [
        "Assign",
        "Transfer",
        "PunkTransfer",
        "PunkOffered",
        "PunkBidEntered",
        "PunkBidWithdrawn",
        "PunkBought",
        "PunkNoLongerForSale",
    ]
    assert len(registry) == len(CRYPTOPUNKS_EVENTS)
    assert registry[TRANSFER_T0][0].name == "Transfer"


def test_make_bid_entered_registry():
    registry = make_bid_entered_registry()

    assert [spec.name for spec in iter_registry_specs(registry)] == ["PunkBidEntered"]


def test_restrict_registry_unknown_event():
    with pytest.raises(ValueError, match="Unknown event"):
        restrict_registry(make_cryptopunks_registry(), ["Swap"])


def test_event_spec_from_signature_layout():
    spec = event_spec_from_signature(
        "PunkBought(uint256 indexed punkIndex, uint256 value, address indexed fromAddress, address indexed toAddress)"
    )

    assert spec.signature == "PunkBought(uint256,uint256,address,address)"
    assert [(f.name, f.index, f.type) for f in spec.topic_fields] == [
        ("punkIndex", 1, "uint256"),
        ("fromAddress", 2, "address"),
        ("toAddress", 3, "address"),
    ]
    assert [(f.name, f.word_index, f.type) for f in spec.data_fields] == [("value", 0, "uint256")]
    assert spec.template == "punkIndex={punkIndex} fromAddress={fromAddress} toAddress={toAddress} value={value}"


def test_event_spec_rejects_unknown_template_field():
    with pytest.raises(ValueError, match="non-existent field"):
        event_spec_from_signature("PunkNoLongerForSale(uint256 indexed punkIndex)", "punk {tokenId}")


def test_invalid_signature():
    with pytest.raises(ValueError, match="Invalid event signature"):
        event_spec_from_signature("PunkNoLongerForSale")


def test_make_event_registry_from_abi():
    abi = cryptopunks_abi_path()
    assert abi.is_file()
    registry = make_event_registry_from_abi(abi)
    events = get_events_from_abi(abi)
    assert len(registry) == 8  # ABI defines 8 events
    assert len(registry) == len(events)
    assert set(registry.keys()) == set([get_event_topic0(event) for event in events.values()])


def test_abi_registry_matches_signature_registry():
    from_abi = make_event_registry_from_abi(cryptopunks_abi_path())
    from_signatures = make_cryptopunks_registry()

    assert list(from_abi.keys()) == list(from_signatures.keys())
    for key in from_abi:
        a: EventSpec = from_abi[key][0]
        s: EventSpec = from_signatures[key][0]
        assert (a.name, a.signature, a.topic_fields, a.data_fields) == (
            s.name,
            s.signature,
            s.topic_fields,
            s.data_fields,
        )


def test_event_spec_field_names_topics_then_data():
    spec = event_spec_from_signature(
        "PunkOffered(uint256 indexed punkIndex, uint256 minValue, address indexed toAddress)"
    )

    assert spec.field_names == ["punkIndex", "toAddress", "minValue"]
