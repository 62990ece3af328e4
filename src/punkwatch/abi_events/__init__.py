import json
from collections.abc import Iterable, Sequence
from importlib import resources
from pathlib import Path
from typing import Any, Literal

from eth_utils.abi import event_signature_to_log_topic
from pydantic import BaseModel

from punkwatch.decoding.registry import add_event_spec
from punkwatch.decoding.specs import DataFieldSpec, EventRegistry, EventSpec, TopicFieldSpec, default_template


class AbiInput(BaseModel):
    indexed: bool
    internalType: str | None = None
    name: str
    type: str


class AbiEvent(BaseModel):
    anonymous: bool = False
    inputs: Sequence[AbiInput]
    name: str
    type: Literal["event"]


def get_event_signature(event: AbiEvent):
    return f"{event.name}({','.join(event_input.type for event_input in event.inputs)})"


def get_event_topic0(event: AbiEvent):
    return "0x" + event_signature_to_log_topic(get_event_signature(event)).hex()


def get_event_topic_field_specs(event: AbiEvent):
    return [
        TopicFieldSpec(event_input.name, event_input_idx + 1, event_input.type)
        for event_input_idx, event_input in enumerate(
            [event_input for event_input in event.inputs if event_input.indexed]
        )
    ]


def get_event_data_field_specs(event: AbiEvent):
    return [
        DataFieldSpec(event_input.name, event_input_idx, event_input.type)
        for event_input_idx, event_input in enumerate(
            [event_input for event_input in event.inputs if not event_input.indexed]
        )
    ]


def get_event_spec(event: AbiEvent, template: str | None = None):
    topic_fields = get_event_topic_field_specs(event)
    data_fields = get_event_data_field_specs(event)
    return EventSpec(
        topic0=get_event_topic0(event),
        name=event.name,
        signature=get_event_signature(event),
        topic_fields=topic_fields,
        data_fields=data_fields,
        template=template if template is not None else default_template(topic_fields, data_fields),
    )


AbiJson = Iterable[dict[str, Any]]
AbiSpec = AbiJson | Path


def _load_abi(abi: AbiSpec) -> AbiJson:
    if isinstance(abi, Path):
        return json.loads(abi.read_text())
    return abi


def cryptopunks_abi_path() -> Path:
    """Path of the bundled CryptoPunks market events ABI."""
    return Path(str(resources.files("punkwatch.abi_events").joinpath("cryptopunks_market_events.json")))


def get_events_from_abi(abi: AbiSpec) -> dict[str, AbiEvent]:
    abi = _load_abi(abi)
    return {entry["name"]: AbiEvent.model_validate(entry) for entry in abi if entry["type"] == "event"}


def make_event_registry_from_events(
    events: Iterable[AbiEvent], templates: dict[str, str] | None = None
) -> EventRegistry:
    reg: EventRegistry = {}
    templates = templates or {}

    for event in events:
        add_event_spec(
            reg,
            get_event_spec(event, templates.get(event.name)),
        )

    return reg


def make_event_registry_from_abi(abi: AbiSpec, templates: dict[str, str] | None = None) -> EventRegistry:
    return make_event_registry_from_events(get_events_from_abi(abi).values(), templates)
