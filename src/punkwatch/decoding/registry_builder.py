"""Registry builder utilities for creating event registries from signatures.

This module provides the core tools for building EventRegistry instances:
- Generic `make_registry()` function for single or multiple signatures
- Signature parsing helpers for converting Solidity event signatures to EventSpec
"""

from __future__ import annotations

from typing import Optional, Union

from eth_utils import keccak

from .registry import add_event_spec
from .specs import DataFieldSpec, EventRegistry, EventSpec, TopicFieldSpec, default_template

# A signature alone, or (signature, message template)
SignatureEntry = Union[str, tuple[str, str]]


# ---- Helpers: build specs from event signature ----
def _split_params(params_str: str) -> list[str]:
    """Split the parameter list by commas while respecting nested tuple types.

    Very lightweight splitter sufficient for typical event signatures.
    """
    items: list[str] = []
    depth = 0
    buf: list[str] = []
    for ch in params_str:
        if ch == '(':
            depth += 1
            buf.append(ch)
        elif ch == ')':
            depth -= 1
            buf.append(ch)
        elif ch == ',' and depth == 0:
            items.append(''.join(buf).strip())
            buf = []
        else:
            buf.append(ch)
    if buf:
        items.append(''.join(buf).strip())
    return [i for i in items if i]


def _parse_param(p: str, fallback_name: str) -> tuple[str, str, bool]:
    """Parse one parameter fragment into (name, abi_type, indexed)."""
    s = ' '.join(p.strip().split())  # normalize spaces
    indexed = False
    if ' indexed ' in f' {s} ':
        indexed = True
        s = f' {s} '.replace(' indexed ', ' ').strip()
    tokens = s.split()
    if len(tokens) == 1:
        # Unnamed parameter
        return (fallback_name, tokens[0], indexed)
    # Last token is the name, the rest is the type (can include tuple syntax)
    return (tokens[-1], ' '.join(tokens[:-1]), indexed)


def event_topic0(canonical_signature: str) -> str:
    """keccak256 of 'Name(type,...)' as lowercase 0x-hex."""
    return '0x' + keccak(text=canonical_signature).hex()


def event_spec_from_signature(signature: str, template: Optional[str] = None) -> EventSpec:
    """Build an EventSpec from a Solidity event signature string.

    Example input:
      "PunkBidEntered(uint256 indexed punkIndex, uint256 value, address indexed fromAddress)"
    """
    sig = signature.strip()
    open_paren = sig.find('(')
    close_paren = sig.rfind(')')
    if open_paren == -1 or close_paren == -1 or close_paren < open_paren:
        raise ValueError(f"Invalid event signature: {signature}")
    name = sig[:open_paren].strip()
    params_str = sig[open_paren + 1 : close_paren].strip()

    parsed = []
    indexed_params: list[tuple[str, str]] = []  # (name, type)
    data_params: list[tuple[str, str]] = []  # (name, type)
    for i, part in enumerate(_split_params(params_str)):
        name_i, abi_type_i, is_indexed = _parse_param(part, fallback_name=f"arg{i}")
        parsed.append((name_i, abi_type_i, is_indexed))
        if is_indexed:
            indexed_params.append((name_i, abi_type_i))
        else:
            data_params.append((name_i, abi_type_i))

    # topic0 hashes the canonical type list (no names, no 'indexed')
    canonical_signature = f"{name}({','.join(t for (_, t, _) in parsed)})"

    topic_fields = [TopicFieldSpec(n, idx + 1, t) for idx, (n, t) in enumerate(indexed_params)]
    data_fields = [DataFieldSpec(n, idx, t) for idx, (n, t) in enumerate(data_params)]

    return EventSpec(
        topic0=event_topic0(canonical_signature),
        name=name,
        signature=canonical_signature,
        topic_fields=topic_fields,
        data_fields=data_fields,
        template=template if template is not None else default_template(topic_fields, data_fields),
    )


def make_registry(signatures: SignatureEntry | list[SignatureEntry]) -> EventRegistry:
    """Create a registry from one or multiple event signatures.

    Args:
        signatures: A signature string, a (signature, template) pair, or a list
            of either. List order is the decode priority order.

    Returns:
        EventRegistry with entries for each signature
    """
    reg: EventRegistry = {}

    sig_list = signatures if isinstance(signatures, list) else [signatures]

    for entry in sig_list:
        if isinstance(entry, tuple):
            signature, template = entry
            add_event_spec(reg, event_spec_from_signature(signature, template))
        else:
            add_event_spec(reg, event_spec_from_signature(entry))

    return reg
