"""Chat block JSON to Block model conversion."""

from collections.abc import Mapping
from typing import Any

import structlog

from meeting_extractor.meetings.models import (
    ActionElement,
    Actions,
    Block,
    Button,
    Checkbox,
    Divider,
    Other,
    Section,
)

logger = structlog.get_logger(__name__)


def parse_blocks(raw_blocks: Any) -> list[Block]:
    """
    Convert chat block JSON into the Block model.

    One output block per input element, so indices line up with the message.
    Anything that cannot be read becomes Other; nothing raises.
    """
    if not isinstance(raw_blocks, list):
        return []
    return [parse_block(raw) for raw in raw_blocks]


def parse_block(raw: Any) -> Block:
    if not isinstance(raw, Mapping):
        logger.debug("Skipping non-mapping block", raw_type=type(raw).__name__)
        return Other()

    block_type = raw.get("type")

    if block_type == "section":
        text = _text_of(raw.get("text"))
        if text is None:
            logger.debug("Section block without text", keys=sorted(raw))
            return Other(kind="section")
        return Section(text=text)

    if block_type == "actions":
        elements = raw.get("elements")
        if not isinstance(elements, list):
            logger.debug("Actions block without elements")
            return Other(kind="actions")
        items = [item for item in map(_parse_element, elements) if item is not None]
        return Actions(items=tuple(items))

    if block_type == "divider":
        return Divider()

    return Other(kind=block_type if isinstance(block_type, str) else None)


def _parse_element(raw: Any) -> ActionElement | None:
    if not isinstance(raw, Mapping):
        return None

    element_type = raw.get("type")
    if element_type == "checkboxes":
        options = raw.get("options")
        if not isinstance(options, list):
            return None
        labels = []
        for option in options:
            label = _option_label(option)
            if label is not None:
                labels.append(label)
        return Checkbox(options=tuple(labels))

    if element_type == "button":
        text = raw.get("text")
        label = _text_of(text)
        if label is None and isinstance(text, Mapping):
            label = _as_str(text.get("value"))
        return Button(label=label) if label is not None else None

    logger.debug("Ignoring unknown action element", element_type=element_type)
    return None


def _option_label(option: Any) -> str | None:
    # Option text is either a plain string or a text object; value is the last resort
    if not isinstance(option, Mapping):
        return None
    text = option.get("text")
    if isinstance(text, str):
        return text
    label = _text_of(text)
    if label is not None:
        return label
    return _as_str(option.get("value"))


def _text_of(text_obj: Any) -> str | None:
    if isinstance(text_obj, Mapping):
        return _as_str(text_obj.get("text"))
    return None


def _as_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None
