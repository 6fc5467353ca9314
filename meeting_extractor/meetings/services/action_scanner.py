"""Stateful scan of the action items region of a meeting summary.

The summary announces each assignee in a section block ("*Jane Doe:*"), lists
their tasks in the following actions block, and closes the whole region with a
divider::

    *Action Items:*   -> InRegion
    *Jane Doe:*       -> AwaitingTasks("Jane Doe")
    [x] task one      -> InRegion, emits ActionGroup("Jane Doe", ["task one"])
    ----------        -> Closed
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
import re

import structlog

from meeting_extractor.meetings.models import (
    ActionGroup,
    Actions,
    Block,
    Button,
    Checkbox,
    Divider,
    Section,
)
from meeting_extractor.meetings.services.field_extractors import (
    ACTION_ITEMS_LABELS,
    has_label,
)

logger = structlog.get_logger(__name__)

# Whole block is a bold name with a trailing colon, e.g. "*Jane Doe:*"
ASSIGNEE_PATTERN = re.compile(r"^\*([^:*]+):\*$")


@dataclass(frozen=True)
class Idle:
    """Before any action items label."""


@dataclass(frozen=True)
class InRegion:
    """Inside the region, no assignee announced."""


@dataclass(frozen=True)
class AwaitingTasks:
    """Assignee announced, waiting for their actions block."""

    assignee: str


@dataclass(frozen=True)
class Closed:
    """Region closed by a divider. Only a fresh label reopens it."""


ScanState = Idle | InRegion | AwaitingTasks | Closed


def match_assignee(text: str) -> str | None:
    match = ASSIGNEE_PATTERN.match(text.strip())
    if not match:
        return None
    name = match.group(1).strip()
    return name or None


def collect_tasks(block: Actions) -> list[str]:
    """One task per checkbox option or button label, blanks dropped."""
    tasks: list[str] = []
    for item in block.items:
        if isinstance(item, Checkbox):
            labels = item.options
        elif isinstance(item, Button):
            labels = (item.label,)
        else:
            continue
        tasks.extend(label.strip() for label in labels if label.strip())
    return tasks


def step(state: ScanState, block: Block) -> tuple[ScanState, ActionGroup | None]:
    """Advance the scan by one block."""
    in_region = isinstance(state, InRegion | AwaitingTasks)

    if isinstance(block, Section):
        if has_label(block.text, ACTION_ITEMS_LABELS):
            # Re-announcing the region inside it keeps the pending assignee
            return (state if in_region else InRegion()), None
        if in_region:
            name = match_assignee(block.text)
            if name is not None:
                return AwaitingTasks(name), None
        return state, None

    if isinstance(block, Actions) and isinstance(state, AwaitingTasks):
        tasks = collect_tasks(block)
        if not tasks:
            return state, None
        return InRegion(), ActionGroup(assignee=state.assignee, tasks=tasks)

    if isinstance(block, Divider) and in_region:
        return Closed(), None

    return state, None


def scan_action_items(blocks: Iterable[Block]) -> list[ActionGroup]:
    """
    Fold the block sequence into per-assignee action groups.

    Groups for the same literal assignee name are merged, keeping the order in
    which each assignee first appeared.
    """
    state: ScanState = Idle()
    merged: dict[str, list[str]] = {}

    for index, block in enumerate(blocks):
        state, group = step(state, block)
        if group is None:
            continue
        if group.assignee in merged:
            logger.debug(
                "Merging repeated assignee",
                assignee=group.assignee,
                block_index=index,
                added_tasks=len(group.tasks),
            )
            merged[group.assignee].extend(group.tasks)
        else:
            merged[group.assignee] = list(group.tasks)

    return [ActionGroup(assignee=name, tasks=tasks) for name, tasks in merged.items()]
