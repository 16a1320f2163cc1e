# Area: Lobby
"""
scrimflow._lobby.state_machine — Lobby State Machine
====================================================

Table of legal lobby transitions. The engine consults it for every
mutation, so no operation can move a lobby backwards or skip a step.
"""

import logging
from typing import Optional

from .enums import LobbyEvent, LobbyState

logger = logging.getLogger("scrimflow.lobby.state_machine")


# Valid state transitions: {current_state: {event: next_state}}
TRANSITIONS = {
    LobbyState.OPEN: {
        LobbyEvent.LOCK: LobbyState.LOCKED,
        LobbyEvent.DISTRIBUTE: LobbyState.DISTRIBUTING,
        LobbyEvent.FORCE_END: LobbyState.ENDED,
    },
    LobbyState.LOCKED: {
        LobbyEvent.DISTRIBUTE: LobbyState.DISTRIBUTING,
        LobbyEvent.FORCE_END: LobbyState.ENDED,
    },
    LobbyState.DISTRIBUTING: {
        LobbyEvent.FINISH: LobbyState.ENDED,
    },
    LobbyState.ENDED: {},
}


def can_transition(state: LobbyState, event: LobbyEvent) -> bool:
    """
    Check if an event is valid from a state.

    Args:
        state: Current lobby state
        event: The event to check

    Returns:
        True if the transition is valid, False otherwise
    """
    return event in TRANSITIONS.get(state, {})


def next_state(state: LobbyState, event: LobbyEvent) -> Optional[LobbyState]:
    """Return the target state for an event, or None if it is illegal."""
    return TRANSITIONS.get(state, {}).get(event)


def transition(state: LobbyState, event: LobbyEvent) -> LobbyState:
    """
    Resolve a transition.

    Args:
        state: Current lobby state
        event: The event triggering the transition

    Returns:
        The new state

    Raises:
        ValueError: If the transition is not valid
    """
    target = next_state(state, event)
    if target is None:
        raise ValueError(f"Invalid transition: {event.value} from {state.value}")
    logger.debug(f"Lobby state: {state.value} → {target.value} ({event.value})")
    return target
