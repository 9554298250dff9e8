"""Table state enumeration."""

from enum import Enum, auto


class TableState(Enum):
    """
    Table state machine states.

    Flow: SELECTING → CARRYING → SELECTING
    """

    # Hand empty, the source cursor picks a card
    SELECTING = auto()

    # Hand holds cards, the target cursor picks a pile
    CARRYING = auto()

    def __str__(self) -> str:
        return self.name.title()


# Valid state transitions
VALID_TRANSITIONS: dict[TableState, list[TableState]] = {
    TableState.SELECTING: [TableState.CARRYING],
    TableState.CARRYING: [TableState.SELECTING],
}


def is_valid_transition(from_state: TableState, to_state: TableState) -> bool:
    """
    Check if a state transition is valid.

    Args:
        from_state: Current state
        to_state: Desired state

    Returns:
        True if the transition is allowed
    """
    return to_state in VALID_TRANSITIONS.get(from_state, [])
