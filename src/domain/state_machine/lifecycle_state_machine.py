from src.domain.enums.listing_state import ListingState


# Mapping of valid transitions: from_state -> set of allowed to_states
VALID_TRANSITIONS: dict[ListingState, frozenset[ListingState]] = {
    ListingState.DRAFT: frozenset({ListingState.PUBLISHED}),
    # Terminal state, no valid outgoing transitions
    ListingState.PUBLISHED: frozenset(),
}


class InvalidStateTransitionError(Exception):
    """Raised when an invalid state transition is attempted."""

    def __init__(self, from_state: ListingState, to_state: ListingState) -> None:
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(
            f"Invalid transition from {from_state.value} to {to_state.value}. "
            f"Allowed transitions: {[s.value for s in VALID_TRANSITIONS.get(from_state, frozenset())]}"
        )


class LifecycleStateMachine:
    """
    Validates state transitions for the listing lifecycle.

    Stateless: call with explicit states.
    """

    def can_transition(self, from_state: ListingState, to_state: ListingState) -> bool:
        """Return True if transitioning from_state → to_state is permitted."""
        if from_state.is_terminal:
            return False
        return to_state in VALID_TRANSITIONS.get(from_state, frozenset())

    def validate_transition(self, from_state: ListingState, to_state: ListingState) -> None:
        """Raise InvalidStateTransitionError if the transition is not permitted."""
        if not self.can_transition(from_state, to_state):
            raise InvalidStateTransitionError(from_state, to_state)

    def get_allowed_transitions(self, from_state: ListingState) -> frozenset[ListingState]:
        """Return the set of states reachable from from_state."""
        return VALID_TRANSITIONS.get(from_state, frozenset())
