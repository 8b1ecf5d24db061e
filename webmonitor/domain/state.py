from webmonitor.domain.entities import SessionPhase


def can_transition(current: SessionPhase, new: SessionPhase) -> bool:
    """
    Session phases only move forward: uninitialized -> loading -> ready.
    Ready is terminal for the lifetime of the process.
    """
    if current == new:
        return True

    if current == SessionPhase.UNINITIALIZED:
        return new == SessionPhase.LOADING

    if current == SessionPhase.LOADING:
        return new == SessionPhase.READY

    return False


def transition(current: SessionPhase, new: SessionPhase) -> SessionPhase:
    """
    Return the new phase.
    Raises ValueError if the transition is invalid.
    """
    if not can_transition(current, new):
        raise ValueError(f"Invalid session transition from {current.value} to {new.value}")
    return new
