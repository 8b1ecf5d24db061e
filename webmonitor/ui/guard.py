from enum import Enum

from webmonitor.ui.state import AppState


class Access(str, Enum):
    # Session still resolving its stored credential: render a placeholder.
    PENDING = "pending"
    DENIED = "denied"
    GRANTED = "granted"


def check_access(state: AppState) -> Access:
    """Decide whether a protected view may render.

    DENIED (redirect to login) is only ever returned once the session is ready.
    """
    if state.loading:
        return Access.PENDING
    if state.current_user is None:
        return Access.DENIED
    return Access.GRANTED
