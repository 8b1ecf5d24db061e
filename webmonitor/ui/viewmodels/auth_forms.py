import logging

from webmonitor.ports.api import display_message
from webmonitor.ports.ui import NavigatorPort
from webmonitor.services.session import SessionStore

logger = logging.getLogger(__name__)

HOME_ROUTE = "/"
REGISTERED_ROUTE = "/login?registered=true"

LOGIN_FAILED = "Invalid credentials"
SIGNUP_FAILED = "Failed to create account. Please try again."


class LoginFormModel:
    def __init__(self, session: SessionStore, navigator: NavigatorPort, registered: bool = False):
        self.session = session
        self.navigator = navigator
        self.registered = registered
        self.identifier = ""
        self.password = ""
        self.error = ""
        self.submitting = False

    def submit(self) -> bool:
        if self.submitting:
            return False
        if not self.identifier or not self.password:
            self.error = "Please enter your email or username and password."
            return False

        self.submitting = True
        self.error = ""
        try:
            self.session.login(self.identifier, self.password)
        except Exception as e:
            logger.info(f"Login failed: {e}")
            self.error = display_message(e, LOGIN_FAILED)
            return False
        finally:
            self.submitting = False

        self.navigator.go(HOME_ROUTE)
        return True


class SignupFormModel:
    def __init__(self, session: SessionStore, navigator: NavigatorPort):
        self.session = session
        self.navigator = navigator
        self.name = ""
        self.identifier = ""
        self.password = ""
        self.error = ""
        self.submitting = False

    def submit(self) -> bool:
        if self.submitting:
            return False
        if not self.name or not self.identifier or not self.password:
            self.error = "Please fill in all fields."
            return False

        self.submitting = True
        self.error = ""
        try:
            self.session.signup(self.name, self.identifier, self.password)
        except Exception as e:
            logger.info(f"Signup failed: {e}")
            self.error = display_message(e, SIGNUP_FAILED)
            return False
        finally:
            self.submitting = False

        # Signing up does not sign in.
        self.navigator.go(REGISTERED_ROUTE)
        return True
