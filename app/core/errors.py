"""
Domain exceptions raised by the service layer.

Routes translate these into HTTP status codes; services never import FastAPI.
"""


class CounterAppError(Exception):
    """Base class for service-layer errors."""


class UserNotFoundError(CounterAppError):
    def __init__(self, user_id: int):
        super().__init__(f"User {user_id} not found")
        self.user_id = user_id


class InvalidCredentialsError(CounterAppError):
    """Unknown email or wrong password. Deliberately does not say which."""

    def __init__(self):
        super().__init__("Invalid credentials")
