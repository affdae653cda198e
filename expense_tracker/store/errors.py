"""Exceptions raised by the record store. All messages are user-facing."""


class RecordStoreError(Exception):
    """Base exception for record store operations."""
    pass


class StoreNotReadyError(RecordStoreError):
    """The store was used before its saved data finished loading."""

    def __init__(self):
        super().__init__("Your data is still loading. Please try again in a moment.")


class DuplicateEmailError(RecordStoreError):
    """An account with this email already exists."""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"An account with email {email} already exists.")


class UserNotFoundError(RecordStoreError):
    """No account matches the given email (or there are no accounts)."""

    def __init__(self, email: str = ""):
        self.email = email
        if email:
            message = f"No account found for {email}."
        else:
            message = "No registered account found on this device."
        super().__init__(message)


class NoCurrentUserError(RecordStoreError):
    """The operation needs a signed-in user."""

    def __init__(self):
        super().__init__("Please sign in first.")


class UserMismatchError(RecordStoreError):
    """A record for one user was submitted as another user's update."""

    def __init__(self):
        super().__init__("Only your own profile can be updated.")
