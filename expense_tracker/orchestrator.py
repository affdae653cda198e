"""
Main Orchestrator for Expense Tracker

This module ties together all the components and defines the flows
behind each screen:
1. Accounts (sign up, sign in, biometric sign in, sign out, profile edit)
2. Expenses (add expense, dashboard figures)

DESIGN DECISION: The orchestrator enforces the boundaries:
- Raw form text is validated before it reaches the store
- The store only ever sees typed models
- Biometric success is turned into a store sign-in here, not in the UI
"""

from typing import Optional

from expense_tracker.audit import AuditLogger
from expense_tracker.config import Settings, get_settings
from expense_tracker.insights.aggregator import DashboardSummary, summarize
from expense_tracker.models.forms import (
    ExpenseForm,
    ProfileForm,
    RegistrationForm,
    SignInForm,
)
from expense_tracker.models.user import User
from expense_tracker.services.biometrics import (
    BiometricAuthenticator,
    BiometricRejectedError,
    BiometricUnavailableError,
)
from expense_tracker.services.notifications import LogNotifier, NotifierInterface
from expense_tracker.services.storage import (
    BlobStoreInterface,
    InMemoryBlobStore,
    JsonFileBlobStore,
)
from expense_tracker.store import NoCurrentUserError, RecordStore
from expense_tracker.validation import InputValidator, ValidationFailedError


class AccountFlow:
    """
    Orchestrates sign up, sign in and profile changes.

    Every method either returns the affected user or raises an error
    whose message can be shown to the user as-is.
    """

    def __init__(
        self,
        store: RecordStore,
        validator: Optional[InputValidator] = None,
        biometric: Optional[BiometricAuthenticator] = None,
    ):
        self._store = store
        self._validator = validator or InputValidator()
        self._biometric = biometric

    def sign_up(self, form: RegistrationForm) -> User:
        """
        Register a new account from the sign-up form.

        Raises:
            ValidationFailedError: Bad input (nothing is stored)
            DuplicateEmailError: Email already registered
        """
        profile = self._validator.to_profile(form)
        return self._store.register(profile, form.password)

    def sign_in(self, form: SignInForm) -> User:
        """
        Raises:
            ValidationFailedError: Email or password left empty
            UserNotFoundError: Unknown email
        """
        result = self._validator.check_sign_in(form)
        if result.has_errors:
            raise ValidationFailedError(result)
        return self._store.authenticate(form.email, form.password)

    @property
    def biometric_available(self) -> bool:
        return self._biometric is not None and self._biometric.is_available

    def biometric_sign_in(self, reason: str = "Sign in to Expense Tracker") -> User:
        """
        Verify the device owner, then sign in the most recent account.

        Raises:
            BiometricUnavailableError: No biometric capability configured
            BiometricRejectedError: The owner was not verified
            UserNotFoundError: No account exists yet
        """
        if not self.biometric_available:
            raise BiometricUnavailableError("Biometric sign in is not available on this device.")
        if not self._biometric.verify_owner(reason):
            raise BiometricRejectedError("Biometric verification failed.")
        return self._store.sign_in_most_recent()

    def sign_out(self) -> None:
        self._store.sign_out()

    def update_profile(self, form: ProfileForm) -> User:
        """
        Apply the profile form to the signed-in user.

        The email cannot be changed here; whatever the form holds
        for email is replaced by the current one.

        Raises:
            NoCurrentUserError: Nobody is signed in
            ValidationFailedError: Bad input (nothing is stored)
        """
        current = self._store.current_user
        if current is None:
            raise NoCurrentUserError()

        form = form.model_copy(update={"email": current.email})
        profile = self._validator.to_profile(form)
        return self._store.update_profile(current.with_profile(profile))


class ExpenseFlow:
    """Orchestrates adding expenses and reading dashboard figures."""

    def __init__(
        self,
        store: RecordStore,
        validator: Optional[InputValidator] = None,
    ):
        self._store = store
        self._validator = validator or InputValidator()

    def add_expense(self, form: ExpenseForm) -> User:
        """
        Raises:
            ValidationFailedError: Bad category or amount (nothing is stored)
            NoCurrentUserError: Nobody is signed in
        """
        expense = self._validator.to_expense(form)
        return self._store.add_expense(expense)

    def dashboard(self) -> DashboardSummary:
        """
        Raises:
            NoCurrentUserError: Nobody is signed in
        """
        user = self._store.current_user
        if user is None:
            raise NoCurrentUserError()
        return summarize(user)


def create_blob_store(settings: Settings) -> BlobStoreInterface:
    """Build the configured blob store backend."""
    storage = settings.storage
    if storage.backend == "memory":
        return InMemoryBlobStore()
    return JsonFileBlobStore(storage.data_path, write_attempts=storage.write_retries)


def create_app_components(
    settings: Optional[Settings] = None,
    notifier: Optional[NotifierInterface] = None,
    biometric: Optional[BiometricAuthenticator] = None,
    blob_store: Optional[BlobStoreInterface] = None,
) -> tuple[RecordStore, AccountFlow, ExpenseFlow]:
    """
    Factory function to create all application components.

    The returned store is not loaded yet; await store.load() before use.

    Args:
        settings: Settings to use (defaults to get_settings())
        notifier: Budget alert sink (defaults to LogNotifier)
        biometric: Device-owner check, if the platform has one
        blob_store: Storage backend (defaults to the configured one)

    Returns:
        (store, account_flow, expense_flow)
    """
    settings = settings or get_settings()

    store = RecordStore(
        blob_store=blob_store or create_blob_store(settings),
        notifier=notifier or LogNotifier(),
        audit_logger=AuditLogger(history_size=settings.app.audit_history_size),
        storage_settings=settings.storage,
        notification_settings=settings.notifications,
    )
    validator = InputValidator()

    account_flow = AccountFlow(store, validator=validator, biometric=biometric)
    expense_flow = ExpenseFlow(store, validator=validator)

    return store, account_flow, expense_flow
