"""
Record Store

Owns the set of registered users and the pointer to the signed-in one,
and persists both to a key-value blob store after every mutation.

DESIGN DECISION: The store is an explicit object handed to whoever needs
it, not a process-wide singleton. It starts "not ready"; load() reads the
saved state off the event loop and publishes users, current user and the
ready flag together. Until then every operation raises StoreNotReadyError.

FAILURE SEMANTICS:
- Unreadable saved data on load -> logged, store starts empty
- Failed save -> logged, in-memory state stays the source of truth
  until the next successful save. Nothing is raised to the caller.

All operations other than load() are synchronous and expected to run
on one control thread; there is no internal locking.
"""

import asyncio
from collections.abc import Callable
from typing import Optional
from uuid import UUID

import structlog
from pydantic import ValidationError

from expense_tracker.audit import AuditLogger
from expense_tracker.config import NotificationSettings, StorageSettings, get_settings
from expense_tracker.insights.aggregator import (
    budget_exceeded,
    total_expenses,
    total_income,
)
from expense_tracker.models.events import StoreEvent, StoreEventBuilder
from expense_tracker.models.user import (
    Expense,
    User,
    UserProfile,
    decode_users,
    encode_users,
)
from expense_tracker.services.notifications import NotifierInterface
from expense_tracker.services.storage import BlobStoreInterface, StorageError
from expense_tracker.store.errors import (
    DuplicateEmailError,
    NoCurrentUserError,
    StoreNotReadyError,
    UserMismatchError,
    UserNotFoundError,
)


StoreListener = Callable[[StoreEvent], None]


class RecordStore:
    """
    The user/expense record store.

    Usage:
        store = RecordStore(JsonFileBlobStore("data.json"))
        await store.load()
        user = store.register(profile, password)
        store.add_expense(Expense(category="Food", amount=Decimal("250")))
    """

    def __init__(
        self,
        blob_store: BlobStoreInterface,
        notifier: Optional[NotifierInterface] = None,
        audit_logger: Optional[AuditLogger] = None,
        storage_settings: Optional[StorageSettings] = None,
        notification_settings: Optional[NotificationSettings] = None,
    ):
        settings = get_settings()
        self._blob_store = blob_store
        self._notifier = notifier
        self._audit_logger = audit_logger or AuditLogger()
        self._storage_settings = storage_settings or settings.storage
        self._notification_settings = notification_settings or settings.notifications
        self._logger = structlog.get_logger(__name__)

        self._users: list[User] = []
        self._current_user: Optional[User] = None
        self._ready = False
        self._listeners: list[StoreListener] = []

    # =========================================================================
    # READINESS & LOADING
    # =========================================================================

    @property
    def is_ready(self) -> bool:
        return self._ready

    async def load(self) -> None:
        """
        Load saved users and the signed-in pointer.

        The blocking read runs in a worker thread. State is published in
        one step once both parts are resolved. Loading a ready store is
        a no-op.
        """
        if self._ready:
            return

        users, current_user, error = await asyncio.to_thread(self._read_saved_state)

        if error:
            self._audit_logger.log(StoreEventBuilder.store_load_failed(error))

        self._users, self._current_user, self._ready = users, current_user, True

        self._publish(StoreEventBuilder.store_loaded(
            user_count=len(users),
            current_user_id=current_user.id if current_user else None,
        ))

    def _read_saved_state(self) -> tuple[list[User], Optional[User], Optional[str]]:
        """Returns (users, current_user, error_message). Never raises."""
        try:
            blob = self._blob_store.get(self._storage_settings.users_key)
            users = decode_users(blob) if blob else []
        except (StorageError, ValidationError, ValueError) as e:
            return [], None, f"users: {e}"

        try:
            raw_id = self._blob_store.get(self._storage_settings.current_user_id_key)
        except StorageError as e:
            return users, None, f"current user id: {e}"

        return users, self._resolve_user(users, raw_id), None

    @staticmethod
    def _resolve_user(users: list[User], raw_id: Optional[str]) -> Optional[User]:
        """Map a stored id to a loaded user; anything unresolvable clears it."""
        if not raw_id:
            return None
        try:
            user_id = UUID(raw_id)
        except ValueError:
            return None
        return next((user for user in users if user.id == user_id), None)

    def _require_ready(self) -> None:
        if not self._ready:
            raise StoreNotReadyError()

    def _require_current_user(self) -> User:
        self._require_ready()
        if self._current_user is None:
            raise NoCurrentUserError()
        return self._current_user

    # =========================================================================
    # READ ACCESS
    # =========================================================================

    @property
    def users(self) -> tuple[User, ...]:
        """All registered users in registration order."""
        self._require_ready()
        return tuple(self._users)

    @property
    def current_user(self) -> Optional[User]:
        self._require_ready()
        return self._current_user

    @property
    def is_signed_in(self) -> bool:
        return self.current_user is not None

    def find_by_email(self, email: str) -> Optional[User]:
        """Case-insensitive email lookup."""
        self._require_ready()
        return next((user for user in self._users if user.email_matches(email)), None)

    # =========================================================================
    # ACCOUNT OPERATIONS
    # =========================================================================

    def register(self, profile: UserProfile, password: str) -> User:
        """
        Create a user with no expenses and sign them in.

        The password is accepted but neither stored nor checked.

        Raises:
            DuplicateEmailError: If the email is taken (case-insensitive)
        """
        self._require_ready()

        if self.find_by_email(profile.email) is not None:
            self._audit_logger.log(StoreEventBuilder.registration_rejected(
                email=profile.email,
                reason="duplicate email",
            ))
            raise DuplicateEmailError(profile.email)

        user = User.from_profile(profile)
        self._users.append(user)
        self._current_user = user
        self._save()

        self._publish(StoreEventBuilder.user_registered(user.id, user.email))
        return user

    def authenticate(self, email: str, password: str) -> User:
        """
        Sign in the user with this email. The password is ignored.

        Raises:
            UserNotFoundError: If no user has this email; the signed-in
                               user is left unchanged
        """
        self._require_ready()

        user = self.find_by_email(email)
        if user is None:
            self._audit_logger.log(StoreEventBuilder.sign_in_failed(email))
            raise UserNotFoundError(email)

        self._current_user = user
        self._save()

        self._publish(StoreEventBuilder.user_signed_in(user.id, user.email))
        return user

    def sign_in_most_recent(self) -> User:
        """
        Sign in the most recently registered user.

        Used after a successful biometric check, which verifies the
        device owner but not a particular account.

        Raises:
            UserNotFoundError: If no user is registered
        """
        self._require_ready()

        if not self._users:
            raise UserNotFoundError()

        user = self._users[-1]
        self._current_user = user
        self._save()

        self._publish(StoreEventBuilder.biometric_sign_in(user.id))
        return user

    def sign_out(self) -> None:
        self._require_ready()

        previous = self._current_user
        self._current_user = None
        self._save()

        self._publish(StoreEventBuilder.user_signed_out(previous.id if previous else None))

    def update_profile(self, updated_user: User) -> User:
        """
        Replace the signed-in user's record wholesale.

        The record must carry the signed-in user's id. It is written
        back by id and becomes the new signed-in snapshot.

        Raises:
            NoCurrentUserError: If nobody is signed in
            UserMismatchError: If the record belongs to another user
        """
        current = self._require_current_user()
        if updated_user.id != current.id:
            self._audit_logger.log_error(
                error_type="profile_owner_mismatch",
                error_message="update_profile called with another user's record",
                details={"current_user_id": str(current.id), "record_id": str(updated_user.id)},
            )
            raise UserMismatchError()

        self._replace_user(updated_user)
        self._current_user = updated_user
        self._save()

        self._publish(StoreEventBuilder.profile_updated(updated_user.id))
        return updated_user

    # =========================================================================
    # EXPENSES
    # =========================================================================

    def add_expense(self, expense: Expense) -> User:
        """
        Append an expense to the signed-in user and persist.

        Afterwards, if total spending exceeds income, a budget alert is
        raised. Every qualifying call raises it again; there is no cooldown.

        Returns:
            The updated user

        Raises:
            NoCurrentUserError: If nobody is signed in
        """
        user = self._require_current_user().with_expense(expense)

        self._replace_user(user)
        self._current_user = user
        self._save()

        self._publish(StoreEventBuilder.expense_added(
            user_id=user.id,
            expense_id=expense.id,
            category=expense.category,
            amount=str(expense.amount),
        ))

        self._check_budget(user)
        return user

    def _check_budget(self, user: User) -> None:
        total = total_expenses(user.expenses)
        income = total_income(user)
        if not budget_exceeded(total, income):
            return

        self._publish(StoreEventBuilder.budget_exceeded(
            user_id=user.id,
            total=str(total),
            income=str(income),
        ))

        if self._notifier is None or not self._notification_settings.enabled:
            return

        try:
            self._notifier.notify(
                self._notification_settings.budget_alert_title,
                self._notification_settings.budget_alert_body,
            )
        except Exception as e:
            self._audit_logger.log_error(
                error_type="notification_failed",
                error_message=str(e),
                details={"user_id": str(user.id)},
            )

    # =========================================================================
    # CHANGE NOTIFICATION
    # =========================================================================

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        """
        Call `listener` with every StoreEvent the store publishes.

        Returns:
            A function that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self, event: StoreEvent) -> None:
        self._audit_logger.log(event)
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as e:
                self._logger.error(
                    "store_listener_failed",
                    error=str(e),
                    event_type=event.event_type.value,
                )

    # =========================================================================
    # PERSISTENCE
    # =========================================================================

    def _replace_user(self, user: User) -> None:
        for idx, existing in enumerate(self._users):
            if existing.id == user.id:
                self._users[idx] = user
                return
        self._users.append(user)

    def _save(self) -> None:
        """Write the user set and the signed-in pointer. Never raises."""
        users_key = self._storage_settings.users_key
        pointer_key = self._storage_settings.current_user_id_key

        try:
            blob = encode_users(self._users)
        except ValueError as e:
            self._audit_logger.log(StoreEventBuilder.save_failed(users_key, str(e)))
        else:
            self._write(users_key, blob)

        if self._current_user is not None:
            self._write(pointer_key, str(self._current_user.id))
        else:
            self._remove(pointer_key)

    def _write(self, key: str, value: str) -> None:
        try:
            self._blob_store.set(key, value)
        except StorageError as e:
            self._audit_logger.log(StoreEventBuilder.save_failed(key, str(e)))

    def _remove(self, key: str) -> None:
        try:
            self._blob_store.remove(key)
        except StorageError as e:
            self._audit_logger.log(StoreEventBuilder.save_failed(key, str(e)))
