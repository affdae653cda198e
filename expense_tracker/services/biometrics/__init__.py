"""Biometric authentication interface."""

from expense_tracker.services.biometrics.authenticator import (
    BiometricAuthenticator,
    BiometricError,
    BiometricRejectedError,
    BiometricUnavailableError,
)

__all__ = [
    "BiometricAuthenticator",
    "BiometricError",
    "BiometricRejectedError",
    "BiometricUnavailableError",
]
