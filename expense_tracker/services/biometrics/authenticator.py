"""
Biometric Authentication Interface

The device biometric prompt (fingerprint, face) is a platform capability.
This package only defines the yes/no question the account flow asks:
"is the device owner present?"

NOTE: A positive answer does not say WHICH account the owner holds.
The account flow signs in the most recently registered user, which is
a weak mapping kept for compatibility (see DESIGN.md).
"""

from abc import ABC, abstractmethod


class BiometricError(Exception):
    """Base exception for biometric sign-in."""
    pass


class BiometricUnavailableError(BiometricError):
    """No biometric capability on this device."""
    pass


class BiometricRejectedError(BiometricError):
    """The device owner could not be verified."""
    pass


class BiometricAuthenticator(ABC):
    """External device-owner check."""

    @property
    def is_available(self) -> bool:
        """Whether the device can run the check at all."""
        return True

    @abstractmethod
    def verify_owner(self, reason: str) -> bool:
        """
        Ask the platform to verify the device owner.

        Args:
            reason: Text shown in the platform prompt

        Returns:
            True if the owner was verified
        """
        pass
