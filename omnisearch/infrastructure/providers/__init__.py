"""Identity and location providers."""

from .identity_provider import SIGN_IN_EVENT, SIGN_OUT_EVENT, SessionIdentityProvider
from .location_provider import CachedLocationProvider

__all__ = [
    'SIGN_IN_EVENT',
    'SIGN_OUT_EVENT',
    'SessionIdentityProvider',
    'CachedLocationProvider'
]
