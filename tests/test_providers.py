"""
Tests for the identity and location providers.
"""

import pytest

from omnisearch.core.entities import LocationContext
from omnisearch.infrastructure.providers import (
    SIGN_IN_EVENT,
    SIGN_OUT_EVENT,
    CachedLocationProvider,
    SessionIdentityProvider
)

FALLBACK = LocationContext("France", "Paris", 48.8566, 2.3522, is_fallback=True)


class TestSessionIdentityProvider:
    """Test suite for SessionIdentityProvider."""

    @pytest.mark.asyncio
    async def test_anonymous_by_default(self, identity_provider):
        assert await identity_provider.get_current_user_id() is None

    @pytest.mark.asyncio
    async def test_sign_in_and_out(self, identity_provider):
        events = []
        identity_provider.subscribe(lambda event, user_id: events.append((event, user_id)))

        identity_provider.sign_in("user-1")
        assert await identity_provider.get_current_user_id() == "user-1"

        identity_provider.sign_out()
        identity_provider.sign_out()
        assert await identity_provider.get_current_user_id() is None

        assert events == [(SIGN_IN_EVENT, "user-1"), (SIGN_OUT_EVENT, "user-1")]

    def test_blank_user_id_is_rejected(self, identity_provider):
        with pytest.raises(ValueError):
            identity_provider.sign_in("  ")

    def test_unsubscribe(self):
        provider = SessionIdentityProvider()
        events = []
        unsubscribe = provider.subscribe(lambda event, user_id: events.append(event))

        unsubscribe()
        provider.sign_in("user-1")

        assert events == []


class TestCachedLocationProvider:
    """Test suite for CachedLocationProvider."""

    def test_unknown_without_fallback(self):
        assert CachedLocationProvider().get_last_known_location() is None

    def test_fallback_until_real_location(self, paris):
        provider = CachedLocationProvider(fallback=FALLBACK)

        assert provider.get_last_known_location().is_fallback

        provider.update(paris)
        assert provider.get_last_known_location() is paris

    def test_use_fallback_replaces_real_location(self, paris):
        provider = CachedLocationProvider(initial=paris, fallback=FALLBACK)

        assert provider.use_fallback() is FALLBACK
        assert provider.get_last_known_location() is FALLBACK
