"""
Core interfaces module for omnisearch.

This module provides access to all core interfaces used throughout
the application.
"""

from .client_interface import (
    ImageSource,
    SearchGatewayInterface,
    ImageEncoderInterface,
    VoiceTranscriberInterface
)
from .service_interface import (
    SessionListener,
    IdentityProviderInterface,
    LocationProviderInterface,
    NavigatorInterface
)

__all__ = [
    'ImageSource',
    'SearchGatewayInterface',
    'ImageEncoderInterface',
    'VoiceTranscriberInterface',
    'SessionListener',
    'IdentityProviderInterface',
    'LocationProviderInterface',
    'NavigatorInterface'
]
