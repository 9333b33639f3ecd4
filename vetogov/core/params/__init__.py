"""
Installation parameter models and their ABI codec.
"""

from vetogov.core.params.codec import decode_installation_params, encode_installation_params, parameters_fingerprint
from vetogov.core.params.models import InstallationParameters, MintSettings, TokenSettings, VotingSettings

__all__ = [
    "InstallationParameters",
    "MintSettings",
    "TokenSettings",
    "VotingSettings",
    "decode_installation_params",
    "encode_installation_params",
    "parameters_fingerprint",
]
