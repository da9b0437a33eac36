from swisspairing.models.enums import ByePolicy, ColourStrength, FloatType, GameResult
from swisspairing.models.pairing import Pairing, PairingMetadata, PairingSet
from swisspairing.models.pairing_history import PairingHistory
from swisspairing.models.round_data import RoundData
from swisspairing.models.swiss_config import SwissConfig

__all__ = [
    "ByePolicy",
    "ColourStrength",
    "FloatType",
    "GameResult",
    "Pairing",
    "PairingMetadata",
    "PairingSet",
    "PairingHistory",
    "RoundData",
    "SwissConfig",
]
