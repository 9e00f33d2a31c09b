"""Run configuration."""

from semvec.config.options import DecayFunction, EncodingMethod, TermWeight, VectorType
from semvec.config.settings import Settings, load_settings

__all__ = [
    "Settings",
    "load_settings",
    "VectorType",
    "EncodingMethod",
    "DecayFunction",
    "TermWeight",
]
