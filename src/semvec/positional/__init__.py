"""Sliding-window term vector construction."""

from semvec.positional.accumulator import AccumulationStats, TermCooccurrenceAccumulator
from semvec.positional.encoders import (
    BasicEncoder,
    DirectionalEncoder,
    PermutationEncoder,
    PermutationPlusBasicEncoder,
    ProximityEncoder,
    WindowEncoder,
    create_encoder,
    decay_for,
)
from semvec.positional.training import CycleSnapshot, IndexingResult, TrainingCycleController
from semvec.positional.window import WindowPolicy

__all__ = [
    "WindowPolicy",
    "WindowEncoder",
    "BasicEncoder",
    "DirectionalEncoder",
    "PermutationEncoder",
    "PermutationPlusBasicEncoder",
    "ProximityEncoder",
    "create_encoder",
    "decay_for",
    "TermCooccurrenceAccumulator",
    "AccumulationStats",
    "TrainingCycleController",
    "CycleSnapshot",
    "IndexingResult",
]
