"""
Window encoders: the contribution a neighbour makes to a focus term.

One encoder is selected per run. Each implements a single operation,
contribution(offset, vector, weight), where offset is neighbour position
minus focus position, vector is the neighbour's elemental vector and weight
its term weight. The result lives in accumulator space and is added into
the focus term's semantic vector.

Rotation convention: a neighbour is rotated by -offset, the number of
places from the neighbour back to the focus. The left neighbour
(offset -1) is rotated by +1, the right neighbour (offset +1) by -1.
"""

import logging
from typing import Callable, ClassVar, Dict

import torch

from semvec.config.constants import PROXIMITY_END_KEY, PROXIMITY_START_KEY
from semvec.config.options import DecayFunction, EncodingMethod
from semvec.config.settings import Settings
from semvec.core.elemental import hash_to_seed
from semvec.core.vector_types import VectorAlgebra
from semvec.errors import ConfigurationError
from semvec.positional.window import WindowPolicy

logger = logging.getLogger(__name__)


def decay_for(function: DecayFunction, radius: int) -> Callable[[int], float]:
    """
    Distance decay f(d) for d in [1, radius], non-increasing, f(1) == 1.

    - linear: HAL ramp (radius - d + 1) / radius
    - inverse: 1 / d
    - flat: 1
    """
    function = DecayFunction(function)
    if function is DecayFunction.LINEAR:
        span = max(radius, 1)
        return lambda distance: (span - distance + 1) / span
    if function is DecayFunction.INVERSE:
        return lambda distance: 1.0 / distance
    return lambda distance: 1.0


class WindowEncoder:
    """Base class for encoding policies."""

    method: ClassVar[EncodingMethod]

    def __init__(self, algebra: VectorAlgebra):
        self._algebra = algebra

    def contribution(self, offset: int, vector: torch.Tensor, weight: float) -> torch.Tensor:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._algebra!r})"


class BasicEncoder(WindowEncoder):
    """Flat window: w·e, independent of the offset."""

    method = EncodingMethod.BASIC

    def contribution(self, offset: int, vector: torch.Tensor, weight: float) -> torch.Tensor:
        return self._algebra.weighted(vector, weight)


class DirectionalEncoder(WindowEncoder):
    """
    HAL-style encoding: w·f(|o|)·rotate(e, -sign(o)).

    Left and right contexts land in two disjoint rotations of the neighbour
    vector, so the representation keeps them apart while distance is
    expressed through the decay weight.
    """

    method = EncodingMethod.DIRECTIONAL

    def __init__(self, algebra: VectorAlgebra, decay: Callable[[int], float]):
        super().__init__(algebra)
        self._decay = decay

    def contribution(self, offset: int, vector: torch.Tensor, weight: float) -> torch.Tensor:
        shift = -1 if offset > 0 else 1
        rotated = self._algebra.rotate(vector, shift)
        return self._algebra.weighted(rotated, weight * self._decay(abs(offset)))


class PermutationEncoder(WindowEncoder):
    """Order encoding: w·rotate(e, -o). Exact relative position up to D."""

    method = EncodingMethod.PERMUTATION

    def contribution(self, offset: int, vector: torch.Tensor, weight: float) -> torch.Tensor:
        return self._algebra.weighted(self._algebra.rotate(vector, -offset), weight)


class PermutationPlusBasicEncoder(WindowEncoder):
    """Sum of basic and permutation encodings: w·e + w·rotate(e, -o)."""

    method = EncodingMethod.PERMUTATION_PLUS_BASIC

    def contribution(self, offset: int, vector: torch.Tensor, weight: float) -> torch.Tensor:
        result = self._algebra.weighted(vector, weight)
        permuted = self._algebra.weighted(self._algebra.rotate(vector, -offset), weight)
        return self._algebra.add(result, permuted)


class ProximityEncoder(WindowEncoder):
    """
    Proximity encoding: w·bind(e, p(o)).

    Position vectors p(o) are interpolated between two dense random
    endpoint vectors, p(-r) at one end and p(r) at the other, so nearby
    offsets get similar position vectors and far apart ones dissimilar.
    """

    method = EncodingMethod.PROXIMITY

    def __init__(self, algebra: VectorAlgebra, window: WindowPolicy, random_seed: int = 0):
        super().__init__(algebra)
        start = algebra.dense_random(hash_to_seed(PROXIMITY_START_KEY, random_seed))
        end = algebra.dense_random(hash_to_seed(PROXIMITY_END_KEY, random_seed))
        span = 2 * max(window.radius, 1)
        self._positions: Dict[int, torch.Tensor] = {
            offset: algebra.interpolate(start, end, (offset + window.radius) / span)
            for offset in window.offsets()
        }

    def position_vector(self, offset: int) -> torch.Tensor:
        return self._positions[offset]

    def contribution(self, offset: int, vector: torch.Tensor, weight: float) -> torch.Tensor:
        bound = self._algebra.bind(vector, self._positions[offset])
        return self._algebra.weighted(bound, weight)


def create_encoder(
    method: EncodingMethod,
    algebra: VectorAlgebra,
    window: WindowPolicy,
    decay_function: DecayFunction = DecayFunction.LINEAR,
    random_seed: int = 0,
) -> WindowEncoder:
    """
    Select the encoding policy for a run.

    Raises:
        ConfigurationError: For the embeddings method (not provided by this
            package) or an unrecognised method
    """
    try:
        method = EncodingMethod(method)
    except ValueError as e:
        raise ConfigurationError(f"Unrecognized encoding method: {method!r}") from e

    if method is EncodingMethod.BASIC:
        return BasicEncoder(algebra)
    if method is EncodingMethod.DIRECTIONAL:
        return DirectionalEncoder(algebra, decay_for(decay_function, window.radius))
    if method is EncodingMethod.PERMUTATION:
        return PermutationEncoder(algebra)
    if method is EncodingMethod.PERMUTATION_PLUS_BASIC:
        return PermutationPlusBasicEncoder(algebra)
    if method is EncodingMethod.PROXIMITY:
        return ProximityEncoder(algebra, window, random_seed)
    raise ConfigurationError(
        f"Encoding method '{method.value}' is not supported by term-vector construction"
    )


def encoder_from_settings(settings: Settings, algebra: VectorAlgebra) -> WindowEncoder:
    encoder = create_encoder(
        settings.encoding_method,
        algebra,
        WindowPolicy.from_settings(settings),
        decay_function=settings.decay_function,
        random_seed=settings.random_seed,
    )
    logger.debug(f"Selected {encoder!r}")
    return encoder
