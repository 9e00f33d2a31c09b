"""
Operations: torchhd primitives used by the vector algebras.

torchhd returns its own VSATensor subclasses. Results are converted back to
plain tensors so stores and tests only ever see torch.Tensor.
"""

import torch
import torchhd


class Operations:
    """
    Stateless wrappers around torchhd.

    - permute: cyclic shift used for order (permutation) encoding
    - bind: elementwise binding used by proximity encoding
    """

    @staticmethod
    def permute(vector: torch.Tensor, shifts: int) -> torch.Tensor:
        """
        Permutation: cyclic shift of every component.

        Component i moves to position (i + shifts) mod D, so
        permute(permute(v, k), -k) == v for any k.

        Args:
            vector: Input vector (any dtype)
            shifts: Number of positions to shift (can be negative)

        Returns:
            Shifted copy of the vector

        Example:
            >>> v = torch.tensor([1.0, 0.0, 0.0, 0.0])
            >>> Operations.permute(v, 1)
            tensor([0., 1., 0., 0.])
        """
        if shifts == 0:
            return vector.clone()
        return torchhd.permute(vector, shifts=shifts).as_subclass(torch.Tensor)

    @staticmethod
    def bind(a: torch.Tensor, b: torch.Tensor) -> torch.Tensor:
        """
        Binding for real and complex vectors (MAP/FHRR style elementwise product).

        Args:
            a: First vector
            b: Second vector

        Returns:
            Bound vector, dissimilar to both inputs
        """
        return torchhd.bind(a, b).as_subclass(torch.Tensor)
