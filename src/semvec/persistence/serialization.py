"""
Serialization utilities for VectorStore persistence.

Saves and loads vector stores to and from disk, both for writing finished
term vectors and for reading initial term vectors at the start of a run.

Design:
- Stacks the vectors into one tensor saved with torch (name.pt)
- Stores the header (keys, dimension, vector type, run metadata) as JSON
  (name.json)
- Validates the header against the tensor on load
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import torch

from semvec.config.constants import OUTPUT_FILE_NAMES
from semvec.config.options import VectorType
from semvec.core.vector_store import VectorStore
from semvec.core.vector_types import algebra_for
from semvec.positional.training import IndexingResult

logger = logging.getLogger(__name__)


class VectorStoreSerializer:
    """
    Serialization/deserialization for VectorStore objects.

    Implementation strategy:
    1. Save vectors as one stacked torch tensor (preserves dtype)
    2. Save the header as JSON (keys in store order, dimension, vector type)
    3. On load: validate header before restoring vectors
    """

    @staticmethod
    def save(
        store: VectorStore,
        path: Union[str, Path],
        name: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Path:
        """
        Save a VectorStore to disk.

        Args:
            store: VectorStore to serialize
            path: Directory to save in
            name: Base filename (will create name.pt and name.json)
            metadata: Extra JSON-serializable header entries

        Returns:
            Path of the written tensor file

        Raises:
            IOError: If unable to write to path
        """
        path = Path(path)
        path.mkdir(parents=True, exist_ok=True)

        keys = store.keys()
        if keys:
            matrix = torch.stack([store.get(key) for key in keys])
        else:
            matrix = torch.zeros((0, store.dimension), dtype=store.algebra.dtype)

        vector_file = path / f"{name}.pt"
        torch.save(matrix, vector_file)

        header = {
            "dimension": store.dimension,
            "vector_type": store.vector_type.value,
            "count": len(keys),
            "keys": keys,
            "metadata": metadata or {},
        }
        with open(path / f"{name}.json", "w", encoding="utf-8") as f:
            json.dump(header, f, indent=2)

        logger.info(f"Wrote {len(keys)} vectors to {vector_file}")
        return vector_file

    @staticmethod
    def load(path: Union[str, Path], name: str) -> VectorStore:
        """
        Load a VectorStore from disk.

        Args:
            path: Directory containing the saved store
            name: Base filename used in save()

        Returns:
            Restored (unfrozen) VectorStore

        Raises:
            FileNotFoundError: If the store files don't exist
            ValueError: If the header doesn't match the saved vectors
        """
        path = Path(path)
        vector_file = path / f"{name}.pt"
        header_file = path / f"{name}.json"

        if not vector_file.exists():
            raise FileNotFoundError(f"Vector file not found: {vector_file}")
        if not header_file.exists():
            raise FileNotFoundError(f"Header not found: {header_file}")

        with open(header_file, "r", encoding="utf-8") as f:
            header = json.load(f)

        algebra = algebra_for(VectorType(header["vector_type"]), header["dimension"])
        matrix = torch.load(vector_file, weights_only=True)

        keys = header["keys"]
        if tuple(matrix.shape) != (len(keys), algebra.dimension):
            raise ValueError(
                f"Vector matrix shape {tuple(matrix.shape)} != "
                f"expected {(len(keys), algebra.dimension)}"
            )

        store = VectorStore(algebra)
        for key, vector in zip(keys, matrix):
            store.put(key, vector.clone())
        logger.info(f"Read {len(store)} vectors from {vector_file}")
        return store

    @staticmethod
    def load_metadata(path: Union[str, Path], name: str) -> Dict[str, Any]:
        """Run metadata stored with a saved VectorStore."""
        with open(Path(path) / f"{name}.json", "r", encoding="utf-8") as f:
            return json.load(f)["metadata"]


def load_vector_store(location: Union[str, Path]) -> VectorStore:
    """
    Load a store given its path stem (directory/name, with or without .pt).

    Example:
        >>> store = load_vector_store("out/termtermvectors")
    """
    location = Path(location)
    if location.suffix in (".pt", ".json"):
        location = location.with_suffix("")
    return VectorStoreSerializer.load(location.parent, location.name)


def write_term_vectors(
    result: IndexingResult,
    directory: Union[str, Path],
    name: Optional[str] = None,
) -> Path:
    """
    Write finished term vectors with the run description in the header.

    Args:
        result: Output of a TrainingCycleController run
        directory: Output directory
        name: Base filename (defaults to the encoding method's usual name)

    Returns:
        Path of the written tensor file
    """
    name = name or OUTPUT_FILE_NAMES[result.encoding_method.value]
    metadata = {
        "encoding_method": result.encoding_method.value,
        "normalized": result.normalized,
        "training_cycles": result.final_cycle.cycle if result.cycles else None,
    }
    return VectorStoreSerializer.save(result.term_vectors, directory, name, metadata)
