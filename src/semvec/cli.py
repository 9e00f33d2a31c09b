"""
Command line interface.

Usage:
    python -m semvec build --index ./corpus --dimension 512 --encoding-method permutation
    python -m semvec lsa --index ./corpus --dimension 100
"""

import argparse
import logging
import sys
from typing import Any, Dict, List, Optional

from semvec.config.constants import (
    DEFAULT_SEED_LENGTH,
    LSA_DOC_VECTORS_NAME,
    LSA_TERM_VECTORS_NAME,
)
from semvec.config.options import DecayFunction, EncodingMethod, TermWeight, VectorType
from semvec.config.settings import Settings, load_settings
from semvec.errors import ConfigurationError, IndexAccessError

logger = logging.getLogger(__name__)

# Settings fields whose argparse destination has the same name
_SETTING_OPTIONS = (
    "dimension",
    "seed_length",
    "vector_type",
    "random_seed",
    "window_radius",
    "truncated_left_radius",
    "encoding_method",
    "decay_function",
    "training_cycles",
    "workers",
    "min_frequency",
    "max_frequency",
    "max_nonalphabet_chars",
    "contents_fields",
    "stopwords",
    "term_weight",
    "initial_term_vectors",
    "output_dir",
)


def _add_common_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--index", required=True, help="Directory of text files to index")
    parser.add_argument("--field", default=None, help="Field name given to file contents")
    parser.add_argument("--dimension", type=int, help="Number of dimensions")
    parser.add_argument(
        "--vector-type", dest="vector_type",
        choices=[v.value for v in VectorType], help="Vector type",
    )
    parser.add_argument("--min-frequency", dest="min_frequency", type=int)
    parser.add_argument("--max-frequency", dest="max_frequency", type=int)
    parser.add_argument(
        "--max-nonalphabet-chars", dest="max_nonalphabet_chars", type=int,
        help="Maximum non-alphabetic characters per term (-1: no limit)",
    )
    parser.add_argument(
        "--filter-out-numbers", dest="filter_out_numbers", action="store_true",
        default=None, help="Ignore terms that parse as numbers",
    )
    parser.add_argument("--stopwords", nargs="+", help="Terms never indexed")
    parser.add_argument(
        "--contents-fields", dest="contents_fields", nargs="+",
        help="Index fields to scan",
    )
    parser.add_argument(
        "--term-weight", dest="term_weight",
        choices=[w.value for w in TermWeight], help="Term weighting scheme",
    )
    parser.add_argument("--output-dir", dest="output_dir", help="Directory for vector stores")
    parser.add_argument("--debug", action="store_true", default=None, help="Debug logging")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="semvec",
        description="Build semantic term vectors from a text collection",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Sliding window Random Indexing, radius 2
  semvec build --index ./corpus --window-radius 2

  # Order-sensitive vectors, retrained twice
  semvec build --index ./corpus --encoding-method permutation --training-cycles 3

  # Latent Semantic Analysis
  semvec lsa --index ./corpus --dimension 100

Unset options fall back to SEMVEC_* environment variables, then defaults.
        """,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    build = subparsers.add_parser("build", help="Build positional term vectors")
    _add_common_options(build)
    build.add_argument("--seed-length", dest="seed_length", type=int,
                       help="Non-zero entries per real or complex elemental vector")
    build.add_argument("--random-seed", dest="random_seed", type=int)
    build.add_argument("--window-radius", dest="window_radius", type=int)
    build.add_argument("--truncated-left-radius", dest="truncated_left_radius", type=int)
    build.add_argument(
        "--encoding-method", dest="encoding_method",
        choices=[m.value for m in EncodingMethod],
    )
    build.add_argument(
        "--decay-function", dest="decay_function",
        choices=[d.value for d in DecayFunction],
    )
    build.add_argument("--training-cycles", dest="training_cycles", type=int)
    build.add_argument("--workers", type=int, help="Threads used to accumulate documents")
    build.add_argument(
        "--initial-term-vectors", dest="initial_term_vectors",
        help="Saved vector store (path stem) used as initial elemental vectors",
    )
    build.add_argument(
        "--not-normalized", dest="normalize", action="store_false", default=None,
        help="Write term vectors without normalizing them",
    )
    build.add_argument("--output-name", dest="output_name",
                       help="Base filename (defaults per encoding method)")

    lsa = subparsers.add_parser("lsa", help="Build LSA term and document vectors")
    _add_common_options(lsa)
    return parser


def settings_from_args(args: argparse.Namespace) -> Settings:
    """Settings with every option given on the command line applied."""
    overrides: Dict[str, Any] = {}
    for name in _SETTING_OPTIONS + ("normalize", "filter_out_numbers", "debug"):
        value = getattr(args, name, None)
        if value is not None:
            overrides[name] = value
    if args.field and "contents_fields" not in overrides:
        overrides["contents_fields"] = [args.field]
    # lsa has no elemental vectors; keep seed_length within the dimension
    if args.command == "lsa" and "dimension" in overrides:
        overrides.setdefault(
            "seed_length", min(DEFAULT_SEED_LENGTH, max(overrides["dimension"], 1))
        )
    return load_settings(**overrides)


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _read_index(args: argparse.Namespace, settings: Settings):
    """
    Index the files below --index into the single configured contents field.

    Raises:
        ConfigurationError: If more than one contents field is configured
        IndexAccessError: If the directory cannot be read
    """
    from semvec.indexing.memory_index import InMemoryTextIndex

    if len(settings.contents_fields) != 1:
        raise ConfigurationError(
            "A directory index has one field per file, got contents fields "
            f"{list(settings.contents_fields)}"
        )
    return InMemoryTextIndex.from_directory(
        args.index, field=settings.contents_fields[0], term_weight=settings.term_weight
    )


def run_build(args: argparse.Namespace, settings: Settings) -> None:
    from semvec.container import SemvecContainer
    from semvec.persistence.serialization import write_term_vectors

    container = SemvecContainer(settings)
    index = _read_index(args, settings)
    result = container.build_term_vectors(index)
    write_term_vectors(result, settings.output_dir, getattr(args, "output_name", None))


def run_lsa(args: argparse.Namespace, settings: Settings) -> None:
    from semvec.lsa import LSABuilder
    from semvec.persistence.serialization import VectorStoreSerializer

    index = _read_index(args, settings)
    result = LSABuilder(index, settings).build()
    VectorStoreSerializer.save(result.term_vectors, settings.output_dir, LSA_TERM_VECTORS_NAME)
    VectorStoreSerializer.save(result.doc_vectors, settings.output_dir, LSA_DOC_VECTORS_NAME)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Entry point.

    Returns:
        0 on success, 1 if the index could not be read, 2 for configuration errors
    """
    args = build_parser().parse_args(argv)
    try:
        settings = settings_from_args(args)
    except ConfigurationError as e:
        _configure_logging(bool(args.debug))
        logger.error(f"Invalid configuration: {e}")
        return 2

    _configure_logging(settings.debug)
    try:
        if args.command == "lsa":
            run_lsa(args, settings)
        else:
            run_build(args, settings)
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2
    except IndexAccessError as e:
        logger.error(f"Could not read index: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
