"""
Logging configuration for semantic-store.

Suppress verbose library output by default.
"""

import logging
import os
import sys
import warnings

LIBRARY_LOGGERS = ("transformers", "sentence_transformers", "chromadb", "httpx")


def configure_quiet_mode(quiet: bool = True) -> None:
    """
    Configure logging to suppress verbose library output.

    This silences HuggingFace progress bars, tokenizer parallelism warnings
    and chatty INFO logs from the embedding and storage libraries.

    Args:
        quiet: If True, suppress verbose output. If False, leave it alone.
    """
    if not quiet:
        return
    os.environ.setdefault("HF_HUB_DISABLE_PROGRESS_BARS", "1")
    os.environ.setdefault("TRANSFORMERS_VERBOSITY", "error")
    os.environ.setdefault("TOKENIZERS_PARALLELISM", "false")
    os.environ.setdefault("HF_HUB_DISABLE_TELEMETRY", "1")

    for name in LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(logging.ERROR)

    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )


def enable_debug_mode() -> None:
    """Enable debug-level logging to stderr."""
    warnings.filterwarnings("default")
    os.environ.pop("HF_HUB_DISABLE_PROGRESS_BARS", None)
    os.environ.pop("TRANSFORMERS_VERBOSITY", None)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    if not any(isinstance(h, logging.StreamHandler) and h.stream == sys.stderr
               for h in root_logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
            datefmt="%H:%M:%S"
        ))
        root_logger.addHandler(handler)

    for name in ("semantic_store",) + LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG)


def configure_logging(verbose: bool = False) -> None:
    """Quiet mode by default, full debug output when verbose."""
    if verbose:
        enable_debug_mode()
    else:
        configure_quiet_mode()
