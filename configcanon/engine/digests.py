# configcanon/engine/digests.py

"""Digests of canonical config text for content-addressed lookup."""

import hashlib
from typing import Dict, Iterable

from configcanon.core.definitions import DIGEST_ALGORITHMS
from configcanon.core.exceptions import ConfigurationError


def compute_digests(
    value: str, algorithms: Iterable[str] = DIGEST_ALGORITHMS
) -> Dict[str, str]:
    """Hashes canonical text with each requested algorithm.

    Args:
        value: Canonical config text
        algorithms: Names from DIGEST_ALGORITHMS

    Returns:
        Lowercase hex digests keyed by algorithm name

    Raises:
        ConfigurationError: If an algorithm is not supported
    """
    data = value.encode("utf-8")
    digests: Dict[str, str] = {}

    for algorithm in algorithms:
        if algorithm not in DIGEST_ALGORITHMS:
            raise ConfigurationError(f"Unsupported digest algorithm: {algorithm}")
        digests[algorithm] = hashlib.new(algorithm, data).hexdigest()

    return digests
