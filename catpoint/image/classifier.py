from __future__ import annotations

import random
from typing import Any, Optional, Protocol


class ImageClassifier(Protocol):
    """
    Protocol interface for threat detection in camera images.

    Implementations decide whether an image contains an intrusion indicator
    (a cat) with at least the given confidence. The image is opaque to the
    security service; its type is whatever the classifier understands.
    """

    def contains_threat(self, image: Any, confidence_threshold: float) -> bool:
        """
        Classify an image.

        Parameters
        ----------
        image
            Camera image.
        confidence_threshold
            Minimum confidence (0-100) required to report a threat.

        Returns
        -------
        bool
            True if a threat was detected with sufficient confidence.
        """
        ...


class RandomThreatClassifier:
    """
    Stand-in classifier returning a random verdict.

    Useful for demos and manual testing when no real vision backend is
    available. The image content is ignored; the threshold only shifts the
    odds (a higher threshold makes a detection less likely).

    Parameters
    ----------
    seed
        Optional seed for reproducible sequences.
    """

    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random(seed)

    def contains_threat(self, image: Any, confidence_threshold: float) -> bool:
        confidence = self._rng.uniform(0.0, 100.0)
        return confidence >= confidence_threshold
