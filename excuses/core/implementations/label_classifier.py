"""
Label-based implementation of the LinkClassifier interface.

The content source marks its navigation anchors only by their wording, so
anchors are classified by exact display text (surrounding whitespace
ignored). The labels default to the French wording used by the site.
"""
from typing import Dict, Optional
from excuses.config.settings import LINK_LABELS
from excuses.core.interfaces.parser import LinkClassifier, NEXT, PREVIOUS

class LabelLinkClassifier(LinkClassifier):
    """
    Example:
        >>> classifier = LabelLinkClassifier({"next": "Next", "previous": "Back"})
        >>> classifier.classify(" Next ")
        'next'
        >>> classifier.classify("next") is None
        True
    """

    def __init__(self, labels: Optional[Dict[str, str]] = None):
        labels = labels or LINK_LABELS
        self._by_label = {
            labels[NEXT].strip(): NEXT,
            labels[PREVIOUS].strip(): PREVIOUS,
        }

    def classify(self, label: str) -> Optional[str]:
        return self._by_label.get(label.strip())
