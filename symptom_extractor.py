"""
Keyword extraction module for herb recommendation service.
Turns free-text symptom descriptions into an ordered set of lowercase tokens.
"""

import re
from typing import Optional, Tuple

# Word characters are ASCII letters, digits and underscore
_TOKEN_PATTERN = re.compile(r'\w+', re.ASCII)


def extract_keywords(text: Optional[str]) -> Tuple[str, ...]:
    """
    Extract distinct lowercase keywords from text.

    Every maximal run of word characters is a token; duplicates are
    dropped keeping the first occurrence.

    Args:
        text: Input text; None and empty strings yield no keywords

    Returns:
        Tuple of distinct tokens in first-occurrence order
    """
    if not text:
        return ()

    tokens = _TOKEN_PATTERN.findall(text.lower())
    return tuple(dict.fromkeys(tokens))


if __name__ == "__main__":
    samples = [
        "I have a terrible headache and can't sleep",
        "STRESS, stress and more Stress!!",
        "",
        "...",
    ]
    for sample in samples:
        print(f"{sample!r:50} -> {list(extract_keywords(sample))}")
