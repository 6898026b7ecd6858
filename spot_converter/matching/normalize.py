"""
Text normalization and Spotify title cleanup.

normalize() reduces any string to lowercase alphanumerics separated by
single spaces, the form every comparison in the scorer works on.

clean_title() strips decorations Spotify adds to titles but YouTube
Music usually leaves out: feature credits, soundtrack attributions,
bracketed tags and version annotations. It is lossy: a title that
really contains "(feat. ...)" loses it too.
"""

import re


_NON_ALNUM_RE = re.compile(r"[^\w\s]|_")

# Applied in order; each match is removed
_DECORATION_PATTERNS = (
    # Song (feat. Artist) / Song - feat. Artist
    re.compile(r"\s*\(feat\.[^()]*(?:\([^)]*\)[^()]*)*\)", re.IGNORECASE),
    re.compile(r"\s+-\s+feat\..*$", re.IGNORECASE),
    # Song - From "Movie" / Song (From "Movie")
    re.compile(r"\s+-\s+from\s+\"[^\"]*\"", re.IGNORECASE),
    re.compile(r"\s*\(from\s+\"[^\"]*\"\)", re.IGNORECASE),
    # [Official Video], [Remastered], ...
    re.compile(r"\s*\[[^\]]*\]"),
    # (Remastered Version), (Radio Version), ...
    re.compile(r"\s*\([^)]*\bversion\b[^)]*\)", re.IGNORECASE),
)


def normalize(text: str | None) -> str:
    """
    Canonicalize free text for comparison.

    Lower-cases, turns every character that is not a letter, digit or
    whitespace into a space, collapses whitespace runs and trims.
    Idempotent; None and whitespace-only input give "".

    Examples:
        normalize("Don't Stop Me Now!")  # "don t stop me now"
        normalize("  AC/DC ")            # "ac dc"
    """
    if not text:
        return ""
    return " ".join(_NON_ALNUM_RE.sub(" ", text.lower()).split())


def clean_title(title: str | None) -> str:
    """
    Remove Spotify-specific decorations from a track title.

    Examples:
        clean_title('Tum Hi Ho (feat. Arijit Singh)')      # 'Tum Hi Ho'
        clean_title('Jai Ho - From "Slumdog Millionaire"') # 'Jai Ho'
        clean_title('Yesterday (Remastered Version)')      # 'Yesterday'
    """
    if not title:
        return ""
    cleaned = title
    for pattern in _DECORATION_PATTERNS:
        cleaned = pattern.sub("", cleaned)
    return " ".join(cleaned.split())
