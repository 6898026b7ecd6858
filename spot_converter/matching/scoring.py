"""
Candidate scoring for YouTube Music matching.

The score is a sum of independent signals:

    1. Title edit similarity (rapidfuzz Levenshtein), times title_weight
    2. Exact phrase bonus: whole source title inside the candidate title
    3. Per-word title bonus for source words longer than 2 characters
    4. Artist bonus: primary artist inside the joined contributors,
       plus a per-word artist bonus
    5. Metadata: catalog song, official source
    6. Vocabulary: positive terms ("official", "audio", ...) add a bonus,
       negative terms ("remix", "live", "slowed", ...) subtract a penalty

All constants come from ScoringWeights (core.config). The score is a pure
function of its inputs and may be negative.
"""

from rapidfuzz.distance import Levenshtein

from spot_converter.core.config import ScoringWeights
from spot_converter.matching.normalize import clean_title, normalize
from spot_converter.spotify.models import SourceTrack
from spot_converter.youtube.models import Candidate, CandidateKind


DEFAULT_WEIGHTS = ScoringWeights()

# Words this short ("a", "of", "ft") say nothing about a match
MIN_WORD_LENGTH = 3


def edit_similarity(a: str, b: str) -> float:
    """
    Edit-distance similarity of two normalized strings.

    Returns 1 - levenshtein(a, b) / max(len(a), len(b)) with unit-cost
    insertions, deletions and substitutions. Defined as 0.0 when either
    string is empty.

    Examples:
        edit_similarity("abc", "abc")  # 1.0
        edit_similarity("abc", "xyz")  # 0.0
        edit_similarity("abc", "abd")  # 0.666...
    """
    if not a or not b:
        return 0.0
    distance = Levenshtein.distance(a, b)
    return 1.0 - distance / max(len(a), len(b))


def _word_overlap(source: str, target: str) -> int:
    """Count words of source (longer than 2 chars) contained in target."""
    return sum(
        1 for word in source.split()
        if len(word) >= MIN_WORD_LENGTH and word in target
    )


def _contains_term(text: str, terms: tuple[str, ...]) -> bool:
    """Whether normalized text contains any term as whole word(s)."""
    padded = f" {text} "
    return any(f" {normalize(term)} " in padded for term in terms if normalize(term))


def score_candidate(
    track: SourceTrack,
    candidate: Candidate,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> float:
    """
    Score how well a search result matches a source track.

    Args:
        track: The Spotify track being resolved. Its title is cleaned
               before comparison.
        candidate: One YouTube Music search result.
        weights: Scoring constants.

    Returns:
        Summed score; higher is better. With the default weights an exact
        official catalog song scores about 9 and unrelated videos stay
        below 1.

    Example:
        track = SourceTrack("Blinding Lights", ("The Weeknd",))
        result = Candidate("abc123", "Blinding Lights", ("The Weeknd",),
                           CandidateKind.SONG, True)
        score_candidate(track, result)  # 8.9
    """
    source_title = normalize(clean_title(track.name) or track.name)
    candidate_title = normalize(candidate.title)

    # Title
    score = edit_similarity(source_title, candidate_title) * weights.title_weight
    if source_title and source_title in candidate_title:
        score += weights.substring_bonus
    score += weights.title_word_bonus * _word_overlap(source_title, candidate_title)

    # Artist
    source_artist = normalize(track.primary_artist)
    contributors = normalize(" ".join(candidate.contributors))
    if source_artist:
        if source_artist in contributors:
            score += weights.artist_bonus
        score += weights.artist_word_bonus * _word_overlap(source_artist, contributors)

    # Metadata
    if candidate.kind == CandidateKind.SONG:
        score += weights.song_bonus
    if candidate.is_official:
        score += weights.official_bonus

    # Vocabulary
    if _contains_term(candidate_title, weights.positive_terms):
        score += weights.positive_signal_bonus
    if _contains_term(candidate_title, weights.negative_terms):
        score -= weights.negative_signal_penalty

    return score
