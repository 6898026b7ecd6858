"""
Cross-catalog track resolution engine.

    - normalize: normalize() and clean_title()
    - queries: generate_queries()
    - scoring: edit_similarity() and score_candidate()
    - selector: MatchSelector, best candidate for one track
    - converter: ConversionOrchestrator, a whole track list
    - models: ScoredCandidate, ConversionResult, ConversionSummary, ConversionReport

Usage:
    from spot_converter.matching import ConversionOrchestrator, MatchSelector

    selector = MatchSelector(YTMusicSearchAdapter())
    report = ConversionOrchestrator(selector).convert(tracks)
"""

from spot_converter.matching.converter import ConversionOrchestrator
from spot_converter.matching.models import (
    ConversionReport,
    ConversionResult,
    ConversionSummary,
    ScoredCandidate,
)
from spot_converter.matching.normalize import clean_title, normalize
from spot_converter.matching.queries import generate_queries
from spot_converter.matching.scoring import edit_similarity, score_candidate
from spot_converter.matching.selector import MatchSelector, SearchAdapter

__all__ = [
    "ConversionOrchestrator",
    "MatchSelector",
    "SearchAdapter",
    "ConversionReport",
    "ConversionResult",
    "ConversionSummary",
    "ScoredCandidate",
    "clean_title",
    "normalize",
    "generate_queries",
    "edit_similarity",
    "score_candidate",
]
