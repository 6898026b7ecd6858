"""
Search query generation.

The first query is always "{title} {artist}". The remaining templates
trade precision for recall and are only reached when earlier queries did
not produce a good enough candidate.
"""

from typing import Sequence

from spot_converter.core.config import DEFAULT_QUERY_TEMPLATES


def generate_queries(
    cleaned_title: str,
    primary_artist: str,
    original_title: str = "",
    templates: Sequence[str] = DEFAULT_QUERY_TEMPLATES,
) -> list[str]:
    """
    Build the ordered list of search queries for one track.

    Args:
        cleaned_title: Title after clean_title().
        primary_artist: First credited artist ("" if uncredited).
        original_title: Uncleaned title, used when cleaning left nothing.
        templates: Format strings over {title} and {artist}, in priority order.

    Returns:
        Queries in template order, whitespace-collapsed, without empty
        strings or duplicates. Empty only when there is neither a title
        nor an artist to search for.

    Example:
        generate_queries("Blinding Lights", "The Weeknd")
        # ["Blinding Lights The Weeknd",
        #  "Blinding Lights The Weeknd official audio",
        #  "Blinding Lights The Weeknd lyrics",
        #  "Blinding Lights"]
    """
    title = cleaned_title.strip() or original_title.strip()
    artist = primary_artist.strip()

    if not title and not artist:
        return []

    queries: list[str] = []
    for template in templates:
        query = " ".join(template.format(title=title, artist=artist).split())
        # A template like "{title}" is meaningless without a title
        if not title and "{title}" in template and "{artist}" not in template:
            continue
        if query and query not in queries:
            queries.append(query)

    return queries
