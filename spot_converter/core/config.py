"""
Configuration management for spot-converter.

This module handles loading, validating, and providing access to the
application configuration stored in config.yaml.

The configuration file contains:
    - Optional Spotify API credentials (needed only to fetch playlists by URL)
    - Output directory for logs and the conversion history database
    - Number of parallel matching threads
    - Matching policy: scoring weights, thresholds and search query templates
    - YouTube Music search options

Configuration File Location:
    The config.yaml file must be in the current working directory
    when running the application.

Example config.yaml:
    spotify:
      client_id: "your_client_id_here"
      client_secret: "your_client_secret_here"

    output:
      directory: "~/SpotConverter"

    conversion:
      threads: 4

    matching:
      acceptance_threshold: 3.0
      negative_signal_penalty: 2.0
      query_templates:
        - "{title} {artist}"
        - "{title} {artist} official audio"

    youtube:
      language: "en"
      search_filters: ["songs", "videos"]
      limit: 20
"""

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

from spot_converter.core.exceptions import ConfigError


# Default configuration file name (always in current working directory)
CONFIG_FILENAME = "config.yaml"

DEFAULT_OUTPUT_DIRECTORY = "~/SpotConverter"

# Search templates tried in priority order; the first one must stay "{title} {artist}"
DEFAULT_QUERY_TEMPLATES = (
    "{title} {artist}",
    "{title} {artist} official audio",
    "{title} {artist} lyrics",
    "{title}",
)

# ytmusicapi search filters merged for each query
DEFAULT_SEARCH_FILTERS = ("songs", "videos")
VALID_SEARCH_FILTERS = frozenset({
    "songs", "videos", "albums", "artists", "playlists",
    "community_playlists", "featured_playlists", "uploads",
})


@dataclass(frozen=True)
class ScoringWeights:
    """
    Tunable constants of the candidate scoring function.

    Every number the scorer uses lives here. Values can be overridden from the
    'matching' section of config.yaml.

    Attributes:
        title_weight: Multiplier applied to the title edit similarity (0.0-1.0).
        substring_bonus: Added when the whole normalized source title
                         appears inside the candidate title.
        title_word_bonus: Added per source title word (length > 2)
                          found in the candidate title.
        artist_bonus: Added when the normalized primary artist appears
                      inside the candidate's joined contributors.
        artist_word_bonus: Added per artist word (length > 2) found in
                           the candidate's contributors.
        song_bonus: Added for YouTube Music "song" results.
        official_bonus: Added for official/verified results.
        positive_signal_bonus: Added once if the candidate title carries
                               any positive_terms word.
        negative_signal_penalty: Subtracted once if the candidate title
                                 carries any negative_terms word.
        acceptance_threshold: Minimum score for the best candidate to be
                              accepted as a match.
        good_enough_score: Once the best score exceeds this value no
                           further queries are issued for the track.
        positive_terms: Words indicating a canonical upload.
        negative_terms: Words indicating a derivative recording
                        (remixes, live or slowed versions).

    Example:
        weights = ScoringWeights(acceptance_threshold=4.0)
    """
    title_weight: float = 2.0
    substring_bonus: float = 2.0
    title_word_bonus: float = 0.25
    artist_bonus: float = 1.0
    artist_word_bonus: float = 0.2
    song_bonus: float = 2.0
    official_bonus: float = 1.0
    positive_signal_bonus: float = 0.5
    negative_signal_penalty: float = 1.5
    acceptance_threshold: float = 3.0
    good_enough_score: float = 7.0
    positive_terms: tuple[str, ...] = ("official", "audio", "soundtrack", "ost")
    negative_terms: tuple[str, ...] = (
        "slowed",
        "reverb",
        "sped up",
        "remix",
        "live",
        "trap",
        "mix",
    )


@dataclass(frozen=True)
class SpotifyConfig:
    """
    Spotify API credentials configuration.

    These credentials are obtained from the Spotify Developer Dashboard:
    https://developer.spotify.com/dashboard

    Attributes:
        client_id: The Spotify application client ID.
        client_secret: The Spotify application client secret.
    """
    client_id: str
    client_secret: str


@dataclass(frozen=True)
class OutputConfig:
    """
    Output directory configuration.

    Attributes:
        directory: Absolute path where logs/ and conversions.db are kept.
                   Path expansion is performed (~ is expanded to home directory).
    """
    directory: Path

    @property
    def database_path(self) -> Path:
        """Path to the SQLite conversion history database."""
        return self.directory / "conversions.db"


@dataclass(frozen=True)
class ConversionConfig:
    """
    Conversion behavior configuration.

    Attributes:
        threads: Number of tracks resolved concurrently.
                 1 (the default) resolves tracks strictly one at a time.
    """
    threads: int = 1


@dataclass(frozen=True)
class MatchingConfig:
    """
    Matching policy configuration.

    Attributes:
        weights: Scoring constants and acceptance thresholds.
        query_templates: Search query templates in priority order.
    """
    weights: ScoringWeights = ScoringWeights()
    query_templates: tuple[str, ...] = DEFAULT_QUERY_TEMPLATES


@dataclass(frozen=True)
class YouTubeConfig:
    """
    YouTube Music search configuration.

    Attributes:
        language: Language passed to ytmusicapi.YTMusic.
        search_filters: ytmusicapi search filters merged for each query.
        limit: Maximum results requested per filter.
    """
    language: str = "en"
    search_filters: tuple[str, ...] = DEFAULT_SEARCH_FILTERS
    limit: int = 20


@dataclass(frozen=True)
class Config:
    """
    Complete application configuration.

    This is the main configuration object that aggregates all configuration
    sections. It is created by load_config() and should be treated as
    immutable (frozen dataclass).

    Attributes:
        spotify: Spotify API credentials, or None when not configured.
        output: Output directory settings.
        conversion: Conversion concurrency settings.
        matching: Scoring weights and query templates.
        youtube: YouTube Music search settings.
    """
    spotify: SpotifyConfig | None
    output: OutputConfig
    conversion: ConversionConfig = ConversionConfig()
    matching: MatchingConfig = MatchingConfig()
    youtube: YouTubeConfig = YouTubeConfig()


def load_config(config_path: Path | None = None) -> Config:
    """
    Load and validate configuration from config.yaml.

    Args:
        config_path: Optional explicit path to config file.
                     If None, looks for config.yaml in current working directory.

    Returns:
        Config: A frozen dataclass containing all configuration values.

    Raises:
        ConfigError: If the config file is not found, has invalid YAML syntax,
                     or contains invalid values.
    """
    if config_path is None:
        config_path = Path.cwd() / CONFIG_FILENAME

    if not config_path.exists():
        raise ConfigError(
            f"Configuration file not found: {config_path}",
            details={"file_path": str(config_path)}
        )

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            content = f.read()
    except IOError as e:
        raise ConfigError(
            f"Failed to read configuration file: {e}",
            details={"file_path": str(config_path), "original_error": str(e)}
        ) from e

    try:
        raw_config = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(
            f"Invalid YAML syntax in configuration file: {e}",
            details={"file_path": str(config_path), "original_error": str(e)}
        ) from e

    # An empty file is a valid config with every default applied
    if raw_config is None:
        raw_config = {}

    if not isinstance(raw_config, dict):
        raise ConfigError(
            "Configuration file must contain a YAML dictionary",
            details={"file_path": str(config_path)}
        )

    return parse_config(raw_config)


def parse_config(raw_config: dict[str, Any]) -> Config:
    """
    Build a Config from an already parsed dictionary.

    Args:
        raw_config: Dictionary with the same structure as config.yaml.

    Returns:
        Config with defaults applied for missing sections.

    Raises:
        ConfigError: If any section has an invalid structure or value.
    """
    for section in ("spotify", "output", "conversion", "matching", "youtube"):
        value = raw_config.get(section)
        if value is not None and not isinstance(value, dict):
            raise ConfigError(
                f"Section '{section}' must be a dictionary",
                details={"section": section}
            )

    return Config(
        spotify=_parse_spotify_config(raw_config.get("spotify")),
        output=_parse_output_config(raw_config.get("output")),
        conversion=_parse_conversion_config(raw_config.get("conversion")),
        matching=_parse_matching_config(raw_config.get("matching")),
        youtube=_parse_youtube_config(raw_config.get("youtube")),
    )


def _parse_spotify_config(spotify_section: dict[str, Any] | None) -> SpotifyConfig | None:
    """
    Parse the optional Spotify credentials section.

    Returns:
        SpotifyConfig, or None if the section is absent.

    Raises:
        ConfigError: If the section is present but client_id or
                     client_secret is missing or empty.
    """
    if spotify_section is None:
        return None

    client_id = spotify_section.get("client_id", "")
    client_secret = spotify_section.get("client_secret", "")

    if not isinstance(client_id, str) or not client_id.strip():
        raise ConfigError(
            "'spotify.client_id' must be a non-empty string",
            details={"field": "spotify.client_id"}
        )

    if not isinstance(client_secret, str) or not client_secret.strip():
        raise ConfigError(
            "'spotify.client_secret' must be a non-empty string",
            details={"field": "spotify.client_secret"}
        )

    return SpotifyConfig(
        client_id=client_id.strip(),
        client_secret=client_secret.strip()
    )


def _parse_output_config(output_section: dict[str, Any] | None) -> OutputConfig:
    """
    Parse the output section, expanding ~ and making the path absolute.

    Does NOT create the directory (that happens at startup in the CLI).
    """
    directory = DEFAULT_OUTPUT_DIRECTORY
    if output_section is not None and "directory" in output_section:
        directory = output_section["directory"]

    if not isinstance(directory, str) or not directory.strip():
        raise ConfigError(
            "'output.directory' must be a non-empty string",
            details={"field": "output.directory"}
        )

    return OutputConfig(directory=Path(directory.strip()).expanduser().resolve())


def _parse_conversion_config(conversion_section: dict[str, Any] | None) -> ConversionConfig:
    if conversion_section is None:
        return ConversionConfig()

    threads = conversion_section.get("threads", 1)
    # bool is an int subclass, reject it explicitly
    if not isinstance(threads, int) or isinstance(threads, bool) or threads < 1:
        raise ConfigError(
            "'conversion.threads' must be a positive integer",
            details={"field": "conversion.threads", "value": threads}
        )

    return ConversionConfig(threads=threads)


def _parse_matching_config(matching_section: dict[str, Any] | None) -> MatchingConfig:
    """
    Parse the matching policy section.

    Every key except 'query_templates' must name a ScoringWeights field.
    Numeric fields accept int or float; term lists must be lists of strings.

    Raises:
        ConfigError: On unknown keys, wrong types, or templates that do
                     not start with "{title} {artist}".
    """
    if matching_section is None:
        return MatchingConfig()

    section = dict(matching_section)
    templates = section.pop("query_templates", None)

    weight_fields = {f.name: f for f in fields(ScoringWeights)}
    overrides: dict[str, Any] = {}

    for key, value in section.items():
        if key not in weight_fields:
            raise ConfigError(
                f"Unknown matching option: 'matching.{key}'",
                details={"field": f"matching.{key}"}
            )

        if key in ("positive_terms", "negative_terms"):
            if not isinstance(value, list) or not all(
                isinstance(term, str) and term.strip() for term in value
            ):
                raise ConfigError(
                    f"'matching.{key}' must be a list of non-empty strings",
                    details={"field": f"matching.{key}"}
                )
            overrides[key] = tuple(term.strip().lower() for term in value)
        else:
            if not isinstance(value, (int, float)) or isinstance(value, bool):
                raise ConfigError(
                    f"'matching.{key}' must be a number",
                    details={"field": f"matching.{key}", "value": value}
                )
            overrides[key] = float(value)

    weights = replace(ScoringWeights(), **overrides)

    if templates is None:
        return MatchingConfig(weights=weights)

    if not isinstance(templates, list) or not templates or not all(
        isinstance(t, str) and t.strip() for t in templates
    ):
        raise ConfigError(
            "'matching.query_templates' must be a non-empty list of strings",
            details={"field": "matching.query_templates"}
        )

    if " ".join(templates[0].split()) != DEFAULT_QUERY_TEMPLATES[0]:
        raise ConfigError(
            f"The first query template must be '{DEFAULT_QUERY_TEMPLATES[0]}'",
            details={"field": "matching.query_templates", "value": templates[0]}
        )

    for template in templates:
        try:
            template.format(title="", artist="")
        except (KeyError, IndexError, ValueError) as e:
            raise ConfigError(
                f"Invalid query template '{template}': only {{title}} and "
                f"{{artist}} placeholders are supported",
                details={"field": "matching.query_templates", "original_error": str(e)}
            ) from e

    return MatchingConfig(weights=weights, query_templates=tuple(templates))


def _parse_youtube_config(youtube_section: dict[str, Any] | None) -> YouTubeConfig:
    if youtube_section is None:
        return YouTubeConfig()

    language = youtube_section.get("language", "en")
    if not isinstance(language, str) or not language.strip():
        raise ConfigError(
            "'youtube.language' must be a non-empty string",
            details={"field": "youtube.language"}
        )

    search_filters = youtube_section.get("search_filters", list(DEFAULT_SEARCH_FILTERS))
    if (
        not isinstance(search_filters, list)
        or not search_filters
        or not all(f in VALID_SEARCH_FILTERS for f in search_filters)
    ):
        raise ConfigError(
            "'youtube.search_filters' must be a non-empty list of ytmusicapi filters",
            details={"field": "youtube.search_filters", "value": search_filters}
        )

    limit = youtube_section.get("limit", 20)
    if not isinstance(limit, int) or isinstance(limit, bool) or limit < 1:
        raise ConfigError(
            "'youtube.limit' must be a positive integer",
            details={"field": "youtube.limit", "value": limit}
        )

    return YouTubeConfig(
        language=language.strip(),
        search_filters=tuple(search_filters),
        limit=limit,
    )
