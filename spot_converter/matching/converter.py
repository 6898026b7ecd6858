"""
Playlist conversion: resolve every source track and tally the results.

Workflow:
    1. Resolve each track with MatchSelector (sequentially, or on a
       bounded thread pool when max_workers > 1)
    2. Turn each outcome into a ConversionResult; an exception while
       resolving one track makes that track unmatched and never stops
       the batch
    3. Re-assemble results in input order
    4. Derive the ConversionSummary

Usage:
    orchestrator = ConversionOrchestrator(selector, max_workers=4)
    report = orchestrator.convert(tracks)

    print(f"Matched {report.summary.successful_conversions}/{report.summary.total_tracks}")
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Sequence

from spot_converter.core.logger import (
    Colors,
    format_matched_message,
    format_no_match_message,
    get_logger,
    log_match_failure,
)
from spot_converter.core.progress import MatchingProgressBar
from spot_converter.matching.models import ConversionReport, ConversionResult
from spot_converter.matching.selector import MatchSelector
from spot_converter.spotify.models import SourceTrack


logger = get_logger(__name__)


class ConversionOrchestrator:
    """
    Converts a whole track list, preserving input order.

    Attributes:
        selector: MatchSelector used for every track.
        max_workers: Number of tracks resolved concurrently. 1 resolves
                     tracks one at a time on the calling thread.

    Ordering:
        Each track is tagged with its input index; completions are
        written into a buffer slot keyed by that index, so the output
        order never depends on which search answered first.

    Example:
        orchestrator = ConversionOrchestrator(MatchSelector(adapter))
        report = orchestrator.convert([SourceTrack("Song", ("Artist",))])
    """

    def __init__(self, selector: MatchSelector, max_workers: int = 1) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self.selector = selector
        self.max_workers = max_workers

    def convert(
        self,
        tracks: Sequence[SourceTrack],
        progress_bar: MatchingProgressBar | None = None
    ) -> ConversionReport:
        """
        Resolve every track and build the conversion report.

        Args:
            tracks: Source tracks in playlist order.
            progress_bar: Optional progress bar updated after each track.

        Returns:
            ConversionReport with one result per track, in input order.
        """
        tracks = list(tracks)
        if not tracks:
            return ConversionReport.from_results([])

        buffer: list[ConversionResult | None] = [None] * len(tracks)

        if self.max_workers == 1:
            for index, track in enumerate(tracks):
                buffer[index] = self._convert_track(track)
                self._report_progress(buffer[index], progress_bar)
        else:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                future_to_index = {
                    executor.submit(self._convert_track, track): index
                    for index, track in enumerate(tracks)
                }

                for future in as_completed(future_to_index):
                    index = future_to_index[future]
                    # _convert_track never raises
                    buffer[index] = future.result()
                    self._report_progress(buffer[index], progress_bar)

        report = ConversionReport.from_results(buffer)
        logger.info(
            f"Converted {report.summary.successful_conversions}/"
            f"{report.summary.total_tracks} tracks"
        )
        return report

    def _convert_track(self, track: SourceTrack) -> ConversionResult:
        """Resolve one track; any exception yields an unmatched result."""
        try:
            accepted = self.selector.resolve(track)
        except Exception as e:
            logger.error(
                f"Error matching {track.primary_artist} - {track.name}: {e}",
                exc_info=True
            )
            log_match_failure(logger, track.name, track.primary_artist, f"error: {e}")
            return ConversionResult.unmatched(track)

        if accepted is None:
            log_match_failure(
                logger, track.name, track.primary_artist, "no acceptable candidate"
            )
            return ConversionResult.unmatched(track)

        return ConversionResult.matched(track, accepted)

    def _report_progress(
        self,
        result: ConversionResult,
        progress_bar: MatchingProgressBar | None
    ) -> None:
        if progress_bar is None:
            return

        track = result.source
        if result.found:
            progress_bar.log(
                format_matched_message(
                    track.primary_artist,
                    track.name,
                    f"https://music.youtube.com/watch?v={result.matched_id}"
                )
            )
        else:
            progress_bar.log(
                f"{Colors.YELLOW}WARNING{Colors.RESET}: "
                + format_no_match_message(track.primary_artist, track.name)
            )
        progress_bar.update(matched=result.found)
