from __future__ import annotations

from collections.abc import Sequence

from transcript_kit.errors import NoCaptionDataError
from transcript_kit.models.player_response import CaptionsResponsePayload
from transcript_kit.models.video_contracts import CaptionTrack
from transcript_kit.services.embedded_blob import decode_all

DEFAULT_PREFERRED_LANGUAGE_CODES: tuple[str, ...] = ("en", "en-US")


def extract_caption_tracks(
    html_text: str,
    *,
    preferred_language_codes: Sequence[str] = DEFAULT_PREFERRED_LANGUAGE_CODES,
) -> list[CaptionTrack]:
    tracks = [track for batch in decode_all(html_text, decode_caption_tracks) for track in batch]
    if not tracks:
        raise NoCaptionDataError("No caption tracks found in the embedded player response.")
    return sort_caption_tracks(tracks, preferred_language_codes=preferred_language_codes)


def decode_caption_tracks(document: str) -> list[CaptionTrack]:
    response = CaptionsResponsePayload.model_validate_json(document)
    return [
        CaptionTrack(
            base_url=track.base_url,
            vss_id=track.vss_id,
            language_code=track.language_code,
        )
        for track in response.captions.player_captions_tracklist_renderer.caption_tracks
    ]


def sort_caption_tracks(
    tracks: Sequence[CaptionTrack],
    *,
    preferred_language_codes: Sequence[str] = DEFAULT_PREFERRED_LANGUAGE_CODES,
) -> list[CaptionTrack]:
    """Order tracks by preferred language, manual captions before auto-generated.

    Tracks outside the preferred languages keep their relative order after all
    preferred ones. ``sorted`` is stable, so ties preserve input order.
    """
    priorities = {code: rank for rank, code in reversed(list(enumerate(preferred_language_codes)))}
    unranked = len(priorities)

    def _sort_key(track: CaptionTrack) -> tuple[int, int]:
        rank = priorities.get(track.language_code)
        if rank is None:
            return (unranked, 0)
        return (rank, 1 if track.is_auto_generated else 0)

    return sorted(tracks, key=_sort_key)
