from decimal import Decimal
from typing import List

from application.dto.trim_dto import StreamInfo

# VBR quality presets used when the source bitrate is unknown
MP3_FALLBACK_QUALITY: str = "2"   # ~190 kbps
OGG_FALLBACK_QUALITY: str = "5"   # ~160 kbps


def _num(value: float) -> str:
    """Exact plain decimal: -45.0 → '-45', 0.20 → '0.2', 1e-05 → '0.00001'."""
    return format(Decimal(repr(value)).normalize(), "f")


def build_silence_filter(
    threshold_db: float = -45.0,
    start_seconds: float = 0.05,
    stop_seconds: float = 0.20,
) -> str:
    """
    Build the ffmpeg ``silenceremove`` expression.

    One leading and one trailing run of audio below *threshold_db* is removed
    if it lasts at least *start_seconds* / *stop_seconds*. Silence inside the
    recording is left alone.
    """
    thr: str = f"{_num(threshold_db)}dB"
    return (
        f"silenceremove=start_periods=1:start_duration={_num(start_seconds)}:"
        f"start_threshold={thr}:"
        f"stop_periods=1:stop_duration={_num(stop_seconds)}:stop_threshold={thr}"
    )


def codec_args_for(ext: str, info: StreamInfo) -> List[str]:
    """
    Pick the output encoder arguments for a file extension.

    Args:
        ext:  Extension including the dot; matched case-insensitively.
        info: Probed stream info; missing values select the fallbacks.

    Returns:
        ffmpeg arguments, e.g. ['-c:a', 'libmp3lame', '-b:a', '192k'].
    """
    ext = ext.lower()

    if ext == ".mp3":
        if info.bitrate_kbps:
            return ["-c:a", "libmp3lame", "-b:a", f"{info.bitrate_kbps}k"]
        return ["-c:a", "libmp3lame", "-q:a", MP3_FALLBACK_QUALITY]

    if ext == ".ogg":
        if info.bitrate_kbps:
            return ["-c:a", "libvorbis", "-b:a", f"{info.bitrate_kbps}k"]
        return ["-c:a", "libvorbis", "-q:a", OGG_FALLBACK_QUALITY]

    # WAV: stay PCM, pick the depth closest to the source
    bits: int = info.bits_per_sample or 16
    if bits >= 32:
        return ["-c:a", "pcm_s32le"]
    if bits >= 24:
        return ["-c:a", "pcm_s24le"]
    return ["-c:a", "pcm_s16le"]
