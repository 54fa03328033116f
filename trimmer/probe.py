import logging
from typing import Optional

from application.dto.trim_dto import StreamInfo
from application.ports.process_runner_port import IProcessRunner, ProcessFailure

logger = logging.getLogger(__name__)


def probe_args(path: str) -> list[str]:
    """ffprobe arguments requesting bit_rate and bits_per_sample of stream a:0."""
    return [
        "-v", "error",
        "-select_streams", "a:0",
        "-show_entries", "stream=bit_rate,bits_per_sample",
        "-of", "default=noprint_wrappers=1",
        path,
    ]


def _positive_int(raw: str) -> Optional[int]:
    try:
        value = int(raw.strip())
    except ValueError:
        return None
    return value if value > 0 else None


def parse_probe_output(text: str) -> StreamInfo:
    """
    Parse ``key=value`` lines from ffprobe.

    Blank lines, unknown keys and values that are not positive integers
    (ffprobe prints ``N/A`` for unknown fields) are ignored. Never raises.
    """
    bitrate_kbps: Optional[int] = None
    bits_per_sample: Optional[int] = None

    for line in text.splitlines():
        key, sep, value = line.partition("=")
        if not sep:
            continue
        key = key.strip()
        if key == "bit_rate":
            bps = _positive_int(value)
            if bps is not None:
                # bits/s → kbps, rounding half up
                kbps = (bps + 500) // 1000
                bitrate_kbps = kbps or None
        elif key == "bits_per_sample":
            bits = _positive_int(value)
            if bits is not None:
                bits_per_sample = bits

    return StreamInfo(bitrate_kbps=bitrate_kbps, bits_per_sample=bits_per_sample)


def probe_stream_info(path: str, ffprobe: str, runner: IProcessRunner) -> StreamInfo:
    """Best-effort probe; any ffprobe failure yields an all-unknown StreamInfo."""
    try:
        output = runner.run(ffprobe, probe_args(path))
    except ProcessFailure as exc:
        logger.debug("probe failed for %s: %s", path, exc)
        return StreamInfo()
    return parse_probe_output(output.stdout)
