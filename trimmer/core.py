import logging
import os
from typing import Callable, List, Optional

from application.dto.trim_dto import (
    BatchSummary,
    CopyPlan,
    InPlacePlan,
    TrimOptions,
    TrimResult,
    TrimStatus,
)
from application.ports.process_runner_port import IProcessRunner, ProcessFailure
from infrastructure.process import SubprocessRunner
from trimmer.codec import build_silence_filter, codec_args_for
from trimmer.probe import probe_stream_info
from trimmer.tools import ToolPaths, resolve_tools
from trimmer.utils import get_extension, is_supported, plan_output

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, str, TrimResult], None]


def _remove_quietly(path: str) -> None:
    """Best-effort delete used during rollback."""
    try:
        if os.path.exists(path):
            os.remove(path)
    except OSError as exc:
        logger.debug("cleanup of %s failed: %s", path, exc)


def _finalize_in_place(
    input_path: str, plan: InPlacePlan, keep_backup: bool, verbose: bool
) -> TrimResult:
    """Swap the temp output over the original, rolling back on failure."""
    if keep_backup:
        try:
            os.replace(input_path, plan.backup_path)
        except OSError as exc:
            if verbose:
                logger.error("Backup failed: %s", exc)
            _remove_quietly(plan.temp_path)
            return TrimResult.error()
    else:
        try:
            os.remove(input_path)
        except OSError as exc:
            if verbose:
                logger.error("Delete original failed: %s", exc)
            _remove_quietly(plan.temp_path)
            return TrimResult.error()

    try:
        os.replace(plan.temp_path, plan.final_path)
    except OSError as exc:
        if verbose:
            logger.error("Finalize failed: %s", exc)
        # Temp output is left behind on purpose so nothing is lost.
        if keep_backup and os.path.exists(plan.backup_path):
            try:
                os.replace(plan.backup_path, input_path)
            except OSError as restore_exc:
                if verbose:
                    logger.error(
                        "Restore failed, original kept at %s: %s",
                        plan.backup_path, restore_exc,
                    )
        return TrimResult.error()

    return TrimResult.ok(input_path)


def trim_file(
    input_path  : str,
    options     : Optional[TrimOptions] = None,
    tools       : Optional[ToolPaths] = None,
    runner      : Optional[IProcessRunner] = None,
) -> TrimResult:
    """
    Full pipeline for one file: validate → probe → plan → ffmpeg → finalize.

    Args:
        input_path: Source audio file (.mp3/.wav/.ogg, any case).
        options:    Trim settings; defaults to TrimOptions().
        tools:      ffmpeg/ffprobe locations; resolved from the environment
                    when omitted.
        runner:     Process runner; defaults to SubprocessRunner.

    Returns:
        TrimResult. Never raises for missing files, ffmpeg failures or
        filesystem errors during finalize; those map to skipped/error.
    """
    options = options or TrimOptions()
    tools = tools or resolve_tools()
    runner = runner or SubprocessRunner()

    # ── Validate ─────────────────────────────────────────────────
    if not os.path.isfile(input_path):
        return TrimResult.skipped()
    if not is_supported(input_path):
        return TrimResult.skipped()

    ext: str = get_extension(input_path)

    # ── Probe + plan ─────────────────────────────────────────────
    info = probe_stream_info(input_path, tools.ffprobe, runner)
    audio_filter: str = build_silence_filter(
        options.threshold_db, options.start_seconds, options.stop_seconds
    )
    plan = plan_output(input_path, options.suffix, options.in_place)
    codec: List[str] = codec_args_for(ext, info)

    target: str = plan.temp_path if isinstance(plan, InPlacePlan) else plan.output_path
    args: List[str] = [
        "-hide_banner", "-y",
        "-i", input_path,
        "-af", audio_filter,
        "-map_metadata", "0",  # keep container tags
        *codec,
        target,
    ]

    if options.verbose:
        pretty = " ".join(
            f'"{os.path.basename(a)}"' if a in (target, input_path) else a
            for a in args
        )
        logger.info("[ffmpeg] %s", pretty)

    # ── Transform ────────────────────────────────────────────────
    target_existed: bool = os.path.exists(target)
    try:
        runner.run(tools.ffmpeg, args)
    except ProcessFailure as exc:
        if options.verbose:
            logger.error("FFmpeg failed: %s", exc.stderr.strip() or exc)
        # Only clean up a target this run created; earlier outputs stay
        if not target_existed:
            _remove_quietly(target)
        return TrimResult.error()

    # ── Finalize ─────────────────────────────────────────────────
    if isinstance(plan, CopyPlan):
        return TrimResult.ok(plan.output_path)

    return _finalize_in_place(
        input_path, plan, keep_backup=not options.no_backup, verbose=options.verbose
    )


def describe_result(path: str, result: TrimResult, options: TrimOptions) -> Optional[str]:
    """Per-file report line for a batch, or None for skipped files."""
    name: str = os.path.basename(path)
    if result.status is TrimStatus.OK:
        if options.in_place:
            return f"{name} (trimmed in-place)"
        return f"{name} -> {os.path.basename(result.output_path or '')}"
    if result.status is TrimStatus.ERROR:
        return name
    return None


def trim_files(
    paths    : List[str],
    options  : Optional[TrimOptions] = None,
    tools    : Optional[ToolPaths] = None,
    runner   : Optional[IProcessRunner] = None,
    progress_callback: Optional[ProgressCallback] = None,
) -> BatchSummary:
    """
    Trim each path in order, one at a time.

    Args:
        paths:   Candidate files; processed in the given order.
        options: Shared settings for every file.
        tools:   Resolved once here and reused for every file.
        runner:  Shared process runner.
        progress_callback: Optional callback (index, total, path, result),
                           called after each file.
    """
    options = options or TrimOptions()
    tools = tools or resolve_tools()
    runner = runner or SubprocessRunner()

    summary = BatchSummary()
    total: int = len(paths)

    for index, path in enumerate(paths):
        result = trim_file(path, options, tools, runner)
        summary.results.append((path, result))

        if result.status is TrimStatus.OK:
            summary.ok += 1
        elif result.status is TrimStatus.ERROR:
            summary.errors += 1
        else:
            summary.skipped += 1

        line = describe_result(path, result, options)
        if line is not None:
            summary.lines.append((result.status, line))

        if progress_callback:
            progress_callback(index, total, path, result)

    return summary


def find_supported_files(directory: str) -> List[str]:
    """Supported files directly inside *directory*, in listing order."""
    return [
        os.path.join(directory, name)
        for name in os.listdir(directory)
        if is_supported(name)
    ]


def trim_directory(
    directory: str,
    options  : Optional[TrimOptions] = None,
    tools    : Optional[ToolPaths] = None,
    runner   : Optional[IProcessRunner] = None,
    progress_callback: Optional[ProgressCallback] = None,
) -> BatchSummary:
    """Trim every supported file in *directory* (non-recursive)."""
    return trim_files(
        find_supported_files(directory), options, tools, runner, progress_callback
    )
