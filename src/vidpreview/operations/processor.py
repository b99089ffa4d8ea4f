"""
Preview orchestration: probe, schedule, generate artifacts, assemble.

Probing is the only mandatory stage. Once the source has been probed, every
artifact stage (thumbnails, clip, loop, contact sheet) is optional: its
failure is logged, recorded in the bundle's stage_errors, and its output is
left out. A caller therefore either gets a (possibly degraded) bundle back or
a single ProbeError.
"""

from __future__ import annotations

import logging
import time
import uuid
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import TYPE_CHECKING, Any

from vidpreview.config.loader import PreviewConfig, get_config
from vidpreview.exceptions import ProbeError, RecordError, StageError
from vidpreview.models.bundle import BundleMetadata, PreviewBundle
from vidpreview.models.options import PreviewOptions
from vidpreview.models.state import PipelineState, StageOutcome, check_transition
from vidpreview.operations.clip import generate_preview_clip
from vidpreview.operations.contact_sheet import generate_contact_sheet
from vidpreview.operations.loop import generate_loop
from vidpreview.operations.probe import probe_video
from vidpreview.operations.schedule import build_thumbnail_specs
from vidpreview.operations.thumbnails import generate_thumbnails
from vidpreview.storage.layout import OutputLayout
from vidpreview.storage.records import save_bundle
from vidpreview.tools.ffmpeg import FFmpegTool
from vidpreview.tools.ffprobe import FFprobeTool
from vidpreview.utils.formatting import sanitize_id
from vidpreview.utils.logging import log_timed

if TYPE_CHECKING:
    from collections.abc import Callable

    from vidpreview.models.bundle import ThumbnailSpec
    from vidpreview.models.metadata import VideoMetadata

logger = logging.getLogger(__name__)

STAGE_THUMBNAILS = "thumbnails"
STAGE_CLIP = "clip"
STAGE_LOOP = "loop"
STAGE_CONTACT_SHEET = "contact_sheet"


class _RunTracker:
    """State of a single run, reported through an optional callback."""

    def __init__(self, on_state: Callable[[PipelineState], None] | None = None):
        self.state = PipelineState.IDLE
        self._on_state = on_state

    def advance(self, target: PipelineState) -> None:
        self.state = check_transition(self.state, target)
        logger.debug(f"Pipeline state -> {target.value}")
        if self._on_state is not None:
            self._on_state(target)


def _settle(stage: str, source_path: Path, fn: Callable[[], Any]) -> StageOutcome:
    """Run one optional stage, capturing its value or its error."""
    try:
        return StageOutcome(stage=stage, value=fn())
    except StageError as e:
        logger.warning(f"Stage '{stage}' failed for {source_path}: {e}")
        logger.debug(f"Stage '{stage}' diagnostics: {e.to_dict()}")
        if e.stderr:
            logger.debug(f"Stage '{stage}' engine output:\n{e.stderr}")
        return StageOutcome(stage=stage, error=e)
    except Exception as e:
        logger.exception(f"Stage '{stage}' crashed for {source_path}: {e}")
        return StageOutcome(stage=stage, error=e)


class PreviewGenerator:
    """Generates preview bundles into an output layout.

    One generator may serve concurrent runs for different sources. `state`
    is the latest PipelineState entered by any run, so it is only meaningful
    between runs or with a single run in flight.
    """

    def __init__(
        self,
        layout: OutputLayout | None = None,
        *,
        config: PreviewConfig | None = None,
        ffmpeg: FFmpegTool | None = None,
        ffprobe: FFprobeTool | None = None,
        save_records: bool = True,
    ):
        config = config or get_config()
        self.layout = layout or OutputLayout.from_config(config)
        self.ffmpeg = ffmpeg or FFmpegTool()
        self.ffprobe = ffprobe or FFprobeTool()
        self.engine_timeout = config.engine_timeout
        self.thumbnail_workers = config.thumbnail_workers
        self.save_records = save_records
        self.state = PipelineState.IDLE
        self.layout.ensure_directories()

    def generate(
        self,
        source_path: Path | str,
        source_id: str,
        options: PreviewOptions | dict | None = None,
        on_state: Callable[[PipelineState], None] | None = None,
    ) -> PreviewBundle:
        """Generate a preview bundle for one source video.

        Args:
            source_path: Path to the source video (never modified)
            source_id: Identifier embedded in artifact names and the bundle
            options: PreviewOptions or a dict of option fields (defaults apply)
            on_state: Called with each PipelineState the run enters

        Returns:
            PreviewBundle; optional artifacts are present only on success

        Raises:
            ProbeError: If the source cannot be probed
            pydantic.ValidationError: If options are invalid
        """
        if options is None:
            options = PreviewOptions()
        elif isinstance(options, dict):
            options = PreviewOptions.model_validate(options)

        source_path = Path(source_path)

        def _report(state: PipelineState) -> None:
            self.state = state
            if on_state is not None:
                on_state(state)

        tracker = _RunTracker(_report)
        t0 = time.time()
        log_timed(f"Generating preview for {source_path} ({source_id})")

        tracker.advance(PipelineState.PROBING)
        try:
            metadata = probe_video(
                source_path, ffprobe=self.ffprobe, timeout=self.engine_timeout
            )
        except ProbeError as e:
            tracker.advance(PipelineState.FAILED)
            logger.error(f"Preview generation failed for {source_path}: {e}")
            raise
        log_timed(
            f"Probed: {metadata.duration_seconds:.1f}s {metadata.resolution_label}",
            t0,
        )

        tracker.advance(PipelineState.SCHEDULING)
        specs = build_thumbnail_specs(
            metadata.duration_seconds,
            options.thumbnail_count,
            options.thumbnail_size.width,
            options.thumbnail_size.height,
        )

        tracker.advance(PipelineState.GENERATING_ARTIFACTS)
        outcomes = self._generate_artifacts(
            source_path, source_id, metadata, specs, options
        )
        log_timed("Artifact stages settled", t0)

        tracker.advance(PipelineState.ASSEMBLING)
        bundle = self._assemble(source_path, source_id, metadata, options, outcomes)
        if self.save_records:
            try:
                save_bundle(bundle, self.layout.records_dir)
            except RecordError as e:
                logger.warning(f"Could not record bundle {bundle.id}: {e}")

        tracker.advance(PipelineState.COMPLETE)
        log_timed(
            f"Preview {bundle.id} complete: {len(bundle.thumbnails)} thumbnails, "
            f"clip={'yes' if bundle.preview_clip_path else 'no'}, "
            f"loop={'yes' if bundle.loop_path else 'no'}, "
            f"sheet={'yes' if bundle.contact_sheet_path else 'no'}"
            + (f", failed={','.join(bundle.stage_errors)}" if bundle.stage_errors else ""),
            t0,
            level=logging.WARNING if bundle.stage_errors else logging.INFO,
        )
        return bundle

    def _generate_artifacts(
        self,
        source_path: Path,
        source_id: str,
        metadata: VideoMetadata,
        specs: list[ThumbnailSpec],
        options: PreviewOptions,
    ) -> dict[str, StageOutcome]:
        """Run the optional stages concurrently and settle every one."""
        duration = metadata.duration_seconds
        outcomes: dict[str, StageOutcome] = {}

        with ThreadPoolExecutor(max_workers=3, thread_name_prefix="stage") as pool:
            thumbs_future = pool.submit(
                _settle,
                STAGE_THUMBNAILS,
                source_path,
                lambda: generate_thumbnails(
                    source_path,
                    specs,
                    source_id=source_id,
                    output_dir=self.layout.thumbnails_dir,
                    ffmpeg=self.ffmpeg,
                    max_workers=self.thumbnail_workers,
                    timeout=self.engine_timeout,
                ),
            )

            clip_future = None
            if duration > options.clip_duration_seconds:
                clip_future = pool.submit(
                    _settle,
                    STAGE_CLIP,
                    source_path,
                    lambda: generate_preview_clip(
                        source_path,
                        source_id=source_id,
                        output_dir=self.layout.videos_dir,
                        duration_seconds=options.clip_duration_seconds,
                        quality=options.clip_quality,
                        ffmpeg=self.ffmpeg,
                        timeout=self.engine_timeout,
                    ),
                )
            else:
                logger.info(
                    f"Skipping preview clip: source is {duration:.1f}s, "
                    f"not longer than {options.clip_duration_seconds}s"
                )
                outcomes[STAGE_CLIP] = StageOutcome.skip(STAGE_CLIP)

            loop_future = None
            if options.generate_loop:
                loop_future = pool.submit(
                    _settle,
                    STAGE_LOOP,
                    source_path,
                    lambda: generate_loop(
                        source_path,
                        source_id=source_id,
                        output_dir=self.layout.gifs_dir,
                        source_duration=duration,
                        ffmpeg=self.ffmpeg,
                        timeout=self.engine_timeout,
                    ),
                )
            else:
                outcomes[STAGE_LOOP] = StageOutcome.skip(STAGE_LOOP)

            # The sheet consumes thumbnail outputs, so it waits for them only
            outcomes[STAGE_THUMBNAILS] = thumbs_future.result()
            thumbnails = outcomes[STAGE_THUMBNAILS].value or []

            if options.generate_contact_sheet and thumbnails:
                outcomes[STAGE_CONTACT_SHEET] = _settle(
                    STAGE_CONTACT_SHEET,
                    source_path,
                    lambda: generate_contact_sheet(
                        thumbnails,
                        source_id=source_id,
                        output_dir=self.layout.sprites_dir,
                        ffmpeg=self.ffmpeg,
                        timeout=self.engine_timeout,
                    ),
                )
            else:
                if options.generate_contact_sheet:
                    logger.info("Skipping contact sheet: no thumbnails were produced")
                outcomes[STAGE_CONTACT_SHEET] = StageOutcome.skip(STAGE_CONTACT_SHEET)

            if clip_future is not None:
                outcomes[STAGE_CLIP] = clip_future.result()
            if loop_future is not None:
                outcomes[STAGE_LOOP] = loop_future.result()

        return outcomes

    def _assemble(
        self,
        source_path: Path,
        source_id: str,
        metadata: VideoMetadata,
        options: PreviewOptions,
        outcomes: dict[str, StageOutcome],
    ) -> PreviewBundle:
        """Build the bundle from settled outcomes."""
        stage_errors = {
            stage: str(outcome.error)
            for stage, outcome in outcomes.items()
            if outcome.error is not None
        }

        thumbs_outcome = outcomes[STAGE_THUMBNAILS]
        thumbnails = tuple(thumbs_outcome.value or ()) if thumbs_outcome.ok else ()
        if options.thumbnail_count and not thumbnails and STAGE_THUMBNAILS not in stage_errors:
            stage_errors[STAGE_THUMBNAILS] = "No thumbnails could be extracted"

        def _path(stage: str) -> Path | None:
            outcome = outcomes.get(stage)
            return outcome.value if outcome is not None and outcome.ok else None

        bundle = PreviewBundle(
            id=(
                f"preview_{sanitize_id(source_id)}_{int(time.time() * 1000)}_"
                f"{uuid.uuid4().hex[:6]}"
            ),
            source_id=source_id,
            source_path=source_path,
            metadata=BundleMetadata.from_video(
                metadata,
                requested=options.thumbnail_count,
                generated=len(thumbnails),
            ),
            thumbnails=thumbnails,
            preview_clip_path=_path(STAGE_CLIP),
            loop_path=_path(STAGE_LOOP),
            contact_sheet_path=_path(STAGE_CONTACT_SHEET),
            stage_errors=stage_errors,
        )
        # Drop anything that vanished between generation and assembly
        return bundle.without_missing_files()


def generate_preview(
    source_path: Path | str,
    source_id: str,
    options: PreviewOptions | dict | None = None,
    *,
    layout: OutputLayout | None = None,
) -> PreviewBundle:
    """Generate a preview bundle using the configured output layout.

    See PreviewGenerator.generate.
    """
    return PreviewGenerator(layout).generate(source_path, source_id, options)
