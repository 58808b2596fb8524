"""Single and batch export entry points."""

from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from htmlpdf.browser.engine import Engine
from htmlpdf.browser.session import DEFAULT_SELECTOR_TIMEOUT_MS, RenderSession
from htmlpdf.config import Settings
from htmlpdf.export.emitter import emit_pdf
from htmlpdf.export.options import merge_options
from htmlpdf.export.source import SourceKind, classify_source
from htmlpdf.models import DEFAULT_OPTIONS, DEFAULT_OUTPUT, ExportJob, ExportOptions, JobResult
from htmlpdf.utils.logging import get_logger

logger = get_logger(__name__)


async def export_to_pdf(
    source: str,
    destination: str | Path = DEFAULT_OUTPUT,
    options: ExportOptions | None = None,
    *,
    defaults: ExportOptions = DEFAULT_OPTIONS,
    engine: Engine | None = None,
    config: Settings | None = None,
) -> Path:
    """
    Render ``source`` and write it to ``destination`` as a PDF.

    Args:
        source: http(s) URL, path to an HTML file, or raw HTML markup
        destination: Output PDF path, overwritten if it exists
        options: Caller overrides, merged over ``defaults``
        defaults: Base option set
        engine: Browser engine, a local headless Chrome when omitted
        config: Settings for the render session

    Returns:
        Absolute path of the written PDF
    """
    merged = merge_options(defaults, options)
    classified = classify_source(source)

    logger.info(
        "Starting PDF export",
        source="<inline html>" if classified.kind is SourceKind.INLINE_HTML else source,
        kind=classified.kind.value,
        output=str(destination),
    )

    try:
        async with RenderSession(engine, config) as session:
            await session.load(classified, merged.navigation)
            await session.await_fonts_ready()

            if merged.wait_for_selector:
                await session.await_selector(
                    merged.wait_for_selector,
                    timeout_ms=(
                        merged.selector_timeout_ms
                        if merged.selector_timeout_ms is not None
                        else DEFAULT_SELECTOR_TIMEOUT_MS
                    ),
                )

            if merged.delay_ms:
                await session.await_delay(merged.delay_ms)

            return await emit_pdf(session, destination, merged.pdf)

    except Exception as e:
        logger.error("Error exporting PDF", output=str(destination), error=str(e))
        raise


def _as_job(job: ExportJob | Mapping[str, Any]) -> ExportJob:
    if isinstance(job, ExportJob):
        return job
    # Missing and None fields both fall back to the job defaults
    return ExportJob.model_validate(
        {key: value for key, value in job.items() if value is not None}
    )


async def export_multiple(
    jobs: Iterable[ExportJob | Mapping[str, Any]],
    *,
    defaults: ExportOptions = DEFAULT_OPTIONS,
    engine: Engine | None = None,
    config: Settings | None = None,
) -> list[JobResult]:
    """
    Export each job in order, one browser session per job.

    A failing job is recorded and the batch carries on.

    Returns:
        One JobResult per job, in input order
    """
    jobs = list(jobs)
    logger.info("Exporting batch", job_count=len(jobs))

    results: list[JobResult] = []
    for index, job in enumerate(jobs):
        try:
            export_job = _as_job(job)
            path = await export_to_pdf(
                export_job.source,
                export_job.output,
                export_job.options,
                defaults=defaults,
                engine=engine,
                config=config,
            )
            results.append(JobResult(success=True, path=str(path)))

        except Exception as e:
            logger.error("Job failed", index=index, error=str(e))
            results.append(JobResult(success=False, error=str(e)))

    logger.info(
        "Batch finished",
        succeeded=sum(1 for r in results if r.success),
        failed=sum(1 for r in results if not r.success),
    )
    return results
