"""FastAPI application exposing transcript alignment over HTTP.

WHY: The browser editor and other tools need to align transcripts without
shelling out to the CLI. FastAPI provides request validation, automatic
OpenAPI documentation, and a threadpool for the CPU-bound alignment.

HOW: A single FastAPI app exposes alignment, rendering, and discovery
endpoints grouped by tags. Alignment is synchronous and stateless, so the
handlers are plain ``def`` functions that FastAPI runs in its threadpool;
no job store or background tasks are needed.

RULES:
- All endpoints have OpenAPI summaries and descriptions
- Error responses use a consistent ErrorResponse schema
- Malformed machine transcripts → 422 with the validation message
- Unknown policy or granularity defaults from the environment → 422
- Unknown render format → 404
- No state is shared between requests
"""

from __future__ import annotations

import logging
from typing import List

from fastapi import FastAPI, HTTPException
from fastapi.responses import Response

from transcript_aligner import __version__, config
from transcript_aligner.core.ir import AlignmentStats, TranscriptDocument
from transcript_aligner.core.pipeline import AlignmentResult, align_transcripts_with_stats
from transcript_aligner.core.speakers import SPEAKER_POLICIES
from transcript_aligner.formatters import FORMATTERS
from transcript_aligner.server.models import (
    AlignmentRequest,
    AlignmentResponse,
    ErrorResponse,
    FormatInfo,
    HealthResponse,
    StatsModel,
    TranscriptModel,
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Transcript Aligner API",
    description=(
        "REST API that carries word timings from a machine transcript over "
        "to a human-corrected text and rebuilds paragraphs and speakers."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _run_alignment(request: AlignmentRequest) -> AlignmentResult:
    """Run the pipeline for a request, mapping input errors to HTTP 422.

    MalformedInputError is a ValueError, so one clause also covers an
    unknown speaker policy or granularity picked up from the environment.
    """
    policy = request.speaker_policy.value if request.speaker_policy else None
    granularity = request.granularity.value if request.granularity else None
    try:
        result = align_transcripts_with_stats(
            request.machine_transcript,
            request.corrected_text,
            speaker_policy=policy,
            granularity=granularity,
        )
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    logger.info(
        "Aligned %d words into %d paragraphs (edit distance %d)",
        len(result.document.words),
        len(result.document.paragraphs),
        result.stats.edit_distance,
    )
    return result


def _to_response(document: TranscriptDocument, stats: AlignmentStats) -> AlignmentResponse:
    return AlignmentResponse(
        transcript=TranscriptModel.model_validate(document.to_dict()),
        stats=StatsModel(**stats.to_dict()),
    )


# ---------------------------------------------------------------------------
# Endpoints: Alignment
# ---------------------------------------------------------------------------


@app.post(
    "/alignments",
    response_model=AlignmentResponse,
    response_model_exclude_none=True,
    tags=["alignment"],
    summary="Align a corrected transcript",
    description=(
        "Aligns the corrected text against the machine transcript with "
        "word-level edit distance and returns the re-timed transcript "
        "together with match/substitute/insert/delete counts."
    ),
    responses={422: {"model": ErrorResponse, "description": "Malformed machine transcript."}},
)
def create_alignment(request: AlignmentRequest) -> AlignmentResponse:
    result = _run_alignment(request)
    return _to_response(result.document, result.stats)


@app.post(
    "/alignments/render/{format_key}",
    tags=["alignment"],
    summary="Align and render in an output format",
    description=(
        "Runs the same alignment as POST /alignments and returns the "
        "result rendered by the selected formatter, as a file download."
    ),
    responses={
        404: {"model": ErrorResponse, "description": "Unknown output format."},
        422: {"model": ErrorResponse, "description": "Malformed machine transcript."},
    },
)
def render_alignment(format_key: str, request: AlignmentRequest) -> Response:
    if format_key not in FORMATTERS:
        raise HTTPException(
            status_code=404,
            detail="Unknown format '{}'. Available formats: {}".format(
                format_key, ", ".join(sorted(FORMATTERS.keys()))
            ),
        )
    result = _run_alignment(request)
    output = FORMATTERS[format_key]().format(result.document)[0]
    return Response(
        content=output.content,
        media_type=output.media_type,
        headers={
            "Content-Disposition": 'attachment; filename="transcript{}"'.format(output.suffix),
        },
    )


# ---------------------------------------------------------------------------
# Endpoints: Discovery
# ---------------------------------------------------------------------------


@app.get(
    "/formats",
    response_model=List[FormatInfo],
    tags=["formats"],
    summary="List available output formats",
    description="Returns all output formats with their identifiers, names, and file suffixes.",
)
def list_formats() -> List[FormatInfo]:
    result = []
    for key, formatter_cls in sorted(FORMATTERS.items()):
        formatter = formatter_cls()
        result.append(FormatInfo(key=key, name=formatter.name, suffix=formatter.suffix))
    return result


@app.get(
    "/speaker-policies",
    response_model=List[str],
    tags=["formats"],
    summary="List speaker detection policies",
    description="Returns the registry keys accepted in the speaker_policy field.",
)
def list_speaker_policies() -> List[str]:
    return sorted(SPEAKER_POLICIES.keys())


# ---------------------------------------------------------------------------
# Endpoints: Health
# ---------------------------------------------------------------------------


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["health"],
    summary="Health check",
    description="Liveness and readiness check for load balancers and orchestrators.",
)
def health_check() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)


def run_api():
    """Entry point for the transcript-aligner-api console script."""
    import uvicorn
    config.configure_logging()
    uvicorn.run(app, host=config.API_HOST, port=config.API_PORT)
