"""
Clean endpoint - runs the cleaning pipeline on submitted text.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, HTTPException
import structlog

from ...cleaning import clean_text
from ...config import settings
from ...models.api_models import CleanRequest, CleanResponse
from ...options import resolve_clean_options

logger = structlog.get_logger(__name__)
router = APIRouter()


def with_default_preset(overrides: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Fill in settings.default_preset when the caller names no preset."""
    merged = dict(overrides or {})
    if "preset" not in merged:
        merged["preset"] = settings.default_preset
    return merged


@router.post("/clean", response_model=CleanResponse)
async def clean(request: CleanRequest) -> CleanResponse:
    """
    Clean text with the given option overrides.

    Args:
        request: Text and optional overrides

    Returns:
        CleanResponse with cleaned text, per-rule report and resolved options
    """
    try:
        if len(request.text) > settings.max_request_chars:
            raise HTTPException(
                status_code=413,
                detail=(
                    f"Text length ({len(request.text)}) exceeds maximum "
                    f"({settings.max_request_chars})"
                ),
            )

        options = resolve_clean_options(with_default_preset(request.options))
        result = clean_text(request.text, options)

        logger.info(
            "text_cleaned_via_api",
            preset=options.preset.value,
            input_length=len(request.text),
            output_length=len(result.text),
            total_changes=result.report.total_changes,
            truncated=result.report.truncated,
        )

        return CleanResponse(success=True, result=result, options=options)

    except HTTPException:
        # Re-raise HTTP exceptions
        raise

    except Exception as e:
        logger.error("clean_failed", error=str(e), exc_info=True)
        return CleanResponse(success=False, error=f"Cleaning failed: {str(e)}")
