"""Journal event endpoints."""

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.responses import Response

from trade_journal.api.deps import (
    get_csv_exporter,
    get_extraction_service,
    get_journal_service,
)
from trade_journal.api.schemas import (
    EventCreateRequest,
    EventListResponse,
    EventResponse,
    ImportSummaryResponse,
)
from trade_journal.csv import CsvExporter
from trade_journal.domain.views import ImageUpload
from trade_journal.services import ExtractionService, JournalService

router = APIRouter(prefix="/events", tags=["events"])


@router.get("", response_model=EventListResponse)
def list_events(
    journal: JournalService = Depends(get_journal_service),
) -> EventListResponse:
    """List all events, oldest first."""
    events = journal.list_events()
    return EventListResponse(
        events=[EventResponse.from_event(e) for e in events],
        count=len(events),
    )


@router.post("", response_model=EventResponse, status_code=201)
def create_event(
    data: EventCreateRequest,
    journal: JournalService = Depends(get_journal_service),
) -> EventResponse:
    """Manually enter a trade confirmation or daily summary."""
    event = journal.record_event(data.to_raw())
    return EventResponse.from_event(event)


@router.post("/extract", response_model=ImportSummaryResponse, status_code=201)
def extract_events(
    files: list[UploadFile] = File(...),
    extraction: ExtractionService = Depends(get_extraction_service),
) -> ImportSummaryResponse:
    """
    Read one or more broker screenshots into journal events.

    Images that cannot be read are listed in ``errors``; the rest are stored.
    """
    images = []
    for upload in files:
        content = upload.file.read()
        if not content:
            raise HTTPException(status_code=400, detail=f"Uploaded file is empty: {upload.filename}")
        images.append(
            ImageUpload(
                filename=upload.filename or "upload",
                content=content,
                content_type=upload.content_type or "image/png",
            )
        )

    summary = extraction.import_images(images)
    return ImportSummaryResponse(
        imported_count=summary.imported_count,
        error_count=summary.error_count,
        errors=summary.errors,
        events=[EventResponse.from_event(e) for e in summary.events],
    )


@router.get("/export")
def export_events(
    exporter: CsvExporter = Depends(get_csv_exporter),
) -> Response:
    """Download all events as a CSV file."""
    return Response(
        content=exporter.export_text(),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="journal.csv"'},
    )


@router.delete("/{event_id}", status_code=204)
def delete_event(
    event_id: str,
    journal: JournalService = Depends(get_journal_service),
) -> Response:
    """Delete an event."""
    journal.delete_event(event_id)
    return Response(status_code=204)
