from fastapi import APIRouter, Depends

from ..dependencies import get_event_sink

router = APIRouter(prefix="/events", tags=["Events"])


@router.get("")
def list_events(events=Depends(get_event_sink)):
    return {"events": events.list_events()}
