import asyncio
import json
import logging
from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from pydantic import ValidationError
from app.config import settings
from app.core.dependencies import get_profile_service
from app.modules.identity.form import IdentityForm
from app.modules.identity.schemas import FormEvent, ResolvedIdentity
from app.modules.profiles.service import ProfileService
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/identity", tags=["identity"])


def apply_event(form: IdentityForm, event: FormEvent) -> Optional[Dict[str, Any]]:
    """Feed one client event into the form; returns a direct reply, if any"""
    if event.type == "open":
        form.open(event.record)
    elif event.type == "name":
        form.change_name(event.first_name, event.last_name)
    elif event.type == "display_name":
        form.edit_display_name(event.value)
    elif event.type == "username":
        form.edit_username(event.value)
    elif event.type == "email":
        form.change_email(event.value)
    elif event.type == "submit":
        identity = form.resolve()
        return ResolvedIdentity(
            first_name=form.first_name,
            last_name=form.last_name,
            email=form.email,
            display_name=identity.display_name,
            username=identity.username,
        ).model_dump()
    return None


async def _send_updates(websocket: WebSocket, form: IdentityForm, outbox: asyncio.Queue):
    # None means "state changed"; bursts of changes collapse into one push
    while True:
        item = await outbox.get()
        state_changed = item is None
        replies = [] if state_changed else [item]
        while not outbox.empty():
            queued = outbox.get_nowait()
            if queued is None:
                state_changed = True
            else:
                replies.append(queued)
        if state_changed:
            await websocket.send_json({"type": "state", **form.snapshot()})
        for reply in replies:
            await websocket.send_json(reply)


async def _stop_sender(sender: asyncio.Task) -> None:
    """Cancel the sender and collect its outcome; a failed send is logged, not raised"""
    sender.cancel()
    try:
        await sender
    except asyncio.CancelledError:
        pass
    except Exception as e:
        logger.warning(f"Identity form sender stopped with error: {e}")


@router.websocket("/form")
async def identity_form(
    websocket: WebSocket,
    service: ProfileService = Depends(get_profile_service)
):
    """One create/edit/signup form session; lives as long as the socket"""
    await websocket.accept()
    outbox: asyncio.Queue = asyncio.Queue()

    async def lookup_username(value: str, exclude_id: Optional[int]) -> bool:
        return await asyncio.to_thread(service.is_username_available, value, exclude_id)

    async def lookup_email(value: str, exclude_id: Optional[int]) -> bool:
        return await asyncio.to_thread(service.is_email_available, value, exclude_id)

    form = IdentityForm(
        username_lookup=lookup_username,
        email_lookup=lookup_email,
        debounce_seconds=settings.availability_debounce_seconds,
        on_change=lambda: outbox.put_nowait(None),
    )
    sender = asyncio.create_task(_send_updates(websocket, form, outbox))
    outbox.put_nowait(None)
    try:
        while True:
            raw = await websocket.receive_text()
            try:
                event = FormEvent(**json.loads(raw))
            except (ValueError, TypeError, ValidationError) as e:
                outbox.put_nowait({"type": "error", "detail": f"Invalid message: {e}"})
                continue
            reply = apply_event(form, event)
            if reply is not None:
                outbox.put_nowait(reply)
    except WebSocketDisconnect:
        logger.debug("Identity form session closed")
    finally:
        form.close()
        await _stop_sender(sender)
