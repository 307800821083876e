# routers/session_events.py

import asyncio

from fastapi import APIRouter, WebSocket
from starlette.websockets import WebSocketDisconnect

from core.config import settings
from core.logging_config import logger
from core.roles import VIEW_ROLES
from core.route_guard import GuardDecision, GuardState, evaluate_access, login_redirect


router = APIRouter(
    tags=["Session"],
)


def signed_out(path: str) -> GuardDecision:
    return GuardDecision(GuardState.unauthenticated, redirect_to=login_redirect(path))


async def _wait_for_disconnect(websocket: WebSocket):
    # Client messages carry no meaning here; only the close matters
    while True:
        message = await websocket.receive()
        if message["type"] == "websocket.disconnect":
            return


# -------------------------------------------------------------
# WS /session/events?view=<view>&path=<requested path>
# -------------------------------------------------------------
@router.websocket("/session/events")
async def session_events(websocket: WebSocket, view: str = "dashboard", path: str = "/"):
    """
    Pushes the route-guard decision for ``view`` on connect and again
    after every change to the session's user or loading flag. The
    stream ends once an unauthenticated decision has been sent.

    An open stream counts as activity: the session's idle expiry is
    pushed forward while the client stays connected. A session that is
    swept or closed ends the stream as unauthenticated.
    """
    if view not in VIEW_ROLES:
        await websocket.close(code=1008)
        return

    await websocket.accept()

    registry = websocket.app.state.sessions
    session_id = websocket.cookies.get(settings.SESSION_COOKIE_NAME)
    session = registry.get(session_id)
    if session is None:
        await websocket.send_json(signed_out(path).as_dict())
        await websocket.close()
        return

    manager = session.manager
    changes: asyncio.Queue = asyncio.Queue()
    unsubscribe = manager.on_change(lambda: changes.put_nowait(None))
    disconnected = asyncio.ensure_future(_wait_for_disconnect(websocket))
    next_change = None
    keepalive_seconds = max(settings.SESSION_IDLE_TTL_SECONDS / 2, 1)

    try:
        send_decision = True
        while True:
            if send_decision:
                if registry.get(session_id) is session:
                    decision = evaluate_access(manager.loading, manager.user, VIEW_ROLES[view], path)
                else:
                    decision = signed_out(path)
                await websocket.send_json(decision.as_dict())

                if decision.state == GuardState.unauthenticated:
                    break

            if next_change is None or next_change.done():
                next_change = asyncio.ensure_future(changes.get())
            done, _ = await asyncio.wait(
                {next_change, disconnected},
                timeout=keepalive_seconds,
                return_when=asyncio.FIRST_COMPLETED,
            )
            if disconnected in done:
                logger.debug(f"Session events client left ({view})")
                break

            if not done:
                # Quiet but connected; registry.get slides the expiry
                send_decision = registry.get(session_id) is not session
                continue

            # Coalesce a burst of changes into one decision
            while not changes.empty():
                changes.get_nowait()
            send_decision = True

    except WebSocketDisconnect:
        logger.debug(f"Session events client disconnected ({view})")

    finally:
        unsubscribe()
        if next_change is not None:
            next_change.cancel()

        if not disconnected.done():
            disconnected.cancel()
            await websocket.close()
