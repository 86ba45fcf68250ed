from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from app.core.log_config import logger
from app.dependencies.service_dependencies import get_websocket_manager
from app.utils.websocket_manager import WebsocketManager

router = APIRouter(prefix="/ws", tags=["websocket"])


@router.websocket("")
async def websocket_endpoint(
    websocket: WebSocket,
    manager: WebsocketManager = Depends(get_websocket_manager),
):
    """
    Listen-only channel: clients receive ``messageUpdate`` events and
    anything they send is ignored.
    """
    connection_id = await manager.connect(websocket)

    try:
        while True:
            data = await websocket.receive_text()
            logger.debug(f"Ignoring data from listener {connection_id}: {data}")

    except WebSocketDisconnect as e:
        logger.info(f"Listener {connection_id} closed the connection. Code: {e.code}")

    except Exception as e:
        logger.error(f"An unhandled error occurred in websocket {connection_id}: {e}", exc_info=True)

    finally:
        manager.disconnect(connection_id)
