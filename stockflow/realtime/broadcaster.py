"""
In-process publish/subscribe broadcaster for realtime resource events.

Connections subscribe to channels named after permission areas
(``stock_requests``, ``stock``, ``stores``...). A subscription is only accepted
if the connection's actor holds ``<channel>:read``, so events never reach a
client that could not have fetched the same data over HTTP.
"""
import logging
from typing import Any, Dict, List, Set

from fastapi.encoders import jsonable_encoder

from stockflow.core.errors import ValidationError
from stockflow.core.permissions import Actor, PermissionAction, PermissionArea, PermissionChecker, permission_checker

logger = logging.getLogger(__name__)

CHANNELS = {area.value for area in PermissionArea}


class Broadcaster:
    """
    Tracks live connections, their actor and their channel subscriptions.

    A connection is any object with an async ``send_json(data)`` method,
    normally a ``fastapi.WebSocket``.
    """

    def __init__(self, checker: PermissionChecker = permission_checker):
        self._checker = checker
        self._actors: Dict[Any, Actor] = {}
        self._subscriptions: Dict[Any, Set[str]] = {}

    def connect(self, connection: Any, actor: Actor) -> None:
        self._actors[connection] = actor
        self._subscriptions[connection] = set()
        logger.info(f"Realtime client connected: {actor.kind} {actor.id}")

    def disconnect(self, connection: Any) -> None:
        actor = self._actors.pop(connection, None)
        self._subscriptions.pop(connection, None)
        if actor is not None:
            logger.info(f"Realtime client disconnected: {actor.kind} {actor.id}")

    def subscribe(self, connection: Any, channel: str) -> None:
        """
        Subscribe a connection to a channel after checking the actor's read permission.

        Raises:
            ValidationError: If the connection is unknown or the channel does not exist
            AuthorizationError: If the actor may not read the channel's resource
        """
        if connection not in self._actors:
            raise ValidationError("Connection is not registered")
        if channel not in CHANNELS:
            raise ValidationError(f"Unknown channel: {channel}")

        self._checker.ensure_permission(
            self._actors[connection],
            f"{channel}:{PermissionAction.READ.value}"
        )
        self._subscriptions[connection].add(channel)

    def unsubscribe(self, connection: Any, channel: str) -> None:
        if connection in self._subscriptions:
            self._subscriptions[connection].discard(channel)

    def subscribers(self, channel: str) -> List[Any]:
        return [conn for conn, channels in self._subscriptions.items() if channel in channels]

    async def publish(self, channel: PermissionArea, event: str, payload: Any) -> int:
        """
        Send an event to every subscriber of a channel.

        Delivery is fire-and-forget: a connection whose send fails is dropped
        and the failure is only logged.

        Args:
            channel: Resource channel
            event: Event name, e.g. ``requestApproved``
            payload: Record (or ``{"id": ...}``) to deliver

        Returns:
            Number of connections the event was delivered to
        """
        channel_name = PermissionArea(channel).value
        message = {
            "channel": channel_name,
            "event": event,
            "data": jsonable_encoder(payload),
        }

        delivered = 0
        for connection in self.subscribers(channel_name):
            try:
                await connection.send_json(message)
                delivered += 1
            except Exception as e:
                logger.warning(f"Dropping realtime connection after failed send of {event}: {str(e)}")
                self.disconnect(connection)

        logger.debug(f"Published {event} on {channel_name} to {delivered} subscriber(s)")
        return delivered


# Create global instance
broadcaster = Broadcaster()
