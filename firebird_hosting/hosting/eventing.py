from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Awaitable, Callable, List, Optional, Type

from firebird_hosting._logging import get_component_logger
from firebird_hosting.types import ErrorCategory, HostingError

from .resources import Resource, ResourceWithConnectionString

if TYPE_CHECKING:
    from .builder import DistributedApplicationModel


@dataclass
class BeforeStartEvent:
    model: "DistributedApplicationModel"


@dataclass
class ConnectionStringAvailableEvent:
    resource: Resource


EventCallback = Callable[[Any], Awaitable[None]]


@dataclass
class EventSubscription:
    event_type: Type[Any]
    callback: EventCallback
    resource: Optional[Resource] = None


class Eventing:
    """
    In-process event bus keyed by event type and, optionally, resource.

    Subscribers run one after another in subscription order; the first
    exception aborts the publish and propagates to the publisher.
    """

    def __init__(self, logger: Optional[Any] = None):
        self._subscriptions: List[EventSubscription] = []
        self._logger = get_component_logger("Eventing", logger)

    def subscribe(
        self,
        event_type: Type[Any],
        callback: EventCallback,
        resource: Optional[Resource] = None,
    ) -> EventSubscription:
        subscription = EventSubscription(event_type, callback, resource)
        self._subscriptions.append(subscription)
        return subscription

    def unsubscribe(self, subscription: EventSubscription) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)

    def subscriptions_for(self, event: Any) -> List[EventSubscription]:
        target = getattr(event, "resource", None)
        return [
            s for s in self._subscriptions
            if isinstance(event, s.event_type)
            and (s.resource is None or s.resource is target)
        ]

    async def publish(self, event: Any) -> None:
        subscriptions = self.subscriptions_for(event)
        self._logger.debug(
            "event_published",
            event_type=type(event).__name__,
            subscribers=len(subscriptions),
        )
        for subscription in subscriptions:
            await subscription.callback(event)


ConnectionStringResolver = Callable[[], Awaitable[Optional[str]]]


def require_connection_string(
    eventing: Eventing,
    resource: ResourceWithConnectionString,
    resolve: Optional[ConnectionStringResolver] = None,
    logger: Optional[Any] = None,
) -> EventSubscription:
    """
    Fail fast when the host announces a connection string that cannot be produced.

    Args:
        eventing: Bus the host publishes ConnectionStringAvailableEvent on
        resource: Resource the subscription is keyed to
        resolve: Accessor to await; defaults to resource.get_connection_string
        logger: Optional injected logger

    Returns:
        The subscription, so callers can unsubscribe
    """
    log = get_component_logger("ConnectionStringValidator", logger)
    accessor = resolve or resource.get_connection_string

    async def validate(event: ConnectionStringAvailableEvent) -> None:
        connection_string = await accessor()
        if connection_string is None:
            log.error("connection_string_unresolved", resource=resource.name)
            raise HostingError(
                ErrorCategory.CONFIGURATION,
                f"ConnectionStringAvailableEvent was published for the '{resource.name}' "
                "resource but the connection string could not be resolved.",
                resource=resource.name,
            )
        log.debug("connection_string_available", resource=resource.name)

    return eventing.subscribe(ConnectionStringAvailableEvent, validate, resource=resource)
