"""Service layer: every service shares the one record store it is given."""
from dataclasses import dataclass

from .attendance_service import AttendanceService
from .notification_service import SessionEventPublisher
from .query_service import QueryService
from .session_service import SessionService


@dataclass
class Services:
    """Process-scoped handle passed to the API layer."""
    store: object
    sessions: SessionService
    attendance: AttendanceService
    queries: QueryService
    publisher: SessionEventPublisher


def build_services(
    store,
    publisher: SessionEventPublisher = None,
    window_minutes: int = 10,
    proximity_meters: float = 100,
    badge_image: str = None,
    badge_description: str = None,
    clock=None
) -> Services:
    publisher = publisher or SessionEventPublisher()
    return Services(
        store=store,
        sessions=SessionService(store, publisher=publisher),
        attendance=AttendanceService(
            store,
            window_minutes=window_minutes,
            proximity_meters=proximity_meters,
            clock=clock
        ),
        queries=QueryService(store, badge_image=badge_image, badge_description=badge_description),
        publisher=publisher
    )
