"""
Occupancy Sync Service

Recomputes each room's occupied-bed count from its active occupancy
records. Runs after a bed switch commits; failures are reported, never
raised.
"""

from typing import Callable, Dict, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hostel_billing.core.exceptions import BaseAppException
from hostel_billing.core.logging import get_logger
from hostel_billing.repositories.room.room_occupancy_repository import RoomOccupancyRepository
from hostel_billing.repositories.room.room_repository import RoomRepository
from hostel_billing.services.base.service_result import ErrorCode, ServiceResult
from hostel_billing.services.common import UnitOfWork


class OccupancySyncService:
    """Keeps `rooms.occupied_beds` in step with active occupancies."""

    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory
        self._logger = get_logger(self.__class__.__name__)

    def resync_rooms(self, room_ids: List[str]) -> ServiceResult[Dict[str, int]]:
        """
        Recount active occupancies for each room.

        Returns:
            ServiceResult with {room_id: occupied_beds}; unknown rooms are skipped
        """
        counts: Dict[str, int] = {}
        try:
            with UnitOfWork(self._session_factory) as uow:
                room_repo = uow.get_repo(RoomRepository)
                occupancy_repo = uow.get_repo(RoomOccupancyRepository)
                for room_id in room_ids:
                    room = room_repo.get_for_update(room_id)
                    if room is None:
                        continue
                    count = occupancy_repo.count_active(room_id)
                    room_repo.set_occupied_beds(room, count)
                    counts[room_id] = count
        except (BaseAppException, SQLAlchemyError) as e:
            self._logger.error(
                f"Occupancy resync failed: {e}",
                exc_info=True,
                extra={"room_ids": room_ids},
            )
            code = ErrorCode.DATABASE_ERROR if isinstance(e, SQLAlchemyError) else ErrorCode.INTERNAL_ERROR
            return ServiceResult.from_exception(e, "resync room occupancy", code=code)

        self._logger.debug("Room occupancy resynced", extra={"occupied_beds": counts})
        return ServiceResult.success(counts, message="Room occupancy resynced")
