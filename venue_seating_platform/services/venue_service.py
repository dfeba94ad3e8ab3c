"""
Venue service for managing venues owned by users.
"""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError

from ..cache import get_cache, CacheKeyBuilder, CacheTTL, CacheInvalidator
from ..config import get_settings
from ..models import Room, Venue
from ..schemas.venue import VenueCreate, VenueUpdate, VenueResponse
from ..utils.exceptions import HasChildrenError, NameConflictError
from ..utils.logging_config import log_business_event
from .access import AccessPolicy, OwnershipPolicy

logger = logging.getLogger(__name__)

# Columns that may be cleared with an explicit null
_NULLABLE_FIELDS = {"phone", "website"}


class VenueService:
    """Service class for venue management operations."""

    def __init__(self, db: AsyncSession, policy: Optional[AccessPolicy] = None):
        """Initialize the venue service with database session."""
        self.db = db
        self.policy = policy or OwnershipPolicy(db)
        self.cache = get_cache()

    async def create_venue(self, owner_id: UUID, venue_data: VenueCreate) -> Venue:
        """
        Create a new venue.

        Args:
            owner_id: The creating user, who becomes the owner
            venue_data: Venue creation data

        Returns:
            Created venue instance

        Raises:
            NameConflictError: If the owner already has a venue with this name
        """
        await self._ensure_name_free(owner_id, venue_data.name)

        venue = Venue(owner_id=owner_id, **venue_data.model_dump())
        self.db.add(venue)

        try:
            await self.db.flush()
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise NameConflictError("venue", venue_data.name)

        await CacheInvalidator.invalidate_public_venues()

        log_business_event(
            "venue_created",
            {"venue_id": venue.id, "venue_name": venue.name},
            user_id=owner_id
        )
        return venue

    async def get_venues_by_owner(self, owner_id: UUID) -> List[Venue]:
        """Get all venues owned by a user, ordered by name."""
        result = await self.db.execute(
            select(Venue)
            .where(Venue.owner_id == owner_id)
            .order_by(Venue.name)
        )
        return list(result.scalars().all())

    async def get_venue(self, venue_id: UUID, actor_id: UUID) -> Venue:
        """
        Get a venue the acting user owns.

        Raises:
            VenueNotFoundError: If the venue does not exist
            VenueAccessDeniedError: If the venue belongs to another user
        """
        return await self.policy.authorize_venue(actor_id, venue_id)

    async def get_public_venues(self) -> List[VenueResponse]:
        """
        Get all venues flagged public, with caching.

        Returns:
            Public venues ordered by name
        """
        settings = get_settings()
        cache_key = CacheKeyBuilder.public_venues()

        if settings.public_venue_cache_enabled:
            cached = await self.cache.get(cache_key)
            if cached is not None:
                return [VenueResponse(**item) for item in cached]

        result = await self.db.execute(
            select(Venue)
            .where(Venue.is_public.is_(True))
            .order_by(Venue.name)
        )
        venues = [VenueResponse.model_validate(venue) for venue in result.scalars().all()]

        if settings.public_venue_cache_enabled:
            await self.cache.set(
                cache_key,
                [venue.model_dump(mode="json") for venue in venues],
                ttl=CacheTTL.PUBLIC_VENUES
            )

        return venues

    async def update_venue(self, venue_id: UUID, actor_id: UUID, venue_data: VenueUpdate) -> Venue:
        """
        Update the fields present in ``venue_data``.

        Raises:
            VenueNotFoundError: If the venue does not exist
            VenueAccessDeniedError: If the venue belongs to another user
            NameConflictError: If the new name is taken by another of the owner's venues
        """
        venue = await self.policy.authorize_venue(actor_id, venue_id)

        update_data = {
            field: value
            for field, value in venue_data.model_dump(exclude_unset=True).items()
            if value is not None or field in _NULLABLE_FIELDS
        }

        new_name = update_data.get("name")
        if new_name is not None and new_name != venue.name:
            await self._ensure_name_free(venue.owner_id, new_name)

        name = new_name or venue.name
        for field, value in update_data.items():
            setattr(venue, field, value)

        try:
            await self.db.flush()
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise NameConflictError("venue", name)

        await CacheInvalidator.invalidate_public_venues()

        logger.info(f"Updated venue {venue_id}: {sorted(update_data)}")
        return venue

    async def delete_venue(self, venue_id: UUID, actor_id: UUID) -> None:
        """
        Delete a venue that has no rooms.

        Raises:
            VenueNotFoundError: If the venue does not exist
            VenueAccessDeniedError: If the venue belongs to another user
            HasChildrenError: If the venue still has rooms
        """
        venue = await self.policy.authorize_venue(actor_id, venue_id)

        room_count = await self.db.scalar(
            select(func.count(Room.id)).where(Room.venue_id == venue_id)
        )
        if room_count:
            raise HasChildrenError("venue", venue_id, "rooms", room_count)

        await self.db.delete(venue)
        await self.db.commit()

        await CacheInvalidator.invalidate_public_venues()

        log_business_event("venue_deleted", {"venue_id": venue_id}, user_id=actor_id)

    async def _ensure_name_free(self, owner_id: UUID, name: str) -> None:
        existing = await self.db.scalar(
            select(Venue.id).where(Venue.owner_id == owner_id, Venue.name == name)
        )
        if existing is not None:
            raise NameConflictError("venue", name)
