from sqlalchemy.orm import Session

from campus_reservations.core.access import can_manage_venues, require
from campus_reservations.core.cache import get_cache, set_cache, delete_cache
from campus_reservations.core.config import VENUE_CACHE_TTL
from campus_reservations.core.errors import NotFound
from campus_reservations.core.logging_config import admin_logger
from campus_reservations.models.venue import Venue
from campus_reservations.schemas.actor import Actor
from campus_reservations.schemas.venue import VenueCreate, VenueUpdate, VenueOut

ACTIVE_VENUES_CACHE_KEY = "venues:active"


def get_venue(db: Session, venue_id: int) -> Venue:
    venue = db.query(Venue).filter(Venue.id == venue_id).first()
    if not venue:
        raise NotFound("Venue not found", venue_id=venue_id)
    return venue


# =====================================================================
# LIST VENUES (active ones are cached)
# =====================================================================
def list_venues(db: Session, actor: Actor | None = None, include_inactive: bool = False) -> list[VenueOut]:
    if include_inactive:
        require(actor is not None and can_manage_venues(actor.role), "list inactive venues")
        venues = db.query(Venue).order_by(Venue.id).all()
        return [VenueOut.model_validate(v) for v in venues]

    cached = get_cache(ACTIVE_VENUES_CACHE_KEY)
    if cached is not None:
        return [VenueOut.model_validate(v) for v in cached]

    venues = [
        VenueOut.model_validate(v)
        for v in db.query(Venue).filter(Venue.active == True).order_by(Venue.id).all()
    ]
    set_cache(
        ACTIVE_VENUES_CACHE_KEY,
        [v.model_dump(mode="json") for v in venues],
        ttl=VENUE_CACHE_TTL,
    )
    return venues


def count_active_venues(db: Session) -> int:
    return db.query(Venue).filter(Venue.active == True).count()


# =====================================================================
# ADD VENUE  (Admin / Office)
# =====================================================================
def add_venue(db: Session, actor: Actor, data: VenueCreate) -> Venue:
    require(can_manage_venues(actor.role), "add venues", role=actor.role.value)

    venue = Venue(
        name=data.name,
        type=data.type.value,
        capacity=data.capacity,
        location=data.location,
        active=True,
    )
    db.add(venue)
    db.commit()
    db.refresh(venue)

    delete_cache(ACTIVE_VENUES_CACHE_KEY)
    admin_logger(actor.user_id).info(
        f"Venue Added | Venue={venue.id} '{venue.name}'"
    )
    return venue


# =====================================================================
# UPDATE VENUE  (Admin / Office)
# =====================================================================
def update_venue(db: Session, actor: Actor, venue_id: int, data: VenueUpdate) -> Venue:
    require(can_manage_venues(actor.role), "update venues", role=actor.role.value)
    venue = get_venue(db, venue_id)

    venue.name = data.name
    venue.type = data.type.value
    venue.capacity = data.capacity
    venue.location = data.location
    if data.active is not None:
        venue.active = data.active
    db.commit()
    db.refresh(venue)

    delete_cache(ACTIVE_VENUES_CACHE_KEY)
    admin_logger(actor.user_id).info(
        f"Venue Updated | Venue={venue.id} | Active={venue.active}"
    )
    return venue


# =====================================================================
# DEACTIVATE VENUE  (soft delete, keeps booking history)
# =====================================================================
def deactivate_venue(db: Session, actor: Actor, venue_id: int) -> Venue:
    require(can_manage_venues(actor.role), "deactivate venues", role=actor.role.value)
    venue = get_venue(db, venue_id)

    if venue.active:
        venue.active = False
        db.commit()
        db.refresh(venue)
        delete_cache(ACTIVE_VENUES_CACHE_KEY)
        admin_logger(actor.user_id).info(
            f"Venue Deactivated | Venue={venue.id}"
        )

    return venue
