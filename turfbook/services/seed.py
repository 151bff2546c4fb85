"""Demo data for the in-memory store.

Booking and slot dates are offsets from the day the store is seeded so the
demo always has upcoming activity.
"""
import logging
from datetime import date, datetime, timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from turfbook.core.clock import local_today
from turfbook.models.booking import Booking, BookedSlot
from turfbook.models.review import Review
from turfbook.models.slot import Slot
from turfbook.models.turf import Turf
from turfbook.models.user import User

logger = logging.getLogger(__name__)

USERS = [
    ("mock-owner-uid", "Owner User", "owner@turfbook.dev", "owner"),
    ("mock-player-uid", "Player User", "player@turfbook.dev", "player"),
    ("another-owner-uid", "Victory Sports", "victory@turfbook.dev", "owner"),
    ("another-owner-uid-2", "Whitefield Community Trust", "whitefield@turfbook.dev", "owner"),
    ("owner-f", "Metropolis Arenas", "arenas@turfbook.dev", "owner"),
    ("player-1", "John Doe", "john@turfbook.dev", "player"),
    ("player-2", "Jane Smith", "jane@turfbook.dev", "player"),
    ("player-3", "Alex Ray", "alex@turfbook.dev", "player"),
    ("player-x", "Sam Patel", "sam@turfbook.dev", "player"),
    ("player-D", "Dev Rao", "dev@turfbook.dev", "player"),
    ("player-E", "Esha Nair", "esha@turfbook.dev", "player"),
]

TURFS = {
    "green-kick": dict(
        owner_id="mock-owner-uid",
        name="Green Kick Arena",
        location="Koramangala, Bangalore",
        price_per_hour=1200,
        images=[
            "https://placehold.co/600x400.png?text=Green+Kick+Arena",
            "https://placehold.co/400x300.png?text=GK+Side",
            "https://placehold.co/400x300.png?text=GK+Goal",
        ],
        amenities=["parking", "restroom", "floodlights", "wifi", "cafe"],
        description=(
            "State-of-the-art 5-a-side football turf with premium FIFA-certified "
            "artificial grass. Enjoy thrilling matches under bright floodlights."
        ),
        is_visible=True,
        created_at=datetime(2023, 11, 1),
        average_rating=4.5,
        review_count=25,
    ),
    "net-masters": dict(
        owner_id="mock-owner-uid",
        name="Net Masters Badminton",
        location="HSR Layout, Bangalore",
        price_per_hour=500,
        images=["https://placehold.co/600x400.png?text=Net+Masters"],
        amenities=["parking", "restroom", "gym"],
        description="Professional wooden badminton courts with excellent lighting.",
        is_visible=False,
        created_at=datetime(2023, 12, 15),
        average_rating=4.8,
        review_count=32,
    ),
    "victory": dict(
        owner_id="another-owner-uid",
        name="Victory Playfield",
        location="Indiranagar, Bangalore",
        price_per_hour=1000,
        images=["https://placehold.co/600x400.png?text=Victory+Playfield"],
        amenities=["restroom", "floodlights"],
        description="Spacious cricket and football turf, perfect for corporate matches.",
        is_visible=True,
        created_at=datetime(2023, 10, 5),
        average_rating=4.2,
        review_count=18,
    ),
    "hidden-gem": dict(
        owner_id="another-owner-uid-2",
        name="Hidden Gem Community Field",
        location="Whitefield, Bangalore",
        price_per_hour=800,
        images=["https://placehold.co/600x400.png?text=Hidden+Gem"],
        amenities=["parking"],
        description="A quiet and well-maintained field for practice sessions.",
        is_visible=False,
        created_at=datetime(2023, 9, 20),
        average_rating=4.0,
        review_count=5,
    ),
    "city-sports": dict(
        owner_id="owner-f",
        name="City Sports Arena",
        location="Downtown, Metropolis",
        price_per_hour=1500,
        images=[
            "https://placehold.co/800x500.png?text=City+Sports+Main",
            "https://placehold.co/400x300.png?text=CSA+Court",
        ],
        amenities=["parking", "restroom", "floodlights", "wifi"],
        description=(
            "The best 5-a-side turf in downtown. Features high-quality turf, excellent "
            "lighting, and spectator seating. Ideal for both casual play and organized events."
        ),
        is_visible=True,
        created_at=datetime(2023, 8, 10),
        average_rating=4.7,
        review_count=42,
    ),
}

# (turf, day offset, time range, status, booked_by)
SLOTS = [
    ("green-kick", 1, "10:00 AM - 11:00 AM", "booked", "player-x"),
    ("net-masters", 3, "05:00 PM - 06:00 PM", "maintenance", None),
    ("city-sports", 3, "06:00 PM - 07:00 PM", "available", None),
]

# (turf, player, day offset, time range, status, payment status, amount)
BOOKINGS = [
    ("green-kick", "mock-player-uid", 1, "09:00 AM - 10:00 AM", "approved", "paid", 1200),
    ("green-kick", "mock-owner-uid", 2, "06:00 PM - 07:00 PM", "pending", "unpaid", 1200),
    ("net-masters", "mock-owner-uid", 4, "07:00 PM - 08:00 PM", "pending", "unpaid", 500),
    ("green-kick", "player-D", 6, "11:00 AM - 12:00 PM", "cancelled", "unpaid", 1200),
    ("victory", "player-E", 5, "10:00 AM - 11:00 AM", "approved", "paid", 900),
    ("city-sports", "mock-player-uid", 3, "05:00 PM - 06:00 PM", "pending", "unpaid", 1500),
    ("victory", "mock-player-uid", -21, "07:00 PM - 08:00 PM", "completed", "paid", 1000),
    ("green-kick", "mock-player-uid", 6, "11:00 AM - 12:00 PM", "cancelled", "unpaid", 1200),
]

# (turf, user, rating, comment, days ago)
REVIEWS = [
    ("green-kick", "player-1", 5, "Amazing turf, well maintained!", 40),
    ("green-kick", "player-2", 4, "Good facilities, but can get crowded.", 19),
    ("city-sports", "player-3", 5, "Best turf in the city, hands down!", 5),
]


async def seed_demo_data(db: AsyncSession, today: date = None) -> None:
    """Populate an empty store with demo users, turfs, slots, bookings and reviews."""
    today = today or local_today()

    for uid, name, email, role in USERS:
        db.add(User(id=uid, name=name, email=email, role=role))
    await db.flush()

    turfs = {}
    for key, data in TURFS.items():
        turf = Turf(**data)
        db.add(turf)
        turfs[key] = turf
    await db.flush()

    slots = {}

    def slot_for(turf_key, offset, time_range):
        key = (turf_key, offset, time_range)
        if key not in slots:
            slots[key] = Slot(
                turf_id=turfs[turf_key].id,
                date=today + timedelta(days=offset),
                time_range=time_range,
                status="available",
            )
            db.add(slots[key])
        return slots[key]

    for turf_key, offset, time_range, status, booked_by in SLOTS:
        slot = slot_for(turf_key, offset, time_range)
        slot.status = status
        slot.booked_by = booked_by

    for turf_key, player_id, offset, time_range, status, payment, amount in BOOKINGS:
        slot = slot_for(turf_key, offset, time_range)
        if status != "cancelled":
            slot.status = "booked"
            slot.booked_by = player_id
        await db.flush()

        db.add(
            Booking(
                turf_id=turfs[turf_key].id,
                player_id=player_id,
                booking_date=slot.date,
                status=status,
                payment_status=payment,
                total_amount=amount,
                created_at=datetime.combine(today, datetime.min.time()) - timedelta(days=3),
                slot_details=[BookedSlot(slot_id=slot.id, time_range=time_range)],
            )
        )

    now = datetime.utcnow()
    for turf_key, user_id, rating, comment, days_ago in REVIEWS:
        db.add(
            Review(
                turf_id=turfs[turf_key].id,
                user_id=user_id,
                rating=rating,
                comment=comment,
                created_at=now - timedelta(days=days_ago),
            )
        )

    await db.commit()
    logger.info(
        f"Seeded {len(USERS)} users, {len(turfs)} turfs, {len(slots)} slots, "
        f"{len(BOOKINGS)} bookings, {len(REVIEWS)} reviews"
    )
