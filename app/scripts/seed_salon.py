#!/usr/bin/env python3
"""
Script to seed the demo salon: users, services, staff and weekly hours
Usage: python -m app.scripts.seed_salon
"""
import sys
from sqlalchemy.orm import Session

from app.config.database import SessionLocal
from app.models import Service, Staff, StaffService, User, UserRole, WorkingHours

USERS = [
    {"email": "admin@bellasalon.com", "name": "Admin User", "phone": "123-456-7890", "role": UserRole.ADMIN},
    {"email": "client@example.com", "name": "John Smith", "phone": "123-456-7890", "role": UserRole.CLIENT},
    {"email": "emma@bellasalon.com", "name": "Emma Thompson", "phone": "123-456-7891", "role": UserRole.STAFF},
    {"email": "alex@bellasalon.com", "name": "Alex Rivera", "phone": "123-456-7892", "role": UserRole.STAFF},
    {"email": "sophie@bellasalon.com", "name": "Sophie Chen", "phone": "123-456-7893", "role": UserRole.STAFF},
]

SERVICES = {
    "haircut": {"name": "Haircut & Style", "description": "Professional haircut and styling with one of our expert stylists.",
                "duration": 45, "price": 7500, "category": "hair"},
    "coloring": {"name": "Hair Coloring", "description": "Full hair coloring service to give you a fresh new look.",
                 "duration": 90, "price": 12000, "category": "hair"},
    "manicure": {"name": "Gel Manicure", "description": "Long-lasting gel polish with nail care and cuticle treatment.",
                 "duration": 60, "price": 4500, "category": "nails"},
    "facial": {"name": "Signature Facial", "description": "Customized facial treatment to address your specific skin concerns.",
               "duration": 75, "price": 9500, "category": "facial"},
    "beard_trim": {"name": "Beard Trim", "description": "Professional beard trimming and shaping.",
                   "duration": 30, "price": 3000, "category": "hair"},
}

# email -> profile, services, (first weekday, start, end); weekdays 0=Sunday
STAFF = {
    "emma@bellasalon.com": {
        "title": "Senior Hair Stylist",
        "bio": "Specializes in cutting-edge hair styling and coloring techniques with 8+ years of experience.",
        "rating": 480, "review_count": 124,
        "services": ["haircut", "coloring"],
        "hours": (0, "09:00", "20:00"),
    },
    "alex@bellasalon.com": {
        "title": "Master Barber",
        "bio": "Expert in modern and classic barbering techniques, specializing in men's grooming.",
        "rating": 500, "review_count": 87,
        "services": ["haircut", "beard_trim"],
        "hours": (0, "09:00", "20:00"),
    },
    "sophie@bellasalon.com": {
        "title": "Senior Esthetician",
        "bio": "Facial specialist with expertise in skincare treatments and anti-aging techniques.",
        "rating": 470, "review_count": 142,
        "services": ["facial", "manicure"],
        "hours": (1, "09:00", "17:00"),  # Monday-Saturday
    },
}


def seed_salon(db: Session) -> dict:
    """Insert the demo salon into an empty database; returns created counts"""
    if db.query(Service).count():
        print("⚠️  Services already exist, skipping seed")
        return {"users": 0, "services": 0, "staff": 0}

    users = {}
    for data in USERS:
        user = User(email=data["email"], name=data["name"], phone=data["phone"], role=data["role"].value)
        db.add(user)
        users[data["email"]] = user

    services = {}
    for key, data in SERVICES.items():
        service = Service(**data)
        db.add(service)
        services[key] = service

    db.flush()

    for email, profile in STAFF.items():
        staff = Staff(
            user_id=users[email].id,
            title=profile["title"],
            bio=profile["bio"],
            rating=profile["rating"],
            review_count=profile["review_count"],
        )
        db.add(staff)
        db.flush()

        for service_key in profile["services"]:
            db.add(StaffService(staff_id=staff.id, service_id=services[service_key].id))

        first_day, start_time, end_time = profile["hours"]
        for day in range(first_day, 7):
            db.add(WorkingHours(
                staff_id=staff.id,
                day_of_week=day,
                start_time=start_time,
                end_time=end_time,
                is_available=True,
            ))

    db.commit()
    return {"users": len(users), "services": len(services), "staff": len(STAFF)}


def main():
    db: Session = SessionLocal()
    try:
        counts = seed_salon(db)
        print(f"✅ Seeded salon: {counts}")
    except Exception as e:
        db.rollback()
        print(f"❌ Error seeding salon: {e}")
        sys.exit(1)
    finally:
        db.close()


if __name__ == "__main__":
    main()
