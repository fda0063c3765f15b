#!/usr/bin/env python3
"""
Seed script: creates users and cheese listings via the API (no direct DB).
Publishes roughly half of the listings through the publication route.
Run: API must be running.
  python scripts/seed_data.py
  python scripts/seed_data.py --users 10 --listings-per-user 8
"""

import argparse
import random

import httpx

API_BASE = "http://localhost:8000/api/v1"

TITLES = [
    "Brie Lovers", "Aged Comté", "Smoked Gouda", "Blue Stilton", "Fresh Mozzarella",
    "Wensleydale", "Roquefort Cave", "Manchego Wheel", "Parmigiano 24m", "Raclette Night",
    "Goat Log", "Red Leicester", "Havarti Dill", "Gruyère Block", "Camembert Box",
]

DESCRIPTIONS = [
    "Creamy and mild.\nPerfect on a baguette.",
    "Nutty, crystalline, aged two years in the Jura.",
    "Smoked over beech wood.\nMelts beautifully.",
    "Bold blue veins.\nPair with port.",
    "Hand-stretched this morning.",
]


def random_price() -> int:
    return random.choice([499, 899, 1000, 1299, 1999, 2499, 4999])


def main():
    ap = argparse.ArgumentParser(description="Seed users and listings via API")
    ap.add_argument("--users", type=int, default=5, help="Number of users to create")
    ap.add_argument("--listings-per-user", type=int, default=6, help="Listings per user")
    ap.add_argument("--base-url", default=API_BASE, help="API base URL")
    args = ap.parse_args()

    user_ids = []
    created = 0
    errors = []

    with httpx.Client(base_url=args.base_url, timeout=30.0) as client:
        print(f"Creating {args.users} users...")
        for i in range(args.users):
            r = client.post("/users", json={"email": f"seller{i+1}@cheesemarket.com", "fullName": f"Seller {i+1}"})
            if r.status_code == 201:
                user_ids.append(r.json()["id"])
            else:
                errors.append(f"User {i+1}: {r.status_code} {r.text[:80]}")

        print(f"Creating ~{len(user_ids) * args.listings_per_user} listings...")
        for user_id in user_ids:
            for _ in range(args.listings_per_user):
                r = client.post(
                    "/listings",
                    json={
                        "title": random.choice(TITLES),
                        "description": random.choice(DESCRIPTIONS),
                        "price": random_price(),
                        "owner": f"/api/v1/users/{user_id}",
                    },
                )
                if r.status_code != 201:
                    errors.append(f"Listing for user {user_id}: {r.status_code} {r.text[:80]}")
                    continue
                created += 1
                listing_id = r.json()["id"]
                if random.random() < 0.5:
                    client.put(f"/listings/{listing_id}/publication", json={"isPublished": True})

    print(f"\nDone. Users: {len(user_ids)}, Listings created: {created}")
    if errors:
        print(f"Errors ({len(errors)}):")
        for e in errors[:15]:
            print("  ", e)


if __name__ == "__main__":
    main()
