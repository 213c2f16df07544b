#!/usr/bin/env python3
"""
Seed script: creates sellers and motorcycle listings via the API (no direct DB).
Ensures: PostgreSQL has data, Celery tasks are queued, Elasticsearch gets indexed when worker runs.
Run: API must be running. For ES indexing, run Celery worker as well.
  python scripts/seed_data.py
  python scripts/seed_data.py --sellers 20 --listings-per-seller 10
"""

import argparse
import random
import sys
from pathlib import Path

# Project root
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import httpx

API_BASE = "http://localhost:8000/api/v1"

BIKES = [
    ("Yamaha", "YZF-R1", "sport"), ("Honda", "CBR600RR", "sport"), ("Ducati", "Panigale V4", "sport"),
    ("BMW", "R 1250 RT", "touring"), ("Honda", "Gold Wing", "touring"), ("Kawasaki", "Versys 1000", "touring"),
    ("Harley-Davidson", "Fat Boy", "cruiser"), ("Indian", "Scout", "cruiser"), ("Triumph", "Bonneville Bobber", "cruiser"),
    ("BMW", "R 1250 GS", "adventure"), ("KTM", "890 Adventure", "adventure"), ("Honda", "Africa Twin", "adventure"),
    ("Yamaha", "MT-09", "naked"), ("Kawasaki", "Z900", "naked"), ("Triumph", "Street Triple", "naked"),
    ("KTM", "EXC 300", "enduro"), ("Husqvarna", "TE 250", "enduro"),
    ("Vespa", "GTS 300", "scooter"), ("Piaggio", "Beverly 400", "scooter"),
    ("Harley-Davidson", "Breakout", "chopper"),
]

LOCATIONS = ["București", "Cluj-Napoca", "Timișoara", "Iași", "Brașov", "Constanța", "Sibiu", "Oradea"]


def random_listing() -> dict:
    brand, model, category = random.choice(BIKES)
    year = random.randint(2005, 2025)
    return {
        "title": f"{brand} {model} {year}",
        "description": "Stare foarte bună, revizie la zi.",
        "brand": brand,
        "model": model,
        "category": category,
        "year": year,
        "mileage": random.randint(0, 80000),
        "price": random.choice([2500, 4900, 7500, 9900, 12500, 15900, 21000, 27500]),
        "location": random.choice(LOCATIONS),
        "images": [],
        "availability": random.choice(["pe_stoc", "la_comanda"]),
    }


def main():
    ap = argparse.ArgumentParser(description="Seed sellers and listings via API")
    ap.add_argument("--sellers", type=int, default=10, help="Number of seller accounts to create")
    ap.add_argument("--listings-per-seller", type=int, default=6, help="Listings per seller")
    ap.add_argument("--base-url", default=API_BASE, help="API base URL")
    args = ap.parse_args()

    created_sellers = []
    created_listings = 0
    errors = []

    with httpx.Client(base_url=args.base_url, timeout=30.0) as client:
        # 1) Sign up sellers (every third one is a dealer)
        print(f"Creating {args.sellers} sellers...")
        for i in range(args.sellers):
            email = f"seller{i+1}@example.com"
            password = "password123"
            metadata = {
                "name": f"Seller {i+1}",
                "location": random.choice(LOCATIONS),
                "sellerType": "dealer" if i % 3 == 0 else "individual",
            }
            try:
                r = client.post("/accounts/signup", json={"email": email, "password": password, "metadata": metadata})
                if r.status_code in (200, 201, 409):
                    # 409: already exists - we'll use same creds for login
                    created_sellers.append({"email": email, "password": password})
                else:
                    errors.append(f"Signup {email}: {r.status_code} {r.text[:80]}")
            except httpx.HTTPError as e:
                errors.append(f"Signup {email}: {e}")

        # 2) Login and publish listings per seller
        print(f"Creating ~{len(created_sellers) * args.listings_per_seller} listings (login + POST)...")
        for u in created_sellers:
            try:
                r = client.post("/accounts/login", json={"email": u["email"], "password": u["password"]})
                if r.status_code != 200:
                    errors.append(f"Login {u['email']}: {r.status_code}")
                    continue
                headers = {"Authorization": f"Bearer {r.json()['access_token']}"}
                for _ in range(args.listings_per_seller):
                    r2 = client.post("/listings", headers=headers, json=random_listing())
                    if r2.status_code in (200, 201):
                        created_listings += 1
                    else:
                        errors.append(f"Listing {u['email']}: {r2.status_code} {r2.text[:80]}")
            except httpx.HTTPError as e:
                errors.append(f"Seller {u['email']}: {e}")

    print(f"\nDone. Sellers: {len(created_sellers)}, Listings created: {created_listings}")
    if errors:
        print(f"Errors ({len(errors)}):")
        for e in errors[:15]:
            print("  ", e)
        if len(errors) > 15:
            print("  ... and", len(errors) - 15, "more")
    print("\nTip: Run Celery worker to index listings in Elasticsearch, then use /api/v1/search/listings.")


if __name__ == "__main__":
    main()
