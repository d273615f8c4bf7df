#!/usr/bin/env python3
"""Smoke test for the perfume catalog endpoints against a running server."""
from __future__ import annotations

import json
import os
import sys
from typing import Any

import httpx

BASE_URL = "http://localhost:8000"
API_PREFIX = "/api"


def print_section(title: str) -> None:
    """Print a formatted section header."""
    print(f"\n{'=' * 60}")
    print(f"  {title}")
    print(f"{'=' * 60}\n")


def print_response(response: httpx.Response, expected_status: int | None = None) -> dict[str, Any] | None:
    """Print formatted response information."""
    status_emoji = "✅" if response.status_code < 400 else "❌"
    status_text = httpx.codes.get_reason_phrase(response.status_code) or "Unknown"
    print(f"{status_emoji} Status: {response.status_code} {status_text}")

    if expected_status and response.status_code != expected_status:
        print(f"⚠️  Expected status {expected_status}, got {response.status_code}")

    try:
        data = response.json()
        print(f"Response: {json.dumps(data, indent=2, ensure_ascii=False)}")
        return data
    except ValueError:
        print(f"Response text: {response.text[:500]}")
        return None


def check_create_and_read(client: httpx.Client, url: str) -> int | None:
    print_section("1. Create perfume (POST /api/perfumes)")
    data = print_response(
        client.post(url, json={"name": "Aqua", "brand": "Marine", "category": "fresh", "price": 49.9}),
        expected_status=201,
    )
    if not data or not data.get("success"):
        return None
    perfume_id = data["data"]["id"]

    print_section("2. Read it back (GET /api/perfumes/{id})")
    print_response(client.get(f"{url}/{perfume_id}"), expected_status=200)

    print_section("3. Search (GET /api/perfumes?search=marine)")
    data = print_response(client.get(url, params={"search": "marine"}), expected_status=200)
    if data:
        print(f"   Found {data.get('count', 0)} matching perfumes")
    return perfume_id


def check_failures(client: httpx.Client, url: str) -> None:
    print_section("4. Expected failures")
    print("Invalid category (should return 400)")
    print_response(client.post(url, json={"name": "X", "brand": "Y", "category": "invalid-value"}), 400)
    print("\nNon-numeric ID (should return 400)")
    print_response(client.get(f"{url}/abc"), 400)
    print("\nUnknown ID (should return 404)")
    print_response(client.get(f"{url}/999999"), 404)


def check_delete(client: httpx.Client, url: str, perfume_id: int) -> None:
    print_section("5. Soft delete twice (DELETE /api/perfumes/{id})")
    print_response(client.delete(f"{url}/{perfume_id}"), 200)
    print_response(client.delete(f"{url}/{perfume_id}"), 404)


def main() -> None:
    """Run the smoke checks in order."""
    base_url = os.getenv("API_BASE_URL", BASE_URL)
    url = f"{base_url}{API_PREFIX}/perfumes"
    print(f"Base URL: {base_url}")

    try:
        with httpx.Client(timeout=30.0) as client:
            response = client.get(f"{base_url}{API_PREFIX}/health")
            if response.status_code != 200:
                print(f"\n❌ Server health check failed: {response.status_code}")
                sys.exit(1)

            perfume_id = check_create_and_read(client, url)
            check_failures(client, url)
            if perfume_id is not None:
                check_delete(client, url, perfume_id)
    except httpx.RequestError as e:
        print(f"\n❌ Cannot connect to server at {base_url}: {e}")
        print("   Start it with: uvicorn perfume_catalog.main:app --reload")
        sys.exit(1)

    print_section("Done")


if __name__ == "__main__":
    main()
