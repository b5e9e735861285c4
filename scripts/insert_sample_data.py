"""Seed a running nomination service with sample nominations over HTTP."""

from __future__ import annotations

import argparse
import logging
import os
import sys
import time

import requests


logger = logging.getLogger("nomination_service.scripts.insert_sample_data")

DEFAULT_API_URL = "http://localhost:8000"

SAMPLE_NOMINATIONS = [
    {"name": "Alice Johnson", "course": "Computer Science Engineering", "phone_no": "9876543210",
     "domain": "Web Dev", "email": "alice.johnson@example.com", "insta_id": "@alice_codes",
     "github_id": "alicejohnson", "gender": "Female"},
    {"name": "Bob Smith", "course": "Information Technology", "phone_no": "9876543211",
     "domain": "App Dev", "email": "bob.smith@example.com", "insta_id": "@bob_apps",
     "github_id": "bobsmith", "gender": "Male"},
    {"name": "Carol Davis", "course": "Cyber Security", "phone_no": "9876543212",
     "domain": "Cybersecurity Team", "email": "carol.davis@example.com", "insta_id": "@carol_sec",
     "github_id": "caroldavis", "gender": "Female"},
    {"name": "David Wilson", "course": "Computer Applications", "phone_no": "9876543213",
     "domain": "UI/UX", "email": "david.wilson@example.com", "insta_id": "@david_design",
     "github_id": "davidwilson", "gender": "Male"},
    {"name": "Eva Martinez", "course": "Business Administration", "phone_no": "9876543214",
     "domain": "Sponsorship & Marketing", "email": "eva.martinez@example.com", "insta_id": "@eva_marketing",
     "github_id": "evamartinez", "gender": "Female"},
    {"name": "Frank Brown", "course": "Mass Communication", "phone_no": "9876543215",
     "domain": "Social Media Team", "email": "frank.brown@example.com", "insta_id": "@frank_social",
     "github_id": "frankbrown", "gender": "Male"},
    {"name": "Grace Lee", "course": "Computer Science", "phone_no": "9876543216",
     "domain": "App Dev", "email": "grace.lee@example.com", "insta_id": "@grace_mobile",
     "github_id": "gracelee", "gender": "Female"},
    {"name": "Henry Taylor", "course": "Software Engineering", "phone_no": "9876543217",
     "domain": "Web Dev", "email": "henry.taylor@example.com", "insta_id": "@henry_web",
     "github_id": "henrytaylor", "gender": "Male"},
    {"name": "Ivy Chen", "course": "Graphic Design", "phone_no": "9876543218",
     "domain": "UI/UX", "email": "ivy.chen@example.com", "insta_id": "@ivy_design",
     "github_id": "ivychen", "gender": "Others"},
    {"name": "Jack Anderson", "course": "Information Security", "phone_no": "9876543219",
     "domain": "Cybersecurity Team", "email": "jack.anderson@example.com", "insta_id": "@jack_security",
     "github_id": "jackanderson", "gender": "Male"},
]


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Insert sample nominations into a running service")
    parser.add_argument(
        "--api-url",
        default=os.getenv("API_URL", DEFAULT_API_URL),
        help=f"Service base URL (default: $API_URL or {DEFAULT_API_URL})",
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=0.1,
        help="Seconds to wait between submissions (default: 0.1)",
    )
    parser.add_argument("--timeout", type=float, default=10.0, help="Per-request timeout in seconds")
    return parser.parse_args(argv)


def server_is_up(api_url: str, timeout: float) -> bool:
    try:
        response = requests.get(f"{api_url}/health", timeout=timeout)
    except requests.RequestException as exc:
        logger.warning("Health check failed: %s", exc)
        return False
    return response.status_code == 200


def _message(response) -> str:
    try:
        return response.json().get("message") or response.reason
    except ValueError:
        return response.reason or f"HTTP {response.status_code}"


def insert_samples(api_url: str, delay: float, timeout: float) -> dict:
    """POST every sample; return counts of created, duplicate and failed submissions."""
    counts = {"created": 0, "duplicates": 0, "failed": 0}
    endpoint = f"{api_url}/api/nominations/"
    for nomination in SAMPLE_NOMINATIONS:
        try:
            response = requests.post(endpoint, json=nomination, timeout=timeout)
        except requests.RequestException as exc:
            print(f"Failed to add {nomination['name']}: {exc}")
            counts["failed"] += 1
            continue

        if response.status_code == 201:
            print(f"Added: {nomination['name']} - {nomination['domain']}")
            counts["created"] += 1
        elif response.status_code == 409:
            print(f"Skipped {nomination['name']}: {_message(response)}")
            counts["duplicates"] += 1
        else:
            print(f"Failed to add {nomination['name']}: {_message(response)}")
            counts["failed"] += 1

        if delay > 0:
            time.sleep(delay)
    return counts


def print_stats(api_url: str, timeout: float) -> None:
    try:
        response = requests.get(f"{api_url}/api/nominations/stats", timeout=timeout)
        response.raise_for_status()
        stats = response.json()["data"]
    except (requests.RequestException, ValueError, KeyError) as exc:
        logger.warning("Could not fetch stats: %s", exc)
        return
    print(f"Total nominations: {stats['total_nominations']}")
    for domain, count in stats["by_domain"].items():
        print(f"  {domain}: {count}")


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    api_url = args.api_url.rstrip("/")

    if not server_is_up(api_url, args.timeout):
        print(f"Server is not reachable at {api_url}. Start it first: uvicorn app:app", file=sys.stderr)
        return 1

    counts = insert_samples(api_url, args.delay, args.timeout)
    print(
        f"\nResults: {counts['created']} added, {counts['duplicates']} already present, "
        f"{counts['failed']} failed"
    )
    if counts["created"] or counts["duplicates"]:
        print_stats(api_url, args.timeout)
    return 1 if counts["failed"] else 0


if __name__ == "__main__":  # pragma: no cover - CLI entrypoint
    logging.basicConfig(level=logging.INFO)
    sys.exit(main())
