#!/usr/bin/env python3
"""
Feed Polling Smoke Test
=======================

Standalone script to exercise a running WindowCast server the way the
control page does.

This script:
    1. Starts N concurrent pollers against the image endpoint
    2. Runs for a configurable duration
    3. Logs per-interval stats (200s, 404s, 503s, errors, fps)
    4. Reports final summary

Prerequisites:
    - WindowCast must be running (windowcast --port 8080)
    - Install test extras: pip install -e .[test]

Usage:
    python scripts/poll_feed.py --duration 30
    python scripts/poll_feed.py --url http://localhost:8080 --clients 8
"""

import argparse
import asyncio
import logging
import time
from collections import Counter

import httpx


logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%S",
)
logger = logging.getLogger(__name__)


async def poll(
    client: httpx.AsyncClient,
    url: str,
    interval: float,
    deadline: float,
    counts: Counter,
) -> None:
    """Request the image endpoint until the deadline, like the viewer page."""
    while time.monotonic() < deadline:
        started = time.monotonic()
        try:
            response = await client.get(f"{url}?{int(time.time() * 1000)}")
            counts[response.status_code] += 1
            if response.status_code == 200:
                counts["bytes"] += len(response.content)
        except httpx.HTTPError as e:
            counts["errors"] += 1
            logger.debug(f"Request failed: {e}")

        remaining = interval - (time.monotonic() - started)
        if remaining > 0:
            await asyncio.sleep(remaining)


async def run_test(
    base_url: str,
    image_path: str,
    clients: int,
    duration: int,
    interval_ms: int,
    report_interval: int,
) -> Counter:
    """
    Run the polling test.

    Args:
        base_url: Server root, e.g. http://localhost:8080
        image_path: Image endpoint path
        clients: Number of concurrent pollers
        duration: Test duration in seconds
        interval_ms: Per-client polling interval
        report_interval: Seconds between progress reports

    Returns:
        Final response counts
    """
    logger.info("=" * 60)
    logger.info("WindowCast Polling Test")
    logger.info("=" * 60)
    logger.info(f"Server: {base_url}")
    logger.info(f"Clients: {clients}, interval: {interval_ms}ms, duration: {duration}s")
    logger.info("=" * 60)

    counts: Counter = Counter()
    deadline = time.monotonic() + duration
    url = base_url.rstrip("/") + image_path

    async with httpx.AsyncClient(timeout=5.0) as client:
        page = await client.get(base_url)
        logger.info(f"Control page: {page.status_code} {page.headers.get('content-type')}")

        pollers = [
            asyncio.create_task(poll(client, url, interval_ms / 1000.0, deadline, counts))
            for _ in range(clients)
        ]

        last_ok = 0
        while time.monotonic() < deadline:
            await asyncio.sleep(report_interval)
            ok = counts[200]
            logger.info(
                f"200={ok} 404={counts[404]} 503={counts[503]} "
                f"errors={counts['errors']} fps={(ok - last_ok) / report_interval:.1f}"
            )
            last_ok = ok

        await asyncio.gather(*pollers)

    return counts


def main() -> None:
    parser = argparse.ArgumentParser(description="Poll a running WindowCast server")
    parser.add_argument("--url", default="http://localhost:8080", help="Server root URL")
    parser.add_argument("--image-path", default="/image", help="Image endpoint path")
    parser.add_argument("--clients", type=int, default=4, help="Concurrent pollers")
    parser.add_argument("--duration", type=int, default=30, help="Seconds to run")
    parser.add_argument("--interval-ms", type=int, default=33, help="Per-client interval")
    parser.add_argument("--report-interval", type=int, default=5, help="Seconds between reports")
    args = parser.parse_args()

    counts = asyncio.run(run_test(
        base_url=args.url,
        image_path=args.image_path,
        clients=args.clients,
        duration=args.duration,
        interval_ms=args.interval_ms,
        report_interval=args.report_interval,
    ))

    total = counts[200] + counts[404] + counts[503] + counts["errors"]
    logger.info("=" * 60)
    logger.info("Summary")
    logger.info("=" * 60)
    logger.info(f"Requests: {total}")
    logger.info(f"Frames served: {counts[200]} ({counts['bytes'] / 1e6:.1f} MB)")
    logger.info(f"No frame yet (404): {counts[404]}")
    logger.info(f"Rejected (503): {counts[503]}")
    logger.info(f"Errors: {counts['errors']}")


if __name__ == "__main__":
    main()
