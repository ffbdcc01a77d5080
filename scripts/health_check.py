#!/usr/bin/env python3
"""Validate Linear MCP configuration and test connectivity."""

import asyncio
import sys

from pydantic import ValidationError

from linear_mcp.governor import RequestGovernor
from linear_mcp.linear.client import LinearClient
from linear_mcp.linear.errors import LinearAPIError
from linear_mcp.settings import load_settings


async def main() -> int:
    print("Loading settings...")
    try:
        settings = load_settings()
    except ValidationError as e:
        print(f"FAIL: Could not load settings: {e}")
        print("Ensure LINEAR_API_KEY is set (in the environment or .env).")
        return 1

    print(f"  LINEAR_API_URL: {settings.api_url}")
    print(f"  LINEAR_API_KEY: {'*' * 8}...{settings.api_key[-4:]}")
    print(f"  LINEAR_HOURLY_QUOTA: {settings.hourly_quota}")

    print("\nTesting connectivity...")
    governor = RequestGovernor(
        hourly_quota=settings.hourly_quota, throttle_threshold=settings.throttle_threshold
    )
    client = LinearClient(
        api_key=settings.api_key,
        governor=governor,
        api_url=settings.api_url,
        timeout=settings.timeout,
        ssl_verify=settings.ssl_verify,
    )

    try:
        viewer = await client.get_viewer()
        print(f"  OK: Authenticated as {viewer.get('name')} ({viewer.get('email')})")
        for team in viewer["teams"][:5]:
            print(f"    - {team.get('key')}: {team.get('name')}")
        if len(viewer["teams"]) > 5:
            print(f"    ... and {len(viewer['teams']) - 5} more")
        metrics = governor.get_metrics()
        print(f"  Request took {metrics.average_request_time:.0f}ms")
        return 0
    except LinearAPIError as e:
        print(f"  FAIL: {e}")
        return 1
    finally:
        await governor.aclose()
        await client.close()


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
