#!/usr/bin/env python3
"""
Subscription CLI
================

Command-line client for the subscription service.

Usage:
    dcr-cli subscribe -g GRAPH_ID -s SIM_ID
    dcr-cli unsubscribe -g GRAPH_ID -s SIM_ID
    dcr-cli getSubs
    dcr-cli getSubs --url http://localhost:8080

Version: 0.1.0
"""

import argparse
import sys
from collections.abc import Sequence

import httpx


DEFAULT_BASE_URL = "http://localhost:8080"
COMMANDS = ("subscribe", "getSubs", "unsubscribe")


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="dcr-cli",
        description="Manage DCR graph simulation subscriptions",
    )
    parser.add_argument("command", choices=COMMANDS, help="Operation to perform")
    parser.add_argument("-g", dest="graph_id", default="", help="The graph ID")
    parser.add_argument("-s", dest="sim_id", default="", help="The simulation ID")
    parser.add_argument(
        "--url",
        dest="base_url",
        default=DEFAULT_BASE_URL,
        help="The base URL of the server",
    )
    return parser


def subscribe(client: httpx.Client, graph_id: str, sim_id: str) -> None:
    response = client.post("/subscribe", json={"graphid": graph_id, "simid": sim_id})
    response.raise_for_status()
    print(f"Subscription successful: {response.status_code} {response.reason_phrase}")


def unsubscribe(client: httpx.Client, graph_id: str, sim_id: str) -> None:
    response = client.post("/unsubscribe", json={"graphid": graph_id, "simid": sim_id})
    response.raise_for_status()
    print(f"Unsubscription successful: {response.status_code} {response.reason_phrase}")


def get_subscriptions(client: httpx.Client) -> None:
    response = client.get("/subscriptions")
    response.raise_for_status()
    print("Get subscriptions successful:")
    print(response.text)


def main(
    argv: Sequence[str] | None = None,
    transport: httpx.BaseTransport | None = None,
) -> int:
    """
    Run the CLI.

    Args:
        argv: Arguments without the program name (default sys.argv[1:])
        transport: Optional httpx transport, mainly for tests

    Returns:
        Process exit code
    """
    args = build_parser().parse_args(argv)

    if args.command in ("subscribe", "unsubscribe") and not (args.graph_id and args.sim_id):
        print(
            f"Both graphID (-g) and simID (-s) must be provided for {args.command}.",
            file=sys.stderr,
        )
        return 1

    try:
        with httpx.Client(base_url=args.base_url, transport=transport) as client:
            if args.command == "subscribe":
                subscribe(client, args.graph_id, args.sim_id)
            elif args.command == "unsubscribe":
                unsubscribe(client, args.graph_id, args.sim_id)
            else:
                get_subscriptions(client)
    except httpx.HTTPError as e:
        print(f"Error making HTTP request: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
