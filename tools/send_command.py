#!/usr/bin/env python3
# SPDX-License-Identifier: Apache-2.0
"""Publish item commands to MQTT for manual binding testing."""
from __future__ import annotations

import argparse
import asyncio

from asyncio_mqtt import Client


async def publish(host: str, port: int, topic: str, command: str, repeat: int, interval: float) -> None:
    async with Client(hostname=host, port=port) as client:
        for _ in range(repeat):
            await client.publish(topic, command.encode("utf-8"))
            await asyncio.sleep(interval)


def main() -> None:
    parser = argparse.ArgumentParser(description="Send a command to an item over MQTT")
    parser.add_argument("item")
    parser.add_argument("command")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=1883)
    parser.add_argument("--topic", default="openhab/{item}/command", help="topic template, {item} is substituted")
    parser.add_argument("--repeat", type=int, default=1)
    parser.add_argument("--interval", type=float, default=0.5)
    args = parser.parse_args()
    topic = args.topic.format(item=args.item)
    asyncio.run(publish(args.host, args.port, topic, args.command, args.repeat, args.interval))


if __name__ == "__main__":
    main()
