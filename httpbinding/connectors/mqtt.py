"""MQTT connector turning ``<prefix>/<item>/command`` messages into command events."""
from __future__ import annotations

import asyncio
import logging
from typing import AsyncIterator, Optional

from asyncio_mqtt import Client, MqttError

from httpbinding.messages import CommandEvent

from .base import BaseConnector

log = logging.getLogger(__name__)

DEFAULT_COMMAND_TOPIC = "openhab/+/command"


class MQTTCommandConnector(BaseConnector):
    def __init__(self, connector_id: str, options, *, on_command):
        super().__init__(connector_id, on_command=on_command)
        self.options = options
        self.command_topic = options.get("command_topic", DEFAULT_COMMAND_TOPIC)
        if self.command_topic.split("/").count("+") != 1:
            raise ValueError(f"command_topic '{self.command_topic}' must contain exactly one '+' for the item name")

    async def iter_events(self) -> AsyncIterator[CommandEvent]:
        host = self.options.get("host", "127.0.0.1")
        port = int(self.options.get("port", 1883))
        username = self.options.get("username")
        password = self.options.get("password")
        reconnect_interval = int(self.options.get("reconnect_interval", 5))
        while True:
            try:
                async with Client(hostname=host, port=port, username=username, password=password) as client:
                    async with client.unfiltered_messages() as messages:
                        await client.subscribe(self.command_topic)
                        log.info("connector %s subscribed to %s", self.connector_id, self.command_topic)
                        async for message in messages:
                            event = self.to_event(message.topic, message.payload)
                            if event is not None:
                                yield event
            except MqttError:
                log.exception("connector %s lost connection; retrying", self.connector_id)
                await asyncio.sleep(reconnect_interval)

    def to_event(self, topic: str, payload: bytes) -> Optional[CommandEvent]:
        entity_name = self.extract_entity(self.command_topic, topic)
        if entity_name is None:
            return None
        try:
            command = payload.decode("utf-8").strip()
        except UnicodeDecodeError:
            log.warning("connector %s dropping non-utf8 command for %s", self.connector_id, entity_name)
            return None
        if not command:
            return None
        return CommandEvent(entity_name=entity_name, command=command)

    @staticmethod
    def extract_entity(pattern: str, topic: str) -> Optional[str]:
        pattern_parts = pattern.split("/")
        topic_parts = topic.split("/")
        if len(pattern_parts) != len(topic_parts):
            return None
        entity_name = None
        for pp, tp in zip(pattern_parts, topic_parts):
            if pp == "+":
                entity_name = tp
                continue
            if pp != tp:
                return None
        return entity_name or None
