import asyncio
import base64
import logging
import zlib
from typing import Optional, Tuple

import aiohttp

from magic_sentry.errors import TransportError, wrap
from magic_sentry.packet import Packet
from magic_sentry.transport.dsn import DSN
from magic_sentry.util.const import COMPRESSION_THRESHOLD, USER_AGENT

logger = logging.getLogger(__name__)


class HTTPTransport:
    """
    Send packets to a Sentry compatible store endpoint over HTTP.

    ``send()`` runs the request on a private event loop, which is what the
    send queue's worker thread needs. Code already running inside an event
    loop should await ``send_async()`` instead.
    """

    def __init__(self, timeout: float = 30.0) -> None:
        self.timeout = timeout

    def send(self, dsn: str, packet: Packet) -> None:
        if not dsn:
            return
        asyncio.run(self.send_async(dsn, packet))

    async def send_async(self, dsn: str, packet: Packet) -> None:
        if not dsn:
            return

        target = DSN.parse(dsn)
        body, content_type = self.serialize_packet(packet)

        headers = {
            'Content-Type': content_type,
            'User-Agent': USER_AGENT,
        }
        auth_header = target.auth_header()
        if auth_header:
            headers['X-Sentry-Auth'] = auth_header

        logger.debug("HTTPTransport POST %s (%d bytes, %s)", target.url, len(body), content_type)

        try:
            timeout = aiohttp.ClientTimeout(total=self.timeout)
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(target.url, data=body, headers=headers) as response:
                    await response.read()
                    status = response.status
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise wrap(e, "failed to submit request", TransportError) from e

        logger.debug("HTTPTransport response status=%s", status)
        if status != 200:
            raise TransportError(f"got http status {status}, expected 200")

    @staticmethod
    def serialize_packet(packet: Optional[Packet]) -> Tuple[bytes, str]:
        """
        Encode a packet for the request body.

        Small packets are sent as JSON; packets of COMPRESSION_THRESHOLD
        bytes or more are deflated and base64 encoded.

        Returns:
            The body and its content type
        """
        try:
            data = (packet if packet is not None else Packet()).to_json().encode('utf-8')
        except (TypeError, ValueError) as e:
            raise wrap(e, "failed to serialize packet", TransportError) from e

        if len(data) < COMPRESSION_THRESHOLD:
            return data, 'application/json; charset=utf-8'

        compressed = zlib.compress(data, zlib.Z_BEST_COMPRESSION)
        return base64.b64encode(compressed), 'application/octet-stream'
