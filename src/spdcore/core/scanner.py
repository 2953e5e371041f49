"""Read SPD slots through an SpdSource and decode what answers.

Reads go through one worker so bus access stays serialized; each read is
retried with exponential backoff.  Decoding is pure and runs one task per
slot on a thread pool.
"""

from __future__ import annotations

import concurrent.futures
import time
from collections.abc import Mapping

from spdcore.core.source import SpdSource
from spdcore.exceptions import SpdSourceError, StructuralError
from spdcore.models.module import SpdModule
from spdcore.models.scan import ScanConfig, ScanResult, SlotReading, SlotStatus
from spdcore.spd.decoder import decode_spd
from spdcore.utils.logging import get_logger

logger = get_logger(__name__)


def read_with_retry(
    source: SpdSource, address: int, config: ScanConfig
) -> tuple[bytes, int]:
    """Read one SPD block, retrying failed reads.

    Returns:
        The bytes read and the number of attempts made.

    Raises:
        SpdSourceError: If every attempt failed.
    """
    delay = config.retry_delay_s
    last_error: SpdSourceError | None = None

    for attempt in range(1, config.retries + 1):
        try:
            return source.read_block(address, config.block_size), attempt
        except SpdSourceError as exc:
            last_error = exc
            logger.debug(
                "spd_read_retry",
                source=source.name,
                address=f"0x{address:02X}",
                attempt=attempt,
                error=str(exc),
            )
            if attempt < config.retries:
                time.sleep(delay)
                delay *= config.backoff

    raise SpdSourceError(
        f"read failed after {config.retries} attempts: {last_error}"
    )


def _read_slot(
    source: SpdSource, slot: int, config: ScanConfig
) -> tuple[SlotReading, bytes | None]:
    """Read one slot. The bytes are returned only when they should be decoded."""
    address = config.address_for(slot)
    try:
        data, attempts = read_with_retry(source, address, config)
    except SpdSourceError as exc:
        logger.warning("spd_slot_skipped", slot=slot, address=f"0x{address:02X}", error=str(exc))
        reading = SlotReading(
            slot=slot,
            address=address,
            status=SlotStatus.READ_FAILED,
            attempts=config.retries,
            error=str(exc),
        )
        return reading, None

    if len(data) < config.min_valid_length:
        reading = SlotReading(
            slot=slot, address=address, status=SlotStatus.EMPTY,
            length=len(data), attempts=attempts,
        )
        return reading, None

    # status is provisional until the decode step
    reading = SlotReading(
        slot=slot, address=address, status=SlotStatus.DECODED,
        length=len(data), attempts=attempts,
    )
    return reading, data


def _decode_slot(reading: SlotReading, data: bytes) -> SlotReading:
    try:
        module = decode_spd(data, slot=reading.slot)
    except StructuralError as exc:
        logger.warning(
            "spd_decode_failed",
            slot=reading.slot,
            address=reading.address_hex,
            error=str(exc),
        )
        return reading.model_copy(
            update={"status": SlotStatus.DECODE_FAILED, "error": str(exc)}
        )
    return reading.model_copy(update={"module": module})


def decode_images(
    images: Mapping[int, bytes], max_workers: int = 8
) -> list[SpdModule]:
    """Decode images keyed by slot concurrently, returning them by slot.

    Raises:
        StructuralError: If any image is shorter than 128 bytes.
    """
    slots = sorted(images)
    with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as pool:
        return list(pool.map(lambda s: decode_spd(images[s], slot=s), slots))


def scan_slots(source: SpdSource, config: ScanConfig | None = None) -> ScanResult:
    """Read every slot address and decode each populated slot.

    ``config.timeout_s`` bounds the whole read phase; slots not read by then
    are reported as timed out.  The scan never raises for a single slot.
    """
    config = config or ScanConfig()
    deadline = time.monotonic() + config.timeout_s

    logger.info(
        "spd_scan_start",
        source=source.name,
        base_address=f"0x{config.base_address:02X}",
        slots=config.slot_count,
    )

    reads: dict[int, tuple[SlotReading, bytes | None]] = {}
    reader = concurrent.futures.ThreadPoolExecutor(max_workers=1)
    try:
        futures = {
            slot: reader.submit(_read_slot, source, slot, config)
            for slot in range(config.slot_count)
        }
        for slot, future in futures.items():
            remaining = max(0.0, deadline - time.monotonic())
            try:
                reads[slot] = future.result(timeout=remaining)
            except concurrent.futures.TimeoutError:
                future.cancel()
                logger.warning(
                    "spd_read_timeout",
                    slot=slot,
                    address=f"0x{config.address_for(slot):02X}",
                    timeout_s=config.timeout_s,
                )
                reads[slot] = (
                    SlotReading(
                        slot=slot,
                        address=config.address_for(slot),
                        status=SlotStatus.TIMED_OUT,
                        error=f"no response within {config.timeout_s}s",
                    ),
                    None,
                )
    finally:
        reader.shutdown(wait=False, cancel_futures=True)

    with concurrent.futures.ThreadPoolExecutor(max_workers=config.max_workers) as pool:
        pending = {
            slot: pool.submit(_decode_slot, reading, data)
            for slot, (reading, data) in reads.items()
            if data is not None
        }
        readings = [
            pending[slot].result() if slot in pending else reads[slot][0]
            for slot in sorted(reads)
        ]

    result = ScanResult(readings=readings)
    logger.info(
        "spd_scan_complete",
        source=source.name,
        modules=len(result.modules),
        errors=len(result.errors),
    )
    return result
