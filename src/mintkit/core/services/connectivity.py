"""Connectivity probe."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from mintkit.core.domain.models import ChainStatus
from mintkit.core.interfaces.chain import ChainStatusReader

logger = logging.getLogger(__name__)


@dataclass
class ProbeHooks:
    """`result(label, value)` is called as soon as each query returns."""

    result: Callable[[str, object], None] | None = None


async def probe_chain(reader: ChainStatusReader, hooks: ProbeHooks | None = None) -> ChainStatus:
    """Run the six read-only queries one after another.

    The first failing query propagates; results already reported through
    `hooks` are not retracted.
    """

    hooks = hooks or ProbeHooks()

    def report(label: str, value: object) -> None:
        logger.debug("%s -> %r", label, value)
        if hooks.result:
            hooks.result(label, value)

    slot = await reader.get_slot()
    report("Current Slot", slot)

    block_height = await reader.get_block_height()
    report("Current Block Height", block_height)

    epoch = await reader.get_epoch_info()
    report("Epoch Info", epoch)

    version = await reader.get_version()
    report("Solana Version", version)

    supply = await reader.get_supply()
    report("Total Supply", supply)

    blockhash = await reader.get_latest_blockhash()
    report("Recent Blockhash", blockhash)

    return ChainStatus(
        slot=slot,
        block_height=block_height,
        epoch=epoch,
        version=version,
        supply=supply,
        recent_blockhash=blockhash,
    )
