"""Transfer channel package."""

from purchase_manager.services.transfer.interface import (
    TransferChannelInterface,
    TransferError,
)
from purchase_manager.services.transfer.local_file import LocalFileChannel

__all__ = [
    "LocalFileChannel",
    "TransferChannelInterface",
    "TransferError",
]
