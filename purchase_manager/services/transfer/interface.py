"""
Abstract Transfer Channel Interface

The import/export channel is the boundary where documents leave and enter
the system: a download in a browser, a file on disk, an upload widget.
The core only hands it text and receives text back.
"""

from abc import ABC, abstractmethod


class TransferChannelInterface(ABC):
    """Moves whole JSON documents in and out of the application."""

    @abstractmethod
    def save_document(self, filename: str, text: str) -> str:
        """
        Offer a document to the user under the given file name.

        Returns:
            A description of where the document went (path, URL)

        Raises:
            TransferError: If the document could not be written
        """
        pass

    @abstractmethod
    def read_document(self, source: str) -> str:
        """
        Read the full text of a user-selected document.

        Raises:
            TransferError: If the document could not be read
        """
        pass


class TransferError(Exception):
    """Base exception for transfer channel operations."""
    pass
