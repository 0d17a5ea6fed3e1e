"""Transfer channel backed by the local filesystem."""

from pathlib import Path

from purchase_manager.services.transfer.interface import (
    TransferChannelInterface,
    TransferError,
)


class LocalFileChannel(TransferChannelInterface):
    """
    Writes exports into a directory and reads imports from any path.

    Relative import sources are resolved against the export directory.
    """

    def __init__(self, export_dir: str = "."):
        self._export_dir = Path(export_dir)

    def save_document(self, filename: str, text: str) -> str:
        target = self._export_dir / filename
        try:
            self._export_dir.mkdir(parents=True, exist_ok=True)
            target.write_text(text, encoding="utf-8")
        except OSError as e:
            raise TransferError(f"Could not write {target}: {e}") from e
        return str(target)

    def read_document(self, source: str) -> str:
        path = Path(source)
        if not path.is_absolute():
            path = self._export_dir / path
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise TransferError(f"Could not read {path}: {e}") from e
