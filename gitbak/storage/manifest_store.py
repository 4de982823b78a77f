"""
Loads and saves the JSON manifest that lists the archives to mirror.
"""

import json
import logging
from contextlib import suppress
from pathlib import Path

from pydantic import ValidationError

from gitbak.exceptions import FilesystemError, ManifestParseError
from gitbak.models.manifest import Manifest, ManifestDocument

log = logging.getLogger(__name__)


class ManifestStore:
    """Handles reading and writing the manifest file."""

    def __init__(self, manifest_path: Path):
        self.path = Path(manifest_path)

    def load(self) -> Manifest:
        """
        Reads and validates the manifest file.

        Returns:
            A freshly parsed Manifest.

        Raises:
            ManifestParseError: If the file is missing, is not valid JSON, or does
            not match the manifest schema.
        """
        if not self.path.is_file():
            raise ManifestParseError(
                f"Manifest not found at '{self.path}'. Run 'gitbak init' first."
            )

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ManifestParseError(f"Error parsing manifest '{self.path}': {e}") from e
        except OSError as e:
            raise ManifestParseError(f"Could not read manifest '{self.path}': {e}") from e

        try:
            document = ManifestDocument.model_validate(raw)
        except ValidationError as e:
            raise ManifestParseError(
                f"Manifest '{self.path}' does not match the expected schema:\n{e}"
            ) from e

        log.debug(f"Loaded manifest from '{self.path}'.")
        return Manifest.from_document(document)

    def save(self, manifest: Manifest) -> None:
        """
        Writes the manifest with 2-space indentation, keeping manifest order.

        The document goes to a temporary file next to the manifest which is then
        renamed over it, so readers never see a partially written file.

        Raises:
            FilesystemError: If the file cannot be written.
        """
        text = json.dumps(manifest.to_document().model_dump(), indent=2) + "\n"
        temp_path = self.path.with_name(f".{self.path.name}.tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            temp_path.write_text(text, encoding="utf-8")
            temp_path.replace(self.path)
        except OSError as e:
            with suppress(OSError):
                temp_path.unlink()
            raise FilesystemError(f"Failed to save manifest '{self.path}': {e}") from e
        log.debug(f"Saved manifest to '{self.path}'.")

    def init(self) -> bool:
        """Creates an empty manifest if none exists. Returns True if one was created."""
        if self.path.exists():
            return False
        self.save(Manifest())
        return True
