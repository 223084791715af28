"""Backup commands: export state to a file and import it back."""

from pathlib import Path
from typing import Optional

from ..core.exceptions import RelentlessError
from ..core.paths import get_path_manager
from ..storage.transfer import export_to_file, import_into
from ..utils.date import today_key
from .base import TrackerCommand


class ExportCommand(TrackerCommand):
    """Write the roster and log to a JSON backup."""

    def run(self, output_path: Optional[str] = None) -> bool:
        try:
            if output_path is None:
                manager = get_path_manager()
                manager.ensure_directories()
                output_path = str(manager.export_dir / f"relentless-{today_key(self.tz)}.json")
            tasks, log = self.store.load()
            ok = export_to_file(output_path, self.identity, tasks, log)
        except RelentlessError as exc:
            return self._fail("Export", exc)

        if not ok:
            print(f"⚠️  Could not write backup to {output_path}")
            return False
        print(f"📄 Exported {len(tasks)} protocols and {len(log)} logged days to: {output_path}")
        return True


class ImportCommand(TrackerCommand):
    """Replace this identity's state with the contents of a backup."""

    def run(self, input_path: str) -> bool:
        path = Path(input_path).expanduser()
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            print(f"⚠️  Could not read {path}: {exc}")
            return False

        try:
            result = import_into(self.store, text)
        except RelentlessError as exc:
            return self._fail("Import", exc)

        if not result.ok:
            print(f"⚠️  Import failed; nothing was changed. {result.error}")
            return False
        print(f"✓ Imported {len(result.tasks)} protocols and {len(result.log)} logged days.")
        return True
