"""Swap toggling. Kubernetes nodes require swap to be off."""

from __future__ import annotations

from pathlib import Path
from typing import List, Tuple

from .base import BaseProvider, ProviderError
from .runner import CommandRunner
from ..data.models import CommandResult


def comment_swap_entries(fstab_text: str) -> Tuple[str, int]:
    """Comment out active fstab lines that mount swap.

    An entry is swap when its third field (the filesystem type) is ``swap``,
    whether the fields are separated by spaces or tabs.

    Returns:
        Tuple of (new text, number of lines commented).
    """
    lines = fstab_text.splitlines(keepends=True)
    changed = 0
    out: List[str] = []
    for line in lines:
        fields = line.split()
        if len(fields) >= 3 and fields[2] == "swap" and not fields[0].startswith("#"):
            out.append("#" + line)
            changed += 1
        else:
            out.append(line)
    return "".join(out), changed


class SwapManager(BaseProvider):
    """Turns swap off (persistently, via fstab) or back on."""

    def __init__(self, runner: CommandRunner, fstab_path: str = "/etc/fstab"):
        self.runner = runner
        self.fstab_path = Path(fstab_path)

    @property
    def name(self) -> str:
        return "swap"

    @property
    def display_name(self) -> str:
        return "Swap"

    def disable(self) -> List[CommandResult]:
        """Run ``swapoff -a`` and comment swap entries out of fstab.

        Raises:
            ProviderError: If fstab exists but cannot be rewritten.
        """
        results = [self.runner.run(["swapoff", "-a"])]
        if not self.fstab_path.is_file():
            self.log(f"{self.fstab_path} not found; nothing to comment out")
            return results

        try:
            text = self.fstab_path.read_text(encoding="utf-8")
            new_text, changed = comment_swap_entries(text)
            if changed and not self.runner.dry_run:
                self.fstab_path.write_text(new_text, encoding="utf-8")
        except OSError as e:
            raise ProviderError(self.name, f"Cannot update {self.fstab_path}: {e}", e)

        prefix = "[dry-run] would comment" if self.runner.dry_run else "Commented"
        self.log(f"{prefix} {changed} swap entr{'y' if changed == 1 else 'ies'} in {self.fstab_path}")
        return results

    def enable(self) -> List[CommandResult]:
        return [self.runner.run(["swapon", "-a"])]
