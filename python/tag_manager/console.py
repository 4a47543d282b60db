"""Console output for the command line driver."""

from typing import Dict, List

from tag_manager.config import eprint
from tag_manager.models import RunStats, TagType
from tag_manager.tag_handler import format_props


class ConsoleOutput:
    """Handles what the CLI prints and how."""

    COLORS = {
        "reset": "\033[0m",
        "bold": "\033[1m",
        "green": "\033[92m",
        "yellow": "\033[93m",
        "red": "\033[91m",
        "cyan": "\033[96m",
        "dim": "\033[2m",
    }

    def __init__(self, no_color: bool = False, verbose: bool = False):
        """
        Initialize console output.

        Args:
            no_color: Disable colored output
            verbose: Show progress and status messages
        """
        self.no_color = no_color
        self.verbose = verbose

        if no_color:
            self.COLORS = {k: "" for k in self.COLORS}

    def _c(self, color: str, text: str) -> str:
        """Apply color to text."""
        return f"{self.COLORS.get(color, '')}{text}{self.COLORS['reset']}"

    def print(self, *args, **kwargs):
        print(*args, **kwargs)

    def info(self, *args, **kwargs):
        """Print only in verbose mode."""
        if self.verbose:
            print(*args, **kwargs)

    def warn(self, message: str) -> None:
        eprint(self._c("yellow", f"WARN: {message}"))

    def error(self, message: str) -> None:
        eprint(self._c("red", message))

    def show_props(self, header: str, props: Dict[TagType, List[str]]) -> None:
        """Print a header line followed by one line per tag."""
        print(f"{self._c('bold', header)}")
        for line in format_props(props):
            print(line)

    def show_summary(self, stats: RunStats) -> None:
        """Display final run summary. Errors are shown even when not verbose."""
        if self.verbose:
            print(f"\n{self._c('bold', '=' * 60)}")
            print(f"{self._c('bold', 'Run Summary')}")
            print("=" * 60)

            print(f"Input files:         {stats.total_files}")
            print(f"Files processed:     {stats.files_processed}")
            print(f"Tag writes:          {self._c('green', str(stats.tags_written))}")
            print(f"Covers added:        {stats.covers_added}")
            print(f"Covers cleared:      {stats.covers_cleared}")
            print(f"Covers extracted:    {stats.covers_extracted}")

        if stats.errors:
            eprint(f"\n{self._c('red', f'Errors ({len(stats.errors)}):')}")
            for error in stats.errors[:10]:
                eprint(f"  - {error}")
            if len(stats.errors) > 10:
                eprint(f"  ... and {len(stats.errors) - 10} more errors")
