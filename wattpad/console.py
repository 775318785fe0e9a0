from typing import Optional


class Console:
    """Interactive stdin prompts. EOF / Ctrl-C count as quitting."""

    @staticmethod
    def confirm(prompt: str) -> bool:
        while True:
            try:
                raw = input(f"{prompt} [ y/n/q(uit) ] : ").strip().lower()
            except (EOFError, KeyboardInterrupt):  # noqa: PERF203
                print()
                return False
            if not raw: continue
            if raw in ('q', 'quit'): return False
            if raw in ('y', 'yes'): return True
            if raw in ('n', 'no'): return False

    @staticmethod
    def input_int(prompt: str) -> Optional[int]:
        """Return a non-negative int, or None when the user quits."""
        while True:
            try:
                raw = input(f"{prompt} (q to quit) : ").strip()
            except (EOFError, KeyboardInterrupt):  # noqa: PERF203
                print()
                return None
            if not raw: continue
            if raw.lower() in ('q', 'quit'): return None
            if raw.isdigit():
                return int(raw)
