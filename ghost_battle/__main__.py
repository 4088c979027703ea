from __future__ import annotations

from ghost_battle.app import run


def main() -> int:
    """Open the battle panel sandbox window (``python -m ghost_battle``)."""
    return run()


if __name__ == "__main__":
    raise SystemExit(main())
