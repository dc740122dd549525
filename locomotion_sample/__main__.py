"""Module entry point: python -m locomotion_sample ..."""

from __future__ import annotations

from locomotion_sample.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
