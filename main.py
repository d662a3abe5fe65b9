#!/usr/bin/env python3
"""StudyTimer entry point.

Run with:
    python main.py
    python -m studytimer
"""

from studytimer.__main__ import main


if __name__ == "__main__":
    main()
