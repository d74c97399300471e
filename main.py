# main.py
"""
Entrypoint for the music player (terminal UI, or headless with --cli)
"""
import sys

from musicplayer.cli import main

if __name__ == "__main__":
    sys.exit(main())
