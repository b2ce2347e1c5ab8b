"""storystate — demo launcher. Plays the bundled story in the terminal.

    python main.py [--log-level DEBUG] [--keep-playing] < moves.txt
"""

import sys

from storystate.cli import main

if __name__ == "__main__":
    sys.exit(main())
