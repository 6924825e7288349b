"""Entry point for running MindMap as a module: python -m mindmap"""

import sys
from .ui import main

if __name__ == "__main__":
    sys.exit(main())
