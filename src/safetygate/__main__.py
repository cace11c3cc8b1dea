"""Entry point for ``python -m safetygate``."""
import sys

from .cli import main

sys.exit(main())
