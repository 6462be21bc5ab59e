"""Allow running as ``python -m pdfbind``."""

from .cli import main

main()
