"""Allow ``python -m tyinfer``."""

from tyinfer.cli import main

raise SystemExit(main())
