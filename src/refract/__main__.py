"""Allow ``python -m refract``."""

from refract.cli.main import main

raise SystemExit(main())
